"""Resource classification by file suffix.

Kind membership is a predicate, not an exclusive tag: a ``.js`` reference is both
SCRIPT and MODULE. Non-string references belong to no kind.
"""

from enum import Enum
from typing import Any

MOD_TAG = "__DEV_MOD"
LOG_CONTEXT = f"[{MOD_TAG}]"

DEFAULT_BASE_URL = "http://localhost:8080/"


class ResourceKind(Enum):
    """Closed set of loadable kinds: (suffixes, human name, expected file type text)."""

    SCRIPT = ((".js",), "a script", '".js"')
    MODULE = ((".js", ".mjs"), "a module", '".mjs" or ".js"')
    STYLESHEET = ((".css",), "a stylesheet", '".css"')
    TEMPLATE = ((".html",), "a template file", '".html"')
    DATA = ((".json",), "JSON data", '".json"')

    @property
    def suffixes(self) -> tuple[str, ...]:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]

    @property
    def expected(self) -> str:
        return self.value[2]


# Kinds reachable from a manifest "load" entry. DATA only via load_data().
LOADABLE_KINDS = frozenset(
    {ResourceKind.SCRIPT, ResourceKind.MODULE, ResourceKind.STYLESHEET, ResourceKind.TEMPLATE}
)


def is_kind(ref: Any, kind: ResourceKind) -> bool:
    """True if ref is a string ending in one of the kind's suffixes."""
    return isinstance(ref, str) and ref.endswith(kind.suffixes)


def kind_of(ref: Any) -> frozenset[ResourceKind]:
    """All kinds ref belongs to. Empty for non-strings and unknown suffixes."""
    return frozenset(kind for kind in ResourceKind if is_kind(ref, kind))


def is_valid_load_resource(ref: Any) -> bool:
    """True if ref can appear in a manifest load list (script, module, stylesheet, template)."""
    return bool(kind_of(ref) & LOADABLE_KINDS)


def kind_mismatch_message(ref: Any, kind: ResourceKind) -> str:
    return (
        f'{LOG_CONTEXT} Cannot load resource "{ref}" as {kind.label}. '
        f"Expected file type {kind.expected}."
    )


def resolve_url(base_url: str, ref: str) -> str:
    """Plain concatenation; no normalization or escaping."""
    return base_url + ref
