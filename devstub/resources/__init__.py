"""Resource loading: classifier, kind-specific loaders, dispatcher, errors."""

from devstub.resources.dispatcher import ResourceDispatcher
from devstub.resources.errors import (
    InvalidResourceError,
    ResourceError,
    ResourceTransportError,
    ResourceValidationError,
)
from devstub.resources.kinds import (
    LOADABLE_KINDS,
    ResourceKind,
    is_kind,
    is_valid_load_resource,
    kind_of,
    resolve_url,
)
from devstub.resources.loaders import LoaderCapabilities, ResourceLoader

__all__ = [
    "InvalidResourceError",
    "LOADABLE_KINDS",
    "LoaderCapabilities",
    "ResourceDispatcher",
    "ResourceError",
    "ResourceKind",
    "ResourceLoader",
    "ResourceTransportError",
    "ResourceValidationError",
    "is_kind",
    "is_valid_load_resource",
    "kind_of",
    "resolve_url",
]
