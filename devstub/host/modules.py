"""Module runtime: resolves a URL to a module's exported bindings."""

import importlib.abc
import importlib.util
import logging
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)


@runtime_checkable
class ModuleRuntime(Protocol):
    """Dynamic import provided by the host."""

    async def import_module(self, url: str) -> dict[str, Any]:
        """Evaluate the module at url and return its exported bindings."""


def exported_bindings(namespace: dict[str, Any]) -> dict[str, Any]:
    """Public names of a module namespace; honours __all__ when present."""
    names = namespace.get("__all__")
    if names is None:
        names = [n for n in namespace if not n.startswith("_")]
    return {n: namespace[n] for n in names if n in namespace}


class _FetchedSourceLoader(importlib.abc.InspectLoader):
    """Loader over module source already fetched from url."""

    def __init__(self, url: str, source: str) -> None:
        self._url = url
        self._source = source

    def get_source(self, fullname: str) -> str:
        return self._source

    def get_code(self, fullname: str):
        return self.source_to_code(self._source, self._url)

    def is_package(self, fullname: str) -> bool:
        return False


class HttpModuleRuntime:
    """Fetches module source over HTTP and evaluates it as a Python module.

    Each import evaluates a fresh module; nothing is cached. Exceptions raised by
    the module body propagate unchanged.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client
        self._count = 0

    async def import_module(self, url: str) -> dict[str, Any]:
        response = await self._client.get(url)
        if not response.is_success:
            raise ImportError(f"Failed to fetch module {url}: HTTP {response.status_code}")
        self._count += 1
        spec = importlib.util.spec_from_loader(
            f"devstub_mod_{self._count}", _FetchedSourceLoader(url, response.text), origin=url
        )
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot create module spec for {url}")
        mod = importlib.util.module_from_spec(spec)
        mod.__file__ = url
        spec.loader.exec_module(mod)
        logger.debug("Evaluated module %s", url)
        return exported_bindings(mod.__dict__)
