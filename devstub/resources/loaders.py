"""Kind-specific loaders. Each re-validates the kind before any side effect."""

import asyncio
import copy
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import httpx
from bs4 import BeautifulSoup

from devstub.host.document import Document
from devstub.host.modules import ModuleRuntime
from devstub.resources.errors import (
    ResourceTransportError,
    ResourceValidationError,
    transport_error,
)
from devstub.resources.kinds import (
    DEFAULT_BASE_URL,
    LOG_CONTEXT,
    ResourceKind,
    is_kind,
    resolve_url,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoaderCapabilities:
    """The five loading functions exposed to mods."""

    load_templates: Callable[[str], Awaitable[None]]
    load_stylesheet: Callable[[str], None]
    load_script: Callable[[str], Awaitable[None]]
    load_module: Callable[[str], Awaitable[dict[str, Any]]]
    load_data: Callable[[str], Awaitable[Any]]


def _require(ref: Any, kind: ResourceKind) -> None:
    if not is_kind(ref, kind):
        raise ResourceValidationError(ref, kind)


class ResourceLoader:
    """Loads resources from base_url into the host document."""

    def __init__(
        self,
        document: Document,
        runtime: ModuleRuntime,
        client: httpx.AsyncClient,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self._document = document
        self._runtime = runtime
        self._client = client
        self.base_url = base_url

    def url_for(self, ref: str) -> str:
        return resolve_url(self.base_url, ref)

    async def load_script(self, ref: str) -> None:
        """Append a <script> to body; resolves on its load event, raises on its error event."""
        _require(ref, ResourceKind.SCRIPT)
        future: asyncio.Future[None] = asyncio.get_running_loop().create_future()

        def on_load() -> None:
            if not future.done():
                future.set_result(None)

        def on_error() -> None:
            if not future.done():
                future.set_exception(transport_error(ref))

        el = self._document.create_element("script", type="text/javascript", src=self.url_for(ref))
        self._document.add_event_listener(el, "load", on_load)
        self._document.add_event_listener(el, "error", on_error)
        self._document.append_child(self._document.body, el)
        await future
        logger.debug("Script loaded: %s", ref)

    async def load_module(self, ref: str) -> dict[str, Any]:
        """Evaluate the module and return its exported bindings."""
        _require(ref, ResourceKind.MODULE)
        return await self._runtime.import_module(self.url_for(ref))

    def load_stylesheet(self, ref: str) -> None:
        """Append a stylesheet <link> to head. Does not wait for the stylesheet itself."""
        _require(ref, ResourceKind.STYLESHEET)
        el = self._document.create_element("link", href=self.url_for(ref), rel="stylesheet")
        self._document.append_child(self._document.head, el)

    async def load_templates(self, ref: str) -> None:
        """Fetch an HTML file and append a copy of each of its <template> elements to body."""
        _require(ref, ResourceKind.TEMPLATE)
        try:
            response = await self._client.get(self.url_for(ref))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ResourceTransportError(f"{LOG_CONTEXT} Templates failed to load.", ref) from e
        fetched = BeautifulSoup(response.text, "html.parser")
        # Templates nested in another template's content are not part of the fetched document.
        templates = [t for t in fetched.find_all("template") if t.find_parent("template") is None]
        for template in templates:
            self._document.append_child(self._document.body, copy.copy(template))
        logger.debug("Appended %d templates from %s", len(templates), ref)

    async def load_data(self, ref: str) -> Any:
        """Fetch a JSON file and return the parsed value."""
        _require(ref, ResourceKind.DATA)
        try:
            response = await self._client.get(self.url_for(ref))
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            raise transport_error(ref) from e

    def capabilities(self) -> LoaderCapabilities:
        return LoaderCapabilities(
            load_templates=self.load_templates,
            load_stylesheet=self.load_stylesheet,
            load_script=self.load_script,
            load_module=self.load_module,
            load_data=self.load_data,
        )
