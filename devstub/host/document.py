"""Host page model: a BeautifulSoup tree with DOM-style event listeners.

Loaders only append to ``head`` and ``body``; appended elements are owned by the page.
"""

import asyncio
import logging
from collections import defaultdict
from typing import Any, Callable

import httpx
from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

_BLANK_PAGE = "<!DOCTYPE html><html><head></head><body></body></html>"

Listener = Callable[[], None]


class Document:
    """In-memory host document. Elements are bs4 tags, events are dispatched per element."""

    def __init__(self, markup: str = _BLANK_PAGE) -> None:
        self.soup = BeautifulSoup(markup, "html.parser")
        if self.soup.html is None:
            self.soup.append(self.soup.new_tag("html"))
        if self.soup.head is None:
            self.soup.html.insert(0, self.soup.new_tag("head"))
        if self.soup.body is None:
            self.soup.html.append(self.soup.new_tag("body"))
        # id(element) -> (element, {event: [listeners]})
        self._listeners: dict[int, tuple[Tag, dict[str, list[Listener]]]] = {}

    @property
    def head(self) -> Tag:
        return self.soup.head

    @property
    def body(self) -> Tag:
        return self.soup.body

    def create_element(self, name: str, **attrs: str) -> Tag:
        return self.soup.new_tag(name, attrs=attrs)

    def add_event_listener(self, element: Tag, event: str, listener: Listener) -> None:
        key = id(element)
        if key not in self._listeners:
            self._listeners[key] = (element, defaultdict(list))
        self._listeners[key][1][event].append(listener)

    def dispatch_event(self, element: Tag, event: str) -> None:
        """Call the element's listeners for event in registration order."""
        entry = self._listeners.get(id(element))
        if entry is None or entry[0] is not element:
            return
        for listener in list(entry[1].get(event, [])):
            listener()

    def append_child(self, parent: Tag, element: Tag) -> None:
        parent.append(element)
        self._on_connected(element)

    def _on_connected(self, element: Tag) -> None:
        """Hook for subclasses: element was just attached to the page."""

    def serialize(self) -> str:
        return str(self.soup)


class FetchingDocument(Document):
    """Headless page: fetches connected <script src> elements and fires load/error."""

    def __init__(self, client: httpx.AsyncClient, markup: str = _BLANK_PAGE) -> None:
        super().__init__(markup)
        self._client = client
        self._pending: set[asyncio.Task[Any]] = set()
        self.loaded_scripts: list[str] = []

    def _on_connected(self, element: Tag) -> None:
        if element.name != "script" or not element.get("src"):
            return
        task = asyncio.get_running_loop().create_task(self._fetch_script(element))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _fetch_script(self, element: Tag) -> None:
        src = element["src"]
        try:
            response = await self._client.get(src)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Script %s failed to load: %s", src, e)
            self.dispatch_event(element, "error")
            return
        if not response.is_success:
            logger.warning("Script %s failed to load: HTTP %s", src, response.status_code)
            self.dispatch_event(element, "error")
            return
        element.string = response.text
        self.loaded_scripts.append(src)
        self.dispatch_event(element, "load")
