"""Shared fixtures: host page, fake module runtime, httpx client, wired loader."""

from typing import Any

import httpx
import pytest
from bs4 import Tag

from devstub.host.document import Document
from devstub.resources.loaders import ResourceLoader

BASE_URL = "http://localhost:8080/"


class AutoFiringDocument(Document):
    """Fires load (or error, for srcs listed in failing) as soon as a script is connected."""

    def __init__(self, failing: set[str] | None = None) -> None:
        super().__init__()
        self.failing = failing or set()

    def _on_connected(self, element: Tag) -> None:
        if element.name != "script":
            return
        event = "error" if element["src"] in self.failing else "load"
        self.dispatch_event(element, event)


class FakeModuleRuntime:
    """url -> bindings, or url -> exception to raise on import."""

    def __init__(self, modules: dict[str, Any] | None = None) -> None:
        self.modules = modules or {}
        self.imported: list[str] = []

    async def import_module(self, url: str) -> dict[str, Any]:
        self.imported.append(url)
        entry = self.modules.get(url)
        if isinstance(entry, BaseException):
            raise entry
        if entry is None:
            raise ImportError(f"No module at {url}")
        return entry


@pytest.fixture
def document() -> AutoFiringDocument:
    return AutoFiringDocument()


@pytest.fixture
def runtime() -> FakeModuleRuntime:
    return FakeModuleRuntime()


@pytest.fixture
async def client() -> httpx.AsyncClient:
    async with httpx.AsyncClient() as c:
        yield c


@pytest.fixture
def loader(
    document: AutoFiringDocument, runtime: FakeModuleRuntime, client: httpx.AsyncClient
) -> ResourceLoader:
    return ResourceLoader(document=document, runtime=runtime, client=client, base_url=BASE_URL)
