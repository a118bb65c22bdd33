"""End-to-end: DebugStub against a headless host with the dev server mocked by pytest-httpx."""

from pathlib import Path

import httpx
import pytest

from devstub import runner
from devstub.host import CHARACTER_SELECTION_LOADED, HeadlessHost, InMemorySaveRepository, SaveHeader
from devstub.settings import get_default_settings
from devstub.stub import DebugStub

from conftest import BASE_URL

_SETUP_MODULE = """
async def setup(ctx):
    ctx.load_stylesheet("from_setup.css")
    ctx.config["setup_ran"] = True
"""


class TestDebugStub:
    @pytest.mark.asyncio
    async def test_full_manifest(self, client: httpx.AsyncClient, httpx_mock) -> None:
        httpx_mock.add_response(
            url=BASE_URL + "manifest.json",
            json={
                "setup": "setup.mjs",
                "load": ["main.js", "data.json", "style.css", "ui.html"],
                "author": "someone",
            },
        )
        httpx_mock.add_response(url=BASE_URL + "setup.mjs", text=_SETUP_MODULE)
        httpx_mock.add_response(url=BASE_URL + "main.js", text="console.log('hi');")
        httpx_mock.add_response(
            url=BASE_URL + "ui.html", text='<template id="panel"><div></div></template>'
        )
        host = HeadlessHost.create(client)
        stub = DebugStub(host, get_default_settings())

        result = await stub.setup()

        assert result.ok is True
        assert result.loaded == ["main.js", "style.css", "ui.html"]
        assert result.skipped == ["data.json"]
        assert stub.context.config["setup_ran"] is True
        hrefs = [link["href"] for link in host.document.head.find_all("link")]
        assert hrefs == [BASE_URL + "from_setup.css", BASE_URL + "style.css"]
        assert host.document.body.find("template", id="panel") is not None
        assert host.document.loaded_scripts == [BASE_URL + "main.js"]
        assert host.settings.sections() == ["Debug Stub"]

    @pytest.mark.asyncio
    async def test_manifest_unreachable(self, client: httpx.AsyncClient, httpx_mock) -> None:
        httpx_mock.add_exception(httpx.ConnectError("refused"), url=BASE_URL + "manifest.json")
        host = HeadlessHost.create(client)
        result = await DebugStub(host, get_default_settings()).setup()
        assert result.ok is False
        # Auto-load is registered even when the mod fails to load.
        assert host.settings.sections() == ["Debug Stub"]

    @pytest.mark.asyncio
    async def test_auto_load_after_setup(self, client: httpx.AsyncClient, httpx_mock) -> None:
        httpx_mock.add_response(url=BASE_URL + "manifest.json", json={})
        saves = InMemorySaveRepository(slots=[SaveHeader("Hero"), SaveHeader("MOD_TEST")])
        host = HeadlessHost.create(client, saves=saves)
        await host.store.set("DEBUG_STUB_AUTO_LOAD", "true")
        await DebugStub(host, get_default_settings()).setup()
        await host.hooks.fire(CHARACTER_SELECTION_LOADED)
        assert saves.loaded == [1]
        assert saves.character_loaded_count == 1

    @pytest.mark.asyncio
    async def test_base_url_from_settings(self, client: httpx.AsyncClient, httpx_mock) -> None:
        settings = get_default_settings()
        settings["server"]["base_url"] = "http://127.0.0.1:9000/mod/"
        settings["server"]["manifest"] = "dev.json"
        httpx_mock.add_response(url="http://127.0.0.1:9000/mod/dev.json", json={"load": "a.css"})
        host = HeadlessHost.create(client)
        result = await DebugStub(host, settings).setup()
        assert result.ok is True
        assert host.document.head.find("link")["href"] == "http://127.0.0.1:9000/mod/a.css"


class TestRunner:
    @pytest.mark.asyncio
    async def test_main_async(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, httpx_mock, capsys
    ) -> None:
        monkeypatch.delenv("DEVSTUB_BASE_URL", raising=False)
        monkeypatch.setattr(runner, "_PROJECT_ROOT", tmp_path)
        monkeypatch.setattr(runner, "setup_logging", lambda root, settings: None)
        monkeypatch.setattr(runner, "load_settings", lambda: get_default_settings())
        httpx_mock.add_response(url=BASE_URL + "manifest.json", json={"load": ["a.css", "b.json"]})

        code = await runner.main_async()

        assert code == 0
        assert "1 resources loaded, 1 skipped" in capsys.readouterr().out
        store_file = tmp_path / "sandbox" / "data" / "devstub" / "storage.json"
        assert not store_file.exists()

    @pytest.mark.asyncio
    async def test_main_async_failure(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, httpx_mock
    ) -> None:
        monkeypatch.setattr(runner, "_PROJECT_ROOT", tmp_path)
        monkeypatch.setattr(runner, "setup_logging", lambda root, settings: None)
        monkeypatch.setattr(runner, "load_settings", lambda: get_default_settings())
        httpx_mock.add_response(url=BASE_URL + "manifest.json", status_code=404)
        assert await runner.main_async() == 1
