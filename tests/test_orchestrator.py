"""Tests for ManifestOrchestrator: phases, ordering, skipping, single catch boundary."""

import asyncio
import logging
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from devstub.orchestrator import ManifestOrchestrator
from devstub.resources.errors import ResourceTransportError
from devstub.resources.kinds import is_valid_load_resource


def _orchestrator(
    manifest: Any, setup_bindings: Any = None
) -> tuple[ManifestOrchestrator, MagicMock, MagicMock, list[tuple[str, Any]]]:
    events: list[tuple[str, Any]] = []
    loader = MagicMock()
    loader.load_data = AsyncMock(return_value=manifest)
    loader.load_module = AsyncMock(return_value=setup_bindings or {})

    async def load_resource(ref: Any) -> None:
        events.append(("start", ref))
        await asyncio.sleep(0.01)
        events.append(("end", ref))

    dispatcher = MagicMock()
    dispatcher.load_resource = AsyncMock(side_effect=load_resource)
    context = MagicMock(name="ctx")
    orch = ManifestOrchestrator(loader, dispatcher, context)
    return orch, loader, dispatcher, events


class TestLoadPhase:
    @pytest.mark.asyncio
    async def test_sequential_and_skips_json(self) -> None:
        orch, loader, dispatcher, events = _orchestrator({"load": ["a.js", "b.json", "c.css"]})
        result = await orch.run()
        assert result.ok is True
        assert events == [("start", "a.js"), ("end", "a.js"), ("start", "c.css"), ("end", "c.css")]
        assert result.loaded == ["a.js", "c.css"]
        assert result.skipped == ["b.json"]
        loader.load_data.assert_awaited_once_with("manifest.json")

    @pytest.mark.asyncio
    async def test_non_string_entries_skipped(self) -> None:
        orch, _, dispatcher, _ = _orchestrator({"load": [None, 3, {"x": 1}, "t.html"]})
        result = await orch.run()
        assert result.ok is True
        assert [c.args[0] for c in dispatcher.load_resource.await_args_list] == ["t.html"]

    @pytest.mark.asyncio
    async def test_single_reference(self) -> None:
        orch, _, dispatcher, _ = _orchestrator({"load": "main.mjs"})
        result = await orch.run()
        dispatcher.load_resource.assert_awaited_once_with("main.mjs")
        assert result.loaded == ["main.mjs"]

    @pytest.mark.asyncio
    async def test_single_invalid_reference_skipped(self) -> None:
        orch, _, dispatcher, _ = _orchestrator({"load": "data.json"})
        result = await orch.run()
        assert result.ok is True
        dispatcher.load_resource.assert_not_awaited()
        assert result.skipped == ["data.json"]

    @pytest.mark.asyncio
    async def test_failure_stops_remaining_entries(self, caplog: pytest.LogCaptureFixture) -> None:
        orch, _, dispatcher, _ = _orchestrator({"load": ["a.js", "b.js", "c.js"]})
        dispatcher.load_resource.side_effect = [None, ResourceTransportError("nope", "b.js"), None]
        with caplog.at_level(logging.ERROR):
            result = await orch.run()
        assert result.ok is False
        assert result.loaded == ["a.js"]
        assert isinstance(result.error, ResourceTransportError)
        assert dispatcher.load_resource.await_count == 2
        assert "Failed to load mod from debug stub" in caplog.text

    @pytest.mark.asyncio
    async def test_manifest_fields_ignored(self) -> None:
        orch, loader, dispatcher, _ = _orchestrator({"name": "x"})
        result = await orch.run()
        assert result.ok is True
        loader.load_module.assert_not_awaited()
        dispatcher.load_resource.assert_not_awaited()


class TestSetupPhase:
    @pytest.mark.asyncio
    async def test_setup_called_with_context_before_load(self) -> None:
        calls: list[str] = []

        async def setup(ctx: Any) -> None:
            calls.append("setup")
            assert ctx is orch._context

        orch, loader, dispatcher, events = _orchestrator(
            {"setup": "setup.js", "load": ["a.js"]}, {"setup": setup}
        )
        result = await orch.run()
        assert result.ok is True
        loader.load_module.assert_awaited_once_with("setup.js")
        assert calls == ["setup"]
        assert events[0] == ("start", "a.js")

    @pytest.mark.asyncio
    async def test_sync_setup_supported(self) -> None:
        seen: list[Any] = []
        orch, _, _, _ = _orchestrator({"setup": "setup.mjs"}, {"setup": seen.append})
        assert (await orch.run()).ok is True
        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_setup_load_failure_skips_load_phase(self) -> None:
        orch, loader, dispatcher, _ = _orchestrator({"setup": "setup.mjs", "load": ["a.js", "b.css"]})
        loader.load_module.side_effect = ZeroDivisionError("module body failed")
        result = await orch.run()
        assert result.ok is False
        assert isinstance(result.error, ZeroDivisionError)
        dispatcher.load_resource.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_setup_raising_skips_load_phase(self) -> None:
        async def setup(ctx: Any) -> None:
            raise RuntimeError("setup exploded")

        orch, _, dispatcher, _ = _orchestrator({"setup": "s.mjs", "load": "a.js"}, {"setup": setup})
        result = await orch.run()
        assert result.ok is False
        dispatcher.load_resource.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_setup_export(self) -> None:
        orch, _, dispatcher, _ = _orchestrator({"setup": "s.mjs", "load": "a.js"}, {"other": 1})
        result = await orch.run()
        assert result.ok is False
        assert isinstance(result.error, TypeError)
        dispatcher.load_resource.assert_not_awaited()


class TestManifestPhase:
    @pytest.mark.asyncio
    async def test_manifest_fetch_failure_is_terminal(self) -> None:
        orch, loader, dispatcher, _ = _orchestrator({})
        loader.load_data.side_effect = ResourceTransportError("down", "manifest.json")
        result = await orch.run()
        assert result.ok is False
        loader.load_module.assert_not_awaited()
        dispatcher.load_resource.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_manifest_not_object(self) -> None:
        orch, _, dispatcher, _ = _orchestrator(["a.js"])
        result = await orch.run()
        assert result.ok is False
        assert isinstance(result.error, ValueError)
        dispatcher.load_resource.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_custom_manifest_reference(self) -> None:
        loader = MagicMock()
        loader.load_data = AsyncMock(return_value={})
        orch = ManifestOrchestrator(loader, MagicMock(), MagicMock(), manifest_ref="mods/dev.json")
        await orch.run()
        loader.load_data.assert_awaited_once_with("mods/dev.json")


def test_skip_rule_matches_classifier() -> None:
    assert [r for r in ["a.js", "b.json", "c.css"] if is_valid_load_resource(r)] == ["a.js", "c.css"]
