"""Entry point: load the mod from the dev server into a headless host."""

import asyncio
import logging
from pathlib import Path

import httpx
from dotenv import load_dotenv

from devstub.host import CHARACTER_SELECTION_LOADED, HeadlessHost, JsonFileStore
from devstub.logging_config import setup_logging
from devstub.settings import get_setting, load_settings
from devstub.stub import DebugStub

logger = logging.getLogger(__name__)

_PROJECT_ROOT = Path(__file__).resolve().parent.parent


async def main_async() -> int:
    """Setup -> character selection -> summary. Returns process exit code."""
    settings = load_settings()
    setup_logging(_PROJECT_ROOT, settings)
    store_file = _PROJECT_ROOT / get_setting(
        settings, "autoload.store_file", "sandbox/data/devstub/storage.json"
    )
    timeout = get_setting(settings, "server.timeout")
    async with httpx.AsyncClient(timeout=timeout) as client:
        host = HeadlessHost.create(client, store=JsonFileStore(store_file))
        stub = DebugStub(host, settings)
        result = await stub.setup()
        await host.hooks.fire(CHARACTER_SELECTION_LOADED)
    status = "loaded" if result.ok else "failed"
    print(
        f"[devstub] mod {status}: {len(result.loaded)} resources loaded, "
        f"{len(result.skipped)} skipped"
    )
    if result.error is not None:
        print(f"[devstub] {result.error}")
    return 0 if result.ok else 1


def main() -> int:
    """Synchronous entry for python -m devstub."""
    load_dotenv(_PROJECT_ROOT / ".env")
    try:
        return asyncio.run(main_async())
    except KeyboardInterrupt:
        return 1


__all__ = ["main"]
