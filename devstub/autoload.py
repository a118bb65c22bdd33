"""Auto-load: a persisted toggle that loads the save named MOD_TEST on character selection."""

import logging
from typing import Awaitable, Callable

from devstub.context import ModContext
from devstub.host.saves import SaveRepository
from devstub.host.settings_panel import SettingsSection, SwitchOption
from devstub.host.storage import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_SECTION = "Debug Stub"
DEFAULT_OPTION = "auto-load-test"
DEFAULT_STORAGE_KEY = "DEBUG_STUB_AUTO_LOAD"
DEFAULT_SENTINEL = "MOD_TEST"


class ToggleStore:
    """Boolean flag kept as "true"/"false" under one key of a key-value store."""

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._store = store
        self.key = key
        self._subscribers: list[Callable[[bool], Awaitable[None]]] = []

    async def read(self) -> bool:
        return await self._store.get(self.key) == "true"

    async def write(self, value: bool) -> None:
        await self._store.set(self.key, "true" if value else "false")
        for callback in list(self._subscribers):
            await callback(value)

    def subscribe(self, callback: Callable[[bool], Awaitable[None]]) -> None:
        self._subscribers.append(callback)


class AutoLoader:
    """Registers the settings switch and the two lifecycle handlers."""

    def __init__(
        self,
        toggle: ToggleStore,
        saves: SaveRepository,
        section_name: str = DEFAULT_SECTION,
        option_name: str = DEFAULT_OPTION,
        sentinel: str = DEFAULT_SENTINEL,
    ) -> None:
        self._toggle = toggle
        self._saves = saves
        self._section_name = section_name
        self._option_name = option_name
        self.sentinel = sentinel
        self._section: SettingsSection | None = None

    def register(self, ctx: ModContext) -> None:
        self._section = ctx.settings.section(self._section_name)
        self._section.add(
            SwitchOption(
                name=self._option_name,
                label=f"Auto load save with name <code>{self.sentinel}</code>",
                default=False,
                on_change=self._on_option_change,
            )
        )
        ctx.on_character_selection_loaded(self.on_character_selection_loaded)
        ctx.on_character_loaded(self.on_character_loaded)

    async def _on_option_change(self, value: bool, previous: bool) -> None:
        await self._toggle.write(bool(value))

    def find_sentinel_slot(self) -> int | None:
        """First slot below max_slots whose character name equals the sentinel."""
        headers = self._saves.headers()
        for i in range(min(self._saves.max_slots, len(headers))):
            header = headers[i]
            if header is not None and header.character_name == self.sentinel:
                logger.info("Found save with name '%s'", self.sentinel)
                return i
        return None

    async def on_character_selection_loaded(self) -> None:
        if not await self._toggle.read():
            return
        logger.info("AUTO LOADING SAVE")
        slot = self.find_sentinel_slot()
        if slot is None:
            logger.info("No save named '%s'; auto-load skipped", self.sentinel)
            return
        self._saves.show_loading(slot)
        await self._saves.load(slot)
        await self._saves.trigger_character_loaded()

    async def on_character_loaded(self) -> None:
        # The option lives in the save file; re-sync it from storage after each load.
        if self._section is None:
            return
        await self._section.set(self._option_name, await self._toggle.read())
