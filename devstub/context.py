"""ModContext: host API handed to a mod's setup entry point."""

import logging
from typing import Any

from devstub.host.hooks import Hook, LifecycleHooks
from devstub.host.settings_panel import SettingsPanel
from devstub.resources.loaders import LoaderCapabilities


class ModContext:
    """Everything a mod can do during setup, only through this object."""

    def __init__(
        self,
        loaders: LoaderCapabilities,
        settings: SettingsPanel,
        hooks: LifecycleHooks,
        logger: logging.Logger,
        config: dict[str, Any] | None = None,
    ) -> None:
        self.loaders = loaders
        self.settings = settings
        self.logger = logger
        self.config = config or {}
        self._hooks = hooks

    async def load_script(self, ref: str) -> None:
        await self.loaders.load_script(ref)

    async def load_module(self, ref: str) -> dict[str, Any]:
        return await self.loaders.load_module(ref)

    def load_stylesheet(self, ref: str) -> None:
        self.loaders.load_stylesheet(ref)

    async def load_templates(self, ref: str) -> None:
        await self.loaders.load_templates(ref)

    async def load_data(self, ref: str) -> Any:
        return await self.loaders.load_data(ref)

    def on_character_selection_loaded(self, handler: Hook) -> None:
        """Run handler once each time the character selection screen finishes loading."""
        self._hooks.on_character_selection_loaded(handler)

    def on_character_loaded(self, handler: Hook) -> None:
        """Run handler once each time a character finishes loading."""
        self._hooks.on_character_loaded(handler)

    def get_config(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)
