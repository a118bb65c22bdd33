"""DebugStub: install loaders, the auto-load option and hooks, then load the mod from the dev server."""

import logging
from typing import Any

from devstub.autoload import AutoLoader, ToggleStore
from devstub.context import ModContext
from devstub.host import HeadlessHost
from devstub.orchestrator import ManifestOrchestrator, OrchestrationResult
from devstub.resources.dispatcher import ResourceDispatcher
from devstub.resources.kinds import MOD_TAG
from devstub.resources.loaders import ResourceLoader
from devstub.settings import get_setting

logger = logging.getLogger(__name__)


class DebugStub:
    """Wiring: host -> loader -> dispatcher -> context -> auto-load -> orchestrator."""

    def __init__(self, host: HeadlessHost, settings: dict[str, Any]) -> None:
        self._host = host
        self._settings = settings
        self.loader = ResourceLoader(
            document=host.document,
            runtime=host.runtime,
            client=host.client,
            base_url=get_setting(settings, "server.base_url", "http://localhost:8080/"),
        )
        self.dispatcher = ResourceDispatcher(self.loader)
        self.context = self.build_context()
        self.autoload = AutoLoader(
            toggle=ToggleStore(
                host.store, get_setting(settings, "autoload.storage_key", "DEBUG_STUB_AUTO_LOAD")
            ),
            saves=host.saves,
            section_name=get_setting(settings, "autoload.section", "Debug Stub"),
            option_name=get_setting(settings, "autoload.option", "auto-load-test"),
            sentinel=get_setting(settings, "autoload.sentinel", "MOD_TEST"),
        )
        self.orchestrator = ManifestOrchestrator(
            loader=self.loader,
            dispatcher=self.dispatcher,
            context=self.context,
            manifest_ref=get_setting(settings, "server.manifest", "manifest.json"),
        )

    def build_context(self) -> ModContext:
        return ModContext(
            loaders=self.loader.capabilities(),
            settings=self._host.settings,
            hooks=self._host.hooks,
            logger=logging.getLogger(f"mod.{MOD_TAG}"),
            config=dict(self._settings.get("mod", {}) or {}),
        )

    async def setup(self) -> OrchestrationResult:
        """Register auto-load before loading so it works even if the mod fails."""
        self.autoload.register(self.context)
        logger.info("Debug stub installed; loading mod from %s", self.loader.base_url)
        return await self.orchestrator.run()
