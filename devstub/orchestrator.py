"""Manifest orchestration: fetch manifest -> optional setup -> sequential load.

The orchestrator is the only place resource failures are caught; they are
logged and reported, never raised to the host.
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any

from devstub.context import ModContext
from devstub.manifest import Manifest, parse_manifest
from devstub.resources.dispatcher import ResourceDispatcher
from devstub.resources.kinds import is_valid_load_resource
from devstub.resources.loaders import ResourceLoader

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST = "manifest.json"


@dataclass(frozen=True)
class OrchestrationResult:
    ok: bool
    loaded: list[str] = field(default_factory=list)
    skipped: list[Any] = field(default_factory=list)
    error: BaseException | None = None


class ManifestOrchestrator:
    """Runs one manifest once. No retries, no concurrent loads."""

    def __init__(
        self,
        loader: ResourceLoader,
        dispatcher: ResourceDispatcher,
        context: ModContext,
        manifest_ref: str = DEFAULT_MANIFEST,
    ) -> None:
        self._loader = loader
        self._dispatcher = dispatcher
        self._context = context
        self._manifest_ref = manifest_ref

    async def run(self) -> OrchestrationResult:
        loaded: list[str] = []
        skipped: list[Any] = []
        try:
            manifest = parse_manifest(await self._loader.load_data(self._manifest_ref))
            if manifest.setup:
                await self._run_setup(manifest.setup)
            await self._load_all(manifest, loaded, skipped)
        except Exception as e:
            logger.exception("Failed to load mod from debug stub: %s", e)
            return OrchestrationResult(ok=False, loaded=loaded, skipped=skipped, error=e)
        logger.info("Loaded mod from debug stub")
        return OrchestrationResult(ok=True, loaded=loaded, skipped=skipped)

    async def _run_setup(self, ref: Any) -> None:
        bindings = await self._loader.load_module(ref)
        setup = bindings.get("setup")
        if not callable(setup):
            raise TypeError(f'Setup module "{ref}" does not export a setup function')
        result = setup(self._context)
        if inspect.isawaitable(result):
            await result
        logger.debug("Setup from %s done", ref)

    async def _load_all(self, manifest: Manifest, loaded: list[str], skipped: list[Any]) -> None:
        # Strictly sequential: later resources may rely on globals registered by earlier ones.
        for ref in manifest.load_entries():
            if not is_valid_load_resource(ref):
                logger.debug("Skipping invalid load entry %r", ref)
                skipped.append(ref)
                continue
            await self._dispatcher.load_resource(ref)
            loaded.append(ref)
