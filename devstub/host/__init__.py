"""Host collaborators: page, module runtime, settings panel, lifecycle hooks, saves, storage."""

from dataclasses import dataclass, field

import httpx

from devstub.host.document import Document, FetchingDocument
from devstub.host.hooks import CHARACTER_LOADED, CHARACTER_SELECTION_LOADED, LifecycleHooks
from devstub.host.modules import HttpModuleRuntime, ModuleRuntime
from devstub.host.saves import InMemorySaveRepository, SaveHeader, SaveRepository
from devstub.host.settings_panel import SettingsPanel, SettingsSection, SwitchOption
from devstub.host.storage import JsonFileStore, KeyValueStore, MemoryKeyValueStore


@dataclass
class HeadlessHost:
    """All host collaborators in one place, without a browser."""

    document: Document
    runtime: ModuleRuntime
    client: httpx.AsyncClient
    store: KeyValueStore
    saves: SaveRepository
    settings: SettingsPanel = field(default_factory=SettingsPanel)
    hooks: LifecycleHooks = field(default_factory=LifecycleHooks)

    @classmethod
    def create(
        cls,
        client: httpx.AsyncClient,
        store: KeyValueStore | None = None,
        saves: SaveRepository | None = None,
    ) -> "HeadlessHost":
        return cls(
            document=FetchingDocument(client),
            runtime=HttpModuleRuntime(client),
            client=client,
            store=store if store is not None else MemoryKeyValueStore(),
            saves=saves if saves is not None else InMemorySaveRepository(),
        )


__all__ = [
    "CHARACTER_LOADED",
    "CHARACTER_SELECTION_LOADED",
    "Document",
    "FetchingDocument",
    "HeadlessHost",
    "HttpModuleRuntime",
    "InMemorySaveRepository",
    "JsonFileStore",
    "KeyValueStore",
    "LifecycleHooks",
    "MemoryKeyValueStore",
    "ModuleRuntime",
    "SaveHeader",
    "SaveRepository",
    "SettingsPanel",
    "SettingsSection",
    "SwitchOption",
]
