"""Save slots: headers, load-by-index and the post-load notification."""

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Protocol, Sequence, runtime_checkable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveHeader:
    character_name: str


@runtime_checkable
class SaveRepository(Protocol):
    """Host save storage consumed by auto-load."""

    @property
    def max_slots(self) -> int: ...

    def headers(self) -> Sequence[SaveHeader | None]:
        """Ordered slot headers; None for an empty slot."""

    def show_loading(self, index: int) -> None:
        """Show the loading indicator on the selected slot."""

    async def load(self, index: int) -> None:
        """Load the save in slot index."""

    async def trigger_character_loaded(self) -> None:
        """Notify the host that a character finished loading."""


@dataclass
class InMemorySaveRepository:
    """Save repository backed by a list. Records every call for inspection."""

    slots: list[SaveHeader | None] = field(default_factory=list)
    slot_limit: int | None = None
    on_character_loaded: Callable[[], Awaitable[None]] | None = None
    loading_shown: list[int] = field(default_factory=list)
    loaded: list[int] = field(default_factory=list)
    character_loaded_count: int = 0

    @property
    def max_slots(self) -> int:
        return self.slot_limit if self.slot_limit is not None else len(self.slots)

    def headers(self) -> Sequence[SaveHeader | None]:
        return self.slots

    def show_loading(self, index: int) -> None:
        self.loading_shown.append(index)

    async def load(self, index: int) -> None:
        if index < 0 or index >= len(self.slots) or self.slots[index] is None:
            raise IndexError(f"No save in slot {index}")
        logger.info("Loading save slot %d (%s)", index, self.slots[index].character_name)
        self.loaded.append(index)

    async def trigger_character_loaded(self) -> None:
        self.character_loaded_count += 1
        if self.on_character_loaded is not None:
            await self.on_character_loaded()
