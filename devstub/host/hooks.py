"""Host lifecycle events. Handlers are no-arg coroutines, called once per event."""

import logging
from collections import defaultdict
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)

CHARACTER_SELECTION_LOADED = "character_selection_loaded"
CHARACTER_LOADED = "character_loaded"

Hook = Callable[[], Awaitable[None]]


class LifecycleHooks:
    """In-memory subscription points for host lifecycle events."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[Hook]] = defaultdict(list)

    def on(self, event: str, handler: Hook) -> None:
        self._handlers[event].append(handler)

    def on_character_selection_loaded(self, handler: Hook) -> None:
        self.on(CHARACTER_SELECTION_LOADED, handler)

    def on_character_loaded(self, handler: Hook) -> None:
        self.on(CHARACTER_LOADED, handler)

    async def fire(self, event: str) -> None:
        """Run handlers in registration order. A failing handler is logged; the rest still run."""
        for handler in list(self._handlers.get(event, [])):
            try:
                await handler()
            except Exception as e:
                logger.exception("Handler for %s failed: %s", event, e)
