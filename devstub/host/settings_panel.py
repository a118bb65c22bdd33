"""Host settings panel: named sections of options with change notification."""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[Any, Any], Awaitable[None] | None]


@dataclass
class SwitchOption:
    """Boolean toggle. on_change(value, previous) runs when the value changes."""

    name: str
    label: str = ""
    default: bool = False
    on_change: ChangeCallback | None = None
    type: str = "switch"


class SettingsSection:
    def __init__(self, name: str) -> None:
        self.name = name
        self._options: dict[str, SwitchOption] = {}
        self._values: dict[str, Any] = {}

    def add(self, option: SwitchOption) -> None:
        if option.name in self._options:
            raise ValueError(f"Option {option.name} already registered in section {self.name}")
        self._options[option.name] = option
        self._values[option.name] = option.default

    def get(self, name: str) -> Any:
        if name not in self._options:
            raise KeyError(f"Unknown option {name} in section {self.name}")
        return self._values[name]

    async def set(self, name: str, value: Any) -> None:
        if name not in self._options:
            raise KeyError(f"Unknown option {name} in section {self.name}")
        previous = self._values[name]
        if previous == value:
            return
        self._values[name] = value
        option = self._options[name]
        if option.on_change is None:
            return
        result = option.on_change(value, previous)
        if inspect.isawaitable(result):
            await result

    def options(self) -> list[SwitchOption]:
        return list(self._options.values())


class SettingsPanel:
    """Settings registration capability. section(name) creates on first use."""

    def __init__(self) -> None:
        self._sections: dict[str, SettingsSection] = {}

    def section(self, name: str) -> SettingsSection:
        if name not in self._sections:
            self._sections[name] = SettingsSection(name)
            logger.debug("Settings section registered: %s", name)
        return self._sections[name]

    def sections(self) -> list[str]:
        return list(self._sections)
