"""Host key-value storage (the page's local storage). String keys and values."""

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str | None) -> None:
        """Store value; None removes the key."""


class MemoryKeyValueStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str | None) -> None:
        if value is None:
            self._data.pop(key, None)
        else:
            self._data[key] = value


class JsonFileStore:
    """JSON file-backed key-value store. Atomic writes via temp file + replace."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._temp_path = path.with_name(path.name + ".tmp")

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return data if isinstance(data, dict) else {}
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Unreadable store %s, starting empty: %s", self._path, e)
            return {}

    def _save(self, store: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._temp_path.write_text(
            json.dumps(store, ensure_ascii=False, indent=2), encoding="utf-8"
        )
        self._temp_path.replace(self._path)

    async def get(self, key: str) -> str | None:
        return self._load().get(key)

    async def set(self, key: str, value: str | None) -> None:
        store = self._load()
        if value is None:
            store.pop(key, None)
        else:
            store[key] = value
        self._save(store)
