"""
Durable local key/value storage.

Plays the part of the browser's local storage: string values under string
keys, kept in a single JSON file. `MemoryStorage` keeps them in a dict.
`ScopedStorage` gives one client session its own slice of either.
"""
import json
import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class MemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._items)


class FileStorage:
    """Every write rewrites the whole file. An unreadable file reads as empty."""

    def __init__(self, path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                items = json.load(fh)
        except ValueError as e:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return {}
        if not isinstance(items, dict):
            logger.warning(f"Ignoring storage file {self.path}: expected an object")
            return {}
        return items

    def _write(self, items: Dict[str, str]) -> None:
        with self.path.open("w", encoding="utf-8") as fh:
            json.dump(items, fh, ensure_ascii=False)

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            items = self._read()
            items[key] = value
            self._write(items)

    def remove_item(self, key: str) -> None:
        with self._lock:
            items = self._read()
            if key in items:
                del items[key]
                self._write(items)

    def keys(self) -> List[str]:
        return list(self._read())


class ScopedStorage:
    """Keys of one client session, stored as `<scope>:<key>` in a shared storage."""

    def __init__(self, storage, scope: str):
        self.storage = storage
        self.scope = scope

    def _key(self, key: str) -> str:
        return f"{self.scope}:{key}"

    def get_item(self, key: str) -> Optional[str]:
        return self.storage.get_item(self._key(key))

    def set_item(self, key: str, value: str) -> None:
        self.storage.set_item(self._key(key), value)

    def remove_item(self, key: str) -> None:
        self.storage.remove_item(self._key(key))

    def keys(self) -> List[str]:
        prefix = self._key("")
        return [key[len(prefix):] for key in self.storage.keys() if key.startswith(prefix)]

    def clear(self) -> None:
        for key in self.keys():
            self.remove_item(key)
