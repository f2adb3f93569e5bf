"""
storage/memory.py
-----------------
Dict-backed storage. Default backend and the one used by tests.
"""

from typing import Optional

from storage.base import KeyValueStorage


class MemoryStorage(KeyValueStorage):
    """In-process storage that lives as long as the object does."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)
