"""
repositories/base.py
--------------------
Shared load/save plumbing for repositories that keep a whole collection
as one JSON array under a single storage key.
"""

import json
from typing import Any, Callable, Generic, Optional, TypeVar

from storage import KeyValueStorage, StorageError, get_storage
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class CollectionRepository(Generic[T]):
    """
    Base class for collection-backed repositories.

    Subclasses set `key`, `entity_name` and the `decode`/`encode` hooks.
    Reads fail soft: a missing or undecodable collection reads as empty.
    Writes overwrite the whole collection.
    """

    key: str
    entity_name: str = "record"

    def __init__(self, storage: Optional[KeyValueStorage] = None):
        self.storage = storage or get_storage()

    def decode(self, data: dict[str, Any]) -> T:
        raise NotImplementedError

    def encode(self, item: T) -> dict[str, Any]:
        raise NotImplementedError

    def _load(self) -> list[T]:
        raw = self.storage.get(self.key)
        if not raw:
            return []
        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise TypeError(f"expected a JSON array, got {type(items).__name__}")
            return [self.decode(item) for item in items]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Error parsing {self.entity_name} collection from '{self.key}': {e}")
            return []

    def _save(self, items: list[T]) -> None:
        try:
            self.storage.set(self.key, json.dumps([self.encode(i) for i in items]))
        except StorageError as e:
            logger.error(f"Error saving {self.entity_name} collection to '{self.key}': {e}")

    def replace_all(self, items: list[T]) -> None:
        """Overwrite the whole collection (used by backup restore)."""
        self._save(items)

    @staticmethod
    def _index_of(items: list[T], match: Callable[[T], bool]) -> int:
        for idx, item in enumerate(items):
            if match(item):
                return idx
        return -1
