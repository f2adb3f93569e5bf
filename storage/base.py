"""
storage/base.py
---------------
The storage port every store composes against.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageError(Exception):
    """Raised when a backend cannot read or write its underlying medium."""


class KeyValueStorage(ABC):
    """
    A flat string-to-string store.

    Values are opaque strings (JSON documents in practice). Reads of a
    missing key return None rather than raising.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under `key`, or None."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store `value` under `key`, replacing any previous value."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete `key`. Removing a missing key is a no-op."""

    @abstractmethod
    def keys(self) -> list[str]:
        """Return all keys currently stored."""
