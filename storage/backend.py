"""
storage/backend.py
------------------
Manages the process-wide default storage instance.
Stores and services use it whenever no explicit storage is injected.
"""

from typing import Optional

from config import STORAGE_PATH
from storage.base import KeyValueStorage
from storage.json_file import JsonFileStorage
from storage.memory import MemoryStorage
from utils.logger import get_logger

logger = get_logger(__name__)

_storage: Optional[KeyValueStorage] = None


def init_storage(path: Optional[str] = None) -> KeyValueStorage:
    """
    Initialize the default storage backend.

    Args:
        path: JSON file to persist to. Falls back to STORAGE_PATH from the
            environment; when both are empty, storage is in-memory.

    Returns:
        The active storage instance. Calling again is a no-op.
    """
    global _storage
    if _storage is not None:
        return _storage

    path = path or STORAGE_PATH
    if path:
        _storage = JsonFileStorage(path)
        logger.info(f"File storage initialized at {path}.")
    else:
        _storage = MemoryStorage()
        logger.info("In-memory storage initialized.")
    return _storage


def get_storage() -> KeyValueStorage:
    """Return the default storage, initializing it from config on first use."""
    if _storage is None:
        return init_storage()
    return _storage


def set_storage(storage: KeyValueStorage) -> None:
    """Replace the default storage (e.g. with a pre-populated backend)."""
    global _storage
    _storage = storage


def close_storage() -> None:
    """Drop the default storage so the next access re-initializes it."""
    global _storage
    if _storage is not None:
        _storage = None
        logger.info("Storage closed.")
