"""
storage/ - Persistence Layer
============================
Key-value storage port and its backends. Every store serializes its whole
collection to a single key, so each write is a full overwrite of that key.
Only config and utils sit below it.
"""

from storage.base import KeyValueStorage, StorageError
from storage.memory import MemoryStorage
from storage.json_file import JsonFileStorage
from storage.backend import close_storage, get_storage, init_storage, set_storage

__all__ = [
    "KeyValueStorage",
    "StorageError",
    "MemoryStorage",
    "JsonFileStorage",
    "init_storage",
    "get_storage",
    "set_storage",
    "close_storage",
]
