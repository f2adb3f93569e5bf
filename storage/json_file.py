"""
storage/json_file.py
--------------------
File-backed storage: a single JSON object mapping keys to string values.
Every write rewrites the file through a temporary file and os.replace().
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from storage.base import KeyValueStorage, StorageError
from utils.logger import get_logger

logger = get_logger(__name__)


class JsonFileStorage(KeyValueStorage):
    """
    Persist keys to a JSON file on disk.

    Args:
        path: Location of the backing file. Created on first write.

    An existing file that cannot be read, or is not a JSON object of
    strings, is renamed to `<name>.corrupt` and storage starts empty.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._data: dict[str, str] = self._load()

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        previous = self._data.get(key)
        self._data[key] = value
        try:
            self._flush()
        except StorageError:
            if previous is None:
                self._data.pop(key, None)
            else:
                self._data[key] = previous
            raise

    def remove(self, key: str) -> None:
        if key not in self._data:
            return
        previous = self._data.pop(key)
        try:
            self._flush()
        except StorageError:
            self._data[key] = previous
            raise

    def keys(self) -> list[str]:
        return list(self._data)

    # ── HELPERS ───────────────────────────────────────────

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read storage file {self.path}: {e}")
            self._quarantine()
            return {}

        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            logger.error(f"Storage file {self.path} is not a JSON object of strings")
            self._quarantine()
            return {}
        return data

    def _quarantine(self) -> None:
        """Move an unusable backing file aside so the next write cannot clobber it."""
        target = self.path.with_name(f"{self.path.name}.corrupt")
        try:
            os.replace(self.path, target)
            logger.warning(f"Moved unreadable storage file to {target}; starting empty")
        except OSError as e:
            logger.error(f"Could not move {self.path} aside: {e}")

    def _flush(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(self._data, f, ensure_ascii=False)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Failed to write storage file {self.path}: {e}")
            raise StorageError(f"Cannot write {self.path}") from e
