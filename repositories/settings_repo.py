"""
repositories/settings_repo.py
-----------------------------
Data access layer for the user's settings record and the cached
language tag kept beside it.
"""

import json
from typing import Optional

from config import LANGUAGE_KEY, SETTINGS_KEY
from models.settings import UserSettings
from storage import KeyValueStorage, StorageError, get_storage
from utils.logger import get_logger

logger = get_logger(__name__)


class SettingsRepository:
    """Repository for the single UserSettings record."""

    def __init__(self, storage: Optional[KeyValueStorage] = None):
        self.storage = storage or get_storage()

    def get(self) -> UserSettings:
        """
        Fetch the stored settings.

        Returns:
            The persisted UserSettings, or the defaults if nothing is stored
            or the stored value cannot be decoded.
        """
        raw = self.storage.get(SETTINGS_KEY)
        if not raw:
            return UserSettings()
        try:
            return UserSettings.from_dict(json.loads(raw))
        except (json.JSONDecodeError, TypeError, ValueError) as e:
            logger.error(f"Error parsing settings from '{SETTINGS_KEY}': {e}")
            return UserSettings()

    def save(self, settings: UserSettings) -> None:
        """Overwrite the stored settings."""
        try:
            self.storage.set(SETTINGS_KEY, json.dumps(settings.to_dict()))
        except StorageError as e:
            logger.error(f"Error saving settings: {e}")

    def exists(self) -> bool:
        return self.storage.get(SETTINGS_KEY) is not None

    def get_cached_language(self) -> Optional[str]:
        return self.storage.get(LANGUAGE_KEY)

    def set_cached_language(self, language: str) -> None:
        try:
            self.storage.set(LANGUAGE_KEY, language)
        except StorageError as e:
            logger.error(f"Error saving language cache: {e}")
