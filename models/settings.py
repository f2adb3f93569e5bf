"""
models/settings.py
------------------
Domain model for the user's display preferences.
"""

from dataclasses import asdict, dataclass
from typing import Any

from config import DATE_FORMATS, DEFAULT_CURRENCY, DEFAULT_DATE_FORMAT, DEFAULT_LANGUAGE
from models.common import require_str

# Persisted (camelCase) name -> attribute name.
SETTING_ALIASES = {"dateFormat": "date_format"}


@dataclass
class UserSettings:
    """
    Process-wide user preferences.

    Attributes:
        currency: ISO-like currency code used by format_currency.
        date_format: One of 'MM/DD/YYYY', 'DD/MM/YYYY', 'YYYY-MM-DD'.
        language: Locale tag, also used as the number-formatting locale.
    """
    currency: str = DEFAULT_CURRENCY
    date_format: str = DEFAULT_DATE_FORMAT
    language: str = DEFAULT_LANGUAGE

    def __post_init__(self) -> None:
        for name, value in asdict(self).items():
            require_str(value, name)
        if self.date_format not in DATE_FORMATS:
            raise ValueError(f"date_format must be one of {DATE_FORMATS}, got {self.date_format!r}")

    @staticmethod
    def field_name(key: str) -> str:
        """Map a persisted or attribute key to the attribute name."""
        return SETTING_ALIASES.get(key, key)

    def to_dict(self) -> dict[str, Any]:
        return {
            "currency": self.currency,
            "dateFormat": self.date_format,
            "language": self.language,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserSettings":
        """Decode persisted settings; missing fields take their defaults."""
        if not isinstance(data, dict):
            raise TypeError(f"settings must be an object, got {type(data).__name__}")
        defaults = cls()
        return cls(
            currency=data.get("currency", defaults.currency),
            date_format=data.get("dateFormat", defaults.date_format),
            language=data.get("language", defaults.language),
        )
