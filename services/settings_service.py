"""
services/settings_service.py
----------------------------
User preferences plus the currency and date formatting that depends on
them. Every read goes back to storage, so a change made through one
service instance is visible to all others immediately.
"""

import re
from dataclasses import fields, replace
from typing import Any, Optional

from babel import Locale, UnknownLocaleError
from babel.numbers import UnknownCurrencyError, format_currency, validate_currency

from config import DEFAULT_LANGUAGE, FALLBACK_CURRENCY_SYMBOLS, SUPPORTED_LANGUAGES
from models.settings import UserSettings
from repositories.settings_repo import SettingsRepository
from storage import KeyValueStorage
from utils.dates import DateLike, to_date
from utils.logger import get_logger

logger = get_logger(__name__)

# ISO 4217 codes that denote "no currency" / testing rather than money.
_PLACEHOLDER_CURRENCIES = {"XXX", "XTS"}
_SYMBOL_NOISE = re.compile(r"[0-9.,\s]")
_SETTING_FIELDS = {f.name for f in fields(UserSettings)}


def _plain_number(amount: float) -> str:
    value = float(amount)
    return str(int(value)) if value.is_integer() else repr(value)


class SettingsService:
    """Reads and updates UserSettings and formats values with them."""

    def __init__(self, storage: Optional[KeyValueStorage] = None):
        self.repo = SettingsRepository(storage)

    # ── SETTINGS ──────────────────────────────────────────

    def get_settings(self) -> UserSettings:
        """Return the stored settings, or the defaults."""
        return self.repo.get()

    def save_settings(self, settings: UserSettings) -> None:
        self.repo.save(settings)

    def get_setting(self, key: str) -> Any:
        return getattr(self.get_settings(), UserSettings.field_name(key))

    def update_setting(self, key: str, value: Any) -> UserSettings:
        """
        Change a single setting (read-modify-write, last write wins).

        Args:
            key: 'currency', 'date_format' (or 'dateFormat') or 'language'.
            value: The new value.

        Returns:
            The full settings after the update. Unknown keys and invalid
            values (e.g. a date format outside DATE_FORMATS) are ignored
            and the current settings are returned unchanged.
        """
        current = self.get_settings()
        name = UserSettings.field_name(key)
        if name not in _SETTING_FIELDS:
            logger.warning(f"Ignoring unknown setting '{key}'")
            return current

        try:
            updated = replace(current, **{name: value})
        except (TypeError, ValueError) as e:
            logger.warning(f"Ignoring invalid value for setting '{key}': {e}")
            return current
        self.repo.save(updated)
        if name == "language":
            self.repo.set_cached_language(value)
        return updated

    # ── LANGUAGE ──────────────────────────────────────────

    def get_current_language(self) -> str:
        """
        Resolve the active UI language.

        The cached language key wins; otherwise the settings' language is
        used and copied into the cache. Unsupported values fall back to
        the default language.
        """
        cached = self.repo.get_cached_language()
        if cached in SUPPORTED_LANGUAGES:
            return cached

        if self.repo.exists():
            language = self.get_settings().language
            if language in SUPPORTED_LANGUAGES:
                self.repo.set_cached_language(language)
                return language

        return DEFAULT_LANGUAGE

    def set_language(self, language: str) -> None:
        """Set the UI language in both the cache and the stored settings."""
        if language not in SUPPORTED_LANGUAGES:
            logger.warning(f"Unsupported language '{language}', keeping current setting")
            return
        self.repo.set_cached_language(language)
        if self.repo.exists():
            self.repo.save(replace(self.get_settings(), language=language))

    # ── FORMATTING ────────────────────────────────────────

    def format_currency(self, amount: float, currency_code: Optional[str] = None) -> str:
        """
        Format an amount as money in the user's locale.

        Args:
            amount: The value to format.
            currency_code: Overrides the settings' currency.

        Returns:
            e.g. "₹1,234.50". Unrecognized currencies or locales produce
            "<code> <amount>" instead, e.g. "XXX 1234.5".
        """
        settings = self.get_settings()
        currency = currency_code or settings.currency
        try:
            locale = self._locale(settings.language)
            self._check_currency(currency, locale)
            return format_currency(amount, currency.upper(), locale=locale)
        except (UnknownCurrencyError, UnknownLocaleError, ValueError, TypeError) as e:
            logger.error(f"Error formatting currency {currency!r}: {e}")
            return f"{currency} {_plain_number(amount)}"

    def get_currency_symbol(self, currency_code: Optional[str] = None) -> str:
        """
        Return the bare symbol for a currency (e.g. '₹', '$').

        The symbol is taken from a formatted zero with digits, separators
        and spaces stripped. If formatting fails, a small table of common
        symbols is consulted, and finally the code itself is returned.
        """
        settings = self.get_settings()
        currency = currency_code or settings.currency
        try:
            locale = self._locale(settings.language)
            self._check_currency(currency, locale)
            formatted = format_currency(0, currency.upper(), locale=locale)
            return _SYMBOL_NOISE.sub("", formatted)
        except (UnknownCurrencyError, UnknownLocaleError, ValueError, TypeError) as e:
            logger.error(f"Error getting currency symbol for {currency!r}: {e}")
            return FALLBACK_CURRENCY_SYMBOLS.get(currency, currency)

    def format_date(self, value: DateLike) -> str:
        """Render a date using the settings' date format."""
        d = to_date(value)
        day, month, year = f"{d.day:02d}", f"{d.month:02d}", d.year
        date_format = self.get_settings().date_format

        if date_format == "MM/DD/YYYY":
            return f"{month}/{day}/{year}"
        if date_format == "YYYY-MM-DD":
            return f"{year}-{month}-{day}"
        return f"{day}/{month}/{year}"

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _locale(language: str) -> Locale:
        return Locale.parse(language, sep="-")

    @staticmethod
    def _check_currency(currency: str, locale: Locale) -> None:
        code = currency.upper()
        if code in _PLACEHOLDER_CURRENCIES:
            raise UnknownCurrencyError(currency)
        validate_currency(code, locale)
