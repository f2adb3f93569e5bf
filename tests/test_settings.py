import json
from datetime import date

import pytest

from config import LANGUAGE_KEY, SETTINGS_KEY
from models.settings import UserSettings


def test_defaults_when_nothing_stored(settings):
    assert settings.get_settings() == UserSettings(currency="INR", date_format="DD/MM/YYYY", language="en-US")


@pytest.mark.parametrize("raw", ["{broken", "[1, 2]", '{"currency": 5}'])
def test_unreadable_settings_fall_back_to_defaults(settings, storage, raw):
    storage.set(SETTINGS_KEY, raw)
    assert settings.get_settings() == UserSettings()


def test_update_setting_accepts_persisted_key_names(settings, storage):
    updated = settings.update_setting("dateFormat", "YYYY-MM-DD")

    assert updated.date_format == "YYYY-MM-DD"
    assert json.loads(storage.get(SETTINGS_KEY)) == {
        "currency": "INR",
        "dateFormat": "YYYY-MM-DD",
        "language": "en-US",
    }
    assert settings.get_setting("date_format") == "YYYY-MM-DD"


def test_update_setting_ignores_unknown_keys(settings, storage):
    assert settings.update_setting("theme", "dark") == UserSettings()
    assert storage.get(SETTINGS_KEY) is None


def test_update_language_syncs_cache(settings, storage):
    settings.update_setting("language", "ta-IN")
    assert storage.get(LANGUAGE_KEY) == "ta-IN"
    assert settings.get_current_language() == "ta-IN"


def test_current_language_falls_back_to_settings_then_default(settings, storage):
    assert settings.get_current_language() == "en-US"

    settings.save_settings(UserSettings(language="ta-IN"))
    storage.set(LANGUAGE_KEY, "fr-FR")
    assert settings.get_current_language() == "ta-IN"
    assert storage.get(LANGUAGE_KEY) == "ta-IN"


def test_set_language(settings, storage):
    settings.set_language("ta-IN")
    assert storage.get(LANGUAGE_KEY) == "ta-IN"
    assert storage.get(SETTINGS_KEY) is None

    settings.save_settings(UserSettings())
    settings.set_language("ta-IN")
    assert settings.get_settings().language == "ta-IN"

    settings.set_language("xx-XX")
    assert settings.get_current_language() == "ta-IN"


def test_format_currency_default_rupees(settings):
    assert settings.format_currency(1234.5) == "₹1,234.50"


def test_format_currency_override(settings):
    assert settings.format_currency(1234.5, "USD") == "$1,234.50"


def test_format_currency_changes_are_visible_to_other_services(settings, reports):
    settings.update_setting("currency", "EUR")
    assert reports.settings_service.format_currency(10) == "€10.00"


@pytest.mark.parametrize("code, amount, expected", [("XXX", 1234.5, "XXX 1234.5"), ("ABC", 10, "ABC 10")])
def test_format_currency_unknown_code_falls_back(settings, code, amount, expected):
    assert settings.format_currency(amount, code) == expected


def test_format_currency_unknown_locale_falls_back(settings):
    settings.update_setting("language", "zz-ZZ")
    assert settings.format_currency(5, "USD") == "USD 5"


def test_currency_symbol(settings):
    assert settings.get_currency_symbol() == "₹"
    assert settings.get_currency_symbol("EUR") == "€"
    assert settings.get_currency_symbol("XXX") == "XXX"


@pytest.mark.parametrize("fmt, expected", [
    ("DD/MM/YYYY", "05/03/2024"),
    ("MM/DD/YYYY", "03/05/2024"),
    ("YYYY-MM-DD", "2024-03-05"),
])
def test_format_date(settings, fmt, expected):
    settings.update_setting("date_format", fmt)
    assert settings.format_date(date(2024, 3, 5)) == expected


def test_update_setting_ignores_unsupported_date_format(settings, storage):
    settings.update_setting("dateFormat", "MM/DD/YYYY")

    result = settings.update_setting("dateFormat", "DD.MM.YY")

    assert result.date_format == "MM/DD/YYYY"
    assert json.loads(storage.get(SETTINGS_KEY))["dateFormat"] == "MM/DD/YYYY"


def test_stored_unknown_date_format_reads_as_defaults(settings, storage):
    storage.set(SETTINGS_KEY, json.dumps({"currency": "USD", "dateFormat": "DD.MM.YY", "language": "en-US"}))
    assert settings.get_settings() == UserSettings()
