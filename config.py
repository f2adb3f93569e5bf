"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── Storage ───────────────────────────────────────────────
# Empty path keeps everything in memory for the lifetime of the process.
STORAGE_PATH: str = os.getenv("FINANCEFLOW_STORAGE_PATH", "")
STORAGE_KEY_PREFIX: str = os.getenv("FINANCEFLOW_KEY_PREFIX", "financeflow_")

TRANSACTIONS_KEY: str = f"{STORAGE_KEY_PREFIX}transactions"
BUDGET_CATEGORIES_KEY: str = f"{STORAGE_KEY_PREFIX}budget_categories"
GOALS_KEY: str = f"{STORAGE_KEY_PREFIX}goals"
SETTINGS_KEY: str = f"{STORAGE_KEY_PREFIX}settings"
LANGUAGE_KEY: str = f"{STORAGE_KEY_PREFIX}language"

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
# Optional file that receives a copy of every log record.
LOG_FILE: str = os.getenv("FINANCEFLOW_LOG_FILE", "")

# ── User defaults ─────────────────────────────────────────
DEFAULT_CURRENCY: str = "INR"
DEFAULT_DATE_FORMAT: str = "DD/MM/YYYY"
DEFAULT_LANGUAGE: str = "en-US"

DATE_FORMATS: tuple[str, ...] = ("MM/DD/YYYY", "DD/MM/YYYY", "YYYY-MM-DD")
SUPPORTED_LANGUAGES: tuple[str, ...] = ("en-US", "ta-IN")

# Used when the locale formatter cannot resolve a symbol.
FALLBACK_CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "C$",
    "AUD": "A$",
    "CNY": "¥",
    "INR": "₹",
}

# ── Categories ────────────────────────────────────────────
# Transactions in these categories fund every goal, whatever its category.
GOAL_FUNDING_CATEGORIES: tuple[str, ...] = ("Savings", "Investments")

# ── Insight thresholds ────────────────────────────────────
SMALL_PURCHASE_THRESHOLD: float = float(os.getenv("SMALL_PURCHASE_THRESHOLD", "20"))
SMALL_PURCHASE_MIN_COUNT: int = 5
HIGH_CATEGORY_SHARE: float = 30.0
TARGET_SAVINGS_RATE: float = 20.0

# ── Budget alerts ─────────────────────────────────────────
BUDGET_WARNING_PERCENT: float = float(os.getenv("BUDGET_WARNING_PERCENT", "80"))
