"""
services/export_service.py
---------------------------
Data management: CSV and Excel exports of transactions, plus a JSON
backup of every collection that can be restored later.
"""

import io
import json
from datetime import datetime
from typing import Optional

import pandas as pd

from config import STORAGE_KEY_PREFIX
from models.budget import BudgetCategory
from models.goal import Goal
from models.settings import UserSettings
from models.transaction import Transaction
from repositories.budget_repo import BudgetRepository
from repositories.goal_repo import GoalRepository
from repositories.settings_repo import SettingsRepository
from repositories.transaction_repo import TransactionRepository
from storage import KeyValueStorage, StorageError, get_storage
from utils.dates import DateLike, end_of_day, start_of_day
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = ["Date", "Type", "Amount", "Category", "Description"]


class ExportService:
    """Generates downloadable reports and full backups."""

    def __init__(self, storage: Optional[KeyValueStorage] = None):
        self.storage = storage or get_storage()
        self.transaction_repo = TransactionRepository(self.storage)
        self.budget_repo = BudgetRepository(self.storage)
        self.goal_repo = GoalRepository(self.storage)
        self.settings_repo = SettingsRepository(self.storage)

    # ── SPREADSHEETS ──────────────────────────────────────

    def transactions_frame(self, start: Optional[DateLike] = None, end: Optional[DateLike] = None) -> pd.DataFrame:
        """
        Transactions as a DataFrame, oldest first.

        Args:
            start: Optional first day to include.
            end: Optional last day to include (the whole day counts).
        """
        if start is None and end is None:
            transactions = self.transaction_repo.get_all()
        else:
            transactions = self.transaction_repo.get_by_date_range(
                start_of_day(start) if start is not None else datetime.min,
                end_of_day(end) if end is not None else datetime.max,
            )

        data = [
            {
                "Date": t.date.strftime("%Y-%m-%d"),
                "Type": t.type,
                "Amount": t.amount,
                "Category": t.category,
                "Description": t.description or "",
            }
            for t in sorted(transactions, key=lambda t: t.date)
        ]
        return pd.DataFrame(data, columns=_COLUMNS)

    def export_transactions_csv(self, start: Optional[DateLike] = None, end: Optional[DateLike] = None) -> io.BytesIO:
        """
        Export transactions as a CSV file.

        Returns:
            A BytesIO buffer containing the CSV data.
        """
        df = self.transactions_frame(start, end)
        buffer = io.BytesIO()
        df.to_csv(buffer, index=False, encoding="utf-8-sig")
        buffer.seek(0)
        logger.info(f"Exported {len(df)} transactions as CSV")
        return buffer

    def export_transactions_excel(self, start: Optional[DateLike] = None, end: Optional[DateLike] = None) -> io.BytesIO:
        """
        Export transactions as an Excel (.xlsx) file.

        A second sheet sums expenses per category.

        Returns:
            A BytesIO buffer containing the Excel data.
        """
        df = self.transactions_frame(start, end)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Transactions", index=False)

            expenses = df[df["Type"] == "expense"]
            if not expenses.empty:
                summary = expenses.groupby("Category")["Amount"].sum().reset_index()
                summary.columns = ["Category", "Total"]
                summary = summary.sort_values("Total", ascending=False)
                summary.to_excel(writer, sheet_name="Summary", index=False)

        buffer.seek(0)
        logger.info(f"Exported {len(df)} transactions as Excel")
        return buffer

    # ── BACKUP ────────────────────────────────────────────

    def export_backup(self) -> str:
        """Serialize every collection and the settings to one JSON document."""
        payload = {
            "exported_at": datetime.now().isoformat(),
            "transactions": [t.to_dict() for t in self.transaction_repo.get_all()],
            "budgets": [b.to_dict() for b in self.budget_repo.get_all()],
            "goals": [g.to_dict() for g in self.goal_repo.get_all()],
            "settings": self.settings_repo.get().to_dict(),
        }
        return json.dumps(payload, indent=2, ensure_ascii=False)

    def import_backup(self, payload: str) -> bool:
        """
        Restore a backup produced by export_backup.

        Every section is decoded before anything is written, so a bad file
        leaves existing data untouched.

        Returns:
            True if the backup was restored, False if it was rejected.
        """
        try:
            data = json.loads(payload)
            transactions = [Transaction.from_dict(t) for t in data["transactions"]]
            budgets = [BudgetCategory.from_dict(b) for b in data["budgets"]]
            goals = [Goal.from_dict(g) for g in data["goals"]]
            settings = UserSettings.from_dict(data["settings"])
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Error importing backup: {e}")
            return False

        self.transaction_repo.replace_all(transactions)
        self.budget_repo.replace_all(budgets)
        self.goal_repo.replace_all(goals)
        self.settings_repo.save(settings)
        self.settings_repo.set_cached_language(settings.language)
        logger.info(
            f"Imported backup: {len(transactions)} transactions, "
            f"{len(budgets)} budgets, {len(goals)} goals"
        )
        return True

    def clear_all_data(self) -> int:
        """
        Remove every application key from storage.

        Returns:
            Number of keys removed.
        """
        removed = 0
        for key in self.storage.keys():
            if not key.startswith(STORAGE_KEY_PREFIX):
                continue
            try:
                self.storage.remove(key)
                removed += 1
            except StorageError as e:
                logger.error(f"Failed to remove '{key}': {e}")
        logger.info(f"Cleared {removed} storage keys")
        return removed
