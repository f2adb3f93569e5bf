"""
services/budget_service.py
---------------------------
Business logic for monthly budget categories and tracking.

`spent` on a BudgetCategory is a projection: it is recomputed from the
transactions of a date window on every call to calculate_category_spending
and never written back to storage as a source of truth.
"""

from datetime import date, datetime, time
from typing import NamedTuple, Optional

from dateutil.relativedelta import relativedelta

from config import BUDGET_WARNING_PERCENT
from models.budget import BudgetCategory
from repositories.budget_repo import BudgetRepository
from repositories.transaction_repo import TransactionRepository
from storage import KeyValueStorage, get_storage
from utils.dates import DateLike, to_date
from utils.logger import get_logger

logger = get_logger(__name__)


class DateRange(NamedTuple):
    start_date: datetime
    end_date: datetime


def get_month_date_range(value: DateLike) -> DateRange:
    """
    Return the first and last instant of the month containing `value`.

    Returns:
        DateRange whose start_date is day 1 at 00:00:00 and end_date is
        the last day of the month at 23:59:59.999999.
    """
    d = to_date(value)
    first = date(d.year, d.month, 1)
    last = first + relativedelta(months=1, days=-1)
    return DateRange(datetime.combine(first, time.min), datetime.combine(last, time.max))


def budget_status(percent_spent: float) -> str:
    """Classify a category's usage: 'safe', 'warning' or 'exceeded'."""
    if percent_spent >= 100:
        return "exceeded"
    if percent_spent >= BUDGET_WARNING_PERCENT:
        return "warning"
    return "safe"


class BudgetService:
    """Manages budget categories and their spend against transactions."""

    def __init__(self, storage: Optional[KeyValueStorage] = None):
        storage = storage or get_storage()
        self.budget_repo = BudgetRepository(storage)
        self.transaction_repo = TransactionRepository(storage)

    # ── CATEGORY CRUD ─────────────────────────────────────

    def get_budget_categories(self) -> list[BudgetCategory]:
        return self.budget_repo.get_all()

    def get_budget_category(self, category_id: str) -> Optional[BudgetCategory]:
        return self.budget_repo.get_by_id(category_id)

    def add_budget_category(self, category: BudgetCategory) -> BudgetCategory:
        return self.budget_repo.add(category)

    def update_budget_category(self, category_id: str, category: BudgetCategory) -> Optional[BudgetCategory]:
        return self.budget_repo.update(category_id, category)

    def delete_budget_category(self, category_id: str) -> bool:
        return self.budget_repo.delete(category_id)

    # ── SPENDING ──────────────────────────────────────────

    def calculate_category_spending(self, start: DateLike, end: DateLike) -> list[BudgetCategory]:
        """
        Recompute `spent` for every budget category over [start, end].

        Spend is the sum of expense transactions in the window whose
        category equals the budget's name, ignoring case. Categories with
        no matching transactions get 0. Nothing is persisted.

        Args:
            start: Window start (inclusive).
            end: Window end (inclusive).

        Returns:
            The stored categories with `spent` filled in.
        """
        spending: dict[str, float] = {}
        for t in self.transaction_repo.get_by_date_range(start, end):
            if t.is_expense():
                key = t.category.lower()
                spending[key] = spending.get(key, 0.0) + t.amount

        categories = self.budget_repo.get_all()
        for c in categories:
            c.spent = spending.get(c.name.lower(), 0.0)
        return categories

    def get_month_spending(self, value: DateLike) -> list[BudgetCategory]:
        """calculate_category_spending for the calendar month containing `value`."""
        start, end = get_month_date_range(value)
        return self.calculate_category_spending(start, end)

    def get_budget_overview(self, value: DateLike) -> dict:
        """
        Spending vs. allocation for every category in a month.

        Returns:
            Dict with 'categories' (one dict per budget with 'category',
            'percent_spent', 'remaining' and 'status') and the totals
            'total_allocated', 'total_spent', 'total_remaining'.
        """
        categories = self.get_month_spending(value)

        rows = []
        for c in categories:
            pct = (c.spent / c.allocated * 100) if c.allocated > 0 else 0
            rows.append({
                "category": c,
                "percent_spent": pct,
                "remaining": c.allocated - c.spent,
                "status": budget_status(pct),
            })

        total_allocated = sum(c.allocated for c in categories)
        total_spent = sum(c.spent for c in categories)
        return {
            "categories": rows,
            "total_allocated": total_allocated,
            "total_spent": total_spent,
            "total_remaining": total_allocated - total_spent,
        }

    def get_budget_alerts(self, value: DateLike) -> list[dict]:
        """
        Categories at or above the warning threshold for the month.

        Returns:
            The overview rows whose status is 'warning' or 'exceeded'.
        """
        alerts = [
            row for row in self.get_budget_overview(value)["categories"]
            if row["status"] != "safe"
        ]
        for row in alerts:
            logger.info(
                f"Budget {row['status']}: {row['category'].name} at {row['percent_spent']:.0f}%"
            )
        return alerts
