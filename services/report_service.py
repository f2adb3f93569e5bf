"""
services/report_service.py
--------------------------
Derived reports over transactions: time-frame filtering, category
breakdowns, monthly/yearly income vs. expense series, dashboard totals
and rule-based financial insights.

The module-level functions are pure and work on any list of transactions.
ReportService binds them to the stored transactions.

Note: category grouping here is exact (case-sensitive), unlike budget
matching in budget_service, which ignores case.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Callable, Iterable, Optional

from dateutil.relativedelta import relativedelta

from config import (
    HIGH_CATEGORY_SHARE,
    SMALL_PURCHASE_MIN_COUNT,
    SMALL_PURCHASE_THRESHOLD,
    TARGET_SAVINGS_RATE,
)
from models.transaction import Transaction
from repositories.transaction_repo import TransactionRepository
from services.settings_service import SettingsService
from storage import KeyValueStorage, get_storage
from utils.logger import get_logger

logger = get_logger(__name__)

TIME_FRAMES = ("week", "month", "year")


@dataclass
class CategoryTotal:
    category: str
    total: float
    count: int
    percentage: float


@dataclass
class PeriodTotals:
    """Income and expense sums for one month or year bucket."""
    label: str
    income: float = 0.0
    expense: float = 0.0


@dataclass
class Insight:
    type: str  # 'positive' | 'suggestion' | 'warning' | 'forecast'
    title: str
    description: str


def _default_amount(value: float) -> str:
    return f"{value:,.2f}"


# ── TIME FRAMES ───────────────────────────────────────────

def get_time_frame_start(time_frame: str, now: Optional[datetime] = None) -> datetime:
    """
    Start of the current calendar week (Sunday), month or year, at midnight.

    Raises:
        ValueError: If `time_frame` is not 'week', 'month' or 'year'.
    """
    now = now or datetime.now()
    today = now.date()
    if time_frame == "week":
        # weekday(): Monday == 0, so Sunday is 6
        start = today - timedelta(days=(today.weekday() + 1) % 7)
    elif time_frame == "month":
        start = today.replace(day=1)
    elif time_frame == "year":
        start = today.replace(month=1, day=1)
    else:
        raise ValueError(f"time_frame must be one of {TIME_FRAMES}, got {time_frame!r}")
    return datetime.combine(start, time.min)


def filter_by_time_frame(
    transactions: Iterable[Transaction], time_frame: str, now: Optional[datetime] = None
) -> list[Transaction]:
    """Keep transactions dated from the start of the time frame up to `now`."""
    now = now or datetime.now()
    start = get_time_frame_start(time_frame, now)
    return [t for t in transactions if start <= t.date <= now]


# ── AGGREGATES ────────────────────────────────────────────

def calculate_category_totals(transactions: Iterable[Transaction]) -> list[CategoryTotal]:
    """
    Group expenses by exact category name.

    Returns:
        One CategoryTotal per category, largest total first, with each
        category's share of the overall expense total in percent.
    """
    totals: dict[str, float] = {}
    counts: dict[str, int] = {}
    for t in transactions:
        if not t.is_expense():
            continue
        totals[t.category] = totals.get(t.category, 0.0) + t.amount
        counts[t.category] = counts.get(t.category, 0) + 1

    grand_total = sum(totals.values())
    result = [
        CategoryTotal(
            category=cat,
            total=total,
            count=counts[cat],
            percentage=(total / grand_total * 100) if grand_total > 0 else 0,
        )
        for cat, total in totals.items()
    ]
    return sorted(result, key=lambda c: c.total, reverse=True)


def get_financial_summary(transactions: Iterable[Transaction]) -> dict:
    """
    Totals for a set of transactions.

    Returns:
        Dict with 'income', 'expenses', 'balance' (income - expenses) and
        'transaction_count'.
    """
    income = expenses = 0.0
    count = 0
    for t in transactions:
        count += 1
        if t.is_income():
            income += t.amount
        else:
            expenses += t.amount
    return {
        "income": income,
        "expenses": expenses,
        "balance": income - expenses,
        "transaction_count": count,
    }


def get_financial_health_score(income: float, expenses: float) -> dict:
    """
    Score how much of income is left after expenses, from 0 to 100.

    Returns:
        Dict with 'score' and 'label' ('Excellent', 'Good', 'Average',
        'Concerning' or 'Critical'). No income scores 0.
    """
    score = min(max((1 - expenses / income) * 100, 0), 100) if income > 0 else 0
    if score >= 70:
        label = "Excellent"
    elif score >= 50:
        label = "Good"
    elif score >= 30:
        label = "Average"
    elif score >= 10:
        label = "Concerning"
    else:
        label = "Critical"
    return {"score": score, "label": label}


# ── SERIES ────────────────────────────────────────────────

def month_label(value: date) -> str:
    return value.strftime("%b %Y")


def calculate_monthly_series(
    transactions: Iterable[Transaction], months: int = 6, now: Optional[datetime] = None
) -> list[PeriodTotals]:
    """
    Income/expense per calendar month for the last `months` months,
    oldest first, ending with the current month.

    Every month gets a bucket even without transactions. Transactions
    dated outside those months are ignored.
    """
    now = now or datetime.now()
    current = now.date().replace(day=1)
    buckets = {}
    for offset in range(months - 1, -1, -1):
        label = month_label(current - relativedelta(months=offset))
        buckets[label] = PeriodTotals(label)

    for t in transactions:
        bucket = buckets.get(month_label(t.date))
        if bucket is None:
            continue
        if t.is_income():
            bucket.income += t.amount
        else:
            bucket.expense += t.amount
    return list(buckets.values())


def calculate_yearly_series(
    transactions: Iterable[Transaction], years: int = 3, now: Optional[datetime] = None
) -> list[PeriodTotals]:
    """Income/expense per calendar year for the last `years` years, ascending."""
    now = now or datetime.now()
    buckets = {
        year: PeriodTotals(str(year))
        for year in range(now.year - years + 1, now.year + 1)
    }
    for t in transactions:
        bucket = buckets.get(t.date.year)
        if bucket is None:
            continue
        if t.is_income():
            bucket.income += t.amount
        else:
            bucket.expense += t.amount
    return list(buckets.values())


def months_for_time_frame(time_frame: str) -> int:
    """Trend length: 12 months for 'year', 6 for 'week' and 'month'."""
    if time_frame not in TIME_FRAMES:
        raise ValueError(f"time_frame must be one of {TIME_FRAMES}, got {time_frame!r}")
    return 12 if time_frame == "year" else 6


# ── INSIGHTS ──────────────────────────────────────────────

def generate_insights(
    transactions: list[Transaction],
    time_frame: str,
    format_amount: Callable[[float], str] = _default_amount,
) -> list[Insight]:
    """
    Produce advice from the transactions of one time frame.

    Rules, in order:
        - no transactions: a single "no data" suggestion;
        - savings rate (only with income): positive from 20%, suggestion
          above 0%, warning when nothing is saved;
        - top expense category above 30% of expenses: suggestion;
        - 5+ expenses under the small-purchase threshold: suggestion;
        - 'month'/'year' frames: spending forecast of expenses x 12.

    Args:
        transactions: Already filtered to the time frame.
        time_frame: 'week', 'month' or 'year'.
        format_amount: Renders money amounts in descriptions.
    """
    if not transactions:
        return [Insight(
            type="suggestion",
            title="No Transaction Data",
            description=f"Start tracking your finances for this {time_frame} to get personalized insights.",
        )]

    insights: list[Insight] = []
    summary = get_financial_summary(transactions)
    income, expenses = summary["income"], summary["expenses"]

    if income > 0:
        savings_rate = (income - expenses) / income * 100
        if savings_rate >= TARGET_SAVINGS_RATE:
            insights.append(Insight(
                type="positive",
                title="Excellent Savings Rate",
                description=(
                    f"You're saving {savings_rate:.1f}% of your income, "
                    f"which is above the recommended {TARGET_SAVINGS_RATE:.0f}%."
                ),
            ))
        elif savings_rate > 0:
            insights.append(Insight(
                type="suggestion",
                title="Improve Your Savings",
                description=(
                    f"Your current savings rate is {savings_rate:.1f}%. Try to aim for at least "
                    f"{TARGET_SAVINGS_RATE:.0f}% to build financial security."
                ),
            ))
        else:
            insights.append(Insight(
                type="warning",
                title="Spending Exceeds Income",
                description=(
                    "Your expenses are higher than your income. "
                    "Consider reviewing your budget to avoid debt."
                ),
            ))

    categories = calculate_category_totals(transactions)
    if categories and categories[0].percentage > HIGH_CATEGORY_SHARE:
        top = categories[0]
        insights.append(Insight(
            type="suggestion",
            title=f"High {top.category} Spending",
            description=(
                f"{top.category} accounts for {top.percentage:.1f}% of your expenses. "
                "Consider if there are ways to reduce this."
            ),
        ))

    small = [t for t in transactions if t.is_expense() and t.amount < SMALL_PURCHASE_THRESHOLD]
    if len(small) >= SMALL_PURCHASE_MIN_COUNT:
        insights.append(Insight(
            type="suggestion",
            title="Frequent Small Purchases",
            description=(
                f"You made {len(small)} small purchases under "
                f"{format_amount(SMALL_PURCHASE_THRESHOLD)}. These can add up quickly."
            ),
        ))

    if time_frame in ("month", "year"):
        insights.append(Insight(
            type="forecast",
            title="Spending Forecast",
            description=(
                "If your spending patterns continue, you'll spend approximately "
                f"{format_amount(expenses * 12)} this year."
            ),
        ))

    return insights


class ReportService:
    """Reports computed from the stored transactions, fresh on every call."""

    def __init__(self, storage: Optional[KeyValueStorage] = None):
        storage = storage or get_storage()
        self.transaction_repo = TransactionRepository(storage)
        self.settings_service = SettingsService(storage)

    def get_filtered_transactions(self, time_frame: str, now: Optional[datetime] = None) -> list[Transaction]:
        return filter_by_time_frame(self.transaction_repo.get_all(), time_frame, now)

    def get_spending_breakdown(self, time_frame: str, now: Optional[datetime] = None) -> list[CategoryTotal]:
        """Expense totals per category for the time frame, largest first."""
        return calculate_category_totals(self.get_filtered_transactions(time_frame, now))

    def get_top_expense_categories(
        self, time_frame: str, limit: int = 5, now: Optional[datetime] = None
    ) -> dict:
        """
        The biggest expense categories of the time frame.

        Returns:
            Dict with 'categories' (at most `limit` CategoryTotal) and
            'total' (all expenses of the time frame).
        """
        categories = self.get_spending_breakdown(time_frame, now)
        return {
            "categories": categories[:max(0, limit)],
            "total": sum(c.total for c in categories),
        }

    def get_income_expense_trend(self, time_frame: str, now: Optional[datetime] = None) -> list[PeriodTotals]:
        """Monthly series: 6 months for week/month, 12 for year."""
        return calculate_monthly_series(
            self.transaction_repo.get_all(), months_for_time_frame(time_frame), now
        )

    def get_yearly_summary(self, now: Optional[datetime] = None) -> list[PeriodTotals]:
        """Yearly series for the current year and the two before it."""
        return calculate_yearly_series(self.transaction_repo.get_all(), 3, now)

    def get_dashboard(self, now: Optional[datetime] = None, recent_limit: int = 5) -> dict:
        """
        Everything the dashboard shows, over all transactions.

        Returns:
            Dict with 'summary', 'health', 'monthly' (last 6 months) and
            'recent' (latest transactions by date).
        """
        transactions = self.transaction_repo.get_all()
        summary = get_financial_summary(transactions)
        return {
            "summary": summary,
            "health": get_financial_health_score(summary["income"], summary["expenses"]),
            "monthly": calculate_monthly_series(transactions, 6, now),
            "recent": self.transaction_repo.get_recent(recent_limit),
        }

    def generate_insights(self, time_frame: str, now: Optional[datetime] = None) -> list[Insight]:
        """Insights for the time frame, with amounts in the user's currency."""
        transactions = self.get_filtered_transactions(time_frame, now)
        insights = generate_insights(transactions, time_frame, self.settings_service.format_currency)
        logger.info(f"Generated {len(insights)} insights for time frame '{time_frame}'")
        return insights
