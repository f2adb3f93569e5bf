from datetime import datetime

import pytest

from models.transaction import Transaction
from services.budget_service import BudgetService
from services.export_service import ExportService
from services.goal_service import GoalService
from services.report_service import ReportService
from services.settings_service import SettingsService
from services.transaction_service import TransactionService
from storage import MemoryStorage


def _make_tx(type="expense", amount=10.0, category="Food", date=None, description=None):
    return Transaction(
        type=type,
        amount=amount,
        category=category,
        date=date or datetime(2024, 3, 10, 9, 30),
        description=description,
    )


@pytest.fixture
def make_tx():
    """Factory for valid transactions; defaults to a Food expense on 2024-03-10."""
    return _make_tx


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def transactions(storage):
    return TransactionService(storage)


@pytest.fixture
def budgets(storage):
    return BudgetService(storage)


@pytest.fixture
def goals(storage):
    return GoalService(storage)


@pytest.fixture
def settings(storage):
    return SettingsService(storage)


@pytest.fixture
def reports(storage):
    return ReportService(storage)


@pytest.fixture
def exports(storage):
    return ExportService(storage)
