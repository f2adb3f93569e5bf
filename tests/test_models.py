from datetime import date, datetime

import pytest

from models.budget import BudgetCategory
from models.goal import Goal
from models.settings import UserSettings
from models.transaction import Transaction
from utils.ids import generate_id


def test_transaction_coerces_iso_date_string():
    t = Transaction(type="expense", amount=12, category="Food", date="2024-03-10T09:30:00")
    assert t.date == datetime(2024, 3, 10, 9, 30)
    assert isinstance(t.amount, float)


def test_transaction_plain_date_is_midnight():
    t = Transaction(type="income", amount=5.5, category="Gift", date=date(2024, 1, 2))
    assert t.date == datetime(2024, 1, 2, 0, 0)


def test_transaction_aware_date_becomes_naive():
    t = Transaction(type="expense", amount=1, category="Food", date="2024-03-10T12:00:00Z")
    assert t.date.tzinfo is None


@pytest.mark.parametrize("amount", [0, -5])
def test_transaction_rejects_non_positive_amount(amount):
    with pytest.raises(ValueError):
        Transaction(type="expense", amount=amount, category="Food", date=date(2024, 1, 1))


@pytest.mark.parametrize("amount", ["12", None, True])
def test_transaction_rejects_non_numeric_amount(amount):
    with pytest.raises(TypeError):
        Transaction(type="expense", amount=amount, category="Food", date=date(2024, 1, 1))


def test_transaction_rejects_unknown_type():
    with pytest.raises(ValueError):
        Transaction(type="transfer", amount=1, category="Food", date=date(2024, 1, 1))


def test_transaction_to_dict_omits_missing_description():
    t = Transaction(type="expense", amount=3, category="Food", date=datetime(2024, 1, 1, 8), id="x1")
    data = t.to_dict()
    assert "description" not in data
    assert data["date"] == "2024-01-01T08:00:00"
    assert Transaction.from_dict(data) == t


def test_transaction_from_dict_requires_id():
    with pytest.raises(KeyError):
        Transaction.from_dict({"type": "expense", "amount": 1, "category": "Food", "date": "2024-01-01"})


def test_transaction_str():
    t = Transaction(type="expense", amount=3, category="Food", date=datetime(2024, 1, 1))
    assert str(t) == "-3.00 | Food | 2024-01-01"


def test_budget_category_requires_positive_allocation():
    with pytest.raises(ValueError):
        BudgetCategory(name="Food", allocated=0)


def test_budget_category_persisted_keys():
    data = BudgetCategory(name="Food", allocated=500, id="b1").to_dict()
    assert data == {"id": "b1", "name": "Food", "allocated": 500.0, "spent": 0.0, "color": "#1E3A8A"}


def test_goal_decodes_camel_case_keys():
    goal = Goal.from_dict({
        "id": "g1",
        "name": "Trip",
        "targetAmount": 1000,
        "currentAmount": 250,
        "deadline": "2030-06-01",
        "category": "Travel",
        "priority": "high",
    })
    assert goal.deadline == date(2030, 6, 1)
    assert goal.remaining_amount == 750
    assert not goal.is_completed()


def test_goal_rejects_unknown_priority():
    with pytest.raises(ValueError):
        Goal(name="Trip", target_amount=10, deadline=date(2030, 1, 1), category="Travel", priority="urgent")


def test_settings_missing_fields_take_defaults():
    settings = UserSettings.from_dict({"currency": "USD"})
    assert settings == UserSettings(currency="USD", date_format="DD/MM/YYYY", language="en-US")


def test_settings_from_dict_rejects_non_object():
    with pytest.raises(TypeError):
        UserSettings.from_dict(["USD"])


def test_generate_id_is_unique():
    ids = {generate_id() for _ in range(1000)}
    assert len(ids) == 1000


def test_settings_reject_unknown_date_format():
    with pytest.raises(ValueError):
        UserSettings(date_format="DD.MM.YY")
