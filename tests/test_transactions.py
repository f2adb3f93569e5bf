import json
from datetime import datetime

import pytest

from config import TRANSACTIONS_KEY


def test_add_assigns_id_and_prepends(transactions, make_tx):
    first = transactions.add_transaction(make_tx(amount=1))
    second = transactions.add_transaction(make_tx(amount=2))

    assert first.id and second.id and first.id != second.id
    assert [t.id for t in transactions.get_transactions()] == [second.id, first.id]


def test_add_persists_camel_case_json(transactions, storage, make_tx):
    tx = transactions.add_transaction(make_tx(amount=42, description="Lunch"))
    stored = json.loads(storage.get(TRANSACTIONS_KEY))
    assert stored == [{
        "id": tx.id,
        "category": "Food",
        "amount": 42.0,
        "date": "2024-03-10T09:30:00",
        "type": "expense",
        "description": "Lunch",
    }]


def test_invalid_transaction_never_reaches_storage(transactions, storage, make_tx):
    with pytest.raises(ValueError):
        transactions.add_transaction(make_tx(amount=0))
    assert storage.get(TRANSACTIONS_KEY) is None


def test_get_transaction_by_id(transactions, make_tx):
    tx = transactions.add_transaction(make_tx())
    assert transactions.get_transaction(tx.id) == tx
    assert transactions.get_transaction("missing") is None


def test_update_keeps_id_and_position(transactions, make_tx):
    a = transactions.add_transaction(make_tx(amount=1))
    b = transactions.add_transaction(make_tx(amount=2))

    updated = transactions.update_transaction(a.id, make_tx(type="income", amount=99, category="Salary"))

    assert updated.id == a.id
    stored = transactions.get_transactions()
    assert [t.id for t in stored] == [b.id, a.id]
    assert stored[1].amount == 99 and stored[1].type == "income"


def test_update_unknown_id_returns_none(transactions, make_tx):
    transactions.add_transaction(make_tx())
    before = transactions.get_transactions()
    assert transactions.update_transaction("missing", make_tx(amount=5)) is None
    assert transactions.get_transactions() == before


def test_delete(transactions, make_tx):
    tx = transactions.add_transaction(make_tx())
    assert transactions.delete_transaction(tx.id) is True
    assert transactions.delete_transaction(tx.id) is False
    assert transactions.get_transactions() == []


def test_search_matches_description_and_category_ignoring_case(transactions, make_tx):
    transactions.add_transaction(make_tx(category="Food", description="Coffee beans"))
    transactions.add_transaction(make_tx(category="Transportation", description="Bus pass"))
    transactions.add_transaction(make_tx(category="Shopping"))

    assert [t.category for t in transactions.search_transactions("COFFEE")] == ["Food"]
    assert [t.category for t in transactions.search_transactions("port")] == ["Transportation"]
    everything = transactions.get_transactions()
    assert len(everything) == 3
    assert transactions.search_transactions("") == everything
    assert transactions.search_transactions("   ") == everything


def test_date_range_is_inclusive(transactions, make_tx):
    for day in (1, 10, 20):
        transactions.add_transaction(make_tx(date=datetime(2024, 3, day, 12)))

    found = transactions.get_transactions_by_date_range(datetime(2024, 3, 10, 12), datetime(2024, 3, 20, 12))
    assert sorted(t.date.day for t in found) == [10, 20]

    assert transactions.get_transactions_by_date_range("2024-03-02", "2024-03-09") == []


def test_list_transactions_filters_and_sorts(transactions, make_tx):
    transactions.add_transaction(make_tx(amount=30, date=datetime(2024, 3, 2)))
    transactions.add_transaction(make_tx(type="income", amount=500, category="Salary", date=datetime(2024, 3, 1)))
    transactions.add_transaction(make_tx(amount=10, date=datetime(2024, 3, 5)))

    assert [t.amount for t in transactions.list_transactions("expense", "oldest")] == [30, 10]
    assert [t.amount for t in transactions.list_transactions("all", "highest")] == [500, 30, 10]
    assert [t.amount for t in transactions.list_transactions("all", "lowest")] == [10, 30, 500]
    assert [t.amount for t in transactions.list_transactions("income")] == [500]


def test_list_transactions_rejects_unknown_sort(transactions):
    with pytest.raises(ValueError):
        transactions.list_transactions(sort_order="random")


def test_recent_transactions_by_date(transactions, make_tx):
    for day in (3, 1, 7, 5):
        transactions.add_transaction(make_tx(date=datetime(2024, 3, day)))

    recent = transactions.get_recent_transactions(limit=2)
    assert [t.date.day for t in recent] == [7, 5]


@pytest.mark.parametrize("raw", ["not json", '{"id": "a"}', '[{"id": "a"}]'])
def test_unreadable_collection_reads_as_empty(transactions, storage, raw):
    storage.set(TRANSACTIONS_KEY, raw)
    assert transactions.get_transactions() == []


def test_adding_the_same_input_twice_creates_two_records(transactions, make_tx):
    tx = make_tx(amount=7)

    first = transactions.add_transaction(tx)
    first_id = first.id
    second = transactions.add_transaction(tx)

    assert tx.id is None
    assert first is not second
    assert first.id == first_id != second.id
    assert {t.id for t in transactions.get_transactions()} == {first_id, second.id}
