"""
repositories/transaction_repo.py
--------------------------------
Data access layer for expense/income transactions.
Everything that reads or writes the transactions collection lives here.
"""

from dataclasses import replace
from typing import Any, Optional

from config import TRANSACTIONS_KEY
from models.transaction import Transaction
from repositories.base import CollectionRepository
from utils.dates import DateLike, to_datetime
from utils.ids import generate_id
from utils.logger import get_logger

logger = get_logger(__name__)

SORT_ORDERS = ("newest", "oldest", "highest", "lowest")


class TransactionRepository(CollectionRepository[Transaction]):
    """Repository for CRUD and query operations on transactions."""

    key = TRANSACTIONS_KEY
    entity_name = "transaction"

    def decode(self, data: dict[str, Any]) -> Transaction:
        return Transaction.from_dict(data)

    def encode(self, item: Transaction) -> dict[str, Any]:
        return item.to_dict()

    # ── CREATE ────────────────────────────────────────────

    def add(self, transaction: Transaction) -> Transaction:
        """
        Persist a new transaction.

        New records are prepended, so get_all() lists them
        newest-inserted first.

        Args:
            transaction: The Transaction to persist (its id is ignored).

        Returns:
            A new Transaction carrying the assigned `id`; the argument is
            left untouched.
        """
        created = replace(transaction, id=generate_id())
        transactions = self._load()
        self._save([created] + transactions)
        logger.info(f"Added {created.type} #{created.id}")
        return created

    # ── READ ──────────────────────────────────────────────

    def get_all(self) -> list[Transaction]:
        """Return every transaction in stored order, or [] if none can be read."""
        return self._load()

    def get_by_id(self, transaction_id: str) -> Optional[Transaction]:
        return next((t for t in self._load() if t.id == transaction_id), None)

    def search(self, query: str) -> list[Transaction]:
        """
        Case-insensitive substring search over description and category.

        A blank query returns every transaction.
        """
        transactions = self._load()
        if not query.strip():
            return transactions

        needle = query.lower()
        return [
            t for t in transactions
            if needle in (t.description or "").lower() or needle in t.category.lower()
        ]

    def get_by_date_range(self, start: DateLike, end: DateLike) -> list[Transaction]:
        """
        Fetch transactions with start <= date <= end.

        Bounds are compared as given; plain dates mean midnight, so callers
        wanting whole days pass end-of-day for `end`.
        """
        start_dt, end_dt = to_datetime(start), to_datetime(end)
        return [t for t in self._load() if start_dt <= t.date <= end_dt]

    def list_filtered(self, tx_type: str = "all", sort_order: str = "newest") -> list[Transaction]:
        """
        Filter by type ('all', 'income', 'expense') and sort.

        Args:
            tx_type: Which transactions to keep.
            sort_order: 'newest', 'oldest', 'highest' or 'lowest'.
        """
        if sort_order not in SORT_ORDERS:
            raise ValueError(f"sort_order must be one of {SORT_ORDERS}, got {sort_order!r}")

        transactions = self._load()
        if tx_type != "all":
            transactions = [t for t in transactions if t.type == tx_type]

        if sort_order in ("newest", "oldest"):
            return sorted(transactions, key=lambda t: t.date, reverse=sort_order == "newest")
        return sorted(transactions, key=lambda t: t.amount, reverse=sort_order == "highest")

    def get_recent(self, limit: int = 5) -> list[Transaction]:
        """Most recent transactions by date, newest first."""
        return self.list_filtered(sort_order="newest")[:max(0, limit)]

    # ── UPDATE ────────────────────────────────────────────

    def update(self, transaction_id: str, transaction: Transaction) -> Optional[Transaction]:
        """
        Replace the record with `transaction_id` wholesale, keeping the id.

        Returns:
            The stored Transaction, or None if no record matched.
        """
        transactions = self._load()
        idx = self._index_of(transactions, lambda t: t.id == transaction_id)
        if idx == -1:
            return None

        updated = replace(transaction, id=transaction_id)
        transactions[idx] = updated
        self._save(transactions)
        return updated

    # ── DELETE ────────────────────────────────────────────

    def delete(self, transaction_id: str) -> bool:
        """
        Delete a transaction by ID.

        Returns:
            True if a record was removed, False otherwise.
        """
        transactions = self._load()
        remaining = [t for t in transactions if t.id != transaction_id]
        if len(remaining) == len(transactions):
            return False

        self._save(remaining)
        logger.info(f"Deleted transaction #{transaction_id}")
        return True
