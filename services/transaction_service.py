"""
services/transaction_service.py
-------------------------------
Business logic entry point for recording and querying transactions.
"""

from typing import Optional

from models.transaction import Transaction
from repositories.transaction_repo import TransactionRepository
from storage import KeyValueStorage
from utils.dates import DateLike


class TransactionService:
    """
    Handles all operations on the transaction log.

    Invalid input (non-positive amount, unknown type) is rejected by the
    Transaction model before anything reaches storage.
    """

    def __init__(self, storage: Optional[KeyValueStorage] = None):
        self.repo = TransactionRepository(storage)

    def get_transactions(self) -> list[Transaction]:
        """All transactions, newest-inserted first."""
        return self.repo.get_all()

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return self.repo.get_by_id(transaction_id)

    def add_transaction(self, transaction: Transaction) -> Transaction:
        return self.repo.add(transaction)

    def update_transaction(self, transaction_id: str, transaction: Transaction) -> Optional[Transaction]:
        """Replace a transaction. Returns None if the id is unknown."""
        return self.repo.update(transaction_id, transaction)

    def delete_transaction(self, transaction_id: str) -> bool:
        """Delete a transaction. Returns False if the id is unknown."""
        return self.repo.delete(transaction_id)

    def search_transactions(self, query: str) -> list[Transaction]:
        return self.repo.search(query)

    def get_transactions_by_date_range(self, start: DateLike, end: DateLike) -> list[Transaction]:
        return self.repo.get_by_date_range(start, end)

    def list_transactions(self, tx_type: str = "all", sort_order: str = "newest") -> list[Transaction]:
        return self.repo.list_filtered(tx_type, sort_order)

    def get_recent_transactions(self, limit: int = 5) -> list[Transaction]:
        return self.repo.get_recent(limit)
