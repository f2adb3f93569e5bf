"""
models/transaction.py
---------------------
Domain model for financial transactions (expenses and income).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from models.common import coerce_amount, require_str
from utils.dates import to_datetime

TRANSACTION_TYPES = ("income", "expense")


@dataclass
class Transaction:
    """
    Represents a single recorded cash movement.

    Attributes:
        type: Either 'expense' or 'income'.
        amount: Positive amount, interpreted in the user's currency.
        category: Free-text category label (e.g., Food, Salary).
        date: When the movement happened. Dates and ISO strings are
            coerced to a naive local datetime.
        description: Optional human-readable note.
        id: Store-assigned identifier (None for new records).
    """
    type: str  # 'expense' | 'income'
    amount: float
    category: str
    date: datetime
    description: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.type not in TRANSACTION_TYPES:
            raise ValueError(f"type must be one of {TRANSACTION_TYPES}, got {self.type!r}")
        self.amount = coerce_amount(self.amount, "amount")
        require_str(self.category, "category")
        self.date = to_datetime(self.date)
        if self.description is not None:
            require_str(self.description, "description")

    def is_expense(self) -> bool:
        """Returns True if this is an expense transaction."""
        return self.type == "expense"

    def is_income(self) -> bool:
        """Returns True if this is an income transaction."""
        return self.type == "income"

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": self.id,
            "category": self.category,
            "amount": self.amount,
            "date": self.date.isoformat(),
            "type": self.type,
        }
        if self.description is not None:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Transaction":
        """
        Strictly decode a persisted transaction.

        Raises:
            KeyError: If a required field is missing.
            TypeError / ValueError: If a field has the wrong type or value.
        """
        return cls(
            id=require_str(data["id"], "id"),
            type=data["type"],
            amount=data["amount"],
            category=data["category"],
            date=require_str(data["date"], "date"),
            description=data.get("description"),
        )

    def __str__(self) -> str:
        sign = "-" if self.is_expense() else "+"
        return f"{sign}{self.amount:.2f} | {self.category} | {self.date:%Y-%m-%d}"
