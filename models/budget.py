"""
models/budget.py
----------------
Domain model for monthly budget envelopes.
"""

from dataclasses import dataclass
from typing import Any, Optional

from models.common import coerce_amount, require_str

DEFAULT_BUDGET_COLOR = "#1E3A8A"


@dataclass
class BudgetCategory:
    """
    A monthly spending envelope for one category.

    Attributes:
        name: Category label; matched case-insensitively against
            Transaction.category when computing spend.
        allocated: The budget ceiling (> 0).
        color: Display tag, opaque to the core.
        spent: Cached projection of the window's expense total. Only
            correct right after BudgetService.calculate_category_spending.
        id: Store-assigned identifier (None for new records).
    """
    name: str
    allocated: float
    color: str = DEFAULT_BUDGET_COLOR
    spent: float = 0.0
    id: Optional[str] = None

    def __post_init__(self) -> None:
        require_str(self.name, "name")
        self.allocated = coerce_amount(self.allocated, "allocated")
        require_str(self.color, "color")
        self.spent = coerce_amount(self.spent, "spent", allow_zero=True)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "allocated": self.allocated,
            "spent": self.spent,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BudgetCategory":
        return cls(
            id=require_str(data["id"], "id"),
            name=data["name"],
            allocated=data["allocated"],
            spent=data.get("spent", 0.0),
            color=data.get("color", DEFAULT_BUDGET_COLOR),
        )
