"""
models/goal.py
--------------
Domain model for savings goals.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from models.common import coerce_amount, require_str
from utils.dates import to_date

GOAL_PRIORITIES = ("low", "medium", "high")


@dataclass
class Goal:
    """
    A savings target with a deadline.

    Attributes:
        name: Friendly name (e.g., 'Emergency fund').
        target_amount: Amount to reach (> 0).
        deadline: Target date. Callers check it lies in the future when
            creating a goal; the store does not.
        category: Goal category, also used to match funding transactions.
        priority: 'low', 'medium' or 'high'.
        current_amount: Cached progress, refreshed by
            GoalService.update_all_goals_progress.
        id: Store-assigned identifier (None for new records).
    """
    name: str
    target_amount: float
    deadline: date
    category: str
    priority: str = "medium"  # 'low' | 'medium' | 'high'
    current_amount: float = 0.0
    id: Optional[str] = None

    def __post_init__(self) -> None:
        require_str(self.name, "name")
        require_str(self.category, "category")
        self.target_amount = coerce_amount(self.target_amount, "target_amount")
        self.current_amount = coerce_amount(self.current_amount, "current_amount", allow_zero=True)
        self.deadline = to_date(self.deadline)
        if self.priority not in GOAL_PRIORITIES:
            raise ValueError(f"priority must be one of {GOAL_PRIORITIES}, got {self.priority!r}")

    @property
    def remaining_amount(self) -> float:
        return self.target_amount - self.current_amount

    def is_completed(self) -> bool:
        return self.current_amount >= self.target_amount

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "targetAmount": self.target_amount,
            "currentAmount": self.current_amount,
            "deadline": self.deadline.isoformat(),
            "category": self.category,
            "priority": self.priority,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Goal":
        return cls(
            id=require_str(data["id"], "id"),
            name=data["name"],
            target_amount=data["targetAmount"],
            current_amount=data.get("currentAmount", 0.0),
            deadline=require_str(data["deadline"], "deadline"),
            category=data["category"],
            priority=data["priority"],
        )
