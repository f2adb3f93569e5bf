"""
models/ - Domain Layer
======================
Plain dataclasses for every persisted entity. Each model validates itself
on construction and knows how to encode to / strictly decode from the JSON
shape kept in storage.
"""

from models.budget import BudgetCategory
from models.goal import Goal
from models.settings import UserSettings
from models.transaction import Transaction

__all__ = ["BudgetCategory", "Goal", "Transaction", "UserSettings"]
