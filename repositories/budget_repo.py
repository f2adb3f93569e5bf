"""
repositories/budget_repo.py
-----------------------------
Data access layer for monthly budget categories.
"""

from dataclasses import replace
from typing import Any, Optional

from config import BUDGET_CATEGORIES_KEY
from models.budget import BudgetCategory
from repositories.base import CollectionRepository
from utils.ids import generate_id
from utils.logger import get_logger

logger = get_logger(__name__)


class BudgetRepository(CollectionRepository[BudgetCategory]):
    """Repository for CRUD operations on budget categories."""

    key = BUDGET_CATEGORIES_KEY
    entity_name = "budget category"

    def decode(self, data: dict[str, Any]) -> BudgetCategory:
        return BudgetCategory.from_dict(data)

    def encode(self, item: BudgetCategory) -> dict[str, Any]:
        return item.to_dict()

    def add(self, category: BudgetCategory) -> BudgetCategory:
        """Append a new budget category with a fresh id and zero spend."""
        created = replace(category, id=generate_id(), spent=0.0)
        categories = self._load()
        categories.append(created)
        self._save(categories)
        logger.info(f"Added budget category #{created.id} ({created.name})")
        return created

    def get_all(self) -> list[BudgetCategory]:
        return self._load()

    def get_by_id(self, category_id: str) -> Optional[BudgetCategory]:
        return next((c for c in self._load() if c.id == category_id), None)

    def update(self, category_id: str, category: BudgetCategory) -> Optional[BudgetCategory]:
        """
        Replace a budget category, keeping its id and its last stored
        `spent` snapshot.

        Returns:
            The stored BudgetCategory, or None if no record matched.
        """
        categories = self._load()
        idx = self._index_of(categories, lambda c: c.id == category_id)
        if idx == -1:
            return None

        updated = replace(category, id=category_id, spent=categories[idx].spent)
        categories[idx] = updated
        self._save(categories)
        return updated

    def delete(self, category_id: str) -> bool:
        """Delete a budget category. Returns False if nothing matched."""
        categories = self._load()
        remaining = [c for c in categories if c.id != category_id]
        if len(remaining) == len(categories):
            return False

        self._save(remaining)
        logger.info(f"Deleted budget category #{category_id}")
        return True
