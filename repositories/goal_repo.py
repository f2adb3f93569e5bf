"""
repositories/goal_repo.py
-------------------------
Data access layer for savings goals.
"""

from dataclasses import replace
from typing import Any, Optional

from config import GOALS_KEY
from models.goal import Goal
from repositories.base import CollectionRepository
from utils.ids import generate_id
from utils.logger import get_logger

logger = get_logger(__name__)


class GoalRepository(CollectionRepository[Goal]):
    """Repository for CRUD operations on goals."""

    key = GOALS_KEY
    entity_name = "goal"

    def decode(self, data: dict[str, Any]) -> Goal:
        return Goal.from_dict(data)

    def encode(self, item: Goal) -> dict[str, Any]:
        return item.to_dict()

    def add(self, goal: Goal) -> Goal:
        """
        Persist a new goal, newest first.

        `current_amount` is always reset to 0; progress only ever comes
        from transactions.
        """
        created = replace(goal, id=generate_id(), current_amount=0.0)
        goals = self._load()
        self._save([created] + goals)
        logger.info(f"Added goal #{created.id} ({created.name})")
        return created

    def get_all(self) -> list[Goal]:
        return self._load()

    def get_by_id(self, goal_id: str) -> Optional[Goal]:
        return next((g for g in self._load() if g.id == goal_id), None)

    def update(self, goal_id: str, goal: Goal) -> Optional[Goal]:
        """
        Replace a goal wholesale, keeping its id.

        Returns:
            The stored Goal, or None if no record matched.
        """
        goals = self._load()
        idx = self._index_of(goals, lambda g: g.id == goal_id)
        if idx == -1:
            return None

        updated = replace(goal, id=goal_id)
        goals[idx] = updated
        self._save(goals)
        return updated

    def delete(self, goal_id: str) -> bool:
        """Delete a goal. Returns False if nothing matched."""
        goals = self._load()
        remaining = [g for g in goals if g.id != goal_id]
        if len(remaining) == len(goals):
            return False

        self._save(remaining)
        logger.info(f"Deleted goal #{goal_id}")
        return True
