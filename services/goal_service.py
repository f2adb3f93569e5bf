"""
services/goal_service.py
------------------------
Business logic for savings goals and their progress.

Goal funding is modelled as money moved out as an expense into a savings
category. Every expense whose category is the goal's own category, or one
of GOAL_FUNDING_CATEGORIES ('Savings', 'Investments'), counts toward the
goal. The pool is shared on purpose: two goals in the same category both
see the same transactions, and every goal sees every Savings/Investments
transaction. Do not "fix" this into per-goal attribution.
"""

import math
from dataclasses import replace
from datetime import datetime
from typing import Optional

from config import GOAL_FUNDING_CATEGORIES
from models.goal import Goal
from repositories.goal_repo import GoalRepository
from repositories.transaction_repo import TransactionRepository
from storage import KeyValueStorage, get_storage
from utils.dates import to_datetime
from utils.logger import get_logger

logger = get_logger(__name__)


def get_goal_progress_percent(goal: Goal) -> int:
    """Whole-number percentage of the target reached, capped at 100."""
    if goal.target_amount <= 0:
        return 0
    return min(100, round(goal.current_amount / goal.target_amount * 100))


def get_goal_progress_status(goal: Goal) -> str:
    """'good' from 75%, 'average' from 50%, otherwise 'poor'."""
    pct = get_goal_progress_percent(goal)
    if pct >= 75:
        return "good"
    if pct >= 50:
        return "average"
    return "poor"


def get_days_remaining(goal: Goal, now: Optional[datetime] = None) -> int:
    """Days until the deadline, rounded up. Negative once it has passed."""
    now = now or datetime.now()
    delta = to_datetime(goal.deadline) - now
    return math.ceil(delta.total_seconds() / 86400)


class GoalService:
    """Manages goals and keeps their cached progress in step with transactions."""

    def __init__(self, storage: Optional[KeyValueStorage] = None):
        storage = storage or get_storage()
        self.goal_repo = GoalRepository(storage)
        self.transaction_repo = TransactionRepository(storage)

    # ── GOAL CRUD ─────────────────────────────────────────

    def get_goals(self) -> list[Goal]:
        return self.goal_repo.get_all()

    def get_goal(self, goal_id: str) -> Optional[Goal]:
        return self.goal_repo.get_by_id(goal_id)

    def add_goal(self, goal: Goal) -> Goal:
        """Create a goal. Its current amount always starts at 0."""
        return self.goal_repo.add(goal)

    def update_goal(self, goal_id: str, goal: Goal, keep_progress: bool = True) -> Optional[Goal]:
        """
        Replace a goal's editable fields.

        Args:
            goal_id: The goal to replace.
            goal: New field values.
            keep_progress: Carry over the stored current_amount instead of
                the one on `goal`.

        Returns:
            The stored Goal, or None if no goal has this id.
        """
        if keep_progress:
            existing = self.goal_repo.get_by_id(goal_id)
            if existing is None:
                return None
            goal = replace(goal, current_amount=existing.current_amount)
        return self.goal_repo.update(goal_id, goal)

    def delete_goal(self, goal_id: str) -> bool:
        return self.goal_repo.delete(goal_id)

    # ── PROGRESS ──────────────────────────────────────────

    def calculate_goal_progress(self, goal_id: str, goal_category: str) -> float:
        """
        Sum the funding transactions for a goal, over all time.

        Counts expense transactions whose category is `goal_category`,
        'Savings' or 'Investments' (see module docstring).

        Returns:
            The funded amount, or 0 if no goal has `goal_id`.
        """
        if self.goal_repo.get_by_id(goal_id) is None:
            return 0.0
        return self._funded_amount(self.transaction_repo.get_all(), goal_category)

    def update_all_goals_progress(self) -> list[Goal]:
        """
        Recompute and persist current_amount for every goal.

        Progress is not refreshed when transactions change; call this
        before reading goals when up-to-date figures are needed.

        Returns:
            The goals as saved.
        """
        transactions = self.transaction_repo.get_all()
        goals = self.goal_repo.get_all()
        for g in goals:
            g.current_amount = self._funded_amount(transactions, g.category)
        self.goal_repo.replace_all(goals)
        logger.info(f"Recomputed progress for {len(goals)} goals")
        return goals

    def get_goals_statistics(self) -> dict:
        """
        Aggregate progress across all goals.

        Returns:
            Dict with 'total_target_amount', 'total_current_amount',
            'overall_progress' (percent, 0 when there is no target),
            'total_goals' and 'completed_goals'.
        """
        goals = self.goal_repo.get_all()
        total_target = sum(g.target_amount for g in goals)
        total_current = sum(g.current_amount for g in goals)
        return {
            "total_target_amount": total_target,
            "total_current_amount": total_current,
            "overall_progress": (total_current / total_target * 100) if total_target > 0 else 0,
            "total_goals": len(goals),
            "completed_goals": sum(1 for g in goals if g.is_completed()),
        }

    @staticmethod
    def _funded_amount(transactions, goal_category: str) -> float:
        categories = {goal_category, *GOAL_FUNDING_CATEGORIES}
        return sum((t.amount for t in transactions if t.is_expense() and t.category in categories), 0.0)
