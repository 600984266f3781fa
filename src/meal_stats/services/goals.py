"""Daily calorie goal lookup."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

logger = logging.getLogger(__name__)


class GoalRepository(Protocol):
    """Persistence interface for nutrition plans."""

    def get_daily_calorie_goal(self, user_id: UUID) -> float | None:
        """Return the active plan's calorie goal if one exists."""


@dataclass
class GoalService:
    """Service for reading a user's daily calorie goal."""

    repository: GoalRepository
    default_calorie_goal: float = 2000

    def daily_calorie_goal(self, user_id: UUID) -> float:
        """Return the user's goal, or the default when no plan is readable."""
        try:
            goal = self.repository.get_daily_calorie_goal(user_id)
        except Exception:
            logger.exception("Failed to load calorie goal for user %s", user_id)
            return self.default_calorie_goal
        if goal is None or goal <= 0:
            return self.default_calorie_goal
        return goal
