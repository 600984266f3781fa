"""Supabase repository for nutrition plan goals."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from meal_stats.services.goals import GoalRepository


@dataclass
class SupabaseGoalRepository(GoalRepository):
    """Supabase implementation for calorie goals."""

    client: Client
    table: str = "nutrition_plans"

    def get_daily_calorie_goal(self, user_id: UUID) -> float | None:
        """Return the goal calories of the user's latest plan."""
        response = (
            self.client.table(self.table)
            .select("goal_calories")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("goal_calories")
        if value is None:
            return None
        return float(value)
