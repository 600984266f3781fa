"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from meal_stats.adapters.openai_insight_client import OpenAIInsightClient
from meal_stats.adapters.supabase_goal_repository import SupabaseGoalRepository
from meal_stats.adapters.supabase_stats_repository import SupabaseStatsRepository
from meal_stats.config import Settings
from meal_stats.services.cache import InMemoryReportCache
from meal_stats.services.goals import GoalService
from meal_stats.services.insights import InsightService
from meal_stats.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    goal_service: GoalService
    stats_service: StatsService
    insight_service: InsightService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    stats_repository = SupabaseStatsRepository(
        supabase_client, table=resolved_settings.meals_table
    )
    goal_repository = SupabaseGoalRepository(
        supabase_client, table=resolved_settings.nutrition_plans_table
    )
    goal_service = GoalService(
        goal_repository,
        default_calorie_goal=resolved_settings.default_calorie_goal,
    )
    stats_service = StatsService(
        repository=stats_repository,
        goal_service=goal_service,
        cache=InMemoryReportCache(
            ttl_seconds=resolved_settings.report_cache_ttl_seconds
        ),
    )
    insight_client = (
        OpenAIInsightClient.create(resolved_settings.openai_api_key or "")
        if resolved_settings.insights_enabled
        else None
    )
    insight_service = InsightService(
        client=insight_client, model=resolved_settings.openai_model
    )

    async def close_resources() -> None:
        if insight_client is not None:
            await insight_client.close()

    return AppContainer(
        settings=resolved_settings,
        goal_service=goal_service,
        stats_service=stats_service,
        insight_service=insight_service,
        close_resources=close_resources,
    )
