"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID

import pytest

from meal_stats.config import Settings
from meal_stats.containers import AppContainer
from meal_stats.domain.meals import MealRecord
from meal_stats.services.cache import InMemoryReportCache
from meal_stats.services.goals import GoalRepository, GoalService
from meal_stats.services.insights import InsightClient, InsightService
from meal_stats.services.stats import StatsRepository, StatsService

BASE_DAY = datetime(2026, 3, 2, tzinfo=UTC)


def make_meal(day: int = 0, hour: int = 12, **values: object) -> MealRecord:
    """Build a meal logged ``day`` days after the base day at ``hour`` UTC."""
    logged_at = BASE_DAY + timedelta(days=day, hours=hour)
    return MealRecord(logged_at=logged_at, **values)  # type: ignore[arg-type]


@dataclass
class InMemoryStatsRepository(StatsRepository):
    """In-memory meal repository for tests."""

    meals: list[MealRecord] = field(default_factory=list)
    calls: list[tuple[UUID, datetime, datetime]] = field(default_factory=list)

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        self.calls.append((user_id, start, end))
        return [meal for meal in self.meals if start <= meal.logged_at < end]


@dataclass
class FailingStatsRepository(StatsRepository):
    """Meal repository that always fails."""

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        raise RuntimeError("database unavailable")


@dataclass
class InMemoryGoalRepository(GoalRepository):
    """In-memory calorie goal repository for tests."""

    goals: dict[UUID, float] = field(default_factory=dict)

    def get_daily_calorie_goal(self, user_id: UUID) -> float | None:
        return self.goals.get(user_id)


@dataclass
class FakeInsightClient(InsightClient):
    """Fake insight client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "insights": ["Great protein week."],
            "recommendations": ["Keep hydrating."],
        }
    )
    prompts: list[str] = field(default_factory=list)

    async def generate(
        self, *, model: str, prompt: str, schema: dict[str, object]
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        return self.payload


@dataclass
class FailingInsightClient(InsightClient):
    """Insight client that always raises."""

    async def generate(
        self, *, model: str, prompt: str, schema: dict[str, object]
    ) -> dict[str, object]:
        raise RuntimeError("upstream timeout")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        openai_api_key="openai-key",
    )


@pytest.fixture
def stats_repository() -> InMemoryStatsRepository:
    return InMemoryStatsRepository()


@pytest.fixture
def goal_repository() -> InMemoryGoalRepository:
    return InMemoryGoalRepository()


@pytest.fixture
def container(
    settings: Settings,
    stats_repository: InMemoryStatsRepository,
    goal_repository: InMemoryGoalRepository,
) -> AppContainer:
    goal_service = GoalService(goal_repository)
    stats_service = StatsService(
        repository=stats_repository,
        goal_service=goal_service,
        cache=InMemoryReportCache(ttl_seconds=0),
    )
    insight_service = InsightService(
        client=FakeInsightClient(), model=settings.openai_model
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        goal_service=goal_service,
        stats_service=stats_service,
        insight_service=insight_service,
        close_resources=close_resources,
    )
