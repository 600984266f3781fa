"""Statistics service for meal logs."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from meal_stats.domain.meals import MealRecord
from meal_stats.domain.stats import (
    DEFAULT_STATS_CONFIG,
    PeriodKind,
    PeriodWindow,
    StatisticsReport,
    StatsConfig,
)
from meal_stats.services.cache import InMemoryReportCache, ReportCache
from meal_stats.services.goals import GoalService
from meal_stats.services.report import build_report
from meal_stats.services.windows import resolve_window

logger = logging.getLogger(__name__)


class StatsRepository(Protocol):
    """Persistence interface for meal records."""

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return meals logged in ``[start, end)``."""


@dataclass
class StatsService:
    """Service for computing statistics reports per user and period."""

    repository: StatsRepository
    goal_service: GoalService
    config: StatsConfig = DEFAULT_STATS_CONFIG
    cache: ReportCache = field(default_factory=InMemoryReportCache)

    def get_report(  # noqa: PLR0913
        self,
        user_id: UUID,
        period: str | PeriodKind = PeriodKind.WEEK,
        start: datetime | None = None,
        end: datetime | None = None,
        now: datetime | None = None,
    ) -> StatisticsReport:
        """Return the statistics report for a period.

        Raises ``MalformedWindowError`` for unknown periods or bad bounds.
        """
        window = resolve_window(period, now or datetime.now(tz=UTC), start, end)
        cached = self.cache.get(user_id, window)
        if cached is not None:
            return cached
        report = self.compute(user_id, window)
        self.cache.set(user_id, window, report)
        return report

    def compute(self, user_id: UUID, window: PeriodWindow) -> StatisticsReport:
        """Fetch meals for the window and its predecessor and build the report."""
        meals = self._fetch(user_id, window)
        previous_meals = self._fetch(user_id, window.previous())
        goal = self.goal_service.daily_calorie_goal(user_id)
        report = build_report(meals, goal, previous_meals, self.config)
        logger.info(
            "Computed %s statistics for user %s: %d meals over %d days",
            window.kind.value,
            user_id,
            len(meals),
            report.total_days,
        )
        return report

    def _fetch(self, user_id: UUID, window: PeriodWindow) -> list[MealRecord]:
        meals = self.repository.list_meals(user_id, window.start, window.end)
        inside = [meal for meal in meals if _in_window(meal, window)]
        if len(inside) != len(meals):
            logger.warning(
                "Dropped %d meals outside %s..%s",
                len(meals) - len(inside),
                window.start.isoformat(),
                window.end.isoformat(),
            )
        return sorted(inside, key=lambda meal: _utc(meal.logged_at))


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _in_window(meal: MealRecord, window: PeriodWindow) -> bool:
    return window.start <= _utc(meal.logged_at) < window.end
