"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from meal_stats.adapters.supabase_goal_repository import SupabaseGoalRepository
from meal_stats.adapters.supabase_stats_repository import (
    SupabaseStatsRepository,
    parse_processing_level,
)
from meal_stats.domain.meals import Energy, Mood, ProcessingLevel, Satiety
from meal_stats.services.report import build_report


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: list[list[dict[str, object]]] = field(default_factory=list)
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)
    selected: str | None = None

    def queue(self, data: list[dict[str, object]]) -> None:
        self.response_queue.append(data)

    def select(self, columns: str) -> "FakeTable":
        self.selected = columns
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("gte", column, value))
        return self

    def lt(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("lt", column, value))
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        data = self.response_queue.pop(0) if self.response_queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_supabase_stats_repository_parses_meals() -> None:
    client = FakeSupabaseClient()
    table = client.table("meals")
    table.queue(
        [
            {
                "upload_time": "2026-03-02T12:30:00+00:00",
                "meal_name": "Chicken salad",
                "calories": 550,
                "protein_g": "42.5",
                "carbs_g": None,
                "fats_g": 20,
                "sodium_mg": 700,
                "processing_level": "Minimally processed",
                "meal_quality": 8,
                "mood": "happy",
                "energy": "HIGH",
                "satiety": "very_full",
                "allergens_json": {"possible_allergens": ["eggs", ""]},
                "health_risk_notes": "",
            },
            {"upload_time": None, "calories": 999},
            {
                "upload_time": "2026-03-02T19:00:00",
                "calories": 800,
                "mood": "ecstatic",
                "allergens_json": ["peanuts"],
            },
        ]
    )
    user_id = uuid4()
    start = datetime(2026, 3, 2, tzinfo=UTC)
    end = datetime(2026, 3, 3, tzinfo=UTC)

    repository = SupabaseStatsRepository(client)
    meals = repository.list_meals(user_id, start, end)

    assert len(meals) == 2
    first, second = meals
    assert first.protein_g == 42.5
    assert first.carbs_g is None
    assert first.processing_level is ProcessingLevel.UNPROCESSED
    assert first.meal_quality == 8
    assert first.mood is Mood.HAPPY
    assert first.energy is Energy.HIGH
    assert first.satiety is Satiety.VERY_FULL
    assert first.allergens == frozenset({"eggs"})
    assert first.health_risk_notes is None
    assert second.logged_at.tzinfo is not None
    assert second.mood is None
    assert second.allergens == frozenset({"peanuts"})
    assert ("eq", "user_id", str(user_id)) in table.last_filters
    assert ("gte", "upload_time", start.isoformat()) in table.last_filters
    assert ("lt", "upload_time", end.isoformat()) in table.last_filters


def test_parse_processing_level_labels() -> None:
    assert parse_processing_level("Ultra-processed") is (
        ProcessingLevel.HIGHLY_PROCESSED
    )
    assert parse_processing_level("highly_processed") is (
        ProcessingLevel.HIGHLY_PROCESSED
    )
    assert parse_processing_level("Processed") is ProcessingLevel.PROCESSED
    assert parse_processing_level("unprocessed") is ProcessingLevel.UNPROCESSED
    assert parse_processing_level("Varies by ingredient") is None
    assert parse_processing_level(None) is None


def test_supabase_goal_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("nutrition_plans")
    table.queue([{"goal_calories": 2150}])

    repository = SupabaseGoalRepository(client)

    assert repository.get_daily_calorie_goal(uuid4()) == 2150
    assert repository.get_daily_calorie_goal(uuid4()) is None


def test_supabase_stats_repository_ignores_non_finite_numbers() -> None:
    client = FakeSupabaseClient()
    client.table("meals").queue(
        [
            {
                "upload_time": "2026-03-02T12:00:00+00:00",
                "calories": "NaN",
                "protein_g": "Infinity",
                "fats_g": float("-inf"),
                "fiber_g": float("nan"),
                "meal_quality": "NaN",
            },
            {
                "upload_time": "2026-03-02T18:00:00+00:00",
                "calories": 700,
                "meal_quality": "Infinity",
            },
        ]
    )

    meals = SupabaseStatsRepository(client).list_meals(
        uuid4(), datetime(2026, 3, 2, tzinfo=UTC), datetime(2026, 3, 3, tzinfo=UTC)
    )

    first, second = meals
    assert first.calories is None
    assert first.protein_g is None
    assert first.fats_g is None
    assert first.fiber_g is None
    assert first.meal_quality is None
    assert second.meal_quality is None

    report = build_report(meals, calorie_goal=2000)

    assert report.average_calories_daily == 700
    assert report.average_protein_daily == 0
