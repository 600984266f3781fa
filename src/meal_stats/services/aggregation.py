"""Day bucketing and per-day aggregation of meal records."""

import math
from collections import Counter
from datetime import UTC, date
from enum import Enum
from typing import TypeVar

from meal_stats.domain.meals import Energy, MealRecord, Mood, Satiety
from meal_stats.domain.stats import DailyTotals

_E = TypeVar("_E", bound=Enum)


def meal_day(meal: MealRecord) -> date:
    """Return the UTC calendar day a meal belongs to."""
    logged_at = meal.logged_at
    if logged_at.tzinfo is None:
        return logged_at.date()
    return logged_at.astimezone(UTC).date()


def bucket_by_day(meals: list[MealRecord]) -> dict[date, list[MealRecord]]:
    """Group meals by calendar day, keeping input order within each day."""
    buckets: dict[date, list[MealRecord]] = {}
    for meal in meals:
        buckets.setdefault(meal_day(meal), []).append(meal)
    return buckets


def aggregate_days(buckets: dict[date, list[MealRecord]]) -> list[DailyTotals]:
    """Sum each day bucket into daily totals, sorted ascending by day."""
    return [
        aggregate_day(day, buckets[day]) for day in sorted(buckets) if buckets[day]
    ]


def aggregate_day(day: date, meals: list[MealRecord]) -> DailyTotals:
    """Sum nutrients for one day; missing or non-finite values count as zero."""
    return DailyTotals(
        day=day,
        calories=sum(_amount(meal.calories) for meal in meals),
        protein_g=sum(_amount(meal.protein_g) for meal in meals),
        carbs_g=sum(_amount(meal.carbs_g) for meal in meals),
        fats_g=sum(_amount(meal.fats_g) for meal in meals),
        fiber_g=sum(_amount(meal.fiber_g) for meal in meals),
        sugar_g=sum(_amount(meal.sugar_g) for meal in meals),
        sodium_mg=sum(_amount(meal.sodium_mg) for meal in meals),
        liquids_ml=sum(_amount(meal.liquids_ml) for meal in meals),
        alcohol_g=sum(_amount(meal.alcohol_g) for meal in meals),
        caffeine_mg=sum(_amount(meal.caffeine_mg) for meal in meals),
        meal_count=len(meals),
        mood=majority(Mood, [meal.mood for meal in meals]),
        energy=majority(Energy, [meal.energy for meal in meals]),
        satiety=majority(Satiety, [meal.satiety for meal in meals]),
        meal_quality=sum(meal.quality for meal in meals) / len(meals),
    )


def majority(enum_type: type[_E], values: list[_E | None]) -> _E | None:
    """Return the most frequent non-null value.

    Ties go to the member declared first in ``enum_type``.
    """
    counts = Counter(value for value in values if value is not None)
    if not counts:
        return None
    best = max(counts.values())
    return next(member for member in enum_type if counts[member] == best)


def _amount(value: float | None) -> float:
    if value is None or not math.isfinite(value):
        return 0.0
    return value
