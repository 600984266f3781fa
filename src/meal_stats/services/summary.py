"""Period-level averages, percentages and the nutrition score."""

import math
import re
from dataclasses import dataclass
from datetime import UTC
from functools import lru_cache

from meal_stats.domain.meals import MealRecord
from meal_stats.domain.stats import DailyTotals, StatsConfig

ACHIEVEMENT_POINTS = 25
PROCESSED_POINTS = 25
LOGGING_POINTS = 20
FIBER_POINTS = 15
SODIUM_POINTS = 15
SODIUM_STEP_MG = 100
MAX_SCORE = 100


@dataclass(frozen=True)
class NutrientAverages:
    """Per-day averages over days that have meals."""

    calories: int
    protein_g: int
    carbs_g: int
    fats_g: int
    fiber_g: int
    sugar_g: int
    sodium_mg: int
    liquids_ml: int
    alcohol_g: int
    caffeine_mg: int


ZERO_AVERAGES = NutrientAverages(
    calories=0,
    protein_g=0,
    carbs_g=0,
    fats_g=0,
    fiber_g=0,
    sugar_g=0,
    sodium_mg=0,
    liquids_ml=0,
    alcohol_g=0,
    caffeine_mg=0,
)


@dataclass(frozen=True)
class PeriodSummary:
    """Aggregated statistics for a period."""

    total_days: int
    averages: NutrientAverages
    calorie_goal_achievement_percent: int
    processed_food_percentage: int
    full_logging_percentage: int
    vegetable_fruit_intake: int
    alcohol_caffeine_intake: int
    health_risk_percentage: int
    nutrition_score: int
    trend_days: list[DailyTotals]
    eating_start_hour: int
    eating_end_hour: int
    intermittent_fasting_hours: int
    missed_meals_alert: int


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def percent(part: int, whole: int) -> float:
    """Return ``part`` as a percentage of ``whole`` (0 when empty)."""
    if whole <= 0:
        return 0.0
    return part / whole * 100


def average_nutrients(daily: list[DailyTotals]) -> NutrientAverages:
    """Average nutrient totals over the days that have meals."""
    total_days = len(daily)
    if total_days == 0:
        return ZERO_AVERAGES

    def avg(field: str) -> int:
        return round_half_up(sum(getattr(day, field) for day in daily) / total_days)

    return NutrientAverages(
        calories=avg("calories"),
        protein_g=avg("protein_g"),
        carbs_g=avg("carbs_g"),
        fats_g=avg("fats_g"),
        fiber_g=avg("fiber_g"),
        sugar_g=avg("sugar_g"),
        sodium_mg=avg("sodium_mg"),
        liquids_ml=avg("liquids_ml"),
        alcohol_g=avg("alcohol_g"),
        caffeine_mg=avg("caffeine_mg"),
    )


def nutrition_score(  # noqa: PLR0913
    *,
    achievement_percent: float,
    processed_percent: float,
    full_logging_percent: float,
    avg_fiber_g: float,
    avg_sodium_mg: float,
    config: StatsConfig,
) -> int:
    """Combine five independently capped signals into a 0-100 score."""
    achievement = min(ACHIEVEMENT_POINTS, achievement_percent * 0.25)
    processed = max(0.0, PROCESSED_POINTS - processed_percent * 0.5)
    logging_ = min(LOGGING_POINTS, full_logging_percent * 0.20)
    fiber = min(FIBER_POINTS, (avg_fiber_g / config.fiber_target_g) * FIBER_POINTS)
    excess_mg = max(0.0, avg_sodium_mg - config.sodium_ceiling_mg)
    sodium_excess = excess_mg / SODIUM_STEP_MG
    sodium = max(0.0, SODIUM_POINTS - sodium_excess)
    total = achievement + processed + logging_ + fiber + sodium
    return round_half_up(min(MAX_SCORE, max(0.0, total)))


def summarize_period(
    daily: list[DailyTotals],
    meals: list[MealRecord],
    calorie_goal: float,
    config: StatsConfig,
) -> PeriodSummary:
    """Reduce ascending daily totals and their meals into period statistics."""
    total_days = len(daily)
    averages = average_nutrients(daily)
    band = config.achievement_band
    achievement = percent(
        sum(1 for day in daily if band.contains(day.calories, calorie_goal)),
        total_days,
    )
    processed = percent(sum(1 for meal in meals if meal.is_processed), len(meals))
    full_logging = percent(
        sum(1 for day in daily if day.meal_count >= config.full_logging_meals),
        total_days,
    )
    vegetable_fruit = percent(
        sum(1 for meal in meals if _mentions_produce(meal, config)), len(meals)
    )
    alcohol_caffeine = percent(
        sum(1 for meal in meals if _has_alcohol_or_caffeine(meal)), len(meals)
    )
    health_risk = percent(
        sum(1 for meal in meals if (meal.health_risk_notes or "").strip()), len(meals)
    )
    start_hour, end_hour = eating_window(meals, config)
    trend_days = daily[-config.trend_days :] if config.trend_days > 0 else []
    return PeriodSummary(
        total_days=total_days,
        averages=averages,
        calorie_goal_achievement_percent=round_half_up(achievement),
        processed_food_percentage=round_half_up(processed),
        full_logging_percentage=round_half_up(full_logging),
        vegetable_fruit_intake=round_half_up(vegetable_fruit),
        alcohol_caffeine_intake=round_half_up(alcohol_caffeine),
        health_risk_percentage=round_half_up(health_risk),
        nutrition_score=nutrition_score(
            achievement_percent=achievement,
            processed_percent=processed,
            full_logging_percent=full_logging,
            avg_fiber_g=averages.fiber_g,
            avg_sodium_mg=averages.sodium_mg,
            config=config,
        ),
        trend_days=trend_days,
        eating_start_hour=start_hour,
        eating_end_hour=end_hour,
        intermittent_fasting_hours=max(0, 24 - (end_hour - start_hour)),
        missed_meals_alert=missed_meals(daily, config),
    )


def eating_window(meals: list[MealRecord], config: StatsConfig) -> tuple[int, int]:
    """Return the earliest and latest UTC meal hour of the period."""
    if not meals:
        return config.default_eating_start_hour, config.default_eating_end_hour
    hours = [_utc_hour(meal) for meal in meals]
    return min(hours), max(hours)


def missed_meals(daily: list[DailyTotals], config: StatsConfig) -> int:
    """Return expected meals minus logged meals over the last trend days."""
    recent = daily[-config.trend_days :] if config.trend_days > 0 else []
    expected = config.expected_meals_per_day * config.trend_days
    return max(0, expected - sum(day.meal_count for day in recent))


def _utc_hour(meal: MealRecord) -> int:
    logged_at = meal.logged_at
    if logged_at.tzinfo is None:
        return logged_at.hour
    return logged_at.astimezone(UTC).hour


def _has_alcohol_or_caffeine(meal: MealRecord) -> bool:
    return (meal.alcohol_g or 0) > 0 or (meal.caffeine_mg or 0) > 0


def _mentions_produce(meal: MealRecord, config: StatsConfig) -> bool:
    if not config.vegetable_fruit_keywords:
        return False
    text = f"{meal.meal_name or ''} {meal.description or ''}"
    return _keyword_pattern(config.vegetable_fruit_keywords).search(text) is not None


@lru_cache(maxsize=8)
def _keyword_pattern(keywords: tuple[str, ...]) -> re.Pattern[str]:
    """Match whole keywords, allowing a plural suffix."""
    alternatives = "|".join(re.escape(keyword) for keyword in keywords)
    return re.compile(rf"\b(?:{alternatives})(?:e?s)?\b", re.IGNORECASE)
