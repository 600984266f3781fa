"""Assembly of the statistics report from meal records."""

from meal_stats.domain.meals import Energy, MealRecord, Mood
from meal_stats.domain.stats import (
    DEFAULT_STATS_CONFIG,
    DailyBreakdown,
    DailyTotals,
    EatingHours,
    EnergyStats,
    MealQualityStats,
    MoodStats,
    StatisticsReport,
    StatsConfig,
    WeeklyTrends,
)
from meal_stats.services.aggregation import aggregate_days, bucket_by_day
from meal_stats.services.gamification import compute_progress
from meal_stats.services.streaks import compute_streaks, count_goal_days
from meal_stats.services.summary import (
    NutrientAverages,
    PeriodSummary,
    average_nutrients,
    summarize_period,
)

EMPTY_REPORT = StatisticsReport()


def daily_totals(meals: list[MealRecord]) -> list[DailyTotals]:
    """Bucket meals by day and return ascending daily totals."""
    return aggregate_days(bucket_by_day(meals))


def compare_previous(previous_meals: list[MealRecord]) -> NutrientAverages:
    """Return nutrient averages for the preceding window."""
    return average_nutrients(daily_totals(previous_meals))


def build_report(
    meals: list[MealRecord],
    calorie_goal: float,
    previous_meals: list[MealRecord] | None = None,
    config: StatsConfig = DEFAULT_STATS_CONFIG,
) -> StatisticsReport:
    """Compute the full statistics report for one window of meals.

    An empty meal list yields the zero-valued report rather than an error.
    """
    previous = compare_previous(previous_meals or [])
    previous_fields = _previous_fields(previous)
    daily = daily_totals(meals)
    if not daily:
        return EMPTY_REPORT.model_copy(update=previous_fields)

    summary = summarize_period(daily, meals, calorie_goal, config)
    streaks = compute_streaks(daily, calorie_goal, config)
    goals = count_goal_days(daily, calorie_goal, config)
    progress = compute_progress(meals, config)
    averages = summary.averages
    return StatisticsReport(
        average_calories_daily=averages.calories,
        average_protein_daily=averages.protein_g,
        average_carbs_daily=averages.carbs_g,
        average_fats_daily=averages.fats_g,
        average_fiber_daily=averages.fiber_g,
        average_sugar_daily=averages.sugar_g,
        average_sodium_daily=averages.sodium_mg,
        average_fluids_daily=averages.liquids_ml,
        average_alcohol_daily=averages.alcohol_g,
        average_caffeine_daily=averages.caffeine_mg,
        calorie_goal_achievement_percent=summary.calorie_goal_achievement_percent,
        processed_food_percentage=summary.processed_food_percentage,
        full_logging_percentage=summary.full_logging_percentage,
        vegetable_fruit_intake=summary.vegetable_fruit_intake,
        alcohol_caffeine_intake=summary.alcohol_caffeine_intake,
        health_risk_percentage=summary.health_risk_percentage,
        nutrition_score=summary.nutrition_score,
        weekly_trends=_weekly_trends(summary),
        average_eating_hours=EatingHours(
            start=f"{summary.eating_start_hour:02d}:00",
            end=f"{summary.eating_end_hour:02d}:00",
        ),
        intermittent_fasting_hours=summary.intermittent_fasting_hours,
        missed_meals_alert=summary.missed_meals_alert,
        allergen_alerts=_allergen_alerts(meals),
        total_days=summary.total_days,
        current_streak=streaks.current,
        best_streak=streaks.best,
        protein_goal_days=goals.protein,
        hydration_goal_days=goals.hydration,
        balanced_meal_days=goals.balanced,
        fiber_goal_days=goals.fiber,
        perfect_days=goals.perfect,
        weekly_streak=goals.weekly_streak,
        total_points=progress.total_points,
        level=progress.level,
        current_xp=progress.current_xp,
        daily_breakdown=tuple(_breakdown_row(day) for day in daily),
        mood_stats=MoodStats(
            happy=_count(daily, "mood", Mood.HAPPY),
            neutral=_count(daily, "mood", Mood.NEUTRAL),
            sad=_count(daily, "mood", Mood.SAD),
        ),
        energy_stats=EnergyStats(
            high=_count(daily, "energy", Energy.HIGH),
            medium=_count(daily, "energy", Energy.MEDIUM),
            low=_count(daily, "energy", Energy.LOW),
        ),
        meal_quality_stats=_meal_quality_stats(meals),
        **previous_fields,
    )


def _previous_fields(previous: NutrientAverages) -> dict[str, int]:
    return {
        "previous_calories_daily": previous.calories,
        "previous_protein_daily": previous.protein_g,
        "previous_carbs_daily": previous.carbs_g,
        "previous_fats_daily": previous.fats_g,
        "previous_fiber_daily": previous.fiber_g,
        "previous_sodium_daily": previous.sodium_mg,
        "previous_sugar_daily": previous.sugar_g,
        "previous_fluids_daily": previous.liquids_ml,
    }


def _weekly_trends(summary: PeriodSummary) -> WeeklyTrends:
    days = summary.trend_days
    return WeeklyTrends(
        calories=tuple(day.calories for day in days),
        protein=tuple(day.protein_g for day in days),
        carbs=tuple(day.carbs_g for day in days),
        fats=tuple(day.fats_g for day in days),
    )


def _allergen_alerts(meals: list[MealRecord]) -> tuple[str, ...]:
    alerts = {
        allergen.strip().lower()
        for meal in meals
        for allergen in meal.allergens
        if allergen.strip()
    }
    return tuple(sorted(alerts))


def _breakdown_row(day: DailyTotals) -> DailyBreakdown:
    return DailyBreakdown(
        date=day.day.isoformat(),
        calories=day.calories,
        protein_g=day.protein_g,
        carbs_g=day.carbs_g,
        fats_g=day.fats_g,
        liquids_ml=day.liquids_ml,
        mood=day.mood.value if day.mood else None,
        energy=day.energy.value if day.energy else None,
        satiety=day.satiety.value if day.satiety else None,
        meal_quality=round(day.meal_quality, 1),
    )


def _count(daily: list[DailyTotals], field: str, member: object) -> int:
    return sum(1 for day in daily if getattr(day, field) == member)


def _meal_quality_stats(meals: list[MealRecord]) -> MealQualityStats:
    distribution = [0] * 10
    for meal in meals:
        distribution[meal.quality - 1] += 1
    average = sum(meal.quality for meal in meals) / len(meals)
    return MealQualityStats(average=round(average, 1), distribution=tuple(distribution))
