"""Calorie streaks and per-goal achievement day counts."""

from dataclasses import dataclass

from meal_stats.domain.stats import DailyTotals, StatsConfig


@dataclass(frozen=True)
class Streaks:
    """Current and best runs of goal-met days."""

    current: int
    best: int


@dataclass(frozen=True)
class GoalDays:
    """Number of days that met each goal."""

    protein: int
    hydration: int
    balanced: int
    fiber: int
    perfect: int
    weekly_streak: int


def compute_streaks(
    daily: list[DailyTotals], calorie_goal: float, config: StatsConfig
) -> Streaks:
    """Walk days from most recent to oldest and measure goal-met runs.

    ``daily`` must be sorted ascending by day. Only days with meals are
    considered, so a day without logs does not break a run.
    """
    current = 0
    best = 0
    run = 0
    still_current = True
    for day in reversed(daily):
        if config.streak_band.contains(day.calories, calorie_goal):
            run += 1
            best = max(best, run)
            if still_current:
                current = run
        else:
            run = 0
            still_current = False
    return Streaks(current=current, best=best)


def count_goal_days(
    daily: list[DailyTotals], calorie_goal: float, config: StatsConfig
) -> GoalDays:
    """Count the days that met each nutrition goal."""
    protein = sum(1 for day in daily if day.protein_g >= config.protein_target_g)
    return GoalDays(
        protein=protein,
        hydration=sum(
            1 for day in daily if day.liquids_ml >= config.hydration_target_ml
        ),
        balanced=sum(1 for day in daily if is_balanced(day, calorie_goal, config)),
        fiber=sum(1 for day in daily if day.fiber_g >= config.fiber_target_g),
        perfect=sum(
            1 for day in daily if day.meal_quality >= config.perfect_day_quality
        ),
        weekly_streak=min(config.weekly_streak_cap, protein),
    )


def is_balanced(day: DailyTotals, calorie_goal: float, config: StatsConfig) -> bool:
    """Return True when calories and every macro reach their floors.

    Macro floors come from the fixed targets in ``config``, not from the
    user's own plan.
    """
    floor = config.balanced_macro_floor
    return (
        config.balanced_band.contains(day.calories, calorie_goal)
        and day.protein_g >= config.protein_target_g * floor
        and day.carbs_g >= config.carbs_target_g * floor
        and day.fats_g >= config.fats_target_g * floor
    )
