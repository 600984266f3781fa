"""XP and level progression from meal quality ratings."""

from dataclasses import dataclass

from meal_stats.domain.meals import MealRecord
from meal_stats.domain.stats import StatsConfig


@dataclass(frozen=True)
class Progress:
    """Accumulated XP and the level it corresponds to."""

    total_points: int
    level: int
    current_xp: int


def meal_xp(quality: int, config: StatsConfig) -> int:
    """Return the XP awarded for a meal of the given quality."""
    for highest, xp in config.xp_tiers:
        if quality <= highest:
            return xp
    return config.xp_tiers[-1][1]


def level_for(total_points: int, config: StatsConfig) -> Progress:
    """Split total XP into a level (starting at 1) and XP within it."""
    return Progress(
        total_points=total_points,
        level=total_points // config.xp_per_level + 1,
        current_xp=total_points % config.xp_per_level,
    )


def compute_progress(meals: list[MealRecord], config: StatsConfig) -> Progress:
    """Sum XP over every meal and derive the level."""
    return level_for(sum(meal_xp(meal.quality, config) for meal in meals), config)
