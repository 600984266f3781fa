"""Domain models for nutrition statistics."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from meal_stats.domain.meals import Energy, Mood, Satiety


class MalformedWindowError(ValueError):
    """Raised when a statistics window cannot be resolved."""


class PeriodKind(Enum):
    """Supported statistics periods."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    CUSTOM = "custom"


@dataclass(frozen=True)
class PeriodWindow:
    """Half-open time interval ``[start, end)`` for a statistics request."""

    start: datetime
    end: datetime
    kind: PeriodKind

    @property
    def length(self) -> timedelta:
        """Return the window length."""
        return self.end - self.start

    def previous(self) -> "PeriodWindow":
        """Return the window of equal length ending where this one starts."""
        return PeriodWindow(
            start=self.start - self.length, end=self.start, kind=self.kind
        )


@dataclass(frozen=True)
class CalorieBand:
    """Tolerance band around the daily calorie goal."""

    low: float
    high: float

    def contains(self, calories: float, goal: float) -> bool:
        """Return True when calories fall inside the band for the goal."""
        return self.low * goal <= calories <= self.high * goal


@dataclass(frozen=True)
class StatsConfig:
    """Thresholds and targets used by the statistics engine."""

    # Days counted towards calorie_goal_achievement_percent.
    achievement_band: CalorieBand = CalorieBand(low=0.9, high=1.1)
    # Days that keep a streak alive. Looser than the achievement band.
    streak_band: CalorieBand = CalorieBand(low=0.8, high=1.2)
    balanced_band: CalorieBand = CalorieBand(low=0.8, high=1.2)
    protein_target_g: float = 120
    carbs_target_g: float = 200
    fats_target_g: float = 60
    balanced_macro_floor: float = 0.8
    hydration_target_ml: float = 2500
    fiber_target_g: float = 25
    sodium_ceiling_mg: float = 2300
    perfect_day_quality: float = 9
    full_logging_meals: int = 3
    expected_meals_per_day: int = 3
    trend_days: int = 7
    weekly_streak_cap: int = 7
    # (highest quality in tier, XP awarded), ascending.
    xp_tiers: tuple[tuple[int, int], ...] = ((3, 50), (6, 75), (8, 100), (10, 150))
    xp_per_level: int = 1000
    default_eating_start_hour: int = 8
    default_eating_end_hour: int = 20
    vegetable_fruit_keywords: tuple[str, ...] = (
        "salad",
        "vegetable",
        "veggie",
        "fruit",
        "apple",
        "banana",
        "orange",
        "berries",
        "berry",
        "grape",
        "melon",
        "broccoli",
        "carrot",
        "spinach",
        "tomato",
        "cucumber",
        "pepper",
        "lettuce",
        "kale",
        "zucchini",
        "avocado",
    )


DEFAULT_STATS_CONFIG = StatsConfig()


@dataclass(frozen=True)
class DailyTotals:
    """Summed nutrition for one calendar day with at least one meal."""

    day: date
    calories: float
    protein_g: float
    carbs_g: float
    fats_g: float
    fiber_g: float
    sugar_g: float
    sodium_mg: float
    liquids_ml: float
    alcohol_g: float
    caffeine_mg: float
    meal_count: int
    mood: Mood | None
    energy: Energy | None
    satiety: Satiety | None
    meal_quality: float


class _ReportModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class EatingHours(_ReportModel):
    """First and last meal hour of the period."""

    start: str = "08:00"
    end: str = "20:00"


class WeeklyTrends(_ReportModel):
    """Daily totals for the most recent days with data."""

    calories: tuple[float, ...] = ()
    protein: tuple[float, ...] = ()
    carbs: tuple[float, ...] = ()
    fats: tuple[float, ...] = ()


class DailyBreakdown(_ReportModel):
    """Per-day row of the report."""

    date: str
    calories: float
    protein_g: float
    carbs_g: float
    fats_g: float
    liquids_ml: float
    mood: str | None = None
    energy: str | None = None
    satiety: str | None = None
    meal_quality: float


class MoodStats(_ReportModel):
    """Count of days per dominant mood."""

    happy: int = 0
    neutral: int = 0
    sad: int = 0


class EnergyStats(_ReportModel):
    """Count of days per dominant energy level."""

    high: int = 0
    medium: int = 0
    low: int = 0


class MealQualityStats(_ReportModel):
    """Meal quality average and 1..10 histogram."""

    average: float = 0
    distribution: tuple[int, ...] = (0,) * 10


class StatisticsReport(_ReportModel):
    """Complete statistics for a user and period.

    Field aliases are the JSON names clients depend on.
    """

    average_calories_daily: int = 0
    average_protein_daily: int = 0
    average_carbs_daily: int = 0
    average_fats_daily: int = 0
    average_fiber_daily: int = 0
    average_sugar_daily: int = 0
    average_sodium_daily: int = 0
    average_fluids_daily: int = 0
    average_alcohol_daily: int = 0
    average_caffeine_daily: int = 0
    calorie_goal_achievement_percent: int = 0
    processed_food_percentage: int = 0
    full_logging_percentage: int = 0
    vegetable_fruit_intake: int = 0
    alcohol_caffeine_intake: int = 0
    health_risk_percentage: int = 0
    nutrition_score: int = 0
    weekly_trends: WeeklyTrends = WeeklyTrends()
    average_eating_hours: EatingHours = EatingHours()
    intermittent_fasting_hours: int = 0
    missed_meals_alert: int = 0
    allergen_alerts: tuple[str, ...] = ()
    total_days: int = Field(default=0, alias="totalDays")
    current_streak: int = Field(default=0, alias="currentStreak")
    best_streak: int = Field(default=0, alias="bestStreak")
    protein_goal_days: int = Field(default=0, alias="proteinGoalDays")
    hydration_goal_days: int = Field(default=0, alias="hydrationGoalDays")
    balanced_meal_days: int = Field(default=0, alias="balancedMealDays")
    fiber_goal_days: int = Field(default=0, alias="fiberGoalDays")
    perfect_days: int = Field(default=0, alias="perfectDays")
    weekly_streak: int = Field(default=0, alias="weeklyStreak")
    total_points: int = Field(default=0, alias="totalPoints")
    level: int = 1
    current_xp: int = Field(default=0, alias="currentXP")
    daily_breakdown: tuple[DailyBreakdown, ...] = Field(
        default=(), alias="dailyBreakdown"
    )
    mood_stats: MoodStats = Field(default=MoodStats(), alias="moodStats")
    energy_stats: EnergyStats = Field(default=EnergyStats(), alias="energyStats")
    meal_quality_stats: MealQualityStats = Field(
        default=MealQualityStats(), alias="mealQualityStats"
    )
    previous_calories_daily: int = 0
    previous_protein_daily: int = 0
    previous_carbs_daily: int = 0
    previous_fats_daily: int = 0
    previous_fiber_daily: int = 0
    previous_sodium_daily: int = 0
    previous_sugar_daily: int = 0
    previous_fluids_daily: int = 0
    insights: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()

    def to_payload(self) -> dict[str, object]:
        """Serialize the report with client field names."""
        return self.model_dump(mode="json", by_alias=True)
