"""Domain models for logged meals."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

DEFAULT_MEAL_QUALITY = 5
MIN_MEAL_QUALITY = 1
MAX_MEAL_QUALITY = 10


class Mood(Enum):
    """Mood reported after a meal, in tie-break order."""

    HAPPY = "happy"
    NEUTRAL = "neutral"
    SAD = "sad"


class Energy(Enum):
    """Energy level reported after a meal, in tie-break order."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Satiety(Enum):
    """Satiety reported after a meal, in tie-break order."""

    VERY_FULL = "very_full"
    SATISFIED = "satisfied"
    HUNGRY = "hungry"


class ProcessingLevel(Enum):
    """How processed the food in a meal is."""

    UNPROCESSED = "unprocessed"
    PROCESSED = "processed"
    HIGHLY_PROCESSED = "highly_processed"


@dataclass(frozen=True)
class MealRecord:
    """A single logged meal as read from the meal log."""

    logged_at: datetime
    calories: float | None = None
    protein_g: float | None = None
    carbs_g: float | None = None
    fats_g: float | None = None
    fiber_g: float | None = None
    sugar_g: float | None = None
    sodium_mg: float | None = None
    liquids_ml: float | None = None
    alcohol_g: float | None = None
    caffeine_mg: float | None = None
    processing_level: ProcessingLevel | None = None
    meal_quality: int | None = None
    mood: Mood | None = None
    energy: Energy | None = None
    satiety: Satiety | None = None
    allergens: frozenset[str] = field(default_factory=frozenset)
    meal_name: str | None = None
    description: str | None = None
    health_risk_notes: str | None = None

    @property
    def quality(self) -> int:
        """Return the meal quality, falling back to the default when unset.

        Ratings outside 1..10 are treated as unset.
        """
        if (
            self.meal_quality is None
            or not MIN_MEAL_QUALITY <= self.meal_quality <= MAX_MEAL_QUALITY
        ):
            return DEFAULT_MEAL_QUALITY
        return self.meal_quality

    @property
    def is_processed(self) -> bool:
        """Return True for processed or highly processed meals."""
        return self.processing_level in {
            ProcessingLevel.PROCESSED,
            ProcessingLevel.HIGHLY_PROCESSED,
        }
