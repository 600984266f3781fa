"""Supabase repository for meal records."""

import math
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import TypeVar
from uuid import UUID

from supabase import Client

from meal_stats.domain.meals import (
    Energy,
    MealRecord,
    Mood,
    ProcessingLevel,
    Satiety,
)
from meal_stats.services.stats import StatsRepository

_E = TypeVar("_E", bound=Enum)

MEAL_COLUMNS = (
    "upload_time, meal_name, description, calories, protein_g, carbs_g, fats_g, "
    "fiber_g, sugar_g, sodium_mg, liquids_ml, alcohol_g, caffeine_mg, "
    "processing_level, meal_quality, mood, energy, satiety, allergens_json, "
    "health_risk_notes"
)


@dataclass
class SupabaseStatsRepository(StatsRepository):
    """Supabase implementation for meal queries."""

    client: Client
    table: str = "meals"

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return meals uploaded in the time range."""
        response = (
            self.client.table(self.table)
            .select(MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("upload_time", start.isoformat())
            .lt("upload_time", end.isoformat())
            .order("upload_time", desc=False)
            .execute()
        )
        return [
            meal for meal in (_parse_row(row) for row in response.data or []) if meal
        ]


def _parse_row(row: dict[str, object]) -> MealRecord | None:
    uploaded_raw = row.get("upload_time")
    if not isinstance(uploaded_raw, str) or not uploaded_raw:
        return None
    logged_at = datetime.fromisoformat(uploaded_raw)
    if logged_at.tzinfo is None:
        logged_at = logged_at.replace(tzinfo=UTC)
    quality = _number(row.get("meal_quality"))
    return MealRecord(
        logged_at=logged_at,
        calories=_number(row.get("calories")),
        protein_g=_number(row.get("protein_g")),
        carbs_g=_number(row.get("carbs_g")),
        fats_g=_number(row.get("fats_g")),
        fiber_g=_number(row.get("fiber_g")),
        sugar_g=_number(row.get("sugar_g")),
        sodium_mg=_number(row.get("sodium_mg")),
        liquids_ml=_number(row.get("liquids_ml")),
        alcohol_g=_number(row.get("alcohol_g")),
        caffeine_mg=_number(row.get("caffeine_mg")),
        processing_level=parse_processing_level(row.get("processing_level")),
        meal_quality=int(quality) if quality is not None else None,
        mood=_enum(Mood, row.get("mood")),
        energy=_enum(Energy, row.get("energy")),
        satiety=_enum(Satiety, row.get("satiety")),
        allergens=_allergens(row.get("allergens_json")),
        meal_name=_text(row.get("meal_name")),
        description=_text(row.get("description")),
        health_risk_notes=_text(row.get("health_risk_notes")),
    )


def parse_processing_level(value: object) -> ProcessingLevel | None:
    """Map free-form processing labels onto the processing levels."""
    if not isinstance(value, str):
        return None
    label = value.strip().lower().replace("-", "_").replace(" ", "_")
    if not label:
        return None
    if "ultra" in label or "highly" in label:
        return ProcessingLevel.HIGHLY_PROCESSED
    if label.startswith(("un", "minimal")):
        return ProcessingLevel.UNPROCESSED
    if "processed" in label:
        return ProcessingLevel.PROCESSED
    return None


def _number(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    return result if math.isfinite(result) else None


def _text(value: object) -> str | None:
    return value if isinstance(value, str) and value else None


def _enum(enum_type: type[_E], value: object) -> _E | None:
    if not isinstance(value, str):
        return None
    try:
        return enum_type(value.strip().lower())
    except ValueError:
        return None


def _allergens(value: object) -> frozenset[str]:
    if isinstance(value, list):
        return frozenset(item for item in value if isinstance(item, str) and item)
    if isinstance(value, dict):
        items = value.get("possible_allergens", [])
        if isinstance(items, list):
            return frozenset(item for item in items if isinstance(item, str) and item)
    return frozenset()
