"""Insight and recommendation text for statistics reports."""

import json
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from meal_stats.domain.insights import InsightPayload
from meal_stats.domain.stats import DEFAULT_STATS_CONFIG, StatisticsReport, StatsConfig

logger = logging.getLogger(__name__)

INSIGHT_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "insights": {"type": "array", "items": {"type": "string"}},
        "recommendations": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["insights", "recommendations"],
    "additionalProperties": False,
}

# Report fields shared with the insight generator.
PROMPT_FIELDS = (
    "average_calories_daily",
    "average_protein_daily",
    "average_carbs_daily",
    "average_fats_daily",
    "average_fiber_daily",
    "average_sodium_daily",
    "average_fluids_daily",
    "calorie_goal_achievement_percent",
    "processed_food_percentage",
    "full_logging_percentage",
    "nutrition_score",
    "currentStreak",
    "bestStreak",
    "proteinGoalDays",
    "hydrationGoalDays",
    "totalDays",
    "missed_meals_alert",
)

HIGH_PROCESSED_PERCENT = 30
LOW_LOGGING_PERCENT = 50


class InsightClient(Protocol):
    """Interface for an LLM that writes insights."""

    async def generate(
        self, *, model: str, prompt: str, schema: dict[str, object]
    ) -> dict[str, object]:
        """Return structured insight data."""


@dataclass
class InsightService:
    """Attach insights to finished reports.

    The client is optional; without it, or when it fails, rule-based text is
    used so a report always carries insights.
    """

    client: InsightClient | None
    model: str
    config: StatsConfig = DEFAULT_STATS_CONFIG

    async def enrich(self, report: StatisticsReport) -> StatisticsReport:
        """Return a copy of the report with insights and recommendations."""
        payload = rule_based_insights(report, self.config)
        if self.client is not None and report.total_days > 0:
            generated = await self._generate(report)
            if generated is not None and (
                generated.insights or generated.recommendations
            ):
                payload = generated
        return report.model_copy(
            update={
                "insights": tuple(payload.insights),
                "recommendations": tuple(payload.recommendations),
            }
        )

    async def _generate(self, report: StatisticsReport) -> InsightPayload | None:
        if self.client is None:
            return None
        try:
            raw = await self.client.generate(
                model=self.model,
                prompt=build_prompt(report),
                schema=INSIGHT_SCHEMA,
            )
            return InsightPayload.model_validate(raw)
        except ValidationError:
            logger.warning("Insight generator returned an invalid payload")
            return None
        except Exception:
            logger.exception("Insight generation failed")
            return None


def build_prompt(report: StatisticsReport) -> str:
    """Build the generator prompt from report fields only."""
    payload = report.to_payload()
    facts = {name: payload[name] for name in PROMPT_FIELDS}
    return (
        "You are a nutrition coach. Based on these statistics for the period, "
        "write up to three short insights and up to three practical "
        "recommendations. Statistics: " + json.dumps(facts, sort_keys=True)
    )


def rule_based_insights(
    report: StatisticsReport, config: StatsConfig = DEFAULT_STATS_CONFIG
) -> InsightPayload:
    """Derive insights and recommendations from report thresholds."""
    if report.total_days == 0:
        return InsightPayload(
            insights=[],
            recommendations=["Log your meals to start seeing statistics."],
        )

    protein_share = round(report.protein_goal_days / report.total_days * 100)
    insights = [
        f"You met your protein goal on {protein_share}% of logged days.",
        f"Your fluid intake averaged {report.average_fluids_daily}ml daily.",
        f"Current streak: {report.current_streak} days!",
    ]
    recommendations = []
    if report.average_fiber_daily < config.fiber_target_g:
        recommendations.append("Consider adding more fiber-rich foods to your diet.")
    if report.average_sodium_daily > config.sodium_ceiling_mg:
        recommendations.append(
            "Try to reduce sodium intake by limiting processed foods."
        )
    if report.processed_food_percentage > HIGH_PROCESSED_PERCENT:
        recommendations.append("Swap some processed meals for whole foods.")
    if report.average_fluids_daily < config.hydration_target_ml:
        recommendations.append("Drink more water throughout the day.")
    if report.full_logging_percentage < LOW_LOGGING_PERCENT:
        recommendations.append("Log at least three meals a day for better insights.")
    return InsightPayload(insights=insights, recommendations=recommendations)
