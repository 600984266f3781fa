"""Tests for container wiring."""

import asyncio

from meal_stats.config import Settings
from meal_stats.containers import build_container


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)
    assert container.stats_service is not None
    assert container.insight_service.client is not None
    asyncio.run(container.close_resources())


def test_build_container_without_openai_key(settings: Settings) -> None:
    container = build_container(settings.model_copy(update={"openai_api_key": None}))
    assert container.insight_service.client is None
    assert container.goal_service.default_calorie_goal == 2000
    asyncio.run(container.close_resources())
