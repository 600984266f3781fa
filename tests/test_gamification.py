"""Tests for XP and levels."""

from meal_stats.domain.stats import DEFAULT_STATS_CONFIG
from meal_stats.services.gamification import compute_progress, level_for, meal_xp
from tests.conftest import make_meal


def test_meal_xp_tiers() -> None:
    expected = {1: 50, 3: 50, 4: 75, 6: 75, 7: 100, 8: 100, 9: 150, 10: 150}
    for quality, xp in expected.items():
        assert meal_xp(quality, DEFAULT_STATS_CONFIG) == xp


def test_unset_quality_counts_as_five() -> None:
    progress = compute_progress(
        [make_meal(meal_quality=None), make_meal(meal_quality=0)],
        DEFAULT_STATS_CONFIG,
    )

    assert progress.total_points == 150


def test_progress_accumulates_into_levels() -> None:
    meals = [make_meal(day=0, meal_quality=quality) for quality in (2, 5, 9)]

    first = compute_progress(meals, DEFAULT_STATS_CONFIG)
    meals.append(make_meal(day=1, meal_quality=9))
    second = compute_progress(meals, DEFAULT_STATS_CONFIG)

    assert (first.total_points, first.level, first.current_xp) == (275, 1, 275)
    assert (second.total_points, second.level, second.current_xp) == (425, 1, 425)


def test_level_for_rolls_over_each_thousand() -> None:
    progress = level_for(1275, DEFAULT_STATS_CONFIG)

    assert progress.level == 2
    assert progress.current_xp == 275
    assert level_for(0, DEFAULT_STATS_CONFIG).level == 1
    assert level_for(1000, DEFAULT_STATS_CONFIG).level == 2


def test_out_of_range_quality_counts_as_five() -> None:
    progress = compute_progress(
        [make_meal(meal_quality=-3), make_meal(meal_quality=15)],
        DEFAULT_STATS_CONFIG,
    )

    assert progress.total_points == 150
