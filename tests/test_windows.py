"""Tests for period window resolution."""

from datetime import UTC, datetime, timedelta

import pytest

from meal_stats.domain.stats import MalformedWindowError, PeriodKind
from meal_stats.services.windows import resolve_window

NOW = datetime(2026, 3, 10, 15, 30, tzinfo=UTC)
TOMORROW = datetime(2026, 3, 11, tzinfo=UTC)


@pytest.mark.parametrize(
    ("kind", "days"),
    [("today", 1), ("week", 7), ("month", 30), ("custom", 7)],
)
def test_window_lengths(kind: str, days: int) -> None:
    window = resolve_window(kind, NOW)

    assert window.end == TOMORROW
    assert window.length == timedelta(days=days)
    assert window.kind is PeriodKind(kind)


def test_previous_window_ends_at_start() -> None:
    window = resolve_window(PeriodKind.WEEK, NOW)

    previous = window.previous()

    assert previous.end == window.start
    assert previous.length == window.length


def test_explicit_bounds_are_used() -> None:
    start = datetime(2026, 1, 1)
    end = datetime(2026, 1, 15, tzinfo=UTC)

    window = resolve_window("custom", NOW, start=start, end=end)

    assert window.start == datetime(2026, 1, 1, tzinfo=UTC)
    assert window.end == end


def test_unknown_period_is_rejected() -> None:
    with pytest.raises(MalformedWindowError):
        resolve_window("year", NOW)


def test_start_after_end_is_rejected() -> None:
    with pytest.raises(MalformedWindowError):
        resolve_window("custom", NOW, start=TOMORROW, end=NOW)


def test_single_bound_is_rejected() -> None:
    with pytest.raises(MalformedWindowError):
        resolve_window("custom", NOW, start=NOW)
