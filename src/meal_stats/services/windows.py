"""Resolution of statistics periods into time windows."""

from datetime import UTC, datetime, timedelta

from meal_stats.domain.stats import MalformedWindowError, PeriodKind, PeriodWindow

PERIOD_DAYS = {
    PeriodKind.TODAY: 1,
    PeriodKind.WEEK: 7,
    PeriodKind.MONTH: 30,
    PeriodKind.CUSTOM: 7,
}


def parse_period(kind: str | PeriodKind) -> PeriodKind:
    """Return the period kind for a raw value."""
    if isinstance(kind, PeriodKind):
        return kind
    try:
        return PeriodKind(kind)
    except ValueError as exc:
        raise MalformedWindowError(f"Unknown period: {kind!r}") from exc


def resolve_window(
    kind: str | PeriodKind,
    now: datetime,
    start: datetime | None = None,
    end: datetime | None = None,
) -> PeriodWindow:
    """Build the window for a period.

    Without explicit bounds the window covers whole UTC days and ends at the
    midnight after ``now``. Explicit bounds must be given together.
    """
    period = parse_period(kind)
    if (start is None) != (end is None):
        raise MalformedWindowError("Both start and end are required")
    if start is not None and end is not None:
        start, end = _as_utc(start), _as_utc(end)
        if start > end:
            raise MalformedWindowError("Window start is after its end")
        return PeriodWindow(start=start, end=end, kind=period)
    today = _as_utc(now).replace(hour=0, minute=0, second=0, microsecond=0)
    window_end = today + timedelta(days=1)
    return PeriodWindow(
        start=window_end - timedelta(days=PERIOD_DAYS[period]),
        end=window_end,
        kind=period,
    )


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
