"""Short-lived cache of computed statistics reports."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from meal_stats.domain.stats import PeriodWindow, StatisticsReport

CacheKey = tuple[UUID, datetime, datetime]


class ReportCache(Protocol):
    """Cache interface for statistics reports."""

    def get(self, user_id: UUID, window: PeriodWindow) -> StatisticsReport | None:
        """Return a cached report if present and not expired."""

    def set(
        self, user_id: UUID, window: PeriodWindow, report: StatisticsReport
    ) -> None:
        """Store a report for the user and window."""


@dataclass
class _CacheEntry:
    report: StatisticsReport
    expires_at: datetime


@dataclass
class InMemoryReportCache(ReportCache):
    """In-process report cache keyed by user and window bounds."""

    ttl_seconds: int = 60
    _entries: dict[CacheKey, _CacheEntry] = field(default_factory=dict)

    def get(self, user_id: UUID, window: PeriodWindow) -> StatisticsReport | None:
        """Return a cached report if it hasn't expired."""
        key = _key(user_id, window)
        entry = self._entries.get(key)
        if entry is None:
            return None
        if datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.report

    def set(
        self, user_id: UUID, window: PeriodWindow, report: StatisticsReport
    ) -> None:
        """Store a report until the TTL elapses."""
        if self.ttl_seconds <= 0:
            return
        now = datetime.now(tz=UTC)
        self._prune(now)
        expires_at = now + timedelta(seconds=self.ttl_seconds)
        self._entries[_key(user_id, window)] = _CacheEntry(
            report=report, expires_at=expires_at
        )

    def __len__(self) -> int:
        return len(self._entries)

    def _prune(self, now: datetime) -> None:
        expired = [
            key for key, entry in self._entries.items() if now >= entry.expires_at
        ]
        for key in expired:
            del self._entries[key]


def _key(user_id: UUID, window: PeriodWindow) -> CacheKey:
    return (user_id, window.start, window.end)
