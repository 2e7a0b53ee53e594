"""
In-memory stand-ins for the storage collaborators, used by the engine unit
tests. They follow the same contracts as journal.services.repositories.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from journal.models.log_entry import LogEntry
from journal.models.summary import WeeklySummary
from journal.services.repositories import WEEK_START_TOLERANCE
from journal.services.streak import StreakState
from journal.services.week_calendar import as_utc


class InMemoryEntryRepository:
    def __init__(self, entries: Optional[list[LogEntry]] = None):
        self.entries: list[LogEntry] = list(entries or [])
        self.calls: list[tuple[int, datetime, datetime]] = []

    def add(self, entry: LogEntry) -> None:
        self.entries.append(entry)

    def list_for_user(self, user_id: int, start: datetime, end: datetime) -> list[LogEntry]:
        self.calls.append((user_id, start, end))
        matching = [
            e for e in self.entries
            if e.user_id == user_id and start <= as_utc(e.timestamp) < end
        ]
        return sorted(matching, key=lambda e: as_utc(e.timestamp))


class InMemorySummaryStore:
    _FIELDS = (
        "week_start", "week_end", "metrics_json", "phase", "phase_confidence",
        "generated_at", "is_complete",
    )

    def __init__(self):
        self.rows: dict[tuple[int, datetime], WeeklySummary] = {}
        self.upserts = 0
        self._next_id = 1

    def find(
        self, user_id: int, week_start: datetime, tolerance: timedelta = timedelta(0)
    ) -> Optional[WeeklySummary]:
        candidates = sorted(
            (
                row for (uid, start), row in self.rows.items()
                if uid == user_id and abs(start - week_start) <= tolerance
            ),
            key=lambda row: row.week_start,
        )
        return candidates[0] if candidates else None

    def upsert(self, summary: WeeklySummary) -> WeeklySummary:
        self.upserts += 1
        key = (summary.user_id, summary.week_start)
        existing = self.rows.get(key) or self.find(
            summary.user_id, summary.week_start, tolerance=WEEK_START_TOLERANCE
        )
        if existing is None:
            summary.id = self._next_id
            self._next_id += 1
            self.rows[key] = summary
            return summary
        del self.rows[(existing.user_id, existing.week_start)]
        for name in self._FIELDS:
            setattr(existing, name, getattr(summary, name))
        self.rows[key] = existing
        return existing

    def list_recent(self, user_id: int, limit: int) -> list[WeeklySummary]:
        rows = [row for (uid, _), row in self.rows.items() if uid == user_id]
        return sorted(rows, key=lambda row: row.week_start, reverse=True)[:limit]


class InMemoryStreakStore:
    def __init__(self, states: Optional[dict[int, StreakState]] = None):
        self.states: dict[int, StreakState] = dict(states or {})
        self.saves = 0

    def load(self, user_id: int) -> StreakState:
        return self.states.get(user_id, StreakState())

    def save(self, user_id: int, state: StreakState) -> None:
        self.saves += 1
        self.states[user_id] = state


class FailingStreakStore(InMemoryStreakStore):
    def save(self, user_id: int, state: StreakState) -> None:
        raise RuntimeError("streak store unavailable")


class FrozenClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)
