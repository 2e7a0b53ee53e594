"""
SQLAlchemy implementations of the storage collaborators.

The engine components never touch a Session directly: they receive one of
these objects (or an in-memory fake in tests) at construction time.

  SqlEntryRepository   log entries for (user, time range), ascending
  SqlStreakStore       StreakState on the users row, row-locked on load
  SqlSummaryStore      weekly_summaries upsert / lookup by (user, week_start)

Commit policy: SqlStreakStore only flushes (the log creation transaction
commits once at the root); SqlSummaryStore.upsert commits, since a summary
is always written on its own.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional, Protocol, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from journal.models.log_entry import LogEntry
from journal.models.summary import WeeklySummary
from journal.models.user import User
from journal.services.streak import StreakState
from journal.services.week_calendar import as_utc


# ---------------------------------------------------------------------------
# Collaborator protocols
# ---------------------------------------------------------------------------

class EntryRepository(Protocol):
    def list_for_user(
        self, user_id: int, start: datetime, end: datetime
    ) -> Sequence[LogEntry]: ...


class SummaryStore(Protocol):
    def find(
        self, user_id: int, week_start: datetime, tolerance: timedelta = timedelta(0)
    ) -> Optional[WeeklySummary]: ...

    def upsert(self, summary: WeeklySummary) -> WeeklySummary: ...

    def list_recent(self, user_id: int, limit: int) -> list[WeeklySummary]: ...


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------

class SqlEntryRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_for_user(self, user_id: int, start: datetime, end: datetime) -> list[LogEntry]:
        """Entries with start <= timestamp < end, oldest first (id breaks ties)."""
        return (
            self.db.query(LogEntry)
            .filter(
                LogEntry.user_id == user_id,
                LogEntry.timestamp >= start,
                LogEntry.timestamp < end,
            )
            .order_by(LogEntry.timestamp.asc(), LogEntry.id.asc())
            .all()
        )


# ---------------------------------------------------------------------------
# Streak
# ---------------------------------------------------------------------------

class SqlStreakStore:
    def __init__(self, db: Session):
        self.db = db

    def _user(self, user_id: int) -> User:
        # FOR UPDATE holds the row until the surrounding transaction ends,
        # so two uploads for one user cannot both read the same last_log_date.
        return (
            self.db.query(User)
            .filter(User.id == user_id)
            .with_for_update()
            .populate_existing()
            .one()
        )

    def load(self, user_id: int) -> StreakState:
        user = self._user(user_id)
        return StreakState(
            streak_count=user.streak_count or 0,
            last_log_date=as_utc(user.last_log_date) if user.last_log_date else None,
            longest_streak=user.longest_streak or 0,
        )

    def save(self, user_id: int, state: StreakState) -> None:
        user = self.db.get(User, user_id) or self._user(user_id)
        user.streak_count = state.streak_count
        user.longest_streak = state.longest_streak
        user.last_log_date = state.last_log_date
        self.db.flush()


# ---------------------------------------------------------------------------
# Summaries
# ---------------------------------------------------------------------------

# Stored week starts may have drifted by up to a day; reads and writes both
# match within this window so a regenerated week overwrites its old row.
WEEK_START_TOLERANCE = timedelta(days=1)

_SUMMARY_FIELDS = (
    "week_start",
    "week_end",
    "metrics_json",
    "phase",
    "phase_confidence",
    "generated_at",
    "is_complete",
)


class SqlSummaryStore:
    def __init__(self, db: Session):
        self.db = db

    def find(
        self,
        user_id: int,
        week_start: datetime,
        tolerance: timedelta = timedelta(0),
    ) -> Optional[WeeklySummary]:
        """Exact lookup, or the earliest row within ±tolerance of week_start."""
        q = self.db.query(WeeklySummary).filter(WeeklySummary.user_id == user_id)
        if tolerance:
            q = q.filter(
                WeeklySummary.week_start >= week_start - tolerance,
                WeeklySummary.week_start <= week_start + tolerance,
            )
        else:
            q = q.filter(WeeklySummary.week_start == week_start)
        return q.order_by(WeeklySummary.week_start.asc()).first()

    def upsert(self, summary: WeeklySummary) -> WeeklySummary:
        """
        Insert or overwrite the row for (user_id, week_start) in one commit.
        A matching row with a drifted week_start is moved to the exact one.
        """
        target = self._merge_into_existing(summary)
        try:
            self.db.commit()
        except IntegrityError:
            # Race condition: another request inserted the row first; update it instead
            self.db.rollback()
            target = self._merge_into_existing(summary)
            self.db.commit()
        self.db.refresh(target)
        return target

    def _merge_into_existing(self, summary: WeeklySummary) -> WeeklySummary:
        existing = self.find(summary.user_id, summary.week_start) or self.find(
            summary.user_id, summary.week_start, tolerance=WEEK_START_TOLERANCE
        )
        if existing is None:
            self.db.add(summary)
            return summary
        for name in _SUMMARY_FIELDS:
            setattr(existing, name, getattr(summary, name))
        return existing

    def list_recent(self, user_id: int, limit: int) -> list[WeeklySummary]:
        return (
            self.db.query(WeeklySummary)
            .filter(WeeklySummary.user_id == user_id)
            .order_by(WeeklySummary.week_start.desc())
            .limit(limit)
            .all()
        )
