"""
Log service: persists already-analysed log entries and advances the streak.

Public API
----------
create_log_entry(db, user_id, data, now)                 -> LogCreated   (single transaction)
get_log_entries(db, user_id, limit, offset, filters...)  -> (total, page)
get_log_entry(db, user_id, log_id)                       -> LogEntry | None

The entry insert and the streak update share one transaction: either both
land or neither does, so a created log never silently loses its streak
update. db.commit() is called once, here.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from journal.models.log_entry import Category, LogEntry, Sentiment
from journal.services.repositories import SqlStreakStore
from journal.services.streak import StreakState, record_log_day
from journal.services.week_calendar import as_utc


# ---------------------------------------------------------------------------
# DTOs
# ---------------------------------------------------------------------------

@dataclass
class NewLogEntry:
    """Lightweight DTO so the service layer stays schema-agnostic."""
    timestamp: Optional[datetime] = None
    duration_seconds: Optional[float] = None
    category: Optional[Category] = None
    sentiment: Optional[Sentiment] = None
    keywords: list[str] = field(default_factory=list)
    title: Optional[str] = None
    transcript: Optional[str] = None


@dataclass
class LogCreated:
    entry: LogEntry
    streak: StreakState


# ---------------------------------------------------------------------------
# Public: create
# ---------------------------------------------------------------------------

def create_log_entry(
    db: Session,
    user_id: int,
    data: NewLogEntry,
    now: datetime,
) -> LogCreated:
    """Insert the entry, advance the user's streak, commit once."""
    now = as_utc(now)
    entry = LogEntry(
        user_id=user_id,
        timestamp=as_utc(data.timestamp) if data.timestamp else now,
        duration_seconds=data.duration_seconds,
        category=data.category,
        sentiment=data.sentiment,
        keywords=data.keywords,
        title=data.title,
        transcript=data.transcript,
    )
    try:
        db.add(entry)
        db.flush()  # get entry.id before touching the streak
        streak = record_log_day(SqlStreakStore(db), user_id, now)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(entry)
    return LogCreated(entry=entry, streak=streak)


# ---------------------------------------------------------------------------
# Public: query helpers
# ---------------------------------------------------------------------------

def get_log_entries(
    db: Session,
    user_id: int,
    limit: int = 20,
    offset: int = 0,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    category: Optional[Category] = None,
) -> tuple[int, list[LogEntry]]:
    """Return (total, page) of a user's entries ordered by timestamp desc."""
    q = db.query(LogEntry).filter(LogEntry.user_id == user_id)
    if start is not None:
        q = q.filter(LogEntry.timestamp >= as_utc(start))
    if end is not None:
        q = q.filter(LogEntry.timestamp <= as_utc(end))
    if category is not None:
        q = q.filter(LogEntry.category == category)
    total = q.count()
    items = (
        q.order_by(LogEntry.timestamp.desc(), LogEntry.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return total, items


def get_log_entry(db: Session, user_id: int, log_id: int) -> Optional[LogEntry]:
    return (
        db.query(LogEntry)
        .filter(LogEntry.id == log_id, LogEntry.user_id == user_id)
        .first()
    )
