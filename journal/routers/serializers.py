"""
ORM / dataclass → response model helpers shared by the routers.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from journal.models.log_entry import LogEntry, enum_value
from journal.models.summary import WeeklySummary
from journal.models.user import User
from journal.schemas.log_entry import LogEntryResponse
from journal.schemas.streak import StreakResponse
from journal.schemas.summary import MetricsOut, SummaryResponse
from journal.services.metrics import MetricsSummary
from journal.services.streak import StreakState
from journal.services.week_calendar import WeekIdentifier, as_utc, week_identifier_of


def _iso(value: Optional[datetime]) -> Optional[str]:
    return as_utc(value).isoformat() if value else None


def streak_from_state(state: StreakState) -> StreakResponse:
    return StreakResponse(
        current=state.streak_count,
        longest=state.longest_streak,
        last_log_date=_iso(state.last_log_date),
    )


def streak_from_user(user: User) -> StreakResponse:
    return StreakResponse(
        current=user.streak_count or 0,
        longest=user.longest_streak or 0,
        last_log_date=_iso(user.last_log_date),
    )


def entry_to_response(entry: LogEntry) -> LogEntryResponse:
    return LogEntryResponse(
        id=entry.id,
        timestamp=_iso(entry.timestamp) or "",
        duration_seconds=entry.duration_seconds,
        category=enum_value(entry.category),
        sentiment=enum_value(entry.sentiment),
        keywords=entry.keywords,
        title=entry.title,
        transcript=entry.transcript,
        created_at=_iso(entry.created_at) or "",
    )


def summary_to_response(
    summary: WeeklySummary,
    week: Optional[WeekIdentifier] = None,
    streak: Optional[StreakResponse] = None,
) -> SummaryResponse:
    metrics = MetricsSummary.from_dict(summary.metrics)
    return SummaryResponse(
        id=summary.id,
        week_id=str(week or week_identifier_of(as_utc(summary.week_start))),
        week_start=_iso(summary.week_start),
        week_end=_iso(summary.week_end),
        metrics=MetricsOut(**metrics.to_dict()),
        phase=summary.phase,
        phase_confidence=summary.phase_confidence,
        generated_at=_iso(summary.generated_at),
        is_complete=summary.is_complete,
        streak=streak,
    )
