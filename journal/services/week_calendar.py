"""
Week calendar: ISO-8601 week arithmetic, always in UTC.

Week 1 of an ISO year is the Monday-to-Sunday week containing the year's
first Thursday. Early-January days can therefore belong to the last week of
the previous ISO year, and late-December days to week 1 of the next one
(2024-12-30 is 2025-W01).

Naive datetimes are treated as UTC; aware datetimes are converted to UTC
before any day is taken from them, so the same instant maps to the same week
whatever the server's locale.

Public API
----------
WeekIdentifier(iso_year, iso_week)      value type, str() -> "YYYY-Wnn"
parse_week_identifier(text)             -> WeekIdentifier
week_identifier_of(date | datetime)     -> WeekIdentifier
week_start(w) / week_end(w)             -> datetime (UTC)
week_range(w)                           -> (start, next_start) half-open
contains(value, w)                      -> bool
calendar_days_between(earlier, later)   -> int
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

from journal.core.errors import InvalidWeekIdentifierError

DateLike = Union[date, datetime]

WEEK_ID_PATTERN = re.compile(r"^\d{4}-W\d{2}$")

_WEEK = timedelta(days=7)
_END_OFFSET = timedelta(days=6, hours=23, minutes=59, seconds=59, milliseconds=999)


# ---------------------------------------------------------------------------
# UTC helpers
# ---------------------------------------------------------------------------

def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (as read back from SQLite), convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _utc_day(value: DateLike) -> date:
    # datetime is a subclass of date, so test it first
    if isinstance(value, datetime):
        return as_utc(value).date()
    return value


# ---------------------------------------------------------------------------
# Value type
# ---------------------------------------------------------------------------

@dataclass(frozen=True, order=True)
class WeekIdentifier:
    iso_year: int
    iso_week: int

    def __post_init__(self) -> None:
        if not 1 <= self.iso_week <= 53:
            raise InvalidWeekIdentifierError(
                str(self), "Week number must be between 01 and 53."
            )
        try:
            date.fromisocalendar(self.iso_year, self.iso_week, 1)
        except ValueError:
            raise InvalidWeekIdentifierError(
                str(self), f"ISO year {self.iso_year} has no week {self.iso_week}."
            ) from None

    def __str__(self) -> str:
        return f"{self.iso_year:04d}-W{self.iso_week:02d}"

    def next(self) -> WeekIdentifier:
        return week_identifier_of(week_start(self) + _WEEK)

    def previous(self) -> WeekIdentifier:
        return week_identifier_of(week_start(self) - _WEEK)


def parse_week_identifier(text: str) -> WeekIdentifier:
    """Parse the canonical `YYYY-Wnn` form. Raises InvalidWeekIdentifierError."""
    if not isinstance(text, str) or not WEEK_ID_PATTERN.match(text):
        raise InvalidWeekIdentifierError(str(text))
    year, week = text.split("-W")
    return WeekIdentifier(int(year), int(week))


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------

def week_identifier_of(value: DateLike) -> WeekIdentifier:
    iso = _utc_day(value).isocalendar()
    return WeekIdentifier(iso.year, iso.week)


def current_week(now: Optional[datetime] = None) -> WeekIdentifier:
    return week_identifier_of(now or utc_now())


def week_start(week: WeekIdentifier) -> datetime:
    """Monday 00:00:00.000 UTC of the given ISO week."""
    monday = date.fromisocalendar(week.iso_year, week.iso_week, 1)
    return datetime.combine(monday, time.min, tzinfo=timezone.utc)


def week_end(week: WeekIdentifier) -> datetime:
    """Sunday 23:59:59.999 UTC of the given ISO week."""
    return week_start(week) + _END_OFFSET


def week_range(week: WeekIdentifier) -> tuple[datetime, datetime]:
    """[start, next Monday), the half-open range used for entry queries."""
    start = week_start(week)
    return start, start + _WEEK


def contains(value: DateLike, week: WeekIdentifier) -> bool:
    if not isinstance(value, datetime):
        return week_identifier_of(value) == week
    return week_start(week) <= as_utc(value) <= week_end(week)


def calendar_days_between(earlier: DateLike, later: DateLike) -> int:
    """Whole UTC calendar days from `earlier` to `later`; time of day is ignored."""
    return (_utc_day(later) - _utc_day(earlier)).days
