"""
Tests for ISO-8601 week arithmetic.

Covered:
  - year-boundary weeks (late December in week 1, early January in 52/53)
  - week_start / week_end instants, round trip over many years
  - UTC normalization of aware and naive datetimes
  - parsing and formatting of YYYY-Wnn
  - contains() edges and calendar_days_between()
"""
from __future__ import annotations

import pytest
from datetime import date, datetime, timedelta, timezone

from journal.core.errors import InvalidWeekIdentifierError
from journal.services.week_calendar import (
    WeekIdentifier,
    calendar_days_between,
    contains,
    current_week,
    parse_week_identifier,
    week_end,
    week_identifier_of,
    week_range,
    week_start,
)

UTC = timezone.utc


def _weeks_in(year: int) -> int:
    # Dec 28 is always in the last ISO week of its year
    return date(year, 12, 28).isocalendar().week


class TestYearBoundaries:
    def test_late_december_belongs_to_next_iso_year(self):
        assert week_identifier_of(date(2024, 12, 30)) == WeekIdentifier(2025, 1)

    def test_late_december_datetime(self):
        assert week_identifier_of(datetime(2024, 12, 30, tzinfo=UTC)) == WeekIdentifier(2025, 1)

    def test_early_january_belongs_to_previous_iso_year(self):
        assert week_identifier_of(date(2021, 1, 1)) == WeekIdentifier(2020, 53)

    def test_week_53_exists_in_2026(self):
        assert week_identifier_of(date(2027, 1, 1)) == WeekIdentifier(2026, 53)

    def test_january_first_in_week_one_when_thursday(self):
        # 2026-01-01 is a Thursday
        assert week_identifier_of(date(2026, 1, 1)) == WeekIdentifier(2026, 1)

    def test_week_one_monday_may_be_in_december(self):
        assert week_start(WeekIdentifier(2026, 1)) == datetime(2025, 12, 29, tzinfo=UTC)


class TestWeekBounds:
    def test_week_start_is_monday_midnight_utc(self):
        start = week_start(WeekIdentifier(2026, 3))
        assert start == datetime(2026, 1, 12, 0, 0, 0, tzinfo=UTC)
        assert start.weekday() == 0

    def test_week_end_is_sunday_last_millisecond(self):
        end = week_end(WeekIdentifier(2026, 3))
        assert end == datetime(2026, 1, 18, 23, 59, 59, 999000, tzinfo=UTC)
        assert end.weekday() == 6

    def test_week_range_is_half_open_seven_days(self):
        start, next_start = week_range(WeekIdentifier(2026, 3))
        assert next_start - start == timedelta(days=7)
        assert next_start == week_start(WeekIdentifier(2026, 4))

    @pytest.mark.parametrize("year", range(2015, 2031))
    def test_round_trip_every_week_of_year(self, year):
        for week in range(1, _weeks_in(year) + 1):
            w = WeekIdentifier(year, week)
            assert week_identifier_of(week_start(w)) == w
            assert week_identifier_of(week_end(w)) == w
            assert week_identifier_of(week_start(w) - timedelta(milliseconds=1)) != w

    def test_adjacent_weeks_are_contiguous(self):
        w = WeekIdentifier(2024, 52)
        assert week_end(w) + timedelta(milliseconds=1) == week_start(w.next())

    def test_next_and_previous_cross_year(self):
        assert WeekIdentifier(2026, 53).next() == WeekIdentifier(2027, 1)
        assert WeekIdentifier(2025, 1).previous() == WeekIdentifier(2024, 52)


class TestUtcNormalization:
    def test_aware_datetime_converted_to_utc_first(self):
        # Sunday 23:30 in UTC-5 is Monday 04:30 UTC
        local = datetime(2026, 1, 11, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        assert week_identifier_of(local) == WeekIdentifier(2026, 3)

    def test_positive_offset_can_move_back_a_week(self):
        # Monday 01:00 in UTC+3 is still Sunday 22:00 UTC
        local = datetime(2026, 1, 12, 1, 0, tzinfo=timezone(timedelta(hours=3)))
        assert week_identifier_of(local) == WeekIdentifier(2026, 2)

    def test_naive_datetime_is_treated_as_utc(self):
        assert week_identifier_of(datetime(2026, 1, 12, 0, 0)) == WeekIdentifier(2026, 3)

    def test_current_week_uses_given_now(self):
        assert current_week(datetime(2026, 1, 21, 12, tzinfo=UTC)) == WeekIdentifier(2026, 4)


class TestParsing:
    def test_canonical_string(self):
        assert str(WeekIdentifier(2026, 3)) == "2026-W03"

    def test_parse_valid(self):
        assert parse_week_identifier("2026-W03") == WeekIdentifier(2026, 3)

    def test_parse_week_53(self):
        assert parse_week_identifier("2020-W53") == WeekIdentifier(2020, 53)

    @pytest.mark.parametrize(
        "text",
        ["2026-W3", "W03-2026", "2026-03", "2026W03", "26-W03", "2026-w03", "", "2026-W003"],
    )
    def test_parse_rejects_malformed(self, text):
        with pytest.raises(InvalidWeekIdentifierError):
            parse_week_identifier(text)

    @pytest.mark.parametrize("text", ["2026-W00", "2026-W54", "2026-W99"])
    def test_parse_rejects_out_of_range(self, text):
        with pytest.raises(InvalidWeekIdentifierError):
            parse_week_identifier(text)

    def test_parse_rejects_week_53_in_52_week_year(self):
        with pytest.raises(InvalidWeekIdentifierError):
            parse_week_identifier("2025-W53")

    def test_error_carries_week_id(self):
        with pytest.raises(InvalidWeekIdentifierError) as exc_info:
            parse_week_identifier("2026-W54")
        assert exc_info.value.details["week_id"] == "2026-W54"
        assert exc_info.value.code == "INVALID_WEEK_ID"

    def test_identifiers_compare_by_value(self):
        assert WeekIdentifier(2026, 3) == parse_week_identifier("2026-W03")
        assert WeekIdentifier(2026, 3) < WeekIdentifier(2026, 4) < WeekIdentifier(2027, 1)


class TestContains:
    W = WeekIdentifier(2026, 3)

    def test_start_and_end_inclusive(self):
        assert contains(week_start(self.W), self.W)
        assert contains(week_end(self.W), self.W)

    def test_just_outside(self):
        assert not contains(week_start(self.W) - timedelta(microseconds=1), self.W)
        assert not contains(week_start(self.W.next()), self.W)

    def test_plain_dates(self):
        assert contains(date(2026, 1, 18), self.W)
        assert not contains(date(2026, 1, 19), self.W)


class TestCalendarDaysBetween:
    def test_same_day_is_zero(self):
        a = datetime(2026, 1, 14, 0, 5, tzinfo=UTC)
        b = datetime(2026, 1, 14, 23, 55, tzinfo=UTC)
        assert calendar_days_between(a, b) == 0

    def test_across_midnight_is_one(self):
        a = datetime(2026, 1, 14, 23, 59, tzinfo=UTC)
        b = datetime(2026, 1, 15, 0, 1, tzinfo=UTC)
        assert calendar_days_between(a, b) == 1

    def test_truncates_in_utc(self):
        # 20:00 in UTC-5 on the 14th is already the 15th in UTC
        a = datetime(2026, 1, 14, 20, 0, tzinfo=timezone(timedelta(hours=-5)))
        b = datetime(2026, 1, 15, 9, 0, tzinfo=UTC)
        assert calendar_days_between(a, b) == 0

    def test_negative_when_reversed(self):
        assert calendar_days_between(date(2026, 1, 15), date(2026, 1, 12)) == -3
