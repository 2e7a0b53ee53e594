"""
Summary orchestrator: weekly summary get-or-generate.

Sequencing only: week range (week_calendar) -> entries (EntryRepository)
-> aggregate (metrics) -> classify (phase) -> upsert (SummaryStore).

Rules
-----
  - An existing summary for (user, week_start) is returned as-is unless
    `refresh=True`. The read path tolerates ±1 day of drift in the stored
    week_start.
  - A week whose Monday is still in the future raises
    SummaryNotAvailableError instead of fabricating empty data.
  - The Summary row is written once, after everything is computed.
  - is_complete is True when the week had fully elapsed at generation time.

The generated Summary *is* the cache: calling get_or_generate twice with no
refresh returns the same persisted row (same generated_at).
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from journal.core.errors import SummaryNotAvailableError
from journal.models.summary import WeeklySummary
from journal.services.metrics import aggregate
from journal.services.phase import classify
from journal.services.repositories import WEEK_START_TOLERANCE, EntryRepository, SummaryStore
from journal.services.week_calendar import (
    WeekIdentifier,
    as_utc,
    utc_now,
    week_end,
    week_range,
    week_start,
)

logger = logging.getLogger(__name__)

READ_TOLERANCE = WEEK_START_TOLERANCE


class SummaryOrchestrator:
    def __init__(
        self,
        entries: EntryRepository,
        summaries: SummaryStore,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.entries = entries
        self.summaries = summaries
        self.clock = clock

    def get_or_generate(
        self,
        user_id: int,
        week: WeekIdentifier,
        refresh: bool = False,
    ) -> WeeklySummary:
        start = week_start(week)
        if not refresh:
            existing = self.summaries.find(user_id, start, tolerance=READ_TOLERANCE)
            if existing is not None:
                logger.debug("Summary cache hit for user %s week %s", user_id, week)
                return existing

        now = as_utc(self.clock())
        if start > now:
            raise SummaryNotAvailableError(str(week))
        return self._generate(user_id, week, now)

    def _generate(self, user_id: int, week: WeekIdentifier, now: datetime) -> WeeklySummary:
        start, next_start = week_range(week)
        entries = self.entries.list_for_user(user_id, start, next_start)
        metrics = aggregate(entries)
        phase = classify(metrics)
        end = week_end(week)

        summary = WeeklySummary(
            user_id=user_id,
            week_start=start,
            week_end=end,
            metrics=metrics.to_dict(),
            phase=phase.phase,
            phase_confidence=phase.confidence,
            generated_at=now,
            is_complete=now > end,
        )
        stored = self.summaries.upsert(summary)
        logger.info(
            "Generated summary for user %s week %s: %s logs, phase %s (%s)",
            user_id, week, metrics.total_logs, phase.phase, phase.confidence,
        )
        return stored

    def list_recent(self, user_id: int, limit: int = 10) -> list[WeeklySummary]:
        return self.summaries.list_recent(user_id, limit)
