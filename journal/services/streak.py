"""
Streak tracker: consecutive calendar days (UTC) with at least one log.

Transition, applied once per successful log creation at instant `now`:

  last_log_date unset          -> streak = 1
  same UTC day as last log     -> no-op (streak, longest and last_log_date untouched)
  previous UTC day             -> streak += 1
  anything else (gap)          -> streak = 1

After every non-no-op transition: longest = max(longest, streak) and
last_log_date = now. Only the first log of a day moves the state.

Serializing concurrent updates for one user is the store's job: the SQL
store locks the user row for the duration of the log transaction.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Protocol

from journal.services.week_calendar import calendar_days_between

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StreakState:
    streak_count: int = 0
    last_log_date: Optional[datetime] = None
    longest_streak: int = 0


class StreakStore(Protocol):
    def load(self, user_id: int) -> StreakState: ...

    def save(self, user_id: int, state: StreakState) -> None: ...


def advance_streak(state: StreakState, now: datetime) -> StreakState:
    """Pure transition. Returns `state` itself when the log changes nothing."""
    if state.last_log_date is None:
        count = 1
    else:
        days = calendar_days_between(state.last_log_date, now)
        if days == 0:
            return state
        count = state.streak_count + 1 if days == 1 else 1

    return replace(
        state,
        streak_count=count,
        longest_streak=max(state.longest_streak, count),
        last_log_date=now,
    )


def record_log_day(store: StreakStore, user_id: int, now: datetime) -> StreakState:
    """Read-modify-write of one user's streak. Store failures propagate."""
    state = store.load(user_id)
    updated = advance_streak(state, now)
    if updated is state:
        logger.debug("Streak unchanged for user %s (already logged today)", user_id)
        return state
    store.save(user_id, updated)
    logger.info(
        "Streak for user %s: %s day(s), longest %s",
        user_id, updated.streak_count, updated.longest_streak,
    )
    return updated
