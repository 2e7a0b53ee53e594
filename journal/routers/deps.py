"""
Shared FastAPI dependencies: clock, current user, engine wiring.

Everything the engine needs is built per request from the request's
Session, so tests can override `get_db` / `get_clock` and nothing lives in
module-level singletons.
"""
from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from fastapi import Depends, Header
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from journal.core.errors import RepositoryError, UnauthenticatedError
from journal.db.base import get_db
from journal.models.user import User
from journal.services.repositories import SqlEntryRepository, SqlSummaryStore
from journal.services.summary_service import SummaryOrchestrator
from journal.services.users import get_or_create_user
from journal.services.week_calendar import utc_now

Clock = Callable[[], datetime]


def get_clock() -> Clock:
    return utc_now


def get_current_user(
    x_user_id: Optional[str] = Header(
        default=None,
        description="Verified identity subject forwarded by the auth gateway.",
    ),
    db: Session = Depends(get_db),
) -> User:
    subject = (x_user_id or "").strip()
    if not subject:
        raise UnauthenticatedError()
    try:
        return get_or_create_user(db, subject)
    except SQLAlchemyError as exc:
        raise RepositoryError("user lookup", str(exc)) from exc


def get_summary_orchestrator(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> SummaryOrchestrator:
    return SummaryOrchestrator(
        entries=SqlEntryRepository(db),
        summaries=SqlSummaryStore(db),
        clock=clock,
    )
