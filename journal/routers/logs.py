"""
Logs router.

POST /logs          store an analysed log entry, advance the streak
GET  /logs          list entries (paginated, newest first)
GET  /logs/{id}     single entry
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from journal.core.errors import LogEntryNotFoundError, RepositoryError
from journal.db.base import get_db
from journal.models.log_entry import Category
from journal.models.user import User
from journal.routers.deps import Clock, get_clock, get_current_user
from journal.routers.serializers import entry_to_response, streak_from_state
from journal.schemas.common import ErrorResponse, ValidationErrorResponse
from journal.schemas.log_entry import (
    LogCreatedResponse,
    LogEntryCreate,
    LogEntryListResponse,
    LogEntryResponse,
)
from journal.services.log_service import (
    NewLogEntry,
    create_log_entry,
    get_log_entries,
    get_log_entry,
)

router = APIRouter(prefix="/logs", tags=["logs"])


# ---------------------------------------------------------------------------
# POST /logs
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=LogCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Store a log entry and update the streak",
    responses={
        401: {"model": ErrorResponse, "description": "Missing X-User-Id."},
        422: {
            "model": ValidationErrorResponse,
            "description": "Unknown category or sentiment, negative duration, oversized fields.",
        },
        503: {"model": ErrorResponse, "description": "Storage unavailable; nothing was written."},
    },
)
def create_log(
    payload: LogEntryCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """
    Persist a log entry whose category, sentiment, duration and keywords were
    already computed by the audio pipeline, then advance the user's streak.

    Only the first log of a UTC day moves the streak; the response always
    carries the streak as it stands after this log.
    """
    data = NewLogEntry(
        timestamp=payload.timestamp,
        duration_seconds=payload.duration_seconds,
        category=payload.category,
        sentiment=payload.sentiment,
        keywords=payload.keywords,
        title=payload.title,
        transcript=payload.transcript,
    )
    try:
        created = create_log_entry(db, user.id, data, now=clock())
    except SQLAlchemyError as exc:
        raise RepositoryError("log creation", str(exc)) from exc

    return LogCreatedResponse(
        entry=entry_to_response(created.entry),
        streak=streak_from_state(created.streak),
    )


# ---------------------------------------------------------------------------
# GET /logs
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=LogEntryListResponse,
    summary="List log entries (newest first)",
)
def list_logs(
    start: Optional[datetime] = Query(default=None, description="Only entries at or after this instant."),
    end: Optional[datetime] = Query(default=None, description="Only entries at or before this instant."),
    category: Optional[Category] = Query(default=None, description="Filter by category."),
    limit: int = Query(default=20, ge=1, le=100, description="Page size."),
    offset: int = Query(default=0, ge=0, description="Skip N items."),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        total, items = get_log_entries(
            db, user.id, limit=limit, offset=offset, start=start, end=end, category=category
        )
    except SQLAlchemyError as exc:
        raise RepositoryError("log listing", str(exc)) from exc
    return LogEntryListResponse(total=total, items=[entry_to_response(e) for e in items])


# ---------------------------------------------------------------------------
# GET /logs/{log_id}
# ---------------------------------------------------------------------------

@router.get(
    "/{log_id}",
    response_model=LogEntryResponse,
    summary="Get one log entry",
    responses={404: {"model": ErrorResponse, "description": "No such entry for this user."}},
)
def read_log(
    log_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        entry = get_log_entry(db, user.id, log_id)
    except SQLAlchemyError as exc:
        raise RepositoryError("log lookup", str(exc)) from exc
    if entry is None:
        raise LogEntryNotFoundError(log_id)
    return entry_to_response(entry)
