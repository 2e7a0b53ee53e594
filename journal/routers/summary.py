"""
Summary router: weekly reflection summaries.

GET  /summary               current ISO week (auto-generates) + streak
GET  /summary/history       recent summaries, newest first
GET  /summary/{week_id}     one week by YYYY-Wnn (auto-generates)
POST /summary/generate      force regeneration of one week
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.exc import SQLAlchemyError

from journal.core.config import settings
from journal.core.errors import RepositoryError
from journal.models.user import User
from journal.routers.deps import Clock, get_clock, get_current_user, get_summary_orchestrator
from journal.routers.serializers import streak_from_user, summary_to_response
from journal.schemas.common import ErrorResponse
from journal.schemas.summary import GenerateSummaryRequest, SummaryListResponse, SummaryResponse
from journal.services.summary_service import SummaryOrchestrator
from journal.services.week_calendar import (
    WeekIdentifier,
    current_week,
    parse_week_identifier,
    week_identifier_of,
)

router = APIRouter(prefix="/summary", tags=["summary"])

_NOT_AVAILABLE = {
    "model": ErrorResponse,
    "description": "The week has not started yet, so no summary can exist for it.",
}


def _get_or_generate(
    orchestrator: SummaryOrchestrator,
    user: User,
    week: WeekIdentifier,
    refresh: bool = False,
    with_streak: bool = False,
) -> SummaryResponse:
    try:
        summary = orchestrator.get_or_generate(user.id, week, refresh=refresh)
    except SQLAlchemyError as exc:
        raise RepositoryError("summary generation", str(exc)) from exc
    return summary_to_response(
        summary,
        week=week,
        streak=streak_from_user(user) if with_streak else None,
    )


# ---------------------------------------------------------------------------
# GET /summary
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=SummaryResponse,
    summary="Current week summary (auto-generated on first request)",
)
def current_summary(
    user: User = Depends(get_current_user),
    orchestrator: SummaryOrchestrator = Depends(get_summary_orchestrator),
    clock: Clock = Depends(get_clock),
):
    """
    Return the summary for the ISO week containing *now* (UTC), generating
    and storing it if it does not exist yet. Includes the user's streak.

    A summary generated mid-week has `is_complete=false`; use
    `POST /summary/generate` to refresh it once more entries are in.
    """
    return _get_or_generate(orchestrator, user, current_week(clock()), with_streak=True)


# ---------------------------------------------------------------------------
# GET /summary/history
# ---------------------------------------------------------------------------

@router.get(
    "/history",
    response_model=SummaryListResponse,
    summary="Recently generated summaries (newest week first)",
)
def summary_history(
    limit: Optional[int] = Query(default=None, ge=1, le=52, description="Max summaries to return."),
    user: User = Depends(get_current_user),
    orchestrator: SummaryOrchestrator = Depends(get_summary_orchestrator),
):
    try:
        items = orchestrator.list_recent(user.id, limit or settings.SUMMARY_HISTORY_LIMIT)
    except SQLAlchemyError as exc:
        raise RepositoryError("summary history", str(exc)) from exc
    return SummaryListResponse(
        total=len(items),
        items=[summary_to_response(s) for s in items],
    )


# ---------------------------------------------------------------------------
# GET /summary/{week_id}
# ---------------------------------------------------------------------------

@router.get(
    "/{week_id}",
    response_model=SummaryResponse,
    summary="Summary for a specific ISO week",
    responses={
        400: {"model": ErrorResponse, "description": "week_id is not a valid YYYY-Wnn week."},
        404: _NOT_AVAILABLE,
    },
)
def summary_for_week(
    week_id: str = Path(description="ISO week, YYYY-Wnn.", examples=["2026-W03"]),
    user: User = Depends(get_current_user),
    orchestrator: SummaryOrchestrator = Depends(get_summary_orchestrator),
):
    """
    Return the stored summary for `week_id`, generating it on first request.
    Future weeks answer **404 SUMMARY_NOT_AVAILABLE** rather than an empty
    summary.
    """
    week = parse_week_identifier(week_id)
    return _get_or_generate(orchestrator, user, week)


# ---------------------------------------------------------------------------
# POST /summary/generate
# ---------------------------------------------------------------------------

@router.post(
    "/generate",
    response_model=SummaryResponse,
    summary="Regenerate the summary of one week",
    responses={
        400: {"model": ErrorResponse, "description": "week_id is not a valid YYYY-Wnn week."},
        404: _NOT_AVAILABLE,
    },
)
def generate_summary(
    payload: GenerateSummaryRequest,
    user: User = Depends(get_current_user),
    orchestrator: SummaryOrchestrator = Depends(get_summary_orchestrator),
):
    """
    Recompute metrics and phase for the given week from the current entries
    and overwrite the stored summary (upsert by user + week start).
    """
    if payload.week_id is not None:
        week = parse_week_identifier(payload.week_id)
    else:
        week = week_identifier_of(payload.week_start)
    return _get_or_generate(orchestrator, user, week, refresh=True)
