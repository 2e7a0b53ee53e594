"""
Streak router.

GET /streak   the caller's current and longest streak
"""
from fastapi import APIRouter, Depends

from journal.models.user import User
from journal.routers.deps import get_current_user
from journal.routers.serializers import streak_from_user
from journal.schemas.streak import StreakResponse

router = APIRouter(prefix="/streak", tags=["streak"])


@router.get("", response_model=StreakResponse, summary="Current streak")
def read_streak(user: User = Depends(get_current_user)):
    """
    The stored streak. It only moves when a log is created, so a user who
    skipped yesterday still sees their old count until their next log.
    """
    return streak_from_user(user)
