"""
Custom exception hierarchy for the journal service.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class JournalException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidWeekIdentifierError(JournalException):
    http_status = status.HTTP_400_BAD_REQUEST
    code = "INVALID_WEEK_ID"

    def __init__(self, value: str, reason: str = "Expected format YYYY-Wnn (e.g. 2026-W03)."):
        super().__init__(
            message=f"Invalid week identifier {value!r}. {reason}",
            details={"week_id": value},
        )


class SummaryNotAvailableError(JournalException):
    """Raised for weeks that have not started yet: no data, nothing to summarize."""
    http_status = status.HTTP_404_NOT_FOUND
    code = "SUMMARY_NOT_AVAILABLE"

    def __init__(self, week_id: str):
        super().__init__(
            message=f"No summary yet for week {week_id}: the week has not started.",
            details={"week_id": week_id},
        )


class UnauthenticatedError(JournalException):
    http_status = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHENTICATED"

    def __init__(self):
        super().__init__(message="User not authenticated.")


class LogEntryNotFoundError(JournalException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "LOG_NOT_FOUND"

    def __init__(self, log_id: int):
        super().__init__(
            message=f"Log entry {log_id} not found.",
            details={"log_id": log_id},
        )


class RepositoryError(JournalException):
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "REPOSITORY_UNAVAILABLE"

    def __init__(self, operation: str, message: str):
        super().__init__(
            message=f"Storage failure during {operation}: {message}",
            details={"operation": operation},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def journal_exception_handler(request: Request, exc: JournalException) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error in %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
