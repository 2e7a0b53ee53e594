"""
Error envelope models, used only to document error responses in OpenAPI.
The handlers in journal.core.errors build the actual payloads.
"""
from typing import Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """`{code, message, details}` returned for every 4xx/5xx."""

    code: str = Field(examples=["INVALID_WEEK_ID"])
    message: str
    details: Optional[dict[str, Any]] = Field(default=None, examples=[{"week_id": "2026-W54"}])


class FieldError(BaseModel):
    field: str = Field(examples=["category"])
    message: str
    type: str


class ValidationDetails(BaseModel):
    errors: list[FieldError]


class ValidationErrorResponse(BaseModel):
    code: str = Field(default="VALIDATION_ERROR")
    message: str
    details: ValidationDetails
