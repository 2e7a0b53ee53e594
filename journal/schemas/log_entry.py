"""
Log entry request / response schemas.

POST /logs        → LogEntryCreate → LogCreatedResponse
GET  /logs        → LogEntryListResponse
GET  /logs/{id}   → LogEntryResponse

Category and sentiment are closed enums: anything else coming from the
upstream analysis step is rejected here with VALIDATION_ERROR.
"""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from journal.models.log_entry import Category, Sentiment
from journal.schemas.streak import StreakResponse

MAX_KEYWORDS = 50


class LogEntryCreate(BaseModel):
    """A log entry whose attributes were already computed upstream."""

    timestamp: Optional[datetime] = Field(
        default=None,
        description="When the entry was recorded. Defaults to now (UTC). Naive values are UTC.",
        examples=["2026-01-14T08:30:00Z"],
    )
    duration_seconds: Optional[float] = Field(
        default=None, ge=0, description="Audio duration in seconds.", examples=[95.5]
    )
    category: Optional[Category] = Field(default=None, examples=["work"])
    sentiment: Optional[Sentiment] = Field(default=None, examples=["positive"])
    keywords: Annotated[list[str], Field(
        default_factory=list,
        max_length=MAX_KEYWORDS,
        description="Keywords extracted from the transcript, in order of appearance.",
        examples=[["standup", "deploy"]],
    )]
    title: Optional[str] = Field(default=None, max_length=100)
    transcript: Optional[str] = Field(default=None, max_length=20_000)

    @field_validator("keywords")
    @classmethod
    def strip_keywords(cls, v: list[str]) -> list[str]:
        return [kw.strip() for kw in v if kw and kw.strip()]


class LogEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    timestamp: str = Field(description="UTC timestamp of the entry.")
    duration_seconds: Optional[float] = None
    category: Optional[str] = None
    sentiment: Optional[str] = None
    keywords: list[str] = Field(default_factory=list)
    title: Optional[str] = None
    transcript: Optional[str] = None
    created_at: str


class LogCreatedResponse(BaseModel):
    entry: LogEntryResponse
    streak: StreakResponse


class LogEntryListResponse(BaseModel):
    total: int
    items: list[LogEntryResponse]
