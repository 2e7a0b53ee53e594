"""
Weekly summary schemas.

GET  /summary              → SummaryResponse (current week, with streak)
GET  /summary/{week_id}    → SummaryResponse
GET  /summary/history      → SummaryListResponse
POST /summary/generate     → GenerateSummaryRequest → SummaryResponse
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from journal.schemas.streak import StreakResponse


class MetricsOut(BaseModel):
    total_logs: int
    category_counts: dict[str, int]
    sentiment_breakdown: dict[str, int] = Field(
        description="positive / negative / neutral / mixed counts; sums to total_logs."
    )
    average_duration_seconds: float
    top_keywords: list[str] = Field(description="At most 10, most frequent first.")


class SummaryResponse(BaseModel):
    id: int
    week_id: str = Field(description="ISO week, YYYY-Wnn.", examples=["2026-W03"])
    week_start: str = Field(description="Monday 00:00 UTC.")
    week_end: str = Field(description="Sunday 23:59:59.999 UTC.")
    metrics: MetricsOut
    phase: str = Field(examples=["Builder"])
    phase_confidence: int = Field(ge=0, le=100)
    generated_at: str
    is_complete: bool = Field(
        description=(
            "True when the week had ended at generation time. A summary generated "
            "mid-week stays false until it is regenerated after Sunday."
        )
    )
    streak: Optional[StreakResponse] = None


class SummaryListResponse(BaseModel):
    total: int
    items: list[SummaryResponse]


class GenerateSummaryRequest(BaseModel):
    """Force (re)generation of one week. Give exactly one of week_id / week_start."""

    week_id: Optional[str] = Field(default=None, examples=["2026-W03"])
    week_start: Optional[datetime] = Field(
        default=None,
        description="Any instant inside the target week; it is mapped to its ISO week.",
        examples=["2026-01-12T00:00:00Z"],
    )

    @model_validator(mode="after")
    def exactly_one_target(self) -> GenerateSummaryRequest:
        if (self.week_id is None) == (self.week_start is None):
            raise ValueError("provide exactly one of week_id or week_start")
        return self
