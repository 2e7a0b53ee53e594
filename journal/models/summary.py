"""
WeeklySummary: persisted result of the weekly aggregation.

One row per (user_id, week_start); regeneration overwrites the row in place
(upsert), the unique constraint guards against racing inserts.

metrics: JSON-encoded MetricsSummary stored as Text.
"""
import json
from datetime import datetime
from sqlalchemy import Integer, String, Text, Boolean, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from journal.db.base import Base


class WeeklySummary(Base):
    __tablename__ = "weekly_summaries"
    __table_args__ = (
        UniqueConstraint("user_id", "week_start", name="uq_weekly_summary_user_week"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    week_start: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True,
        comment="Monday 00:00 UTC",
    )
    week_end: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        comment="Sunday 23:59:59.999 UTC",
    )
    metrics_json: Mapped[str] = mapped_column("metrics", Text, nullable=False)
    phase: Mapped[str] = mapped_column(String(32), nullable=False)
    phase_confidence: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="0–100"
    )
    generated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_complete: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    @property
    def metrics(self) -> dict:
        return json.loads(self.metrics_json) if self.metrics_json else {}

    @metrics.setter
    def metrics(self, value: dict) -> None:
        self.metrics_json = json.dumps(value, ensure_ascii=False, sort_keys=True)
