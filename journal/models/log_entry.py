"""
LogEntry: one transcribed daily audio entry.

Category, sentiment, duration and keywords are computed upstream (AI
categorization, transcoding); this service stores them as given.

keywords: JSON-encoded list stored as Text, exposed as a Python list via
the `keywords` property.
"""
import enum
import json
from datetime import datetime
from sqlalchemy import Integer, String, Text, Float, DateTime, Enum, ForeignKey, Index, func
from sqlalchemy.orm import Mapped, mapped_column

from journal.db.base import Base


class Category(str, enum.Enum):
    health = "health"
    work = "work"
    personal = "personal"
    family = "family"
    social = "social"
    finance = "finance"
    learning = "learning"
    other = "other"
    uncategorized = "uncategorized"


class Sentiment(str, enum.Enum):
    positive = "positive"
    negative = "negative"
    neutral = "neutral"
    mixed = "mixed"


def enum_value(v) -> str | None:
    """Bare string value of a str-enum member or plain str; None stays None."""
    if v is None:
        return None
    return v.value if hasattr(v, "value") else str(v)


class LogEntry(Base):
    __tablename__ = "log_entries"
    __table_args__ = (
        Index("ix_log_entries_user_timestamp", "user_id", "timestamp"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    duration_seconds: Mapped[float | None] = mapped_column(Float, nullable=True)
    category: Mapped[str | None] = mapped_column(
        Enum(Category, name="log_category_enum"), nullable=True
    )
    sentiment: Mapped[str | None] = mapped_column(
        Enum(Sentiment, name="log_sentiment_enum"), nullable=True
    )
    keywords_json: Mapped[str | None] = mapped_column("keywords", Text, nullable=True)
    title: Mapped[str | None] = mapped_column(String(100), nullable=True)
    transcript: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    @property
    def keywords(self) -> list[str]:
        if not self.keywords_json:
            return []
        try:
            value = json.loads(self.keywords_json)
        except (ValueError, TypeError):
            return []
        return value if isinstance(value, list) else []

    @keywords.setter
    def keywords(self, value: list[str] | None) -> None:
        self.keywords_json = json.dumps(list(value or []), ensure_ascii=False)
