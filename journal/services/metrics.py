"""
Metrics aggregator: reduces one week of log entries to a MetricsSummary.

Pure and boundary-agnostic: it aggregates whatever collection it is given;
week filtering is the caller's job. Input order matters only for the
keyword tie-break (first occurrence wins among equal counts).

Rules
-----
  total_logs                = len(entries)
  category_counts           missing category -> "uncategorized"
  sentiment_breakdown       missing sentiment -> "neutral"; buckets sum to total_logs
  average_duration_seconds  sum(present durations) / total_logs; 0 when empty
  top_keywords              frequency desc, first-seen on ties, at most 10
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable, Protocol

from journal.models.log_entry import Category, Sentiment, enum_value

TOP_KEYWORDS_LIMIT = 10

UNCATEGORIZED = Category.uncategorized.value
DEFAULT_SENTIMENT = Sentiment.neutral.value


class EntryLike(Protocol):
    category: Any
    sentiment: Any
    duration_seconds: float | None
    keywords: list[str]


def _empty_breakdown() -> dict[str, int]:
    return {s.value: 0 for s in Sentiment}


@dataclass(frozen=True)
class MetricsSummary:
    total_logs: int = 0
    category_counts: dict[str, int] = field(default_factory=dict)
    sentiment_breakdown: dict[str, int] = field(default_factory=_empty_breakdown)
    average_duration_seconds: float = 0.0
    top_keywords: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total_logs": self.total_logs,
            "category_counts": dict(self.category_counts),
            "sentiment_breakdown": dict(self.sentiment_breakdown),
            "average_duration_seconds": self.average_duration_seconds,
            "top_keywords": list(self.top_keywords),
        }

    @classmethod
    def from_dict(cls, data: dict) -> MetricsSummary:
        breakdown = _empty_breakdown()
        breakdown.update(data.get("sentiment_breakdown") or {})
        return cls(
            total_logs=int(data.get("total_logs", 0)),
            category_counts=dict(data.get("category_counts") or {}),
            sentiment_breakdown=breakdown,
            average_duration_seconds=float(data.get("average_duration_seconds", 0.0)),
            top_keywords=list(data.get("top_keywords") or []),
        )


def aggregate(entries: Iterable[EntryLike]) -> MetricsSummary:
    total = 0
    duration_sum = 0.0
    categories: Counter[str] = Counter()
    sentiments = _empty_breakdown()
    keywords: Counter[str] = Counter()

    for entry in entries:
        total += 1
        categories[enum_value(entry.category) if entry.category else UNCATEGORIZED] += 1
        sentiments[enum_value(entry.sentiment) if entry.sentiment else DEFAULT_SENTIMENT] += 1
        if entry.duration_seconds:
            duration_sum += entry.duration_seconds
        # Counter keeps insertion order and most_common() sorts stably,
        # so equal counts stay in first-seen order.
        keywords.update(entry.keywords or [])

    return MetricsSummary(
        total_logs=total,
        category_counts=dict(categories),
        sentiment_breakdown=sentiments,
        average_duration_seconds=duration_sum / total if total else 0.0,
        top_keywords=[kw for kw, _ in keywords.most_common(TOP_KEYWORDS_LIMIT)],
    )
