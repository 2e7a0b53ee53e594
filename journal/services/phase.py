"""
Phase classifier: maps a week's MetricsSummary to a coarse behavioral label.

The cascade is the ordered table `PHASE_RULES`; the first rule whose
predicate holds wins and later rules are not evaluated.

  #  rule                 condition                                phase      confidence
  1  builder              ratio > 0.7 and "work" in categories     Builder    round(ratio * 100)
  2  learning_explorer    "learning" in categories                 Explorer   round((ratio + 0.3) * 70)
  3  optimizer            ratio > 0.5                              Optimizer  round(ratio * 90)
  4  reflector            ratio > 0.3                              Reflector  round((1 - ratio) * 60)
  5  default_explorer     always                                   Explorer   60

ratio = positive / (positive + negative + neutral + mixed), 0 when no entries.
round() is half-up, confidence is clamped to [0, 100].
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from journal.services.metrics import MetricsSummary


@dataclass(frozen=True)
class PhaseResult:
    phase: str
    confidence: int


@dataclass(frozen=True)
class PhaseRule:
    name: str
    applies: Callable[[float, MetricsSummary], bool]
    phase: str
    confidence: Callable[[float], float]


PHASE_RULES: tuple[PhaseRule, ...] = (
    PhaseRule(
        name="builder",
        applies=lambda ratio, m: ratio > 0.7 and "work" in m.category_counts,
        phase="Builder",
        confidence=lambda ratio: ratio * 100,
    ),
    PhaseRule(
        name="learning_explorer",
        applies=lambda ratio, m: "learning" in m.category_counts,
        phase="Explorer",
        confidence=lambda ratio: (ratio + 0.3) * 70,
    ),
    PhaseRule(
        name="optimizer",
        applies=lambda ratio, m: ratio > 0.5,
        phase="Optimizer",
        confidence=lambda ratio: ratio * 90,
    ),
    PhaseRule(
        name="reflector",
        applies=lambda ratio, m: ratio > 0.3,
        phase="Reflector",
        confidence=lambda ratio: (1 - ratio) * 60,
    ),
    PhaseRule(
        name="default_explorer",
        applies=lambda ratio, m: True,
        phase="Explorer",
        confidence=lambda ratio: 60,
    ),
)


def positive_ratio(metrics: MetricsSummary) -> float:
    breakdown = metrics.sentiment_breakdown
    total = (
        breakdown.get("positive", 0)
        + breakdown.get("negative", 0)
        + breakdown.get("neutral", 0)
        + breakdown.get("mixed", 0)
    )
    if total == 0:
        return 0.0
    return breakdown.get("positive", 0) / total


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def classify(
    metrics: MetricsSummary,
    rules: tuple[PhaseRule, ...] = PHASE_RULES,
) -> PhaseResult:
    ratio = positive_ratio(metrics)
    for rule in rules:
        if rule.applies(ratio, metrics):
            confidence = _round_half_up(rule.confidence(ratio))
            return PhaseResult(phase=rule.phase, confidence=max(0, min(100, confidence)))
    # The default rule always matches; an empty custom table is a caller bug.
    raise ValueError("phase rule table has no matching rule")
