"""
Tests for the phase classifier cascade.

Each rule is hit at least once, including the exact threshold values where a
strict comparison sends the week to the next rule down.
"""
from __future__ import annotations

import pytest

from journal.services.metrics import MetricsSummary
from journal.services.phase import PHASE_RULES, PhaseResult, classify, positive_ratio


def _metrics(positive=0, negative=0, neutral=0, mixed=0, categories=None) -> MetricsSummary:
    total = positive + negative + neutral + mixed
    return MetricsSummary(
        total_logs=total,
        category_counts=categories or {"personal": total},
        sentiment_breakdown={
            "positive": positive,
            "negative": negative,
            "neutral": neutral,
            "mixed": mixed,
        },
    )


class TestPositiveRatio:
    def test_zero_when_empty(self):
        assert positive_ratio(MetricsSummary()) == 0.0

    def test_counts_all_four_buckets(self):
        assert positive_ratio(_metrics(positive=2, negative=1, neutral=1, mixed=4)) == 0.25


class TestBuilder:
    def test_high_ratio_with_work(self):
        m = _metrics(positive=8, negative=1, neutral=1, categories={"work": 5, "health": 5})
        assert classify(m) == PhaseResult("Builder", 80)

    def test_builder_wins_over_learning(self):
        m = _metrics(positive=9, neutral=1, categories={"work": 5, "learning": 5})
        assert classify(m) == PhaseResult("Builder", 90)

    def test_exact_threshold_is_not_builder(self):
        m = _metrics(positive=7, negative=3, categories={"work": 10})
        assert classify(m) == PhaseResult("Optimizer", 63)


class TestExplorer:
    def test_learning_without_work(self):
        m = _metrics(positive=8, negative=2, categories={"learning": 10})
        assert classify(m) == PhaseResult("Explorer", 77)

    def test_learning_with_middling_ratio(self):
        m = _metrics(positive=6, negative=4, categories={"learning": 3, "health": 7})
        assert classify(m) == PhaseResult("Explorer", 63)

    def test_learning_with_zero_ratio(self):
        m = _metrics(negative=5, categories={"learning": 5})
        assert classify(m) == PhaseResult("Explorer", 21)

    def test_default_on_low_ratio(self):
        m = _metrics(positive=2, negative=8)
        assert classify(m) == PhaseResult("Explorer", 60)

    def test_default_on_exact_reflector_threshold(self):
        m = _metrics(positive=3, negative=7)
        assert classify(m) == PhaseResult("Explorer", 60)

    def test_empty_week(self):
        assert classify(MetricsSummary()) == PhaseResult("Explorer", 60)


class TestOptimizer:
    def test_ratio_above_half(self):
        m = _metrics(positive=6, negative=4)
        assert classify(m) == PhaseResult("Optimizer", 54)

    def test_high_ratio_without_work(self):
        m = _metrics(positive=9, negative=1, categories={"health": 10})
        assert classify(m) == PhaseResult("Optimizer", 81)


class TestReflector:
    def test_ratio_between_thresholds(self):
        m = _metrics(positive=4, negative=6)
        assert classify(m) == PhaseResult("Reflector", 36)

    def test_exact_half_is_reflector(self):
        m = _metrics(positive=5, negative=5)
        assert classify(m) == PhaseResult("Reflector", 30)

    def test_half_rounds_up(self):
        # (1 - 0.375) * 60 = 37.5
        m = _metrics(positive=3, negative=5)
        assert classify(m) == PhaseResult("Reflector", 38)


class TestRuleTable:
    def test_rule_order(self):
        assert [r.name for r in PHASE_RULES] == [
            "builder",
            "learning_explorer",
            "optimizer",
            "reflector",
            "default_explorer",
        ]

    def test_confidence_always_in_range(self):
        for pos in range(0, 11):
            for cats in ({"work": 1}, {"learning": 1}, {"other": 1}):
                result = classify(_metrics(positive=pos, negative=10 - pos, categories=cats))
                assert 0 <= result.confidence <= 100

    def test_empty_table_raises(self):
        with pytest.raises(ValueError):
            classify(MetricsSummary(), rules=())
