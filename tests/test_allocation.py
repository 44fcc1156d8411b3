# ABOUTME: Tests practice-time allocation: weighting, normalization, weak-share bounds, strong cap.
# ABOUTME: Uses small hand-built topic lists so each share bound is easy to verify by hand.

import unittest

import numpy as np
import pytest

from src.common.config import DEFAULT_CONFIG
from src.common.schemas import TopicAnalysis, TopicClassification
from src.diagnostics.allocation import (
    build_practice_distribution,
    enforce_strong_cap,
    enforce_weak_share,
    normalize_proportions,
    topic_weights,
)

WEAK = TopicClassification.WEAK
BORDERLINE = TopicClassification.BORDERLINE
STRONG = TopicClassification.STRONG


def _analysis(topic, classification, confidence):
    return TopicAnalysis(topic, 3, 50.0, 50.0, classification, confidence)


def _shares(items):
    return [item.proportion for item in items]


class TestPracticeDistribution(unittest.TestCase):
    def setUp(self):
        self.config = DEFAULT_CONFIG

    def test_empty_topics(self):
        self.assertEqual(build_practice_distribution([], self.config), [])

    def test_single_topic_gets_everything(self):
        items = build_practice_distribution([_analysis("fractions", WEAK, 0.2)], self.config)
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0].proportion, 1.0)

    def test_weak_share_raised_to_minimum(self):
        analyses = [_analysis("a", WEAK, 0.0)] + [_analysis(f"b{i}", BORDERLINE, 1.0) for i in range(4)]
        shares = _shares(build_practice_distribution(analyses, self.config))
        self.assertAlmostEqual(shares[0], 0.5)
        for share in shares[1:]:
            self.assertAlmostEqual(share, 0.125)
        self.assertAlmostEqual(sum(shares), 1.0, places=9)

    def test_weak_share_inside_bounds_is_untouched(self):
        analyses = [_analysis("a", WEAK, 1.0), _analysis("b", BORDERLINE, 1.0)]
        shares = _shares(build_practice_distribution(analyses, self.config))
        self.assertAlmostEqual(shares[0], 2 / 3)
        self.assertAlmostEqual(shares[1], 1 / 3)

    def test_weak_share_capped_then_strong_cap_applied(self):
        analyses = [_analysis("a", WEAK, 1.0), _analysis("b", STRONG, 1.0)]
        shares = _shares(build_practice_distribution(analyses, self.config))
        self.assertAlmostEqual(shares[0], 0.75)
        self.assertAlmostEqual(shares[1], 0.25)

    def test_disabled_strong_cap(self):
        cfg = self.config.with_overrides({"strong_share_max": None})
        analyses = [_analysis("a", WEAK, 1.0), _analysis("b", STRONG, 1.0)]
        shares = _shares(build_practice_distribution(analyses, cfg))
        self.assertAlmostEqual(shares[0], 0.7)
        self.assertAlmostEqual(shares[1], 0.3)

    def test_all_weak_topics_still_sum_to_one(self):
        analyses = [_analysis("fractions", WEAK, 0.3), _analysis("decimals", WEAK, 0.49)]
        shares = _shares(build_practice_distribution(analyses, self.config))
        self.assertAlmostEqual(sum(shares), 1.0, places=9)
        self.assertTrue(all(0 <= s <= 1 for s in shares))

    def test_order_matches_input_topics(self):
        analyses = [_analysis("x", BORDERLINE, 0.5), _analysis("y", STRONG, 0.5), _analysis("z", WEAK, 0.5)]
        items = build_practice_distribution(analyses, self.config)
        self.assertEqual([i.topic for i in items], ["x", "y", "z"])
        self.assertAlmostEqual(sum(_shares(items)), 1.0, places=9)


def test_topic_weights_scale_with_confidence():
    weights = topic_weights(
        [_analysis("a", WEAK, 0.0), _analysis("b", BORDERLINE, 1.0), _analysis("c", STRONG, 0.5)],
        DEFAULT_CONFIG,
    )
    assert weights.tolist() == pytest.approx([1.5, 1.5, 0.375])


def test_normalize_proportions_uniform_fallback():
    assert normalize_proportions([0, 0, 0, 0]).tolist() == pytest.approx([0.25] * 4)
    assert normalize_proportions([]).size == 0


def test_normalize_proportions_sums_exactly_to_one():
    p = normalize_proportions([1, 1, 1])
    assert p.sum() == pytest.approx(1.0, abs=1e-12)
    assert p[1] == pytest.approx(1 / 3)


def test_enforce_weak_share_without_weak_topics_is_noop():
    p = np.array([0.6, 0.4])
    assert enforce_weak_share(p, [False, False], DEFAULT_CONFIG).tolist() == [0.6, 0.4]


def test_enforce_strong_cap_below_cap_is_noop():
    p = np.array([0.8, 0.2])
    assert enforce_strong_cap(p, [False, True], DEFAULT_CONFIG).tolist() == [0.8, 0.2]


if __name__ == "__main__":
    unittest.main()
