# ABOUTME: Converts topic bands and confidences into a normalized practice-time distribution.
# ABOUTME: Enforces the aggregate weak-topic share bounds and the strong-topic cap.

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from src.common.config import AnalysisConfig
from src.common.schemas import PracticeDistributionItem, TopicAnalysis, TopicClassification


def classification_weight(classification: str, config: AnalysisConfig) -> float:
    if classification == TopicClassification.WEAK:
        return config.weight_weak
    if classification == TopicClassification.BORDERLINE:
        return config.weight_borderline
    return config.weight_strong


def topic_weights(analyses: Sequence[TopicAnalysis], config: AnalysisConfig) -> np.ndarray:
    """Band weight scaled by 0.5..1 depending on confidence."""
    base = np.array([classification_weight(t.classification, config) for t in analyses], dtype=float)
    confidence = np.array([t.confidence for t in analyses], dtype=float)
    return base * (0.5 + 0.5 * confidence)


def normalize_proportions(weights) -> np.ndarray:
    """
    Scale weights to sum to 1; the floating residual goes onto the first entry.

    Non-positive totals fall back to a uniform split.
    """

    w = np.asarray(weights, dtype=float)
    if w.size == 0:
        return w
    total = w.sum()
    if total <= 0:
        proportions = np.full(w.size, 1.0 / w.size)
    else:
        proportions = w / total
    proportions[0] += 1.0 - proportions.sum()
    return proportions


def enforce_weak_share(proportions, is_weak, config: AnalysisConfig) -> np.ndarray:
    """
    Pull the aggregate weak share into [weak_share_min, weak_share_max].

    Weak entries are scaled to the nearest bound and the difference is taken
    from (or given to) non-weak entries in proportion to their size, never
    below zero, then the vector is renormalized.
    """

    p = np.asarray(proportions, dtype=float)
    mask = np.asarray(is_weak, dtype=bool)
    if not mask.any():
        return p

    weak_sum = p[mask].sum()
    if weak_sum < config.weak_share_min:
        target = config.weak_share_min
    elif weak_sum > config.weak_share_max:
        target = config.weak_share_max
    else:
        return p

    scale = target / (weak_sum or 1.0)
    updated = p.copy()
    scaled = np.clip(updated[mask] * scale, 0, 1)
    added = (scaled - updated[mask]).sum()
    updated[mask] = scaled

    others = ~mask
    others_sum = updated[others].sum()
    if others_sum > 0:
        share = updated[others] / others_sum
        updated[others] = np.clip(updated[others] - added * share, 0, 1)
    return normalize_proportions(updated)


def enforce_strong_cap(proportions, is_strong, config: AnalysisConfig) -> np.ndarray:
    """Scale strong entries down to strong_share_max, handing freed mass to the rest."""

    p = np.asarray(proportions, dtype=float)
    mask = np.asarray(is_strong, dtype=bool)
    cap = config.strong_share_max
    if cap is None or not mask.any():
        return p

    strong_sum = p[mask].sum()
    if strong_sum <= cap:
        return p

    updated = p.copy()
    scaled = np.clip(updated[mask] * (cap / strong_sum), 0, 1)
    removed = (updated[mask] - scaled).sum()
    updated[mask] = scaled

    others = ~mask
    others_sum = updated[others].sum()
    if others_sum > 0:
        share = updated[others] / others_sum
        updated[others] = np.clip(updated[others] + removed * share, 0, 1)
    return normalize_proportions(updated)


def build_practice_distribution(
    analyses: Sequence[TopicAnalysis], config: AnalysisConfig
) -> List[PracticeDistributionItem]:
    """Weights -> normalize -> weak-share bounds -> strong cap, in that order."""

    if not analyses:
        return []
    if len(analyses) == 1:
        return [PracticeDistributionItem(topic=analyses[0].topic, proportion=1.0)]

    is_weak = [t.classification == TopicClassification.WEAK for t in analyses]
    is_strong = [t.classification == TopicClassification.STRONG for t in analyses]

    proportions = normalize_proportions(topic_weights(analyses, config))
    proportions = enforce_weak_share(proportions, is_weak, config)
    proportions = enforce_strong_cap(proportions, is_strong, config)
    return [
        PracticeDistributionItem(topic=t.topic, proportion=float(p))
        for t, p in zip(analyses, proportions)
    ]
