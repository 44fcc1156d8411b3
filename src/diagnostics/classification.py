# ABOUTME: Assigns weak/borderline/strong bands and sample-size-aware confidence per topic.
# ABOUTME: Builds the weakest-first TopicAnalysis list consumed by planning and narrative steps.

from __future__ import annotations

from typing import List

import pandas as pd

from src.common.config import AnalysisConfig
from src.common.numeric import clamp, round2
from src.common.schemas import TopicAnalysis, TopicClassification

INSUFFICIENT_SAMPLE_CONFIDENCE_CAP = 0.49


def classify_topic(percent_correct: float, avg_score_pct: float, config: AnalysisConfig) -> str:
    """
    Band a topic from its two accuracy signals (both 0..100).

    Either signal under the weak threshold makes it weak; strong needs both
    signals above the borderline threshold.
    """

    p = percent_correct / 100
    a = avg_score_pct / 100
    if p < config.weak_threshold or a < config.weak_threshold:
        return TopicClassification.WEAK
    if p > config.borderline_threshold and a > config.borderline_threshold:
        return TopicClassification.STRONG
    return TopicClassification.BORDERLINE


def compute_confidence(total_items: int, percent_correct: float, config: AnalysisConfig) -> float:
    """
    Blend of sample size and outcome stability, in 0..1.

    stability is 1 for all-right or all-wrong topics and 0 at a 50/50 split.
    Topics with fewer than min_items_for_confidence items are capped at 0.49.
    """

    min_items = config.min_items_for_confidence
    sample_factor = clamp(total_items / min_items, 0, 1) if min_items > 0 else 1.0
    p = clamp(percent_correct / 100, 0, 1)
    stability = 1 - 4 * p * (1 - p)
    raw = 0.5 * sample_factor + 0.5 * stability
    confidence = clamp(round2(0.85 * raw + 0.15 * raw * raw), 0, 1)
    if total_items < min_items:
        confidence = min(confidence, INSUFFICIENT_SAMPLE_CONFIDENCE_CAP)
    return confidence


def _sort_key(analysis: TopicAnalysis):
    return (
        TopicClassification.ORDER.index(analysis.classification),
        analysis.confidence,
        analysis.topic.casefold(),
        analysis.topic,
    )


def sort_weakest_first(analyses: List[TopicAnalysis]) -> List[TopicAnalysis]:
    return sorted(analyses, key=_sort_key)


def build_topic_analyses(topic_stats: pd.DataFrame, config: AnalysisConfig) -> List[TopicAnalysis]:
    """Turn aggregate_topics() rows into sorted TopicAnalysis records."""

    analyses = []
    for row in topic_stats.itertuples(index=False):
        total_items = int(row.total_items)
        percent_correct = float(row.percent_correct)
        avg_score_pct = float(row.avg_score_pct)
        analyses.append(
            TopicAnalysis(
                topic=str(row.topic),
                total_items=total_items,
                percent_correct=percent_correct,
                avg_score_pct=avg_score_pct,
                classification=classify_topic(percent_correct, avg_score_pct, config),
                confidence=compute_confidence(total_items, percent_correct, config),
            )
        )
    return sort_weakest_first(analyses)
