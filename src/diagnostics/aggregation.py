# ABOUTME: Groups an attempt's question outcomes by topic and computes per-topic accuracy.
# ABOUTME: Also computes the attempt-wide score percentage across every question.

from __future__ import annotations

from typing import Iterable, List

import pandas as pd

from src.common.numeric import round2, safe_divide
from src.common.schemas import QuestionOutcome

TOPIC_STATS_COLUMNS = ["topic", "total_items", "correct_count", "total_score", "max_possible",
                       "percent_correct", "avg_score_pct", "avg_time_seconds"]


def outcomes_to_frame(questions: Iterable[QuestionOutcome]) -> pd.DataFrame:
    rows = [
        {
            "question_id": q.question_id,
            "topic": q.topic,
            "score": q.score,
            "max_score": q.max_score,
            "correct": bool(q.correct),
            "time_spent_seconds": q.time_spent_seconds,
        }
        for q in questions
    ]
    df = pd.DataFrame(
        rows, columns=["question_id", "topic", "score", "max_score", "correct", "time_spent_seconds"]
    )
    # All-missing timings arrive as an object column; mean() needs floats.
    df["time_spent_seconds"] = pd.to_numeric(df["time_spent_seconds"], errors="coerce")
    return df


def aggregate_topics(questions: Iterable[QuestionOutcome]) -> pd.DataFrame:
    """
    Per-topic statistics, one row per distinct non-blank topic in first-seen order.

    percent_correct and avg_score_pct are 0..100 rounded to 2 decimals; a zero
    max-score sum yields 0. Outcomes with a blank topic are not grouped.
    """

    df = outcomes_to_frame(questions)
    df = df[df["topic"].astype(str).str.strip() != ""]
    if df.empty:
        return pd.DataFrame(columns=TOPIC_STATS_COLUMNS)

    grouped = (
        df.groupby("topic", sort=False)
        .agg(
            total_items=("question_id", "size"),
            correct_count=("correct", "sum"),
            total_score=("score", "sum"),
            max_possible=("max_score", "sum"),
            avg_time_seconds=("time_spent_seconds", "mean"),
        )
        .reset_index()
    )
    grouped["total_items"] = grouped["total_items"].astype(int)
    grouped["correct_count"] = grouped["correct_count"].astype(int)
    grouped["percent_correct"] = [
        round2(safe_divide(c, n) * 100) for c, n in zip(grouped["correct_count"], grouped["total_items"])
    ]
    grouped["avg_score_pct"] = [
        round2(safe_divide(s, m) * 100) for s, m in zip(grouped["total_score"], grouped["max_possible"])
    ]
    return grouped[TOPIC_STATS_COLUMNS]


def overall_score_pct(questions: Iterable[QuestionOutcome]) -> float:
    """Total score over total max score for every question, blank topics included."""
    questions = list(questions)
    total_score = sum(q.score for q in questions)
    total_max = sum(q.max_score for q in questions)
    return round2(safe_divide(total_score, total_max) * 100)


def dropped_outcomes(questions: Iterable[QuestionOutcome]) -> List[QuestionOutcome]:
    """Outcomes that cannot be grouped because their topic is blank."""
    return [q for q in questions if not q.topic.strip()]
