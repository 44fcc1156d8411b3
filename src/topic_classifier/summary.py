# ABOUTME: Summarizes a batch of classified questions into subject/topic counts and weak spots.
# ABOUTME: Ranks topics by average difficulty to suggest where practice should go first.

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List

import pandas as pd

from src.common.numeric import round2, round_half_up
from .classifier import QuestionClassification

MAX_WEAKEST_TOPICS = 5
MAX_RECOMMENDATIONS = 3

_TOPIC_ADVICE = (
    (re.compile(r"logarithm|логарифм", re.IGNORECASE), "assign 20 practice problems on logarithms"),
    (re.compile(r"quadratic|квадрат", re.IGNORECASE), "review quadratic equations and assign 15 factoring tasks"),
    (re.compile(r"probability|вероят", re.IGNORECASE), "10–15 practice problems on basic probability and combinatorics"),
    (re.compile(r"derivatives|производн", re.IGNORECASE),
     "provide step-by-step explanation of derivative basics with 10 drills"),
    (re.compile(r"mongol|монгол", re.IGNORECASE), "review Mongol invasion (13th c.) with a timeline and key figures"),
)


def advice_for_topic(topic: str) -> str:
    for pattern, advice in _TOPIC_ADVICE:
        if pattern.search(topic):
            return advice
    return f"reinforce topic: {topic} with targeted practice"


def _empty_summary() -> Dict[str, Any]:
    return {
        "total_questions": 0,
        "counts_by_subject": {},
        "counts_by_topic": {},
        "weakest_topics": [],
        "percent_multi_topic": 0,
        "recommendations": [],
        "visualization_ready": {"labels": [], "values": []},
    }


def summarize_questions(records: Iterable[QuestionClassification]) -> Dict[str, Any]:
    """
    Aggregate classified questions.

    weakest_topics: top topics by mean difficulty (desc), ties broken by
    count (desc), then first appearance. Counts keep first-seen order.
    """

    rows = [
        {"subject": r.subject, "topic": r.topic, "difficulty": r.difficulty, "multi_topic": r.multi_topic}
        for r in records
    ]
    if not rows:
        return _empty_summary()

    df = pd.DataFrame(rows)
    total = len(df)

    counts_by_subject = {str(k): int(v) for k, v in df.groupby("subject", sort=False).size().items()}
    per_topic = (
        df.groupby("topic", sort=False)
        .agg(question_count=("difficulty", "size"), avg_difficulty=("difficulty", "mean"))
        .reset_index()
    )
    counts_by_topic = {str(row.topic): int(row.question_count) for row in per_topic.itertuples(index=False)}

    per_topic["avg_difficulty"] = per_topic["avg_difficulty"].map(round2)
    ranked = per_topic.sort_values(
        ["avg_difficulty", "question_count"], ascending=[False, False], kind="mergesort"
    ).head(MAX_WEAKEST_TOPICS)
    weakest_topics: List[Dict[str, Any]] = [
        {
            "topic": str(row.topic),
            "count": int(row.question_count),
            "avg_difficulty": float(row.avg_difficulty),
            "reason": f"avg_difficulty {row.avg_difficulty:.2f} · count {int(row.question_count)}",
        }
        for row in ranked.itertuples(index=False)
    ]

    multi_count = int(df["multi_topic"].sum())
    labels = list(counts_by_topic.keys())
    return {
        "total_questions": total,
        "counts_by_subject": counts_by_subject,
        "counts_by_topic": counts_by_topic,
        "weakest_topics": weakest_topics,
        "percent_multi_topic": int(round_half_up(100 * multi_count / total)),
        "recommendations": [advice_for_topic(w["topic"]) for w in weakest_topics[:MAX_RECOMMENDATIONS]],
        "visualization_ready": {"labels": labels, "values": [counts_by_topic[label] for label in labels]},
    }
