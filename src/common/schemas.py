# ABOUTME: Defines canonical data structures shared by the classifier and diagnostic engines.
# ABOUTME: Centralizes test-attempt input, per-topic analysis, and recommendation output schemas.

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional


class TopicClassification:
    WEAK = "weak"
    BORDERLINE = "borderline"
    STRONG = "strong"
    # Weakest first; used for sorting and band lookups.
    ORDER = (WEAK, BORDERLINE, STRONG)


def _to_optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _to_float(value: Any) -> float:
    number = _to_optional_float(value)
    return 0.0 if number is None else number


def _to_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


_TRUE_STRINGS = frozenset({"true", "t", "yes", "y", "1"})


def _to_bool(value: Any) -> bool:
    """Strings such as "false", "no", or "0" read as False; other values use truthiness."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


@dataclass(frozen=True)
class QuestionOutcome:
    """One answered question, already annotated with a resolved topic."""

    question_id: str
    topic: str
    max_score: float
    score: float
    correct: bool
    response: Optional[str] = None
    time_spent_seconds: Optional[float] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "QuestionOutcome":
        topic = payload.get("topic")
        return cls(
            question_id=str(payload.get("question_id", payload.get("id", ""))),
            topic="" if topic is None else str(topic).strip(),
            max_score=_to_float(payload.get("max_score")),
            score=_to_float(payload.get("score")),
            correct=_to_bool(payload.get("correct")),
            response=payload.get("response"),
            time_spent_seconds=_to_optional_float(
                payload.get("time_spent_seconds", payload.get("time_spent"))
            ),
        )


@dataclass(frozen=True)
class AttemptMetadata:
    grade_level: Optional[str] = None
    preferred_language: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "AttemptMetadata":
        if not isinstance(payload, Mapping):
            return cls()
        return cls(
            grade_level=_to_optional_str(payload.get("grade_level")),
            preferred_language=_to_optional_str(payload.get("preferred_language")),
        )


@dataclass(frozen=True)
class TestAttempt:
    """A single completed test submission."""

    __test__ = False  # keep pytest from collecting this as a test class

    student_id: str
    test_id: str
    timestamp: str
    questions: List[QuestionOutcome]
    metadata: AttemptMetadata = field(default_factory=AttemptMetadata)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TestAttempt":
        raw_questions = payload.get("questions")
        if not isinstance(raw_questions, (list, tuple)):
            raw_questions = []
        questions = [QuestionOutcome.from_dict(q) for q in raw_questions if isinstance(q, Mapping)]
        timestamp = payload.get("timestamp") or datetime.now(timezone.utc).isoformat()
        return cls(
            student_id=str(payload.get("student_id", "")),
            test_id=str(payload.get("test_id", "")),
            timestamp=str(timestamp),
            questions=questions,
            metadata=AttemptMetadata.from_dict(payload.get("metadata")),
        )


@dataclass(frozen=True)
class TopicAnalysis:
    """Per-topic statistics and band for one attempt; recomputed on every analysis."""

    topic: str
    total_items: int
    percent_correct: float  # 0..100
    avg_score_pct: float  # 0..100
    classification: str
    confidence: float  # 0..1, capped at 0.49 below the minimum sample size


@dataclass(frozen=True)
class PracticeDistributionItem:
    topic: str
    proportion: float


@dataclass(frozen=True)
class HomeworkTask:
    topic: str
    task_id: str
    title: str
    description: str
    difficulty: str
    estimated_time_minutes: int
    learning_objective: str


@dataclass(frozen=True)
class VideoRecommendation:
    topic: str
    title: str
    query_terms: List[str]
    recommended_length_min: int
    difficulty: str
    source_priority: List[str]


@dataclass(frozen=True)
class AnalysisOutput:
    student_id: str
    test_id: str
    timestamp: str
    overall_score_pct: float
    topics: List[TopicAnalysis]
    recommended_practice_distribution: List[PracticeDistributionItem]
    homework: List[HomeworkTask]
    video_recommendations: List[VideoRecommendation]
    teacher_notes: str
    student_message: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
