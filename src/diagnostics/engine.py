# ABOUTME: Orchestrates one test-attempt analysis from raw outcomes to the final output object.
# ABOUTME: Aggregates, bands, allocates practice, and generates localized content and messages.

from __future__ import annotations

from typing import Any, Mapping, Optional

from src.common.config import DEFAULT_CONFIG, AnalysisConfig
from src.common.i18n import resolve_language
from src.common.schemas import AnalysisOutput, TestAttempt, TopicClassification
from .aggregation import aggregate_topics, overall_score_pct
from .allocation import build_practice_distribution
from .classification import build_topic_analyses
from .content import make_homework, make_videos
from .narrative import build_student_message, build_teacher_notes


def analyze(attempt: TestAttempt, config: Optional[AnalysisConfig] = None) -> AnalysisOutput:
    """
    Analyze a single attempt.

    Pure and synchronous: everything is recomputed from the attempt, so two
    calls agree on topics, scores, and practice distribution (task ids differ).
    """

    cfg = config or DEFAULT_CONFIG
    language = resolve_language(attempt.metadata.preferred_language)
    grade = attempt.metadata.grade_level

    topics = build_topic_analyses(aggregate_topics(attempt.questions), cfg)
    overall = overall_score_pct(attempt.questions)
    distribution = build_practice_distribution(topics, cfg)

    homework = []
    videos = []
    for topic in topics:
        homework.extend(make_homework(topic, language=language, grade=grade))
        videos.extend(make_videos(topic, cfg, language=language, grade=grade))

    weak_topics = [t.topic for t in topics if t.classification == TopicClassification.WEAK]
    return AnalysisOutput(
        student_id=attempt.student_id,
        test_id=attempt.test_id,
        timestamp=attempt.timestamp,
        overall_score_pct=overall,
        topics=topics,
        recommended_practice_distribution=distribution,
        homework=homework,
        video_recommendations=videos,
        teacher_notes=build_teacher_notes(overall, topics, cfg, language=language, grade=grade),
        student_message=build_student_message(weak_topics, cfg, language=language),
    )


def analyze_dict(
    payload: Mapping[str, Any],
    overrides: Optional[Mapping[str, Any]] = None,
    config: Optional[AnalysisConfig] = None,
) -> AnalysisOutput:
    """Analyze a JSON-style attempt, applying flat option overrides on top of config."""
    cfg = (config or DEFAULT_CONFIG).with_overrides(overrides)
    return analyze(TestAttempt.from_dict(payload), cfg)
