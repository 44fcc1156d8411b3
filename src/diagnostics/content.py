# ABOUTME: Generates localized homework tasks and short-video recommendations per topic.
# ABOUTME: Task mix, time estimates, and video counts depend on band and confidence.

from __future__ import annotations

import secrets
import time
from typing import List, Optional

import numpy as np

from src.common.config import AnalysisConfig
from src.common.i18n import LanguagePack, get_language_pack
from src.common.schemas import HomeworkTask, TopicAnalysis, TopicClassification, VideoRecommendation

LOW_CONFIDENCE = 0.5
VIDEO_SOURCES = ("Khan Academy", "YouTube", "internal", "Coursera")
_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def generate_task_id(prefix: str = "HW") -> str:
    """
    '<prefix>-<base36 ms timestamp>-<6 random base36 chars>'.

    Unique in practice, but different on every call for the same input.
    """

    stamp = np.base_repr(int(time.time() * 1000), 36).lower()
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(6))
    return f"{prefix}-{stamp}-{suffix}"


def _task(pack: LanguagePack, kind: str, topic: str, difficulty: str, minutes: int,
          grade: Optional[str]) -> HomeworkTask:
    return HomeworkTask(
        topic=topic,
        task_id=generate_task_id(),
        title=pack.task_titles[kind].format(topic=topic),
        description=pack.task_descriptions[kind].format(topic=topic),
        difficulty=difficulty,
        estimated_time_minutes=minutes,
        learning_objective=pack.objective(topic, grade),
    )


def make_homework(
    analysis: TopicAnalysis,
    language: str = "en",
    grade: Optional[str] = None,
    include_challenge: bool = False,
) -> List[HomeworkTask]:
    """
    Homework for one topic.

    weak: conceptual + guided, plus applied when confidence >= 0.5 (10/15/20
    minutes, or 15/20/25 when confident). borderline: guided, plus applied
    when confident (12 minutes each). strong: a 5-minute quick review only
    when confident, and optionally a hard challenge problem.
    """

    pack = get_language_pack(language)
    topic = analysis.topic
    confident = analysis.confidence >= LOW_CONFIDENCE
    tasks: List[HomeworkTask] = []

    if analysis.classification == TopicClassification.WEAK:
        base_minutes = 15 if confident else 10
        tasks.append(_task(pack, "conceptual", topic, "easy", base_minutes, grade))
        tasks.append(_task(pack, "guided", topic, "medium", base_minutes + 5, grade))
        if confident:
            tasks.append(_task(pack, "applied", topic, "medium", base_minutes + 10, grade))
        return tasks

    if analysis.classification == TopicClassification.BORDERLINE:
        tasks.append(_task(pack, "guided", topic, "medium", 12, grade))
        if confident:
            tasks.append(_task(pack, "applied", topic, "medium", 12, grade))
        return tasks

    if confident:
        tasks.append(_task(pack, "quick_review", topic, "easy", 5, grade))
        if include_challenge:
            tasks.append(_task(pack, "challenge", topic, "hard", 20, grade))
    return tasks


def _video(pack: LanguagePack, topic: str, query_terms: List[str], length: int,
           difficulty: str) -> VideoRecommendation:
    return VideoRecommendation(
        topic=topic,
        title=pack.video_title.format(topic=topic),
        query_terms=query_terms,
        recommended_length_min=length,
        difficulty=difficulty,
        source_priority=list(VIDEO_SOURCES),
    )


def make_videos(
    analysis: TopicAnalysis,
    config: AnalysisConfig,
    language: str = "en",
    grade: Optional[str] = None,
) -> List[VideoRecommendation]:
    pack = get_language_pack(language)
    topic = analysis.topic
    base_terms = [topic]
    if grade:
        base_terms.append(grade)
    if pack.code != "en":
        base_terms.append(pack.code)
    low_confidence = analysis.confidence < LOW_CONFIDENCE

    videos = []
    if analysis.classification == TopicClassification.WEAK:
        count = config.video_count_weak_min if low_confidence else config.video_count_weak_max
        start = 5 if low_confidence else 7
        for i in range(max(count, 0)):
            videos.append(_video(
                pack, topic, base_terms + ["basics" if i == 0 else "practice"],
                start + 2 * i, "easy" if i == 0 else "medium",
            ))
    elif analysis.classification == TopicClassification.BORDERLINE:
        for i in range(max(config.video_count_borderline, 0)):
            videos.append(_video(pack, topic, base_terms + ["review"], 6 + 2 * i, "medium"))
    else:
        for i in range(max(config.video_count_strong, 0)):
            videos.append(_video(pack, topic, base_terms + ["quick review"], 5 + 2 * i, "easy"))
    return videos
