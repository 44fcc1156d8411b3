# ABOUTME: Builds the localized teacher notes and student message for an analysis.
# ABOUTME: Applies message style (short/direct/friendly) and tone (strict/motivational/...).

from __future__ import annotations

import re
from typing import Optional, Sequence

from src.common.config import AnalysisConfig
from src.common.i18n import get_language_pack
from src.common.numeric import round_half_up
from src.common.schemas import TopicAnalysis, TopicClassification

MOTIVATIONAL_SUFFIX = " 🚀"
_EXCLAMATIONS = re.compile(r"!+")
_TERMINAL_PUNCTUATION = (".", "!", "?")


def apply_tone(text: str, tone: str) -> str:
    """strict drops exclamation marks, motivational adds a rocket; other tones pass through."""
    if tone == "strict":
        return _EXCLAMATIONS.sub(".", text)
    if tone == "motivational":
        return text + MOTIVATIONAL_SUFFIX
    return text


def _apply_style(text: str, style: str, greeting: str) -> str:
    if style == "short":
        first = text.split(". ")[0]
        return first if first.endswith(_TERMINAL_PUNCTUATION) else first + "."
    if style == "direct":
        return text.replace(greeting, "", 1)
    return text


def build_student_message(
    weak_topics: Sequence[str], config: AnalysisConfig, language: str = "en"
) -> str:
    pack = get_language_pack(language)
    if weak_topics:
        base = pack.student_weak.format(topics=", ".join(weak_topics))
    else:
        base = pack.student_clear
    styled = _apply_style(base, config.student_message_style, pack.student_greeting)
    return apply_tone(styled, config.tone)


def _names(analyses: Sequence[TopicAnalysis], classification: str):
    return [t.topic for t in analyses if t.classification == classification]


def build_teacher_notes(
    overall_pct: float,
    analyses: Sequence[TopicAnalysis],
    config: AnalysisConfig,
    language: str = "en",
    grade: Optional[str] = None,
) -> str:
    """
    Overall percentage followed by the weak, borderline, and strong topic
    clauses and a grade note, keeping 3 clauses in brief style or 4 in
    detailed style.
    """

    pack = get_language_pack(language)
    parts = [pack.notes_overall.format(overall=int(round_half_up(overall_pct)))]
    weak = _names(analyses, TopicClassification.WEAK)
    borderline = _names(analyses, TopicClassification.BORDERLINE)
    strong = _names(analyses, TopicClassification.STRONG)
    if weak:
        parts.append(pack.notes_weak.format(topics=", ".join(weak)))
    if borderline:
        parts.append(pack.notes_borderline.format(topics=", ".join(borderline)))
    if strong:
        parts.append(pack.notes_strong.format(topics=", ".join(strong)))
    if grade:
        parts.append(pack.notes_grade.format(grade=grade))

    limit = 4 if config.teacher_notes_style == "detailed" else 3
    return apply_tone(" ".join(parts[:limit]), config.tone)
