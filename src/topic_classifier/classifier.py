# ABOUTME: Heuristic classifier mapping question text (or explicit metadata) to a canonical topic.
# ABOUTME: Produces subject, domain, topic, tags, difficulty, confidence, and a follow-up action.

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from src.common.numeric import clamp, round2
from . import rules
from .history import infer_century
from .rules import RuleConfidence
from .translations import GENERIC_TOPICS, entry_from_meta, localize_topic, topic_from_meta


class Subject:
    MATHEMATICS = "Mathematics"
    HISTORY = "History"
    PHYSICS = "Physics"
    OTHER = "Other"


class RecommendedAction:
    REVIEW_CONCEPT = "review_concept"
    PRACTICE_PROBLEMS = "practice_problems"
    PROVIDE_EXPLANATION = "provide_explanation"
    CLARIFY = "further_clarification_needed"


@dataclass(frozen=True)
class QuestionClassification:
    question_text: str
    subject: str
    domain: str
    topic: str
    tags: List[str]
    difficulty: int  # 1..5
    confidence: float  # 0..1
    recommended_action: str
    subtopic: Optional[str] = None
    history_century: Optional[int] = None
    history_event_tags: List[str] = field(default_factory=list)
    multi_topic: bool = False
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def estimate_difficulty(text: str, base: int) -> int:
    difficulty = base
    if rules.DIFFICULTY_AT_LEAST_3.search(text):
        difficulty = max(difficulty, 3)
    if rules.DIFFICULTY_AT_LEAST_4.search(text):
        difficulty = max(difficulty, 4)
    if rules.DIFFICULTY_BUMP.search(text):
        difficulty = min(5, difficulty + 1)
    return int(clamp(difficulty, 1, 5))


def choose_action(subject: str, confidence: float, difficulty: int) -> str:
    if confidence < 0.6:
        return RecommendedAction.CLARIFY
    if subject == Subject.MATHEMATICS:
        return RecommendedAction.PRACTICE_PROBLEMS if difficulty >= 3 else RecommendedAction.REVIEW_CONCEPT
    return RecommendedAction.PROVIDE_EXPLANATION


def is_multi_topic(text: str) -> bool:
    """Two or more list separators plus at least one cross-domain keyword."""
    separators = rules.MULTI_TOPIC_SEPARATORS.findall(text)
    return len(separators) >= 2 and bool(rules.MULTI_TOPIC_KEYWORDS.search(text))


def _normalize(text: Any) -> str:
    if text is None:
        return ""
    return " ".join(str(text).split())


def _build(text: str, subject: str, domain: str, topic: str, tags, difficulty: int,
           confidence: float, **extra) -> QuestionClassification:
    return QuestionClassification(
        question_text=text,
        subject=subject,
        domain=domain,
        topic=topic,
        tags=[t.lower() for t in tags],
        difficulty=difficulty,
        confidence=round2(confidence),
        recommended_action=choose_action(subject, confidence, difficulty),
        multi_topic=is_multi_topic(text),
        **extra,
    )


def _classify_from_meta(text: str, meta: Optional[Mapping[str, Any]]) -> Optional[QuestionClassification]:
    entry = entry_from_meta(meta)
    if entry is None:
        return None
    tags = [entry.code] if entry.code else []
    return _build(
        text,
        entry.subject,
        entry.domain,
        entry.topic,
        tags,
        estimate_difficulty(text, 2),
        RuleConfidence.METADATA,
    )


def _classify_history(text: str) -> QuestionClassification:
    event = rules.first_match(rules.HISTORY_EVENT_RULES, text)
    if event is not None:
        tags = list(event.tags)
        return _build(
            text, Subject.HISTORY, "History of Kazakhstan", event.topic, tags, 3,
            RuleConfidence.SPECIFIC,
            history_century=event.century,
            history_event_tags=list(tags),
            notes=event.note,
        )
    century, note = infer_century(text)
    tags = ["kazakhstan-history"]
    return _build(
        text, Subject.HISTORY, "History of Kazakhstan", "Historical facts and chronology", tags, 3,
        RuleConfidence.HISTORY_FALLBACK,
        history_century=century,
        history_event_tags=list(tags),
        notes=note,
    )


def _classify_subject_rule(text: str, subject: str, rule) -> QuestionClassification:
    return _build(
        text, subject, rule.domain, rule.topic, rule.tags,
        estimate_difficulty(text, rule.difficulty),
        RuleConfidence.SPECIFIC,
        subtopic=rule.subtopic,
    )


def _classify_other(text: str) -> QuestionClassification:
    return _build(
        text, Subject.OTHER, "General", "General knowledge", ["general"], 2,
        RuleConfidence.OTHER,
        notes="Unclear subject; needs clarification",
    )


def classify_question(text: Any, meta: Optional[Mapping[str, Any]] = None) -> QuestionClassification:
    """
    Classify a single question.

    Explicit metadata (topicCode, math-literacy domain, topic) always wins.
    Otherwise history cues take the question unless a specific math rule
    also matched (questions naming Kazakhstan stay history); physics rules
    apply when no math rule matched; any remaining math cue falls back to
    "General problem solving". Never raises: empty text is "General knowledge".
    """

    normalized = _normalize(text)

    from_meta = _classify_from_meta(normalized, meta)
    if from_meta is not None:
        return from_meta
    if not normalized:
        return _classify_other(normalized)

    math_rule = rules.first_match(rules.MATH_RULES, normalized)
    physics_rule = rules.first_match(rules.PHYSICS_RULES, normalized)
    history_cue = bool(rules.HISTORY_CUE.search(normalized)) or (
        rules.first_match(rules.HISTORY_EVENT_RULES, normalized) is not None
    )

    if history_cue and (math_rule is None or rules.KAZAKHSTAN.search(normalized)):
        return _classify_history(normalized)
    if physics_rule is not None and math_rule is None:
        return _classify_subject_rule(normalized, Subject.PHYSICS, physics_rule)
    if math_rule is not None:
        return _classify_subject_rule(normalized, Subject.MATHEMATICS, math_rule)
    if rules.MATH_CUE.search(normalized):
        return _build(
            normalized, Subject.MATHEMATICS, "Algebra", "General problem solving", ["algebra"],
            estimate_difficulty(normalized, 2),
            RuleConfidence.MATH_FALLBACK,
        )
    return _classify_other(normalized)


def classify_questions(texts: Iterable[Any]) -> List[QuestionClassification]:
    return [classify_question(text) for text in texts]


def resolve_topic(
    text: Any,
    meta: Optional[Mapping[str, Any]] = None,
    language: str = "en",
    fallback: Optional[str] = None,
) -> str:
    """
    Topic label used to annotate a QuestionOutcome.

    Metadata labels win; otherwise the classified topic is localized. When the
    classifier only reaches a generic bucket, a caller-supplied fallback
    (e.g. the test section title) is preferred.
    """

    label = topic_from_meta(meta, language)
    if label:
        return label
    classification = classify_question(text)
    if classification.topic in GENERIC_TOPICS and fallback:
        return fallback
    return localize_topic(classification.topic, language)
