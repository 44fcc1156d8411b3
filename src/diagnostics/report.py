# ABOUTME: Rule-based diagnostic report listing weak and strong topics with fixed action plans.
# ABOUTME: Renders in Russian, Kazakh, or English from percentages or band labels alone.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from src.common.i18n import resolve_language
from src.common.numeric import clamp, round_half_up
from src.common.schemas import AnalysisOutput, TopicClassification

MAX_REPORT_TOPICS = 10


class ReportBands:
    WEAK_BELOW = 60
    BORDERLINE_UP_TO = 80
    ESTIMATES = {
        TopicClassification.WEAK: 50,
        TopicClassification.BORDERLINE: 70,
        TopicClassification.STRONG: 90,
    }


@dataclass(frozen=True)
class TopicPerformance:
    topic: str
    percent: Optional[float] = None
    classification: Optional[str] = None
    note: Optional[str] = None
    sample_size: Optional[int] = None


@dataclass(frozen=True)
class ReportStrings:
    tiers: Mapping[str, str]
    estimate_suffix: str
    rationales: Mapping[str, str]
    actions: Mapping[str, Tuple[str, str, str]]
    time_weak: str
    time_other: str
    summary_label: str
    recommendations_label: str
    time_label: str
    weak_header: str
    strong_header: str
    plan: str
    default_topic: str


_W, _B, _S = TopicClassification.ORDER

REPORT_STRINGS: Dict[str, ReportStrings] = {
    "ru": ReportStrings(
        tiers={_W: "Требуется полное повторение", _B: "Требуется небольшое повторение", _S: "Поддерживать"},
        estimate_suffix="(оценка)",
        rationales={
            _W: "заметны пробелы в базовых шагах/правилах",
            _B: "нужна тренировка для стабильности и скорости",
            _S: "уровень хороший; поддерживать навыки периодической практикой",
        },
        actions={
            _W: (
                "Повторить ключевые определения и формулы",
                "Решить 10–15 типовых задач с самопроверкой",
                "Разобрать 3 типичные ошибки по теме",
            ),
            _B: (
                "Сделать краткий конспект опорных идей",
                "Решить 8–10 задач средней сложности",
                "Провести мини‑тест (10 задач) с разбором",
            ),
            _S: (
                "1–2 набора задач повышенной сложности",
                "Мини‑тест на скорость (10 задач, 10 минут)",
                "Короткое повторение формул",
            ),
        },
        time_weak="3–4 часа",
        time_other="1–2 часа",
        summary_label="Кратко",
        recommendations_label="Рекомендации",
        time_label="Время",
        weak_header="Слабые темы:",
        strong_header="Сильные темы:",
        plan="План: усилить слабые темы ежедневно 45–60 минут; раз в 3 дня — мини‑тест и разбор.",
        default_topic="Тема",
    ),
    "kz": ReportStrings(
        tiers={_W: "Толық қайталау қажет", _B: "Қысқа қайталау қажет", _S: "Қолдау"},
        estimate_suffix="(бағалау)",
        rationales={
            _W: "негізгі қадамдар/ережелерде олқылықтар байқалады",
            _B: "тұрақтылық пен жылдамдық үшін жаттығу қажет",
            _S: "деңгей жақсы; дағдыны жүйелі тәжірибемен қолдау",
        },
        actions={
            _W: (
                "Негізгі анықтамалар мен формулаларды қайталау",
                "10–15 типтік есепті шешіп, өзін‑өзі тексеру",
                "3 жиі қателерді талдау",
            ),
            _B: (
                "Қысқа конспект жасау",
                "8–10 орташа есеп шығару",
                "Мини‑тест (10 есеп) және талдау",
            ),
            _S: (
                "1–2 күрделі есептер жинағы",
                "Жылдамдыққа мини‑тест (10 есеп, 10 минут)",
                "Формулаларды қысқа қайталау",
            ),
        },
        time_weak="3–4 сағат",
        time_other="1–2 сағат",
        summary_label="Қысқаша",
        recommendations_label="Ұсыныстар",
        time_label="Уақыты",
        weak_header="Әлсіз тақырыптар:",
        strong_header="Күшті тақырыптар:",
        plan="Жоспар: әлсіз тақырыптарға күнде 45–60 мин; 3 күнде бір мини‑тест.",
        default_topic="Тақырып",
    ),
    "en": ReportStrings(
        tiers={_W: "Needs full review", _B: "Needs brief review", _S: "Maintain"},
        estimate_suffix="(estimate)",
        rationales={
            _W: "gaps in basic steps/rules are visible",
            _B: "needs practice for stability and speed",
            _S: "good level; maintain skills with periodic practice",
        },
        actions={
            _W: (
                "Review key definitions and formulas",
                "Solve 10–15 typical problems with self-check",
                "Go through 3 typical mistakes on the topic",
            ),
            _B: (
                "Write a short summary of the core ideas",
                "Solve 8–10 medium-difficulty problems",
                "Take a mini-test (10 problems) with review",
            ),
            _S: (
                "1–2 sets of advanced problems",
                "Speed mini-test (10 problems, 10 minutes)",
                "Quick formula review",
            ),
        },
        time_weak="3–4 hours",
        time_other="1–2 hours",
        summary_label="Summary",
        recommendations_label="Recommendations",
        time_label="Time",
        weak_header="Weak topics:",
        strong_header="Strong topics:",
        plan="Plan: strengthen weak topics daily for 45–60 minutes; every 3 days, a mini-test and review.",
        default_topic="Topic",
    ),
}


def report_band(percent: Optional[float], classification: Optional[str] = None) -> str:
    """Percent wins when given (<60 weak, <=80 borderline); otherwise the label, defaulting to borderline."""
    if percent is not None:
        if percent < ReportBands.WEAK_BELOW:
            return TopicClassification.WEAK
        if percent <= ReportBands.BORDERLINE_UP_TO:
            return TopicClassification.BORDERLINE
        return TopicClassification.STRONG
    if classification in (TopicClassification.WEAK, TopicClassification.STRONG):
        return classification
    return TopicClassification.BORDERLINE


def percent_label(percent: Optional[float], band: str, strings: ReportStrings) -> str:
    if percent is not None:
        return f"{int(round_half_up(percent))}%"
    return f"≈{ReportBands.ESTIMATES[band]}% {strings.estimate_suffix}"


def _topic_line(item: TopicPerformance, strings: ReportStrings) -> Tuple[str, str]:
    band = report_band(item.percent, item.classification)
    rationale = item.note or strings.rationales[band]
    first, second, third = strings.actions[band]
    budget = strings.time_weak if band == TopicClassification.WEAK else strings.time_other
    line = (
        f"- {item.topic} — {percent_label(item.percent, band, strings)} — {strings.tiers[band]}. "
        f"{strings.summary_label}: {rationale}. "
        f"{strings.recommendations_label}: 1) {first}; 2) {second}; 3) {third}. "
        f"{strings.time_label}: {budget}."
    )
    return band, line


def generate_diagnostic_report(
    topics: Sequence[TopicPerformance],
    language: str = "en",
    max_topics: int = MAX_REPORT_TOPICS,
) -> str:
    """
    Two-section plain-text report: weak and borderline topics first, strong
    topics second, each section followed by a blank line, ending with a
    one-line weekly plan. At most max_topics (clamped to 1..10) topics are
    listed, in input order.
    """

    strings = REPORT_STRINGS[resolve_language(language)]
    limit = int(clamp(max_topics, 1, MAX_REPORT_TOPICS))
    weak_lines: List[str] = []
    strong_lines: List[str] = []
    for item in list(topics)[:limit]:
        band, line = _topic_line(item, strings)
        (strong_lines if band == TopicClassification.STRONG else weak_lines).append(line)

    sections: List[str] = []
    if weak_lines:
        sections += [strings.weak_header, *weak_lines, ""]
    if strong_lines:
        sections += [strings.strong_header, *strong_lines, ""]
    sections.append(strings.plan)
    return "\n".join(sections)


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def performances_from_analysis(
    analysis: Union[AnalysisOutput, Mapping[str, Any]], language: str = "en"
) -> List[TopicPerformance]:
    """Read topic, percent_correct (or avg_score_pct), and band off each analysed topic."""

    payload = analysis.to_dict() if isinstance(analysis, AnalysisOutput) else analysis
    topics = payload.get("topics") if isinstance(payload, Mapping) else None
    if not isinstance(topics, (list, tuple)):
        return []

    default_topic = REPORT_STRINGS[resolve_language(language)].default_topic
    performances = []
    for entry in topics:
        if not isinstance(entry, Mapping):
            continue
        percent = _as_number(entry.get("percent_correct"))
        if percent is None:
            percent = _as_number(entry.get("avg_score_pct"))
        total_items = entry.get("total_items")
        performances.append(
            TopicPerformance(
                topic=str(entry.get("topic") or default_topic),
                percent=percent,
                classification=entry.get("classification"),
                sample_size=total_items if isinstance(total_items, int) else None,
            )
        )
    return performances


def diagnostic_report_from_analysis(
    analysis: Union[AnalysisOutput, Mapping[str, Any]],
    language: str = "en",
    max_topics: int = MAX_REPORT_TOPICS,
) -> str:
    return generate_diagnostic_report(
        performances_from_analysis(analysis, language), language=language, max_topics=max_topics
    )
