# ABOUTME: Holds the English, Russian, and Kazakh string tables for generated analysis text.
# ABOUTME: Resolves free-form language codes to one of the supported tables.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

SUPPORTED_LANGUAGES = ("en", "ru", "kz")
DEFAULT_LANGUAGE = "en"

TASK_KINDS = ("conceptual", "guided", "applied", "quick_review", "challenge")


def resolve_language(code: Any) -> str:
    """Map 'ru-RU', 'kk', 'KZ', ... onto a supported table; anything else is English."""

    if not isinstance(code, str):
        return DEFAULT_LANGUAGE
    lang = code.strip().lower()
    if lang.startswith("ru"):
        return "ru"
    if lang.startswith("kz") or lang.startswith("kk"):
        return "kz"
    return DEFAULT_LANGUAGE


@dataclass(frozen=True)
class LanguagePack:
    """Templates use str.format placeholders: {topic}, {topics}, {grade}, {overall}."""

    code: str
    student_weak: str
    student_clear: str
    student_greeting: str
    notes_overall: str
    notes_weak: str
    notes_borderline: str
    notes_strong: str
    notes_grade: str
    task_titles: Mapping[str, str]
    task_descriptions: Mapping[str, str]
    learning_objective: str
    grade_clause: str
    video_title: str

    def objective(self, topic: str, grade: Optional[str] = None) -> str:
        clause = self.grade_clause.format(grade=grade) if grade else ""
        return self.learning_objective.format(topic=topic, grade_clause=clause)


EN = LanguagePack(
    code="en",
    student_weak="Nice work! Next, focus: {topics}. Complete tasks and watch short videos.",
    student_clear="Great result! Do a quick review and move on.",
    student_greeting="Nice work! ",
    notes_overall="Overall performance: {overall}%.",
    notes_weak="Weak topics: {topics} — targeted re-teaching recommended.",
    notes_borderline="Borderline topics: {topics} — reinforce with practice.",
    notes_strong="Strong topics: {topics} — light review suggested.",
    notes_grade="Consider grade level: {grade}.",
    task_titles={
        "conceptual": "Concept focus: {topic}",
        "guided": "Guided practice: {topic}",
        "applied": "Applied problems: {topic}",
        "quick_review": "Quick review: {topic}",
        "challenge": "Optional challenge: {topic}",
    },
    task_descriptions={
        "conceptual": "Read a concise explanation of key ideas for “{topic}” with examples and visuals.",
        "guided": "Complete 5–8 scaffolded exercises with hints and step-by-step solutions on “{topic}”.",
        "applied": "Solve 1–2 applied problems connecting “{topic}” to real-world contexts.",
        "quick_review": "Quickly check understanding of “{topic}” using a short deck of flashcards/questions.",
        "challenge": "A harder problem to consolidate mastery of “{topic}”.",
    },
    learning_objective="Strengthen understanding of “{topic}”{grade_clause} and improve accuracy on tasks.",
    grade_clause=" at {grade} level",
    video_title="Quick lesson: {topic}",
)

RU = LanguagePack(
    code="ru",
    student_weak="Хорошая работа! Дальше фокус: {topics}. Выполните задания и посмотрите короткие видео.",
    student_clear="Отличный результат! Для закрепления — короткое повторение и вперёд к следующему модулю.",
    student_greeting="Хорошая работа! ",
    notes_overall="Итоговая успеваемость: {overall}%.",
    notes_weak="Слабые темы: {topics} — требуется целевое переобучение.",
    notes_borderline="Пограничные темы: {topics} — закрепить практикой.",
    notes_strong="Сильные темы: {topics} — рекомендовано лёгкое повторение.",
    notes_grade="Учитывайте уровень: {grade}.",
    task_titles={
        "conceptual": "Понять концепцию: {topic}",
        "guided": "Пошаговая практика: {topic}",
        "applied": "Применение в задачах: {topic}",
        "quick_review": "Короткое повторение: {topic}",
        "challenge": "Доп. задача (опционально): {topic}",
    },
    task_descriptions={
        "conceptual": "Прочитайте краткое объяснение ключевых идей по теме «{topic}» с примерами и визуализациями.",
        "guided": "Решите 5–8 тренировочных заданий с подсказками и разбором решений по теме «{topic}».",
        "applied": "Решите 1–2 прикладные задачи, связывающие «{topic}» с жизненными ситуациями.",
        "quick_review": "Быстро проверьте понимание «{topic}» с помощью короткого набора карточек/вопросов.",
        "challenge": "Сложная задача для закрепления материала по теме «{topic}».",
    },
    learning_objective="Укрепить понимание темы «{topic}»{grade_clause} и повысить точность выполнения заданий.",
    grade_clause=" на уровне {grade}",
    video_title="Быстрый урок: {topic}",
)

KZ = LanguagePack(
    code="kz",
    student_weak="Жақсы жұмыс! Келесі фокус: {topics}. Тапсырмаларды орындап, қысқа бейнелерді қараңыз.",
    student_clear="Тамаша нәтиже! Қысқа қайталау жасап, келесі модульге өтіңіз.",
    student_greeting="Жақсы жұмыс! ",
    notes_overall="Жалпы үлгерім: {overall}%.",
    notes_weak="Әлсіз тақырыптар: {topics} — мақсатты қайта оқыту қажет.",
    notes_borderline="Шекаралық тақырыптар: {topics} — тәжірибемен бекіту.",
    notes_strong="Күшті тақырыптар: {topics} — жеңіл қайталау ұсынылады.",
    notes_grade="Деңгейін ескеріңіз: {grade}.",
    task_titles={
        "conceptual": "Түсінікті қалыптастыру: {topic}",
        "guided": "Қадамдап жаттығу: {topic}",
        "applied": "Қолданбалы есептер: {topic}",
        "quick_review": "Қысқа қайталау: {topic}",
        "challenge": "Қосымша күрделі есеп: {topic}",
    },
    task_descriptions={
        "conceptual": "«{topic}» тақырыбының негізгі идеяларын мысалдармен оқыңыз.",
        "guided": "«{topic}» бойынша 5–8 нұсқаулықпен қамтамасыз етілген жаттығуларды орындаңыз.",
        "applied": "«{topic}» тақырыбын өмірлік жағдаяттармен байланыстыратын 1–2 есепті шешіңіз.",
        "quick_review": "«{topic}» бойынша түсінікті жылдам тексеріңіз (қысқа карточкалар/сұрақтар).",
        "challenge": "«{topic}» бойынша күрделі есеп.",
    },
    learning_objective="«{topic}» тақырыбын{grade_clause} түсінуді күшейту және дәлдікті арттыру.",
    grade_clause=" {grade} деңгейінде",
    video_title="Жылдам сабақ: {topic}",
)

LANGUAGE_PACKS = {pack.code: pack for pack in (EN, RU, KZ)}


def get_language_pack(code: Any) -> LanguagePack:
    return LANGUAGE_PACKS[resolve_language(code)]
