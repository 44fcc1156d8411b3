# ABOUTME: Catalogue of canonical topic labels with their Russian and Kazakh translations.
# ABOUTME: Resolves explicit question metadata (topic codes, math-literacy domains) to topics.

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from src.common.i18n import resolve_language


@dataclass(frozen=True)
class TopicEntry:
    topic: str
    ru: str
    kz: str
    subject: str
    domain: str
    code: Optional[str] = None

    def label(self, language: str) -> str:
        lang = resolve_language(language)
        if lang == "ru":
            return self.ru
        if lang == "kz":
            return self.kz
        return self.topic


def _math(topic, ru, kz, domain="Algebra", code=None):
    return TopicEntry(topic, ru, kz, "Mathematics", domain, code)


def _history(topic, ru, kz):
    return TopicEntry(topic, ru, kz, "History", "History of Kazakhstan")


def _physics(topic, ru, kz, domain, code):
    return TopicEntry(topic, ru, kz, "Physics", domain, code)


def _mathlit(number, topic, ru, kz):
    return TopicEntry(topic, ru, kz, "Mathematics", "Math literacy", f"mathlit_{number:02d}")


TOPIC_CATALOGUE: Dict[str, TopicEntry] = {
    entry.topic: entry
    for entry in (
        _math("Quadratic equations", "Квадратные уравнения", "Квадрат теңдеулер", code="math_quadratic"),
        _math("Linear equations", "Линейные уравнения", "Сызықтық теңдеулер", code="math_linear"),
        _math("Systems of equations", "Системы уравнений", "Теңдеулер жүйесі"),
        _math("Inequalities", "Неравенства", "Теңсіздіктер"),
        _math("Functions and graphs", "Функции и графики", "Функциялар және графиктер", code="math_algebra_func"),
        _math("Logarithms", "Логарифмы", "Логарифмдер"),
        _math("Exponents and powers", "Степени и показатели", "Дәрежелер және көрсеткіштер"),
        _math("Percentages", "Проценты", "Пайыздар", code="math_percent"),
        _math("Ratio and proportion", "Отношения и пропорции", "Қатынас және пропорция"),
        _math("Fractions", "Дроби и сравнение чисел", "Бөлшектер және сандарды салыстыру", code="math_fractions"),
        _math("Probability and combinatorics", "Вероятность и комбинаторика", "Ықтималдық және комбинаторика"),
        _math("Descriptive statistics", "Описательная статистика", "Сипаттамалық статистика", code="math_stats"),
        _math("Sequences and series", "Последовательности и ряды", "Тізбектер және қатарлар", code="math_progression"),
        _math(
            "Plane and solid geometry",
            "Геометрия (плоская и пространственная)",
            "Геометрия (жазық және кеңістік)",
            domain="Geometry",
        ),
        _math("Circle geometry", "Геометрия окружности", "Шеңбер геометриясы", domain="Geometry", code="math_geometry_cir"),
        _math(
            "Triangles (similarity, Pythagoras)",
            "Треугольники (подобие, Пифагор)",
            "Үшбұрыштар (ұқсастық, Пифагор)",
            domain="Geometry",
            code="math_geometry_tri",
        ),
        _math(
            "Trigonometric values and identities",
            "Тригонометрия (значения и тождества)",
            "Тригонометрия (мәндер мен тепе-теңдіктер)",
            domain="Trigonometry",
        ),
        _math("Derivatives and integrals", "Производные и интегралы", "Туынды және интеграл", domain="Calculus"),
        _math("Primes and divisibility", "Простые числа и делимость", "Жай сандар және бөлінгіштік", domain="Number Theory"),
        _math("General problem solving", "Общее решение задач", "Жалпы есеп шығару"),
        _history("Historical facts and chronology", "Исторические факты и хронология", "Тарихи фактілер және хронология"),
        _history("Mongol invasion", "Монгольские завоевания", "Моңғол шапқыншылығы"),
        _history("White Horde", "Ак Орда", "Ақ Орда"),
        _history("Nogai Horde", "Ногайская Орда", "Ноғай Ордасы"),
        _history("Anyrakai battle", "Анракайская битва", "Аңырақай шайқасы"),
        _history("Kazakh–Dzungar wars", "Казахско-джунгарские войны", "Қазақ‑жоңғар соғыстары"),
        _history("Alash movement", "Движение Алаш", "Алаш қозғалысы"),
        _history("Constitution of Kazakhstan (1995)", "Конституция РК (1995)", "ҚР Конституциясы (1995)"),
        _history("Capital moved to Astana", "Перенос столицы в Астану", "Астанаға астананы көшіру"),
        _history("Great Famine (1931–1933)", "Голод 1931–1933", "Ашаршылық 1931–1933"),
        _history(
            "De-Stalinization (XX CPSU Congress)",
            "Десталинизация (XX съезд КПСС)",
            "Десталинизация (КПСС XX съезі)",
        ),
        _history("Orenburg–Tashkent Railway", "Оренбург-Ташкентская железная дорога", "Орынбор-Ташкент темір жолы"),
        _history("Khanate of Abulkhair", "Ханство Абулхаира", "Әбілқайыр хандығы"),
        _physics(
            "Dynamics (Newton's second law)",
            "Динамика: второй закон Ньютона",
            "Динамика: Ньютонның екінші заңы",
            "Mechanics",
            "physics_mechanics",
        ),
        _physics("Kinematics", "Кинематика", "Кинематика", "Mechanics", "physics_kinematics"),
        _physics("Optics", "Оптика", "Оптика", "Optics", "physics_optics"),
        _physics("Electricity", "Электричество", "Электр", "Electricity", "physics_electricity"),
        _physics(
            "SI units and dimensions",
            "Единицы СИ и размерности",
            "SI бірліктері және өлшемдер",
            "Measurement",
            "physics_units",
        ),
        TopicEntry("General knowledge", "Общие знания", "Жалпы білім", "Other", "General"),
        _mathlit(1, "Logical tasks with numerical values",
                 "Логические задания с числовыми значениями", "Сандық мәндермен логикалық тапсырмалар"),
        _mathlit(2, "Word problems with equations", "Текстовые задачи с уравнениями", "Теңдеулермен мәтін есептері"),
        _mathlit(3, "Percentages and diagrams", "Проценты и диаграммы", "Пайыздар мен диаграммалар"),
        _mathlit(4, "Mean, range, median, mode", "Среднее, размах, медиана, мода", "Орташа, ауқым, медиана, мода"),
        _mathlit(5, "Probability, combinatorics, frequency tables",
                 "Вероятности/комбинаторика/таблицы частот", "Ықтималдық/комбинаторика/жиілік кестелері"),
        _mathlit(6, "Dependence of one quantity on another (proportions)",
                 "Зависимость одной величины от другой (пропорции)",
                 "Бір шаманың екінші шамаға тәуелділігі (пропорциялар)"),
        _mathlit(7, "Sequences and table analysis", "Последовательности / анализ таблиц", "Тізбектер / кестелерді талдау"),
        _mathlit(8, "Geometric logic", "Геометрическая логика", "Геометриялық логика"),
        _mathlit(9, "Area and perimeter", "Площадь и периметр", "Аудан және периметр"),
        _mathlit(10, "Surface area of solids (cube)", "Площадь поверхности тел (куб)", "Денелердің бет ауданы (куб)"),
    )
}

GENERIC_TOPICS = frozenset({"General problem solving", "General knowledge"})

_BY_KEY: Dict[str, TopicEntry] = {}
for _entry in TOPIC_CATALOGUE.values():
    _BY_KEY[_entry.topic.lower()] = _entry
    if _entry.code:
        _BY_KEY[_entry.code] = _entry

_MATHLIT_DOMAIN = re.compile(r"^\d{1,2}$")


def lookup_topic(value: Any) -> Optional[TopicEntry]:
    """Find a catalogue entry by canonical label, topic code, or two-digit math-literacy domain."""

    if value is None:
        return None
    key = str(value).strip()
    if not key:
        return None
    if _MATHLIT_DOMAIN.match(key):
        key = f"mathlit_{int(key):02d}"
    return _BY_KEY.get(key.lower())


def entry_from_meta(meta: Optional[Mapping[str, Any]]) -> Optional[TopicEntry]:
    if not isinstance(meta, Mapping):
        return None
    for field_name in ("topicCode", "domain", "topic"):
        entry = lookup_topic(meta.get(field_name))
        if entry is not None:
            return entry
    return None


def _explicit_label(meta: Mapping[str, Any], language: str) -> Optional[str]:
    if language == "kz":
        candidates = ("topicCodeKz",)
    elif language == "ru":
        candidates = ("topicTranslation", "topicCodeRu")
    else:
        return None
    for field_name in candidates:
        value = meta.get(field_name)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def topic_from_meta(meta: Optional[Mapping[str, Any]], language: str = "en") -> Optional[str]:
    """
    Localized topic label carried by question metadata, if any.

    Hand-written labels (topicTranslation / topicCodeRu for Russian,
    topicCodeKz for Kazakh) win over catalogue lookups of topicCode,
    domain, or topic.
    """

    if not isinstance(meta, Mapping):
        return None
    lang = resolve_language(language)
    explicit = _explicit_label(meta, lang)
    if explicit:
        return explicit
    entry = entry_from_meta(meta)
    return entry.label(lang) if entry is not None else None


def localize_topic(topic: str, language: str = "en") -> str:
    """Translate a canonical topic label; unknown labels are returned unchanged."""
    entry = TOPIC_CATALOGUE.get(topic)
    if entry is None:
        return topic
    return entry.label(language)
