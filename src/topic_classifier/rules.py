# ABOUTME: Ordered keyword/regex rule tables mapping question text to canonical topics.
# ABOUTME: Covers Kazakhstan history events, mathematics domains, physics, and subject cues.

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple

_FLAGS = re.IGNORECASE


class RuleConfidence:
    SPECIFIC = 0.85
    HISTORY_FALLBACK = 0.65
    MATH_FALLBACK = 0.6
    OTHER = 0.55
    METADATA = 1.0


@dataclass(frozen=True)
class HistoryEventRule:
    pattern: Pattern[str]
    topic: str
    century: Optional[int]
    tags: Tuple[str, ...]
    note: Optional[str] = None

    def matches(self, text: str) -> bool:
        return bool(self.pattern.search(text))


@dataclass(frozen=True)
class SubjectRule:
    """A math or physics rule; `exclude` vetoes an otherwise matching text."""

    pattern: Pattern[str]
    domain: str
    topic: str
    tags: Tuple[str, ...]
    difficulty: int
    subtopic: Optional[str] = None
    exclude: Optional[Pattern[str]] = None

    def matches(self, text: str) -> bool:
        if not self.pattern.search(text):
            return False
        return not (self.exclude is not None and self.exclude.search(text))


def _rx(pattern: str) -> Pattern[str]:
    return re.compile(pattern, _FLAGS)


HISTORY_EVENT_RULES: Tuple[HistoryEventRule, ...] = (
    HistoryEventRule(
        _rx(r"монгол(ьск|дық|дықтар|дардың)|чингисхан|genghis|mongol"),
        "Mongol invasion", 13, ("mongol-invasion", "13th-century"),
    ),
    HistoryEventRule(
        _rx(r"ақ орда|белая орда|white horde"),
        "White Horde", None, ("white-horde",), "century_range: 13-15",
    ),
    HistoryEventRule(
        _rx(r"ноғай(ская| орда)|mangyt|мангыт"),
        "Nogai Horde", None, ("nogai-horde",), "century_range: 14-16",
    ),
    HistoryEventRule(
        _rx(r"аңырақай|аныракай|anrakai|anry?akai"),
        "Anyrakai battle", 18, ("anrakai-battle", "kazakh-dzungar-wars"),
    ),
    HistoryEventRule(
        _rx(r"джунгар|жоңғар"),
        "Kazakh–Dzungar wars", 18, ("kazakh-dzungar-wars",), "century_range: 17-18",
    ),
    HistoryEventRule(_rx(r"алаш"), "Alash movement", 20, ("alash-movement",)),
    HistoryEventRule(
        _rx(r"конституци(я|ясы) (рк|республики казахстан)|1995"),
        "Constitution of Kazakhstan (1995)", 20, ("constitution-1995",),
    ),
    HistoryEventRule(
        _rx(r"перенос столицы|астан(а|ы)|нур-?султан|ақмола"),
        "Capital moved to Astana", 20, ("capital-move",),
    ),
    HistoryEventRule(
        _rx(r"голод|ашаршылық|жұт|zhut|1931|1933"),
        "Great Famine (1931–1933)", 20, ("great-famine-1931-33",),
    ),
    HistoryEventRule(
        _rx(r"десталинизац|de-?stalin|xx съезд кпсс|кпсс xx"),
        "De-Stalinization (XX CPSU Congress)", 20, ("de-stalinization",),
    ),
    HistoryEventRule(
        _rx(r"оренбург-ташкент"),
        "Orenburg–Tashkent Railway", 20, ("industrialization", "infrastructure"),
    ),
    HistoryEventRule(
        _rx(r"абулхаир|әбілқайыр"),
        "Khanate of Abulkhair", 15, ("abulkhair-khanate",),
    ),
)

# Quadratic is listed before linear so "x^2" never lands in the generic equation bucket.
MATH_RULES: Tuple[SubjectRule, ...] = (
    SubjectRule(
        _rx(r"квадратн(ое|ые|ых) уравн|x\^2|x²|корн(и|я|ей)|дискриминант|quadratic"),
        "Algebra", "Quadratic equations", ("quadratics", "polynomial", "algebra"), 2,
    ),
    SubjectRule(
        _rx(r"(решит|решите|solve).*\b(x|y|\d+x)\b|\bуравн(ение|я)\b|linear equation"),
        "Algebra", "Linear equations", ("algebra", "linear-equations"), 2,
        subtopic="one-variable", exclude=_rx(r"квадрат"),
    ),
    SubjectRule(
        _rx(r"логарифм|logarithm|\blog(_|\d|\b)|\blg\b|\bln\b"),
        "Algebra", "Logarithms", ("logarithms", "change-of-base", "algebra"), 2,
    ),
    SubjectRule(
        _rx(r"степен(и|ь)|показател|2\^|\^\d+|exponent"),
        "Algebra", "Exponents and powers", ("exponents", "powers", "algebra"), 2,
        subtopic="properties of exponents",
    ),
    SubjectRule(
        _rx(r"процент|%|скидк|налог|комисси|percent"),
        "Algebra", "Percentages", ("percentages", "financial-math", "algebra"), 2,
        subtopic="applications",
    ),
    SubjectRule(
        _rx(r"вероятн|probab|шар(ов|ы)\b|\bурн|комбинатор|выберите|combinator"),
        "Algebra", "Probability and combinatorics", ("probability", "combinatorics", "algebra"), 3,
    ),
    SubjectRule(
        _rx(r"средн(ее|яя|его) арифм|медиан|\bмод(а|у|ы)\b|размах|median"),
        "Algebra", "Descriptive statistics", ("mean", "median", "mode", "statistics"), 2,
    ),
    SubjectRule(
        _rx(r"последовательност|арифметическ.*прогресс|прогресси|sequence"),
        "Algebra", "Sequences and series", ("sequences", "algebra"), 3,
        subtopic="arithmetic progression",
    ),
    SubjectRule(
        _rx(r"периметр|площад(ь|и)|поверхн|\bкуб|прямоугольник|треугольник|радиус|диагонал|perimeter|triangle"),
        "Geometry", "Plane and solid geometry", ("geometry", "perimeter", "area", "surface-area"), 2,
    ),
    SubjectRule(
        _rx(r"\b(sin|cos|tg|ctg)|синус|косинус|тангенс|\bугол"),
        "Trigonometry", "Trigonometric values and identities", ("trigonometry", "unit-circle"), 3,
    ),
    SubjectRule(
        _rx(r"производн|derivat|интеграл|integral|предел|\blimit\b"),
        "Calculus", "Derivatives and integrals", ("calculus", "derivatives", "integrals"), 4,
    ),
    SubjectRule(
        _rx(r"прост(ое|ые|ых) числ|делимост|\bНОК\b|\bНОД\b|\bgcd\b|\blcm\b|prime"),
        "Number Theory", "Primes and divisibility", ("number-theory", "divisibility", "primes"), 3,
    ),
)

PHYSICS_RULES: Tuple[SubjectRule, ...] = (
    SubjectRule(
        _rx(r"ньютон|\bсил(а|у|ы|ой)\b|\bforce\b|newton"),
        "Mechanics", "Dynamics (Newton's second law)", ("physics", "dynamics"), 3,
    ),
    SubjectRule(
        _rx(r"скорост|ускорени|жылдамдық|velocity|acceleration"),
        "Mechanics", "Kinematics", ("physics", "kinematics"), 3,
    ),
    SubjectRule(
        _rx(r"\bсвет|жарық|линз|\blens"),
        "Optics", "Optics", ("physics", "optics"), 3,
    ),
    SubjectRule(
        _rx(r"электр|\bток\b|напряжени|electric|voltage"),
        "Electricity", "Electricity", ("physics", "electricity"), 3,
    ),
    SubjectRule(
        _rx(r"единиц|бірлік|размерност|\bsi units?\b"),
        "Measurement", "SI units and dimensions", ("physics", "units"), 3,
    ),
)

HISTORY_CUE = _rx(
    r"\b(казахстан|қазақ|ханств|орда|жуз|джунгар|жоңғар|әлем|алаш|абылай|кенесары|тауке|астан|нур-?султан|акмол)"
    r"|\b(век|ғасыр|вв\.|гг\.|импер|хан\b|хана\b|ханы\b)"
)

MATH_CUE = _rx(
    r"\b(x|y|\d+x)\b"
    r"|\b(log|sin|cos|tg|корн|квадрат|уравн|процент|вероятност|комбинатор|периметр|площад|куб|угол|производн|интеграл)"
    r"|[=+*/^]"
)

KAZAKHSTAN = _rx(r"казахстан")

DIFFICULTY_AT_LEAST_3 = _rx(r"производн|integral|интеграл|предел|limit|trig|тригоном")
DIFFICULTY_AT_LEAST_4 = _rx(r"доказат|prove|теорем|оптимизац|optimi[sz]")
DIFFICULTY_BUMP = _rx(r"многошаг|multi-?step|слож")

MULTI_TOPIC_SEPARATORS = _rx(r"\bи\b|\band\b|\bжәне\b|,|;")
MULTI_TOPIC_KEYWORDS = _rx(
    r"логарифм|квадратн|производн|геометр|вероятност|logarithm|quadratic|derivative|geometr|probabilit"
)


def first_match(rules, text: str):
    for rule in rules:
        if rule.matches(text):
            return rule
    return None
