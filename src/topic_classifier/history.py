# ABOUTME: Infers the century a history question refers to from years or roman numerals.
# ABOUTME: Century ranges are reported as notes rather than collapsed to a single value.

from __future__ import annotations

import math
import re
from typing import Optional, Tuple

from src.common.numeric import round_half_up

_YEAR = re.compile(r"\b(\d{3,4})\b")
_ROMAN_CENTURY = re.compile(
    r"\b([ivxlcdm]+)(?:\s*[–-]\s*([ivxlcdm]+))?\s*(?:вв?\b\.?|ғасыр|ғ\.|век|cent)",
    re.IGNORECASE,
)
_ROMAN_VALUES = {"i": 1, "v": 5, "x": 10, "l": 50, "c": 100, "d": 500, "m": 1000}


def roman_to_int(numeral: str) -> int:
    """Subtractive-notation parse; 'xviii' -> 18, 'xiv' -> 14."""
    values = [_ROMAN_VALUES.get(ch, 0) for ch in numeral.lower()]
    total = 0
    for idx, value in enumerate(values):
        if idx < len(values) - 1 and value < values[idx + 1]:
            total -= value
        else:
            total += value
    return total


def century_from_years(text: str) -> Optional[int]:
    years = [int(y) for y in _YEAR.findall(text)]
    years = [y for y in years if 1 <= y <= 2100]
    if not years:
        return None
    avg_year = round_half_up(sum(years) / len(years))
    return int(math.ceil(avg_year / 100))


def infer_century(text: str) -> Tuple[Optional[int], Optional[str]]:
    """
    Return (century, note) for free-form history text.

    A single roman century ("XIII в.") overrides any years found; a range
    ("XVIII–XIX вв.") clears the century and is recorded as
    "century_range: 18-19" instead.
    """

    century = century_from_years(text)
    note = None

    match = _ROMAN_CENTURY.search(text)
    if match:
        start = roman_to_int(match.group(1))
        end = roman_to_int(match.group(2)) if match.group(2) else 0
        if start and not end:
            century = start
        elif start and end:
            century = None
            note = f"century_range: {start}-{end}"
    return century, note
