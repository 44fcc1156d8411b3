# ABOUTME: Small numeric helpers shared by the classifier and diagnostic engines.
# ABOUTME: Half-up rounding, zero-safe division, and clamping.

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round halves away from zero.

    Python's built-in round() uses banker's rounding, which turns 12.5 into 12;
    reported percentages and minutes expect 13. Non-finite input rounds to 0.0.
    """

    if not math.isfinite(value):
        return 0.0
    if value < 0:
        return -round_half_up(-value, digits)
    factor = 10 ** digits
    scaled = value * factor + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / factor


def round2(value: float) -> float:
    return round_half_up(value, 2)


def safe_divide(numerator: float, denominator: float) -> float:
    """Return numerator / denominator, or 0.0 when the denominator is zero or the quotient is not finite."""
    if denominator == 0:
        return 0.0
    quotient = numerator / denominator
    return quotient if math.isfinite(quotient) else 0.0


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))
