"""
Numeric Input Helpers
=====================
Free-text coefficient entry accepts plain numbers and "numerator/denominator"
fractions. Nothing in here raises: malformed input falls back to 0.
"""
from __future__ import annotations

import math
from typing import Optional

DISPLAY_DECIMALS = 4
# above this magnitude the label switches to exponent notation
EXPONENT_THRESHOLD = 1e15


def _to_float(text: str) -> Optional[float]:
    try:
        return float(text)
    except ValueError:
        return None


def parse_fraction(text: str) -> Optional[float]:
    """
    Parse "3/4" or "-3/4". Returns None on any failure.

    The leading '-' applies to the whole fraction. Exactly one '/' is allowed,
    both sides must be numbers and the denominator must be non-zero.
    """
    text = text.strip()
    negative = text.startswith("-")
    if negative:
        text = text[1:]

    parts = text.split("/")
    if len(parts) != 2:
        return None

    numerator = _to_float(parts[0])
    denominator = _to_float(parts[1])
    if numerator is None or denominator is None or denominator == 0:
        return None

    result = numerator / denominator
    return -result if negative else result


def parse_coefficient(text: str) -> float:
    """Parse user text into a coefficient. Anything unusable becomes 0.0."""
    text = text.strip()
    value = parse_fraction(text) if "/" in text else _to_float(text)

    if value is None or not math.isfinite(value):
        return 0.0
    return value


def round_display_value(value: float) -> float:
    """Round half-up to four decimal places. Values too large to scale are returned as is."""
    scale = 10 ** DISPLAY_DECIMALS
    scaled = value * scale
    if not math.isfinite(scaled):
        return value
    rounded = math.floor(scaled + 0.5) / scale
    # avoid "-0"
    return rounded if rounded != 0 else 0.0


def format_display_value(value: float) -> str:
    """0.123456 -> '0.1235', 2.0 -> '2', 0.5 -> '0.5'."""
    rounded = round_display_value(value)
    if abs(rounded) >= EXPONENT_THRESHOLD:
        return f"{rounded:g}"
    if rounded.is_integer():
        return str(int(rounded))
    return f"{rounded:.{DISPLAY_DECIMALS}f}".rstrip("0").rstrip(".")
