"""
Numeric coercion helpers shared by payload parsing and scoring.

Rounding is half-up (2.5 -> 3) everywhere so results do not depend on
Python's banker's rounding.
"""

import math
from typing import Any


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def as_number(raw: Any) -> float | None:
    """Finite float from an int, float or numeric string ("85", "85%"); else None."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw.strip().rstrip("%"))
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(value) or math.isinf(value) else value


def coerce_sub_score(raw: Any) -> int | None:
    """Coerce a 1-5 sub-score. Zero or below means "not assessed"; above 5 is clamped."""
    value = as_number(raw)
    if value is None or value <= 0:
        return None
    return min(5, max(1, round_half_up(value)))


def _written_as_decimal(raw: Any) -> bool:
    if isinstance(raw, float):
        return True
    if isinstance(raw, str):
        text = raw.strip()
        return "." in text and not text.endswith("%")
    return False


def coerce_percent(raw: Any) -> int | None:
    """Coerce a 0-100 value.

    Decimals in (0, 1], as floats or strings (0.9, "0.9"), are read as
    fractions and scaled. Integers and "%"-suffixed strings are already
    percentages, so 1 and "1" stay 1.
    """
    value = as_number(raw)
    if value is None:
        return None
    if _written_as_decimal(raw) and 0.0 < value <= 1.0:
        value *= 100
    return min(100, max(0, round_half_up(value)))
