# change_cab_project/app/services/scoring/utils.py

from __future__ import annotations

import math
import re
from typing import Any, Optional, Sequence

# Canonical rating scale for effort and risk factors
RATING_MIN = 1
RATING_MAX = 10

_NUMBER_CHARS = re.compile(r"[^0-9.\-]")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def clamp(value: Optional[float], min_value: float, max_value: float) -> float:
    """Clamp a possibly None float into [min_value, max_value]. None -> min_value."""
    if value is None:
        return min_value
    return max(min_value, min(max_value, value))


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves away from zero for non-negative scores (Python's round() is banker's)."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def parse_number(value: Any, default: float = 0.0) -> float:
    """Parse a raw wizard value as a number.

    Currency symbols, thousands separators, percent signs and units are stripped
    ("£100,000" -> 100000.0, "15%" -> 15.0). Empty or unparsable -> default.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else default
    s = _NUMBER_CHARS.sub("", str(value))
    if s in ("", "-", ".", "-."):
        return default
    try:
        result = float(s)
    except ValueError:
        return default
    return result if math.isfinite(result) else default


def parse_months(value: Any, default: int = 12) -> int:
    """Parse a timeline as whole months; absent or unparsable -> default, negative -> 0."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return default
        return max(0, int(value))
    m = _LEADING_INT.match(str(value))
    if not m:
        return default
    return max(0, int(m.group(1)))


def parse_rating(value: Any, default: Optional[float]) -> Optional[float]:
    """Parse a 1-10 rating, clamped into the scale. Unparsable -> default."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        parsed = float(value)
    else:
        s = str(value).strip()
        if not s:
            return default
        try:
            parsed = float(s)
        except ValueError:
            return default
    if not math.isfinite(parsed):
        return default
    return clamp(parsed, RATING_MIN, RATING_MAX)


def inverse_rating(value: float) -> float:
    """Flip a rating where higher means better (e.g. rollback capability)."""
    return (RATING_MAX + 1) - value


def bucket_rating(value: float, upper_bounds: Sequence[float], ratings: Sequence[float]) -> float:
    """Return ratings[i] for the first exclusive upper bound value stays below.

    ratings has one more entry than upper_bounds; the last one applies above every bound.
    """
    for bound, rating in zip(upper_bounds, ratings):
        if value < bound:
            return rating
    return ratings[-1]


def threshold_rating(value: float, thresholds: Sequence[float]) -> float:
    """Spread the number of thresholds strictly below value over the rating scale.

    value at or below the first threshold -> RATING_MIN; above every threshold -> RATING_MAX.
    """
    if not thresholds:
        return RATING_MIN
    exceeded = sum(1 for t in thresholds if value > t)
    return RATING_MIN + (RATING_MAX - RATING_MIN) * exceeded / len(thresholds)


__all__ = [
    "RATING_MIN",
    "RATING_MAX",
    "clamp",
    "round_half_up",
    "parse_number",
    "parse_months",
    "parse_rating",
    "inverse_rating",
    "bucket_rating",
    "threshold_rating",
]
