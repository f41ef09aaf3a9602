"""Signal normalization helpers.

Turn raw counters, durations and text into bounded 0-100 sub-scores. Every
function here is pure.
"""
import math
import re
from datetime import timedelta

_LOCATION_SPLIT = re.compile(r"[,\s]+")
_KEYWORD_SPLIT = re.compile(r"[,\s\-]+")


def clamp_score(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def bounded_linear(value: float, points_per_unit: float, cap: float) -> float:
    """Linear score that saturates at ``cap``.

    Example: ``bounded_linear(views, 5, 15)`` gives 5 points per view up to 15.
    """
    return clamp_score(value * points_per_unit, 0.0, cap)


def time_decay(elapsed: timedelta, window: timedelta) -> float:
    """Linear recency score: 100 at zero elapsed time, 0 at ``window`` and beyond."""
    ratio = elapsed.total_seconds() / window.total_seconds()
    return clamp_score(100 - ratio * 100)


def round_half_up(value: float) -> float:
    """Round to the nearest integer with .5 going up (banker's rounding avoided)."""
    return float(math.floor(value + 0.5))


def split_location(text: str) -> list[str]:
    """Lowercased location components split on commas and whitespace."""
    return [part for part in _LOCATION_SPLIT.split((text or "").lower()) if part]


def keyword_tokens(text: str, min_length: int = 4) -> list[str]:
    """Lowercased words of at least ``min_length`` characters.

    Splits on commas, whitespace and hyphens so "Senior Python-Developer"
    yields ["senior", "python", "developer"].
    """
    return [
        word for word in _KEYWORD_SPLIT.split((text or "").lower())
        if len(word) >= min_length
    ]


def contains_any(text: str, markers) -> bool:
    """Case-insensitive substring test against a list of markers."""
    lowered = (text or "").lower()
    return any(marker in lowered for marker in markers)
