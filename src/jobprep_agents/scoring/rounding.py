"""Rounding shared by the scorers."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest int with .5 going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def safe_percent(part: float, whole: float) -> float:
    """Return part / whole * 100, or 0.0 when whole is 0."""
    if whole == 0:
        return 0.0
    return part / whole * 100
