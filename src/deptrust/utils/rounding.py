"""Rounding helpers."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves up (2.5 -> 3, not banker's 2)."""
    return math.floor(value + 0.5)


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))
