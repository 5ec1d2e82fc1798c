"""Numeric helpers shared by the scoring and reporting utilities."""

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves upward (2.5 -> 3, -2.5 -> -2), the way browsers' Math.round does."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def percentage(part: int, whole: int) -> int:
    """Whole-number share of `whole`, 0 when there is nothing to divide."""
    if not whole:
        return 0
    return int(round_half_up(part / whole * 100))
