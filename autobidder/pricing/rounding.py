"""Rounding shared by the evaluator and the aggregator."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going up (2.5 -> 3, -2.5 -> -2).

    Python's built-in ``round`` rounds halves to even, which would price
    12.5 as 12. The fraction is compared directly because ``value + 0.5``
    can itself round up (0.49999999999999994 + 0.5 == 1.0).
    """
    whole = math.floor(value)
    return whole + 1 if value - whole >= 0.5 else whole


def clamp_percent(value: float) -> float:
    """Clamp a percentage to the closed range [0, 100]."""
    return min(max(value, 0.0), 100.0)
