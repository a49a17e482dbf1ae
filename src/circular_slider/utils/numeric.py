"""Numeric helpers used by the widget shell."""

import math


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp ``value`` to the inclusive range ``[lo, hi]``."""
    return max(lo, min(hi, value))


def round_half_up(value: float) -> float:
    """Round to the nearest integer, halves going towards positive infinity."""
    return float(math.floor(value + 0.5))


def coerce_value(
    value: float,
    to_int: bool = False,
    to_half: bool = False,
    to_quarter: bool = False,
) -> float:
    """Snap ``value`` to whole, half and/or quarter steps, in that order."""
    if to_int:
        value = round_half_up(value)
    if to_half:
        value = round_half_up(value * 2) / 2
    if to_quarter:
        value = round_half_up(value * 4) / 4
    return value


__all__ = ["clamp", "round_half_up", "coerce_value"]
