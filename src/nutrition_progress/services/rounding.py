"""Rounding helpers for stored totals and goals."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up.

    Unlike built-in round(), 12.5 becomes 13.
    """
    return math.floor(value + 0.5)


def round_to(value: float, places: int) -> float:
    """Round to a number of decimal places with halves going up."""
    factor = 10**places
    return math.floor(value * factor + 0.5) / factor
