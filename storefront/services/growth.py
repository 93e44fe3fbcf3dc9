"""
Growth and share percentages.
"""
import math


def round_half_up(value) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return int(math.floor(float(value) + 0.5))


def calculate_growth(current, previous) -> int:
    """
    Whole-percent change from previous to current.

    A zero previous value yields 100 when there is new activity and 0 when
    there is none, so the result is always defined.
    """
    if previous == 0:
        return 100 if current > 0 else 0
    return round_half_up((float(current) - float(previous)) / float(previous) * 100)


def percentage_of(part, total) -> int:
    """Whole-percent share of part in total; 0 when total is 0."""
    if not total:
        return 0
    return round_half_up(float(part) / float(total) * 100)
