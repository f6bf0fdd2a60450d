"""Numeric helpers shared by the scoring modules"""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (12.5 -> 13, not 12)"""
    return math.floor(value + 0.5)


def mean_rounded(values: list[int]) -> int:
    """Half-up rounded arithmetic mean, 0 for an empty list"""
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))
