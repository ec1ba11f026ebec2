import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (2.5 -> 3, unlike round())."""
    return int(math.floor(value + 0.5))


def clamp(value, lower, upper):
    return max(lower, min(value, upper))
