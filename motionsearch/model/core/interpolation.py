"""
Linear resampling of multichannel sequences.
"""

from __future__ import annotations
from typing import Tuple

import numpy as np

from motionsearch.enums.algorithm import InterpolationStrategy

# fractional positions below this snap to the lower sample
SNAP_EPSILON = 1e-6


def linear_interpolate(sequence: np.ndarray, length: int) -> np.ndarray:
    """
    Resample a sequence to a new number of samples.

    Each output sample i sits at the fractional position i * (n - 1) / (length - 1)
    of the input and is the per-channel linear blend of its two neighbouring
    input samples. Masked (+inf) samples stay +inf instead of turning into NaN.

    Args:
        sequence: (n, d) array
        length: target number of samples, values below 2 are raised to 2

    Returns:
        np.ndarray: (max(length, 2), d) array
    """
    old_n = sequence.shape[0]
    new_n = max(int(length), 2)
    delta = (old_n - 1) / (new_n - 1)

    positions = np.arange(new_n) * delta
    lower = np.clip(positions.astype(np.int64), 0, old_n - 1)
    upper = np.clip(lower + 1, 0, old_n - 1)
    fraction = (positions - lower)[:, np.newaxis]

    below = sequence[lower]
    above = sequence[upper]
    with np.errstate(invalid="ignore"):
        blended = below + fraction * (above - below)
    blended = np.where(np.isposinf(below) | np.isposinf(above), np.inf, blended)

    return np.where(fraction < SNAP_EPSILON, below, blended)


def linear_interpolate_pair(
    x: np.ndarray,
    y: np.ndarray,
    interpolation_strategy: InterpolationStrategy = InterpolationStrategy.TO_SMALLER,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Bring two sequences to a common length.

    TO_SMALLER shrinks the longer one, TO_BIGGER stretches the shorter one.
    Sequences that already share a length are returned as they are. The common
    length is never below 2, so a single-sample sequence is always stretched.
    """
    n = x.shape[0]
    m = y.shape[0]

    if n == m:
        return x, y

    match interpolation_strategy:
        case InterpolationStrategy.TO_SMALLER:
            length = max(min(n, m), 2)
        case InterpolationStrategy.TO_BIGGER:
            length = max(n, m)
        case _:
            raise ValueError(f"Unknown interpolation strategy: {interpolation_strategy}")

    if n != length:
        x = linear_interpolate(x, length)
    if m != length:
        y = linear_interpolate(y, length)
    return x, y
