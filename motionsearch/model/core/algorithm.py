"""
Dynamic Time Warping kernels.

Two variants are provided:
    - constrained DTW: Sakoe-Chiba band, rolling two-row buffer, returns only the
      accumulated cost of aligning two whole sequences.
    - open-begin DTW: full accumulated cost matrix where the alignment may start
      at any column of the second sequence, plus backtracking of the warping path.

The recurrences are compiled with numba and release the GIL, so searches running
in a thread pool do not serialize on them.
"""

from __future__ import annotations
from typing import List, NamedTuple

import numpy as np
from numba import njit

from motionsearch.enums.algorithm import DistanceMetric, LocalWeights, GeneralizationStrategy
from motionsearch.model.core.distance import MetricLike, local_cost_matrix
from motionsearch.model.core.sequence import as_sequence, check_same_channels
from motionsearch.model.core.utils import round_half_up, clamp


class WarpingPathCell(NamedTuple):
    # 1-based indices into the accumulated cost matrix
    x_index: int
    y_index: int


@njit(nogil=True)
def _banded_alignment_cost(local_cost, wh, wv, wd, w):
    n, m = local_cost.shape

    rows = np.full((2, m + 1), np.inf)
    rows[0, 0] = 0.0

    previous = 0
    current = 1
    for i in range(1, n + 1):
        rows[current, :] = np.inf
        for j in range(max(1, i - w), min(m, i + w) + 1):
            rows[current, j] = local_cost[i - 1, j - 1] + min(
                wh * rows[current, j - 1],
                min(wv * rows[previous, j], wd * rows[previous, j - 1]),
            )
        previous, current = current, previous

    return rows[previous, m]


@njit(nogil=True)
def _open_begin_cost_matrix(local_cost, wh, wv, wd):
    n, m = local_cost.shape

    matrix = np.empty((n + 1, m + 1))
    matrix[0, :] = 0.0
    matrix[1:, 0] = np.inf

    for i in range(1, n + 1):
        for j in range(1, m + 1):
            matrix[i, j] = local_cost[i - 1, j - 1] + min(
                wh * matrix[i, j - 1],
                min(wv * matrix[i - 1, j], wd * matrix[i - 1, j - 1]),
            )

    return matrix


def global_constraint_width(n: int, m: int, global_constraint_width_factor: float) -> int:
    """
    Half width of the Sakoe-Chiba band for sequences of length n and m.

    The factor is clamped into [0, 1]. The band is never narrower than |n - m|,
    otherwise the end cell (n, m) would be unreachable.
    """
    factor = clamp(float(global_constraint_width_factor), 0.0, 1.0)
    return max(abs(n - m), round_half_up((max(n, m) - 1) * factor))


def _constrained_cost(x, y, metric, local_weights, w):
    local_cost = local_cost_matrix(x, y, metric)
    return float(
        _banded_alignment_cost(local_cost, local_weights.wh, local_weights.wv, local_weights.wd, w)
    )


def _dtw_cost(
    x: np.ndarray,
    y: np.ndarray,
    metric: MetricLike,
    local_weights: LocalWeights,
    global_constraint_width_factor: float,
    generalization_strategy: GeneralizationStrategy,
) -> float:
    # x and y are already validated (n, d) float arrays
    w = global_constraint_width(len(x), len(y), global_constraint_width_factor)

    if generalization_strategy == GeneralizationStrategy.INDEPENDENT:
        return float(
            sum(
                _constrained_cost(x[:, [channel]], y[:, [channel]], metric, local_weights, w)
                for channel in range(x.shape[1])
            )
        )

    return _constrained_cost(x, y, metric, local_weights, w)


def dtw_cost(
    x,
    y,
    metric: MetricLike = DistanceMetric.EUCLIDEAN,
    local_weights: LocalWeights = LocalWeights.SYMMETRIC,
    global_constraint_width_factor: float = 1.0,
    generalization_strategy: GeneralizationStrategy = GeneralizationStrategy.DEPENDENT,
) -> float:
    """compute the alignment cost between two sequences under a global band constraint

    Args:
        x (n x nch): first sequence
        y (m x nch): second sequence
        metric: point-wise distance, DistanceMetric member or callable(u, v) -> float
        local_weights: horizontal/vertical/diagonal step weights
        global_constraint_width_factor: band width as a fraction of max(n, m) - 1, clamped to [0, 1]
        generalization_strategy: DEPENDENT aligns the full vectors, INDEPENDENT sums per-channel alignments

    output:
        alignment_cost : float. accumulated cost of the optimal path inside the band
    """
    x = as_sequence(x, "x")
    y = as_sequence(y, "y")
    check_same_channels(x, y)

    return _dtw_cost(x, y, metric, local_weights, global_constraint_width_factor, generalization_strategy)


def accumulated_cost_matrix(
    x,
    y,
    metric: MetricLike = DistanceMetric.EUCLIDEAN,
    local_weights: LocalWeights = LocalWeights.SYMMETRIC,
) -> np.ndarray:
    """
    Open-begin, closed-end accumulated cost matrix of x against y.

    Row 0 is all zeros, so the alignment may begin at any column of y; column 0
    is +inf below row 0, so the whole of x has to be consumed from its first sample.

    Args:
        x: (n, d) short sequence (the reference)
        y: (m, d) long sequence (the target)

    Returns:
        np.ndarray: (n + 1, m + 1) matrix
    """
    x = as_sequence(x, "x")
    y = as_sequence(y, "y")
    check_same_channels(x, y)

    local_cost = local_cost_matrix(x, y, metric)
    return _open_begin_cost_matrix(local_cost, local_weights.wh, local_weights.wv, local_weights.wd)


def optimal_warping_path(matrix: np.ndarray, end_inclusive: int) -> List[WarpingPathCell]:
    """
    Backtrack the optimal warping path from cell (n, end_inclusive).

    Among equal predecessors the diagonal step wins over the vertical one, and
    the vertical one over the horizontal one. Changing this order changes the
    recovered start column whenever costs tie.

    Args:
        matrix: accumulated cost matrix from accumulated_cost_matrix
        end_inclusive: 1-based end column, clamped to [1, m]

    Returns:
        List[WarpingPathCell]: cells from (1, start) to (n, end_inclusive)
    """
    n = matrix.shape[0] - 1
    m = matrix.shape[1] - 1

    i = n
    j = clamp(int(end_inclusive), 1, m)
    path = []

    while i > 1:
        path.append(WarpingPathCell(i, j))
        if j == 1:
            i -= 1
            continue

        diagonal = matrix[i - 1, j - 1]
        vertical = matrix[i - 1, j]
        horizontal = matrix[i, j - 1]
        best = min(horizontal, vertical, diagonal)

        if diagonal == best:
            i -= 1
            j -= 1
        elif vertical == best:
            i -= 1
        else:
            j -= 1

    path.append(WarpingPathCell(i, j))
    path.reverse()

    return path
