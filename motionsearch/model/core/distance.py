"""
Point-wise distances and local cost matrices.

The three supported metrics are members of DistanceMetric. Any other callable
taking two vectors and returning a float can still be used to build a local
cost matrix, but not to compute the LB_Keogh lower bound.
"""

from __future__ import annotations
from typing import Callable, Union

import numpy as np
from scipy.spatial.distance import cdist

from motionsearch.enums.algorithm import DistanceMetric

MetricLike = Union[DistanceMetric, Callable[[np.ndarray, np.ndarray], float]]


def manhattan_distance(x, y) -> float:
    """Sum of absolute differences."""
    return DistanceMetric.MANHATTAN(x, y)


def euclidean_distance(x, y) -> float:
    """Root of the sum of squared differences."""
    return DistanceMetric.EUCLIDEAN(x, y)


def squared_euclidean_distance(x, y) -> float:
    """
    Sum of squared differences.

    Symmetric and zero on equal inputs, but it does not satisfy the triangle
    inequality: d([0], [2]) = 4 > d([0], [1]) + d([1], [2]) = 2.
    """
    return DistanceMetric.SQUARED_EUCLIDEAN(x, y)


def local_cost_matrix(x: np.ndarray, y: np.ndarray, metric: MetricLike) -> np.ndarray:
    """
    Distances between every row of x and every row of y.

    Args:
        x: (n, d) sequence
        y: (m, d) sequence
        metric: DistanceMetric member or a callable(u, v) -> float

    Returns:
        np.ndarray: (n, m) matrix, entry [i, j] = metric(x[i], y[j])
    """
    if isinstance(metric, DistanceMetric):
        # scipy's C loops keep inf rows (masked samples) at inf for all three metrics
        with np.errstate(invalid="ignore", over="ignore"):
            return cdist(x, y, metric=metric.value)
    return cdist(x, y, metric=lambda u, v: float(metric(u, v)))
