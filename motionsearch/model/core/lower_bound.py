"""
LB_Keogh lower bound on the DTW cost.

The envelope is clamped to the query's own per-channel minimum and maximum
rather than computed over a sliding local window. This is cheaper than the
classical envelope and is what the search prunes against.
"""

from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from motionsearch.enums.algorithm import DistanceMetric
from motionsearch.model.core.distance import MetricLike
from motionsearch.model.core.errors import UnsupportedMetricError


@dataclass(frozen=True)
class Envelope:
    lower: np.ndarray
    upper: np.ndarray


def envelope_of(query: np.ndarray, lower_bound_radius: float) -> Envelope:
    """
    Build the [lower, upper] envelope of a query window.

    Args:
        query: (n, d) window
        lower_bound_radius: half width of the envelope, negative values are treated as 0

    Returns:
        Envelope: lower[i] = max(query[i] - r, min), upper[i] = min(query[i] + r, max)
    """
    radius = max(float(lower_bound_radius), 0.0)

    global_min = np.min(query, axis=0)
    global_max = np.max(query, axis=0)

    lower = np.maximum(query - radius, global_min)
    upper = np.minimum(query + radius, global_max)

    return Envelope(lower, upper)


def keogh_lower_bound(
    candidate: np.ndarray,
    query: np.ndarray,
    lower_bound_radius: float,
    metric: MetricLike,
) -> float:
    """
    Lower bound of the DTW cost between candidate and query.

    Only the parts of the candidate outside the query's envelope contribute. The
    penalty is accumulated in the same shape as the metric (sum, sum of squares,
    root of sum of squares) so the bound is comparable with DTW costs computed
    with that metric.

    Args:
        candidate: (n, d) sequence, same shape as query
        query: (n, d) sequence the envelope is built around
        lower_bound_radius: envelope radius
        metric: one of the DistanceMetric members

    Raises:
        UnsupportedMetricError: metric is not a DistanceMetric member
    """
    if not isinstance(metric, DistanceMetric):
        raise UnsupportedMetricError(
            f"Distance function is not supported by the lower bound: {metric!r}"
        )

    envelope = envelope_of(query, lower_bound_radius)

    with np.errstate(invalid="ignore"):
        below = np.where(candidate < envelope.lower, envelope.lower - candidate, 0.0)
        above = np.where(candidate > envelope.upper, candidate - envelope.upper, 0.0)
    excess = below + above

    match metric:
        case DistanceMetric.MANHATTAN:
            return float(np.sum(excess))
        case DistanceMetric.EUCLIDEAN:
            return float(np.sqrt(np.sum(excess**2)))
        case DistanceMetric.SQUARED_EUCLIDEAN:
            return float(np.sum(excess**2))
