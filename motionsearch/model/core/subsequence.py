"""
Subsequence search: find the window of a long target that best aligns with a
shorter reference.

search_pruned slides windows of tolerated lengths over the target, prunes the
ones whose LB_Keogh bound cannot beat the best cost so far and aligns the rest
with constrained DTW. search_exhaustive runs a single open-begin DTW over the
whole target.
"""

from __future__ import annotations

import numpy as np

from motionsearch.enums.algorithm import (
    DistanceMetric,
    LocalWeights,
    GeneralizationStrategy,
    InterpolationStrategy,
)
from motionsearch.model.core.algorithm import _dtw_cost, accumulated_cost_matrix, optimal_warping_path
from motionsearch.model.core.distance import MetricLike
from motionsearch.model.core.errors import UnsupportedMetricError
from motionsearch.model.core.interpolation import linear_interpolate_pair
from motionsearch.model.core.lower_bound import keogh_lower_bound
from motionsearch.model.core.reports import SearchReport
from motionsearch.model.core.sequence import as_sequence, check_same_channels
from motionsearch.model.core.utils import round_half_up, clamp


def window_lengths(reference_length: int, length_tolerance_factor: float):
    """
    Shortest and longest window lengths searched for a reference.

    The tolerance is clamped into [0, 0.99]. Windows have at least two samples,
    the shortest sequence linear_interpolate produces.
    """
    tolerance = clamp(float(length_tolerance_factor), 0.0, 0.99)
    min_length = max(2, round_half_up(reference_length * (1 - tolerance)))
    max_length = max(min_length, round_half_up(reference_length * (1 + tolerance)))
    return min_length, max_length


def search_pruned(
    reference,
    target,
    metric: MetricLike = DistanceMetric.EUCLIDEAN,
    local_weights: LocalWeights = LocalWeights.SYMMETRIC,
    global_constraint_width_factor: float = 0.1,
    generalization_strategy: GeneralizationStrategy = GeneralizationStrategy.DEPENDENT,
    down_sampling_step: int = 10,
    length_tolerance_factor: float = 0.25,
    interpolation_strategy: InterpolationStrategy = InterpolationStrategy.TO_SMALLER,
    lower_bound_radius: float = 0.1,
) -> SearchReport:
    """
    Sliding-window search with LB_Keogh pruning.

    Window starts and ends both advance by down_sampling_step (clamped to [1, m]).
    Each window and the reference are resampled to a common length; the full DTW
    is only computed when the lower bound is strictly below the best cost found so
    far.

    Args:
        reference: (n, d) reference movement
        target: (m, d) recording to search
        metric: DistanceMetric member, needed by the lower bound
        local_weights: DTW step weights
        global_constraint_width_factor: DTW band width factor
        generalization_strategy: dependent or independent multichannel DTW
        down_sampling_step: stride over window starts and ends
        length_tolerance_factor: windows from n(1 - tol) to n(1 + tol) samples
        interpolation_strategy: which side of a pair gets resampled
        lower_bound_radius: LB_Keogh envelope radius

    Returns:
        SearchReport: best window, its cost divided by the window length, and the
        pruned / not pruned counters. Cost is +inf when no window could be aligned.
        Windows containing a masked (+inf) sample are counted as pruned.

    Raises:
        UnsupportedMetricError: metric is not a DistanceMetric member
    """
    if not isinstance(metric, DistanceMetric):
        raise UnsupportedMetricError(
            f"The pruned search needs a DistanceMetric for its lower bound, got {metric!r}"
        )

    reference = as_sequence(reference, "reference")
    target = as_sequence(target, "target")
    check_same_channels(reference, target)

    n = reference.shape[0]
    m = target.shape[0]

    step = clamp(int(down_sampling_step), 1, m)
    min_length, max_length = window_lengths(n, length_tolerance_factor)

    # masked_before[k] = number of masked samples in target[:k]
    masked_before = np.concatenate(([0], np.cumsum(np.any(np.isinf(target), axis=1))))

    best_start = 0
    best_end_inclusive = 0
    best_cost = np.inf

    pruned_out = 0
    not_pruned_out = 0

    for i in range(0, m - min_length + 1, step):
        for j in range(i + min_length - 1, min(i + max_length - 1, m - 1) + 1, step):
            # resampling may step over masked samples, so such windows are never aligned
            if masked_before[j + 1] > masked_before[i]:
                pruned_out += 1
                continue

            window = target[i : j + 1]

            interpolated_reference, interpolated_window = linear_interpolate_pair(
                reference, window, interpolation_strategy
            )

            lower_bound = keogh_lower_bound(
                interpolated_reference, interpolated_window, lower_bound_radius, metric
            )

            if lower_bound < best_cost:
                cost = _dtw_cost(
                    interpolated_reference,
                    interpolated_window,
                    metric,
                    local_weights,
                    global_constraint_width_factor,
                    generalization_strategy,
                )
                if cost < best_cost:
                    best_start = i
                    best_end_inclusive = j
                    best_cost = cost
                not_pruned_out += 1
            else:
                pruned_out += 1

    if not np.isfinite(best_cost):
        return SearchReport.no_match(pruned_out, not_pruned_out)

    best_length = best_end_inclusive - best_start + 1
    return SearchReport(
        best_start,
        best_end_inclusive,
        float(best_cost / best_length),
        pruned_out,
        not_pruned_out,
    )


def search_exhaustive(
    reference,
    target,
    metric: MetricLike = DistanceMetric.EUCLIDEAN,
    local_weights: LocalWeights = LocalWeights.SYMMETRIC,
) -> SearchReport:
    """
    Open-begin DTW search over the whole target, no windowing and no pruning.

    The end of the match is the cheapest cell of the last matrix row (first one on
    ties); its start is recovered by backtracking the warping path. The cost is the
    raw accumulated cost, not normalized.

    Returns:
        SearchReport: zero-based start / end_inclusive and cost, or the no-match
        report (0, 0, +inf) when no finite alignment exists.
    """
    reference = as_sequence(reference, "reference")
    target = as_sequence(target, "target")
    check_same_channels(reference, target)

    matrix = accumulated_cost_matrix(reference, target, metric, local_weights)

    last_row = matrix[-1, 1:]
    if last_row.size == 0 or np.all(np.isnan(last_row)):
        return SearchReport.no_match()

    end = int(np.nanargmin(last_row)) + 1
    cost = float(matrix[-1, end])
    if not np.isfinite(cost):
        return SearchReport.no_match()

    path = optimal_warping_path(matrix, end)
    start = path[0].y_index

    return SearchReport(start - 1, end - 1, cost, 0, 1)
