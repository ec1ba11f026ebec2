"""
Tests for the pruned sliding-window search and the exhaustive open-begin search.
"""
import numpy as np
import pytest

from motionsearch.enums.algorithm import DistanceMetric, InterpolationStrategy, LocalWeights
from motionsearch.model.core.errors import InvalidInputError, UnsupportedMetricError
from motionsearch.model.core.reports import SearchReport
from motionsearch.model.core.subsequence import search_exhaustive, search_pruned, window_lengths


REFERENCE = [-10.0, 0.0, 10.0, 0.0, -10.0]


def _make_target(padding=10):
    """REFERENCE embedded between two runs of zeros, occupying [padding, padding + 4]."""
    return np.concatenate([np.zeros(padding), REFERENCE, np.zeros(padding)]).reshape(-1, 1)


def _exact_pruned(reference, target, **kwargs):
    parameters = dict(
        metric=DistanceMetric.EUCLIDEAN,
        local_weights=LocalWeights.SYMMETRIC,
        global_constraint_width_factor=1.0,
        down_sampling_step=1,
        length_tolerance_factor=0.0,
        interpolation_strategy=InterpolationStrategy.TO_BIGGER,
        lower_bound_radius=0.1,
    )
    parameters.update(kwargs)
    return search_pruned(reference, target, **parameters)


# ============================================================================
# Window lengths
# ============================================================================

class TestWindowLengths:
    def test_default_tolerance(self):
        assert window_lengths(5, 0.25) == (4, 6)
        assert window_lengths(10, 0.25) == (8, 13)

    def test_zero_tolerance(self):
        assert window_lengths(7, 0.0) == (7, 7)

    def test_tolerance_is_clamped(self):
        assert window_lengths(10, 2.0) == (2, 20)
        assert window_lengths(10, -1.0) == (10, 10)

    @pytest.mark.parametrize(
        "reference_length, tolerance, expected",
        [(1, 0.0, (2, 2)), (1, 0.99, (2, 2)), (2, 0.99, (2, 4)), (3, 0.99, (2, 6))],
    )
    def test_windows_have_at_least_two_samples(self, reference_length, tolerance, expected):
        assert window_lengths(reference_length, tolerance) == expected


# ============================================================================
# Pruned search
# ============================================================================

class TestSearchPruned:
    def test_finds_embedded_copy(self):
        report = _exact_pruned(REFERENCE, _make_target())

        assert report.cost == 0.0
        assert report.start == 10
        assert report.end_inclusive == 14
        assert report.pruned_out + report.not_pruned_out == 21

    def test_pruning_happens_after_exact_match(self):
        report = _exact_pruned(REFERENCE, _make_target())

        # every window after the exact match has a bound >= 0
        assert report.pruned_out >= 10

    def test_stride_counts_windows(self):
        report = _exact_pruned(REFERENCE, _make_target(), down_sampling_step=2)

        # starts 0, 2, ..., 20 with a single window length each
        assert report.pruned_out + report.not_pruned_out == 11

    def test_cost_is_normalized_by_window_length(self):
        target = np.ones(5).reshape(-1, 1)

        report = _exact_pruned(np.zeros(5), target, metric=DistanceMetric.MANHATTAN)

        assert report.start == 0
        assert report.end_inclusive == 4
        assert report.cost == pytest.approx(1.0)

    def test_masked_region_is_avoided(self):
        target = _make_target()
        target[10:15] = np.inf

        report = _exact_pruned(REFERENCE, target)

        assert np.isfinite(report.cost)
        assert report.end_inclusive < 10 or report.start > 14

    def test_fully_masked_target_has_no_match(self):
        target = np.full((20, 1), np.inf)

        report = _exact_pruned(REFERENCE, target)

        assert report.start == 0
        assert report.end_inclusive == 0
        assert np.isposinf(report.cost)

    def test_target_shorter_than_windows(self):
        report = _exact_pruned(REFERENCE, np.zeros((3, 1)))

        assert report == SearchReport.no_match()

    def test_default_band_and_tolerance(self):
        reference = np.repeat(REFERENCE, 4)
        target = np.concatenate([np.zeros(30), reference, np.zeros(30)]).reshape(-1, 1)

        report = search_pruned(reference, target, down_sampling_step=1)

        assert report.cost == pytest.approx(0.0)
        assert report.start <= 40 <= report.end_inclusive

    def test_callable_metric_is_rejected(self):
        with pytest.raises(UnsupportedMetricError):
            _exact_pruned(REFERENCE, _make_target(), metric=lambda u, v: 0.0)

    def test_callable_metric_is_rejected_without_windows(self):
        with pytest.raises(UnsupportedMetricError):
            _exact_pruned(REFERENCE, np.zeros((3, 1)), metric=lambda u, v: 0.0)

    def test_single_sample_reference(self):
        target = np.zeros((10, 1))
        target[4:6] = 5.0

        report = _exact_pruned(
            [5.0],
            target,
            length_tolerance_factor=0.99,
            interpolation_strategy=InterpolationStrategy.TO_SMALLER,
        )

        assert (report.start, report.end_inclusive) == (4, 5)
        assert report.cost == 0.0

    def test_downsampled_window_cannot_skip_masked_samples(self):
        # [0, 3] resampled to two samples reads only its ends, which match exactly
        target = np.array([0.0, np.inf, np.inf, 3.0, 9.0, 9.0, 9.0, 9.0]).reshape(-1, 1)

        report = _exact_pruned(
            [0.0, 3.0],
            target,
            length_tolerance_factor=0.99,
            interpolation_strategy=InterpolationStrategy.TO_SMALLER,
        )

        assert np.isfinite(report.cost)
        assert report.start >= 3

    def test_channel_mismatch_raises(self):
        with pytest.raises(InvalidInputError):
            search_pruned(np.zeros((5, 2)), np.zeros((20, 3)))


# ============================================================================
# Exhaustive search
# ============================================================================

class TestSearchExhaustive:
    def test_finds_embedded_copy(self):
        report = search_exhaustive(REFERENCE, _make_target())

        assert report.cost == 0.0
        assert report.start == 10
        assert report.end_inclusive == 14
        assert report.pruned_out == 0
        assert report.not_pruned_out == 1

    @pytest.mark.parametrize("metric", list(DistanceMetric))
    def test_multichannel_copy_in_noise(self, metric):
        rng = np.random.default_rng(9)
        target = rng.normal(size=(60, 3))
        reference = rng.normal(size=(8, 3)) * 5
        target[23:31] = reference

        report = search_exhaustive(reference, target, metric)

        assert report.cost == 0.0
        midpoint = (report.start + report.end_inclusive) / 2
        assert 23 <= midpoint <= 30

    def test_custom_metric_is_accepted(self):
        chebyshev = lambda u, v: float(np.max(np.abs(u - v)))

        report = search_exhaustive(REFERENCE, _make_target(), chebyshev)

        assert report.cost == 0.0
        assert (report.start, report.end_inclusive) == (10, 14)

    def test_masked_copy_is_not_found(self):
        target = _make_target()
        target[10:15] = np.inf

        report = search_exhaustive(REFERENCE, target)

        assert report.cost > 0.0
        assert report.end_inclusive < 10 or report.start > 14

    def test_fully_masked_target_has_no_match(self):
        report = search_exhaustive(REFERENCE, np.full((20, 1), np.inf))
        assert report == SearchReport.no_match()
