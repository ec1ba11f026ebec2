"""
Tests for the point-wise distances and local cost matrices.
"""
import numpy as np
import pytest

from motionsearch.enums.algorithm import DistanceMetric
from motionsearch.model.core.distance import (
    manhattan_distance,
    euclidean_distance,
    squared_euclidean_distance,
    local_cost_matrix,
)
from motionsearch.model.core.errors import InvalidInputError


ALL_METRICS = [DistanceMetric.MANHATTAN, DistanceMetric.EUCLIDEAN, DistanceMetric.SQUARED_EUCLIDEAN]


# ============================================================================
# Point-wise distances
# ============================================================================

class TestPointDistances:
    def test_known_values(self):
        x = [0.0, 0.0]
        y = [3.0, 4.0]

        assert manhattan_distance(x, y) == 7.0
        assert euclidean_distance(x, y) == 5.0
        assert squared_euclidean_distance(x, y) == 25.0

    def test_enum_members_are_callable(self):
        assert DistanceMetric.MANHATTAN([1.0, 2.0], [2.0, 0.0]) == 3.0
        assert DistanceMetric.EUCLIDEAN([1.0], [4.0]) == 3.0
        assert DistanceMetric.SQUARED_EUCLIDEAN([1.0], [4.0]) == 9.0

    @pytest.mark.parametrize("metric", ALL_METRICS)
    def test_non_negative_and_symmetric(self, metric):
        rng = np.random.default_rng(0)
        for _ in range(20):
            x = rng.normal(size=3)
            y = rng.normal(size=3)
            assert metric(x, y) >= 0
            assert metric(x, y) == pytest.approx(metric(y, x))

    @pytest.mark.parametrize("metric", ALL_METRICS)
    def test_zero_on_equal_inputs(self, metric):
        x = [1.5, -2.0, 3.25]
        assert metric(x, x) == 0.0

    @pytest.mark.parametrize("metric", [DistanceMetric.MANHATTAN, DistanceMetric.EUCLIDEAN])
    def test_true_metrics_satisfy_triangle_inequality(self, metric):
        rng = np.random.default_rng(1)
        for _ in range(50):
            x, y, z = rng.normal(size=(3, 4))
            assert metric(x, z) <= metric(x, y) + metric(y, z) + 1e-12

    def test_squared_euclidean_violates_triangle_inequality(self):
        x, y, z = [0.0], [1.0], [2.0]
        # 4 > 1 + 1
        assert squared_euclidean_distance(x, z) > squared_euclidean_distance(x, y) + squared_euclidean_distance(y, z)

    def test_different_lengths_raise(self):
        with pytest.raises(InvalidInputError):
            euclidean_distance([0.0, 1.0], [0.0])


# ============================================================================
# Local cost matrix
# ============================================================================

class TestLocalCostMatrix:
    @pytest.mark.parametrize("metric", ALL_METRICS)
    def test_matches_point_distances(self, metric):
        rng = np.random.default_rng(2)
        x = rng.normal(size=(4, 3))
        y = rng.normal(size=(6, 3))

        matrix = local_cost_matrix(x, y, metric)

        assert matrix.shape == (4, 6)
        for i in range(4):
            for j in range(6):
                assert matrix[i, j] == pytest.approx(metric(x[i], y[j]))

    def test_custom_callable(self):
        x = np.array([[0.0, 0.0], [1.0, 1.0]])
        y = np.array([[3.0, 1.0]])

        chebyshev = lambda u, v: float(np.max(np.abs(u - v)))
        matrix = local_cost_matrix(x, y, chebyshev)

        assert matrix[:, 0].tolist() == [3.0, 2.0]

    @pytest.mark.parametrize("metric", ALL_METRICS)
    def test_masked_samples_stay_infinite(self, metric):
        x = np.array([[1.0, 2.0]])
        y = np.array([[0.0, 0.0], [np.inf, np.inf]])

        matrix = local_cost_matrix(x, y, metric)

        assert np.isfinite(matrix[0, 0])
        assert np.isposinf(matrix[0, 1])
