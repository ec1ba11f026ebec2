"""
Smoke tests for the plotting helpers, rendered off-screen.
"""
import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np

from motionsearch.model.core.algorithm import accumulated_cost_matrix, optimal_warping_path
from motionsearch.model.core.plotting import plot_cost_matrix, plot_patterns
from motionsearch.model.core.reports import Pattern, PatternRange
from motionsearch.model.templates.template import MovementExecution, MovementType


def _make_pattern(type_id, start, end_inclusive):
    return Pattern(MovementType(type_id), MovementExecution(1), PatternRange(start, end_inclusive), 0.1)


class TestPlotPatterns:
    def test_one_axis_per_channel(self):
        target = np.random.default_rng(10).normal(size=(100, 3))
        patterns = [_make_pattern(1, 10, 20), _make_pattern(2, 50, 70)]

        fig = plot_patterns(target, patterns, show=False)

        assert len(fig.axes) == 3
        plt.close(fig)

    def test_channel_subset_and_save(self, tmp_path):
        target = np.random.default_rng(11).normal(size=(100, 3))
        save_path = tmp_path / "patterns.png"

        fig = plot_patterns(
            target,
            [_make_pattern(1, 10, 20)],
            sampling_frequency=50.0,
            save_path=str(save_path),
            show=False,
            channels_to_plot=[2],
        )

        assert len(fig.axes) == 1
        assert save_path.exists()
        plt.close(fig)


class TestPlotCostMatrix:
    def test_with_path(self, tmp_path):
        reference = [0.0, 1.0, 2.0]
        target = [5.0, 0.0, 1.0, 2.0, 5.0]
        matrix = accumulated_cost_matrix(reference, target)
        path = optimal_warping_path(matrix, 4)
        save_path = tmp_path / "matrix.png"

        fig = plot_cost_matrix(matrix, path, save_path=str(save_path), show=False)

        assert save_path.exists()
        plt.close(fig)
