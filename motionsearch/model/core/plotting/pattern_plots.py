"""
Pattern plotting utilities for motionsearch.

Provides visualization of detected patterns over the recording and of the
accumulated cost matrix with its warping path.
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import List, Optional, Sequence

from motionsearch.model.core.algorithm import WarpingPathCell
from motionsearch.model.core.reports import Pattern
from motionsearch.model.core.sequence import as_sequence


def plot_patterns(
    target,
    patterns: Sequence[Pattern],
    title: str = "Detected Patterns",
    sampling_frequency: Optional[float] = None,
    save_path: Optional[str] = None,
    show: bool = True,
    channels_to_plot: Optional[List[int]] = None,
) -> plt.Figure:
    """
    Plot the recording with every detected pattern shaded.

    Args:
        target: recording (n_samples, n_channels)
        patterns: detections, e.g. ExtractionReport.patterns
        title: Plot title
        sampling_frequency: if provided, x axis in seconds instead of samples
        save_path: If provided, save figure to this path
        show: If True, display the figure
        channels_to_plot: List of channel indices to plot (default: all)

    Returns:
        matplotlib Figure object
    """
    target = as_sequence(target, "target")
    n_samples, n_channels = target.shape

    if sampling_frequency:
        x_axis = np.arange(n_samples) / sampling_frequency
        x_label = "Time (s)"
        scale = 1.0 / sampling_frequency
    else:
        x_axis = np.arange(n_samples)
        x_label = "Sample"
        scale = 1.0

    if channels_to_plot is None:
        channels_to_plot = list(range(n_channels))

    n_plot_channels = len(channels_to_plot)

    fig, axes = plt.subplots(
        n_plot_channels, 1,
        figsize=(12, max(3, n_plot_channels * 1.2)),
        sharex=True,
        squeeze=False,
    )
    axes = axes[:, 0]

    # one color per movement type
    type_ids = sorted({pattern.type.id for pattern in patterns})
    cmap = plt.get_cmap("tab10")
    colors = {type_id: cmap(k % 10) for k, type_id in enumerate(type_ids)}

    for i, ch_idx in enumerate(channels_to_plot):
        ax = axes[i]
        ax.plot(x_axis, target[:, ch_idx], "k-", linewidth=0.7)
        ax.set_ylabel(f"Ch {ch_idx}", fontsize=8)
        ax.tick_params(axis="y", labelsize=6)

        for pattern in patterns:
            ax.axvspan(
                pattern.range.start * scale,
                (pattern.range.end_inclusive + 1) * scale,
                alpha=0.25,
                color=colors[pattern.type.id],
            )

    # labels on the top axis only
    for pattern in patterns:
        label = pattern.type.description or f"type {pattern.type.id}"
        axes[0].text(
            pattern.range.start * scale,
            axes[0].get_ylim()[1],
            f"{label}\n{pattern.cost:.3f}",
            fontsize=7,
            va="top",
        )

    axes[-1].set_xlabel(x_label)
    axes[0].set_title(f"{title} ({len(patterns)} found)")
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches="tight")
        print(f"Figure saved to: {save_path}")

    if show:
        plt.show()

    return fig


def plot_cost_matrix(
    matrix: np.ndarray,
    path: Optional[Sequence[WarpingPathCell]] = None,
    title: str = "Accumulated Cost Matrix",
    save_path: Optional[str] = None,
    show: bool = True,
) -> plt.Figure:
    """
    Plot an accumulated cost matrix (boundary row/column dropped) with an optional warping path.

    Infinite cells are left blank.
    """
    costs = np.where(np.isfinite(matrix[1:, 1:]), matrix[1:, 1:], np.nan)

    fig, ax = plt.subplots(figsize=(10, 4))
    image = ax.imshow(costs, aspect="auto", origin="lower", cmap="viridis", interpolation="nearest")
    fig.colorbar(image, ax=ax, label="Accumulated cost")

    if path:
        # path cells are 1-based matrix indices
        ax.plot(
            [cell.y_index - 1 for cell in path],
            [cell.x_index - 1 for cell in path],
            "r-",
            linewidth=1.5,
            label="Warping path",
        )
        ax.legend(loc="upper left", fontsize=8)

    ax.set_xlabel("Target sample")
    ax.set_ylabel("Reference sample")
    ax.set_title(title)
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches="tight")
        print(f"Figure saved to: {save_path}")

    if show:
        plt.show()

    return fig
