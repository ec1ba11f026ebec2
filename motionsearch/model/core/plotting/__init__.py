from motionsearch.model.core.plotting.pattern_plots import (
    plot_patterns,
    plot_cost_matrix,
)

__all__ = [
    "plot_patterns",
    "plot_cost_matrix",
]
