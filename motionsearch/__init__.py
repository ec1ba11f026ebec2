"""
motionsearch: locate labeled reference movements inside a continuous multichannel recording.
"""

from motionsearch.enums import (
    DistanceMetric,
    LocalWeights,
    GeneralizationStrategy,
    InterpolationStrategy,
    SearchStrategy,
    SuppressionPolicy,
    ExtractorState,
)
from motionsearch.model.core.algorithm import (
    dtw_cost,
    accumulated_cost_matrix,
    optimal_warping_path,
    global_constraint_width,
)
from motionsearch.model.core.distance import (
    manhattan_distance,
    euclidean_distance,
    squared_euclidean_distance,
)
from motionsearch.model.core.errors import InvalidInputError, UnsupportedMetricError
from motionsearch.model.core.extractor import GreedyPatternExtractor, ExtractionListener, CallbackListener
from motionsearch.model.core.interpolation import linear_interpolate, linear_interpolate_pair
from motionsearch.model.core.lower_bound import Envelope, envelope_of, keogh_lower_bound
from motionsearch.model.core.reports import (
    SearchReport,
    Pattern,
    PatternRange,
    CalculationsReport,
    PerformanceReport,
    ExtractionReport,
)
from motionsearch.model.core.subsequence import search_pruned, search_exhaustive
from motionsearch.model.interface import align_cost, extract_patterns, MotionSearchInterface
from motionsearch.model.templates import Template, MovementType, MovementExecution

__all__ = [
    "DistanceMetric",
    "LocalWeights",
    "GeneralizationStrategy",
    "InterpolationStrategy",
    "SearchStrategy",
    "SuppressionPolicy",
    "ExtractorState",
    "dtw_cost",
    "accumulated_cost_matrix",
    "optimal_warping_path",
    "global_constraint_width",
    "manhattan_distance",
    "euclidean_distance",
    "squared_euclidean_distance",
    "InvalidInputError",
    "UnsupportedMetricError",
    "GreedyPatternExtractor",
    "ExtractionListener",
    "CallbackListener",
    "linear_interpolate",
    "linear_interpolate_pair",
    "Envelope",
    "envelope_of",
    "keogh_lower_bound",
    "SearchReport",
    "Pattern",
    "PatternRange",
    "CalculationsReport",
    "PerformanceReport",
    "ExtractionReport",
    "search_pruned",
    "search_exhaustive",
    "align_cost",
    "extract_patterns",
    "MotionSearchInterface",
    "Template",
    "MovementType",
    "MovementExecution",
]
