from motionsearch.enums.algorithm import (
    DistanceMetric,
    LocalWeights,
    GeneralizationStrategy,
    InterpolationStrategy,
    SearchStrategy,
)
from motionsearch.enums.extraction import SuppressionPolicy, ExtractorState
from motionsearch.enums.logger import LoggerLevel

__all__ = [
    "DistanceMetric",
    "LocalWeights",
    "GeneralizationStrategy",
    "InterpolationStrategy",
    "SearchStrategy",
    "SuppressionPolicy",
    "ExtractorState",
    "LoggerLevel",
]
