"""
Enum classes for the alignment and search hyperparameters.
"""

from enum import Enum

import numpy as np

from motionsearch.model.core.errors import InvalidInputError


class DistanceMetric(Enum):
    """
    Point-wise distance between two feature vectors.

    The value is the name scipy's cdist uses for the same metric, so the
    local cost matrix and the lower bound always agree on the metric kind.

    MANHATTAN           -> sum of absolute differences
    EUCLIDEAN           -> root of the sum of squared differences
    SQUARED_EUCLIDEAN   -> sum of squared differences (not a true metric)
    """

    MANHATTAN = "cityblock"
    EUCLIDEAN = "euclidean"
    SQUARED_EUCLIDEAN = "sqeuclidean"

    def __call__(self, x, y) -> float:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        if x.shape != y.shape:
            raise InvalidInputError(
                f"Vectors must have the same length, got {x.shape} and {y.shape}."
            )

        diff = x - y
        match self:
            case DistanceMetric.MANHATTAN:
                return float(np.sum(np.abs(diff)))
            case DistanceMetric.EUCLIDEAN:
                return float(np.sqrt(np.sum(diff**2)))
            case DistanceMetric.SQUARED_EUCLIDEAN:
                return float(np.sum(diff**2))


class LocalWeights(Enum):
    """
    Step weights (horizontal, vertical, diagonal) of the DTW recurrence.
    """

    SYMMETRIC = (1, 1, 1)
    ASYMMETRIC = (1, 1, 2)

    @property
    def wh(self) -> int:
        return self.value[0]

    @property
    def wv(self) -> int:
        return self.value[1]

    @property
    def wd(self) -> int:
        return self.value[2]


class GeneralizationStrategy(Enum):
    """
    How multichannel sequences are aligned.

    DEPENDENT   -> one alignment over the full d-dimensional vectors
    INDEPENDENT -> one alignment per channel, costs summed
    """

    DEPENDENT = 0
    INDEPENDENT = 1


class InterpolationStrategy(Enum):
    """
    Which sequence of a pair gets resampled when their lengths differ.
    """

    TO_SMALLER = 0
    TO_BIGGER = 1


class SearchStrategy(Enum):
    """
    PRUNED      -> sliding windows, LB_Keogh pruning, constrained DTW
    EXHAUSTIVE  -> open-begin DTW over the whole target, no windowing
    """

    PRUNED = 0
    EXHAUSTIVE = 1
