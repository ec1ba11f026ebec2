from motionsearch.enums.algorithm import (
    DistanceMetric,
    LocalWeights,
    GeneralizationStrategy,
    InterpolationStrategy,
)
from motionsearch.enums.extraction import SuppressionPolicy


class config:
    def __init__(self):
        # Alignment
        self.DISTANCE_METRIC = DistanceMetric.EUCLIDEAN
        self.LOCAL_WEIGHTS = LocalWeights.SYMMETRIC
        self.GLOBAL_CONSTRAINT_WIDTH_FACTOR = 0.1  # fraction of max(n, m) - 1, clamped to [0, 1]
        self.GENERALIZATION_STRATEGY = GeneralizationStrategy.DEPENDENT

        # Pruned subsequence search
        self.DOWN_SAMPLING_STEP = 10  # samples between window starts / ends
        self.LENGTH_TOLERANCE_FACTOR = 0.25  # windows from 75% to 125% of the template length
        self.INTERPOLATION_STRATEGY = InterpolationStrategy.TO_SMALLER
        self.LOWER_BOUND_RADIUS = 0.1

        # Extraction loop
        self.SUPPRESSION_POLICY = SuppressionPolicy.GLOBAL_THRESHOLD
        self.COST_THRESHOLD = 0.5  # GLOBAL_THRESHOLD: stop when best cost > threshold
        self.LENGTH_RATIO_THRESHOLD = 0.5  # LENGTH_RATIO: stop when best cost / template length >= threshold
        self.MIN_LENGTH_FACTOR = 0.5  # LENGTH_RATIO: shortest accepted match, fraction of template length
        self.OVERLAP_FACTOR = 0.25  # LENGTH_RATIO: fraction trimmed from each end of a masked match
        self.MAX_WORKERS = None  # None -> one thread per template


config = config()
