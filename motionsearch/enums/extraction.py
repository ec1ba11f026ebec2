from enum import Enum


class SuppressionPolicy(Enum):
    """
    Termination and region-suppression policy of the greedy extractor.

    GLOBAL_THRESHOLD -> stop when the best cost exceeds the cost threshold,
                        mask every accepted range in one shared copy.
    LENGTH_RATIO     -> compare costs normalized by reference length, stop at
                        the threshold, reject too-short matches and mask
                        overlap-trimmed ranges per template.
    """

    GLOBAL_THRESHOLD = 0
    LENGTH_RATIO = 1


class ExtractorState(Enum):
    RUNNING = 0
    FINISHED = 1
