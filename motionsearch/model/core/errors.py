"""
Exceptions raised by the matching engine.
"""


class InvalidInputError(ValueError):
    """Sequence or template data that cannot be aligned (empty, ragged, channel mismatch)."""


class UnsupportedMetricError(NotImplementedError):
    """Operation that needs a metric-specific formula got a metric it has none for."""
