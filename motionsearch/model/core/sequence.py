"""
Validation of multichannel sequences.

A sequence is a (n_samples, n_channels) float64 array. One-dimensional input
is treated as a single-channel sequence.
"""

from __future__ import annotations
from typing import Sequence, Union

import numpy as np

from motionsearch.model.core.errors import InvalidInputError

ArrayLike = Union[np.ndarray, Sequence[Sequence[float]], Sequence[float]]


def as_sequence(data: ArrayLike, name: str = "sequence") -> np.ndarray:
    """
    Convert data to a validated (n_samples, n_channels) float64 array.

    Args:
        data: rows of equal length, or a flat list of single-channel samples
        name: used in error messages

    Returns:
        np.ndarray: float64 array of shape (n_samples, n_channels)

    Raises:
        InvalidInputError: empty data, rows of inconsistent length, more than 2 dimensions
    """
    if not isinstance(data, np.ndarray):
        rows = list(data)
        if len(rows) == 0:
            raise InvalidInputError(f"{name} is empty.")
        if any(np.ndim(row) > 0 for row in rows):
            n_channels = np.size(rows[0])
            for index, row in enumerate(rows):
                if np.ndim(row) != 1 or np.size(row) != n_channels:
                    raise InvalidInputError(
                        f"All rows in {name} must have {n_channels} channels, "
                        f"row {index} has {np.size(row)}."
                    )
        data = rows

    sequence = np.array(data, dtype=np.float64)

    if sequence.ndim == 1:
        sequence = sequence.reshape(-1, 1)
    if sequence.ndim != 2:
        raise InvalidInputError(
            f"{name} must be 2-dimensional (n_samples, n_channels), got shape {sequence.shape}."
        )
    if sequence.shape[0] == 0 or sequence.shape[1] == 0:
        raise InvalidInputError(f"{name} is empty, got shape {sequence.shape}.")

    return sequence


def check_same_channels(x: np.ndarray, y: np.ndarray) -> None:
    """Raise InvalidInputError if two sequences do not share their channel count."""
    if x.shape[1] != y.shape[1]:
        raise InvalidInputError(
            f"Sequences must have the same number of channels, got {x.shape[1]} and {y.shape[1]}."
        )
