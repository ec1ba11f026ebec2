"""
Labeled reference movements searched for in a recording.
"""

from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from motionsearch.model.core.sequence import as_sequence


@dataclass(frozen=True)
class MovementType:
    id: int
    description: str = ""


@dataclass(frozen=True)
class MovementExecution:
    id: int
    description: str = ""
    is_correct: bool = True


@dataclass(frozen=True, eq=False)
class Template:
    """
    A reference movement and its labels.

    Args:
        type: which movement this is
        execution: how it was performed (e.g. correct / wrong)
        data: (n_samples, n_channels) recording of the movement, validated and copied
    """

    type: MovementType
    execution: MovementExecution
    data: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", as_sequence(self.data, name="template data"))

    @property
    def length(self) -> int:
        return self.data.shape[0]

    @property
    def num_channels(self) -> int:
        return self.data.shape[1]
