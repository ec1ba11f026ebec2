"""
Result containers produced by the search and extraction loop.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from motionsearch.model.templates.template import MovementType, MovementExecution
from motionsearch.model.core.utils import round_half_up


@dataclass(frozen=True)
class SearchReport:
    """Best window of one subsequence search, in zero-based target coordinates."""

    start: int
    end_inclusive: int
    cost: float
    pruned_out: int = 0
    not_pruned_out: int = 0

    @classmethod
    def no_match(cls, pruned_out: int = 0, not_pruned_out: int = 0) -> "SearchReport":
        return cls(0, 0, float("inf"), pruned_out, not_pruned_out)


@dataclass(frozen=True)
class PatternRange:
    start: int
    end_inclusive: int

    @property
    def length(self) -> int:
        return self.end_inclusive - self.start + 1

    def overlaps(self, other: "PatternRange") -> bool:
        return self.start <= other.end_inclusive and other.start <= self.end_inclusive


@dataclass(frozen=True)
class Pattern:
    type: MovementType
    execution: MovementExecution
    range: PatternRange
    cost: float


@dataclass(frozen=True)
class CalculationsReport:
    """How many candidate windows were pruned by the lower bound and how many needed a full DTW."""

    pruned_out: int = 0
    not_pruned_out: int = 0

    @property
    def total(self) -> int:
        return self.pruned_out + self.not_pruned_out

    @property
    def gain_percentage(self) -> int:
        if self.total == 0:
            return 0
        return round_half_up(self.pruned_out / self.total * 100)

    def __add__(self, other: "CalculationsReport") -> "CalculationsReport":
        return CalculationsReport(
            self.pruned_out + other.pruned_out,
            self.not_pruned_out + other.not_pruned_out,
        )


@dataclass(frozen=True)
class TimeReport:
    total_in_milliseconds: float = 0.0
    search_in_milliseconds: float = 0.0


@dataclass(frozen=True)
class PerformanceReport:
    calculations: CalculationsReport = field(default_factory=CalculationsReport)
    time: TimeReport = field(default_factory=TimeReport)


@dataclass(frozen=True)
class ExtractionReport:
    patterns: List[Pattern]
    performance: PerformanceReport
