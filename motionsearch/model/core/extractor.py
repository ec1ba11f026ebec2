"""
Greedy extraction of non-overlapping movement patterns from a recording.

Every iteration searches all templates against the recording in parallel, keeps
the cheapest match and masks its range with +inf so that it cannot be matched
again. The loop stops once the best match is no longer below the threshold.
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence
import logging
import time

import numpy as np

from motionsearch.config import config
from motionsearch.enums.algorithm import (
    LocalWeights,
    GeneralizationStrategy,
    InterpolationStrategy,
    SearchStrategy,
)
from motionsearch.enums.extraction import SuppressionPolicy, ExtractorState
from motionsearch.enums.logger import LoggerLevel
from motionsearch.model.core.distance import MetricLike
from motionsearch.model.core.reports import (
    SearchReport,
    Pattern,
    PatternRange,
    CalculationsReport,
    TimeReport,
    PerformanceReport,
    ExtractionReport,
)
from motionsearch.model.core.sequence import as_sequence, check_same_channels
from motionsearch.model.core.subsequence import search_pruned, search_exhaustive
from motionsearch.model.core.utils import round_half_up, clamp
from motionsearch.model.templates.template import Template


class ExtractionListener:
    """
    Observer of an extraction run. All methods are no-ops; override the ones you need.

    Events are delivered on the thread driving the extractor, one at a time and in
    iteration order.
    """

    def on_next_iteration(self, iteration_id: int) -> None:
        pass

    def on_pattern_found(self, pattern: Pattern, calculations: CalculationsReport) -> None:
        """
        Best window of one template in the current iteration (cost may be +inf).

        calculations is the cumulative total over every iteration so far, this one
        included, not the counts of this template's search alone.
        """
        pass

    def on_best_pattern_chosen(self, pattern: Pattern, calculations: CalculationsReport) -> None:
        """Pattern accepted at the end of an iteration, with the same cumulative calculations."""
        pass

    def on_finished(self, time_in_milliseconds: float) -> None:
        pass


class CallbackListener(ExtractionListener):
    """ExtractionListener built from optional plain callables."""

    def __init__(
        self,
        on_next_iteration: Optional[Callable[[int], None]] = None,
        on_pattern_found: Optional[Callable[[Pattern, CalculationsReport], None]] = None,
        on_best_pattern_chosen: Optional[Callable[[Pattern, CalculationsReport], None]] = None,
        on_finished: Optional[Callable[[float], None]] = None,
    ) -> None:
        self._on_next_iteration = on_next_iteration
        self._on_pattern_found = on_pattern_found
        self._on_best_pattern_chosen = on_best_pattern_chosen
        self._on_finished = on_finished

    def on_next_iteration(self, iteration_id: int) -> None:
        if self._on_next_iteration is not None:
            self._on_next_iteration(iteration_id)

    def on_pattern_found(self, pattern: Pattern, calculations: CalculationsReport) -> None:
        if self._on_pattern_found is not None:
            self._on_pattern_found(pattern, calculations)

    def on_best_pattern_chosen(self, pattern: Pattern, calculations: CalculationsReport) -> None:
        if self._on_best_pattern_chosen is not None:
            self._on_best_pattern_chosen(pattern, calculations)

    def on_finished(self, time_in_milliseconds: float) -> None:
        if self._on_finished is not None:
            self._on_finished(time_in_milliseconds)


class GreedyPatternExtractor:
    def __init__(
        self,
        templates: Sequence[Template],
        metric: MetricLike = config.DISTANCE_METRIC,
        local_weights: LocalWeights = config.LOCAL_WEIGHTS,
        global_constraint_width_factor: float = config.GLOBAL_CONSTRAINT_WIDTH_FACTOR,
        generalization_strategy: GeneralizationStrategy = config.GENERALIZATION_STRATEGY,
        down_sampling_step: int = config.DOWN_SAMPLING_STEP,
        length_tolerance_factor: float = config.LENGTH_TOLERANCE_FACTOR,
        interpolation_strategy: InterpolationStrategy = config.INTERPOLATION_STRATEGY,
        lower_bound_radius: float = config.LOWER_BOUND_RADIUS,
        policy: SuppressionPolicy = config.SUPPRESSION_POLICY,
        search_strategy: Optional[SearchStrategy] = None,
        cost_threshold: Optional[float] = None,
        min_length_factor: float = config.MIN_LENGTH_FACTOR,
        overlap_factor: float = config.OVERLAP_FACTOR,
        listener: Optional[ExtractionListener] = None,
        max_workers: Optional[int] = config.MAX_WORKERS,
    ) -> None:
        """
        Configure the extraction loop.

        Args:
            templates: labeled reference movements, all with the same number of channels
            metric ... lower_bound_radius: hyperparameters forwarded to the subsequence search
            policy: GLOBAL_THRESHOLD (single shared mask) or LENGTH_RATIO (per-template masks)
            search_strategy: PRUNED or EXHAUSTIVE; defaults to PRUNED for GLOBAL_THRESHOLD
                and EXHAUSTIVE for LENGTH_RATIO
            cost_threshold: stop threshold; defaults to config.COST_THRESHOLD for
                GLOBAL_THRESHOLD and config.LENGTH_RATIO_THRESHOLD for LENGTH_RATIO
            min_length_factor: LENGTH_RATIO only, shortest accepted match as a fraction
                of the reference length, clamped to [0.01, 0.99]
            overlap_factor: LENGTH_RATIO only, how much of each end of a match is left
                unmasked, clamped to [0.01, 0.99]
            listener: receives progress events
            max_workers: thread pool size, defaults to one thread per template
        """
        # Logging
        self.logger = logging.getLogger("GreedyPatternExtractor")

        self.templates: List[Template] = list(templates)
        for template in self.templates[1:]:
            check_same_channels(self.templates[0].data, template.data)

        # Search parameters
        self.metric = metric
        self.local_weights = local_weights
        self.global_constraint_width_factor = global_constraint_width_factor
        self.generalization_strategy = generalization_strategy
        self.down_sampling_step = down_sampling_step
        self.length_tolerance_factor = length_tolerance_factor
        self.interpolation_strategy = interpolation_strategy
        self.lower_bound_radius = lower_bound_radius

        # Policy parameters
        self.policy = policy
        if search_strategy is None:
            search_strategy = (
                SearchStrategy.EXHAUSTIVE
                if policy == SuppressionPolicy.LENGTH_RATIO
                else SearchStrategy.PRUNED
            )
        self.search_strategy = search_strategy
        if cost_threshold is None:
            cost_threshold = (
                config.LENGTH_RATIO_THRESHOLD
                if policy == SuppressionPolicy.LENGTH_RATIO
                else config.COST_THRESHOLD
            )
        self.cost_threshold = float(cost_threshold)
        self.min_length_factor = clamp(float(min_length_factor), 0.01, 0.99)
        self.overlap_factor = clamp(float(overlap_factor), 0.01, 0.99)

        self.listener = listener if listener is not None else ExtractionListener()
        self.max_workers = max_workers

        # Run state, set by start()
        self.state: Optional[ExtractorState] = None
        self.iteration_id: int = 0
        self.patterns: List[Pattern] = []
        self.working_copies: List[np.ndarray] = []
        self.calculations = CalculationsReport()
        self.search_time_ms: float = 0.0
        self.elapsed_time_ms: float = 0.0
        self._start_time: float = 0.0

    def log_info(self, msg: str, level: LoggerLevel = LoggerLevel.INFO) -> None:
        """
        Logs information to the extractor's logger.

        Args:
            msg (str):
                Message to be logged.
            level (LoggerLevel, optional):
                Level on which the message should be logged.
                Defaults to "INFO".
        """
        match level:
            case LoggerLevel.INFO:
                self.logger.info(msg, extra={"type": "INFO"})
            case LoggerLevel.DEBUG:
                self.logger.debug(msg, extra={"type": "DEBUG"})
            case LoggerLevel.WARNING:
                self.logger.warning(msg, extra={"type": "WARNING"})
            case LoggerLevel.ERROR:
                self.logger.error(msg, extra={"type": "ERROR"})
            case LoggerLevel.CRITICAL:
                self.logger.critical(msg, extra={"type": "CRITICAL"})

    # ------------------------------------------------------------------ run control

    def start(self, target) -> None:
        """
        Reset the run state for a new target recording.

        The target is copied; the caller's data is never masked.
        """
        target = as_sequence(target, "target")
        for template in self.templates:
            check_same_channels(template.data, target)

        if self.policy == SuppressionPolicy.LENGTH_RATIO:
            self.working_copies = [target.copy() for _ in self.templates]
        else:
            self.working_copies = [target]

        self.state = ExtractorState.RUNNING
        self.iteration_id = 0
        self.patterns = []
        self.calculations = CalculationsReport()
        self.search_time_ms = 0.0
        self.elapsed_time_ms = 0.0
        self._start_time = time.perf_counter()

        self.log_info(
            f"Extraction started: {len(self.templates)} templates, target of {target.shape[0]} samples, "
            f"policy {self.policy.name}, search {self.search_strategy.name}",
            LoggerLevel.DEBUG,
        )

    def step(self) -> bool:
        """
        Run one iteration.

        Returns:
            bool: True while the extractor is still RUNNING after the iteration
        """
        if self.state is None:
            raise RuntimeError("Extractor not started! Call start() first.")
        if self.state == ExtractorState.FINISHED:
            return False

        iteration_id = self.iteration_id
        self.iteration_id += 1
        self.listener.on_next_iteration(iteration_id)
        self.log_info(f"Iteration #{iteration_id}", LoggerLevel.DEBUG)

        reports = self._search_all()

        candidates = [
            self._candidate_pattern(template, report)
            for template, report in zip(self.templates, reports)
        ]
        for report in reports:
            self.calculations = self.calculations + CalculationsReport(
                report.pruned_out, report.not_pruned_out
            )
        for pattern in candidates:
            self.listener.on_pattern_found(pattern, self.calculations)

        if not candidates:
            self._finish()
            return False

        best_index = min(range(len(candidates)), key=lambda index: candidates[index].cost)
        best_pattern = candidates[best_index]

        match self.policy:
            case SuppressionPolicy.GLOBAL_THRESHOLD:
                self._apply_global_threshold(best_pattern)
            case SuppressionPolicy.LENGTH_RATIO:
                self._apply_length_ratio(best_index, best_pattern)

        return self.state == ExtractorState.RUNNING

    def run(self, target) -> ExtractionReport:
        """Extract every pattern from target and return them with the performance figures."""
        self.start(target)
        while self.step():
            pass
        return self.report()

    def report(self) -> ExtractionReport:
        if self.state == ExtractorState.FINISHED:
            total_ms = self.elapsed_time_ms
        else:
            total_ms = (time.perf_counter() - self._start_time) * 1000

        return ExtractionReport(
            list(self.patterns),
            PerformanceReport(
                self.calculations,
                TimeReport(total_ms, self.search_time_ms),
            ),
        )

    # ------------------------------------------------------------------ iteration internals

    def _working_copy_for(self, template_index: int) -> np.ndarray:
        if self.policy == SuppressionPolicy.LENGTH_RATIO:
            return self.working_copies[template_index]
        return self.working_copies[0]

    def _search(self, template: Template, working_copy: np.ndarray) -> SearchReport:
        match self.search_strategy:
            case SearchStrategy.EXHAUSTIVE:
                return search_exhaustive(
                    template.data,
                    working_copy,
                    self.metric,
                    self.local_weights,
                )
            case SearchStrategy.PRUNED:
                return search_pruned(
                    template.data,
                    working_copy,
                    self.metric,
                    self.local_weights,
                    self.global_constraint_width_factor,
                    self.generalization_strategy,
                    self.down_sampling_step,
                    self.length_tolerance_factor,
                    self.interpolation_strategy,
                    self.lower_bound_radius,
                )

    def _search_all(self) -> List[SearchReport]:
        if not self.templates:
            return []

        search_start = time.perf_counter()

        # working copies are only read here, masking happens after every future is joined
        max_workers = self.max_workers or len(self.templates)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [
                executor.submit(self._search, template, self._working_copy_for(index))
                for index, template in enumerate(self.templates)
            ]
            reports = [future.result() for future in futures]

        self.search_time_ms += (time.perf_counter() - search_start) * 1000
        return reports

    def _candidate_pattern(self, template: Template, report: SearchReport) -> Pattern:
        cost = report.cost
        if self.policy == SuppressionPolicy.LENGTH_RATIO:
            cost = cost / template.length
        return Pattern(
            template.type,
            template.execution,
            PatternRange(report.start, report.end_inclusive),
            float(cost),
        )

    def _apply_global_threshold(self, best_pattern: Pattern) -> None:
        if not best_pattern.cost <= self.cost_threshold:
            self._finish()
            return

        self.patterns.append(best_pattern)
        self._mask(self.working_copies[0], best_pattern.range.start, best_pattern.range.end_inclusive)

        self.log_info(
            f"Pattern accepted: type {best_pattern.type.id}, execution {best_pattern.execution.id}, "
            f"range [{best_pattern.range.start}, {best_pattern.range.end_inclusive}], "
            f"cost {best_pattern.cost:.4f}"
        )
        self.listener.on_best_pattern_chosen(best_pattern, self.calculations)

    def _apply_length_ratio(self, best_index: int, best_pattern: Pattern) -> None:
        if not best_pattern.cost < self.cost_threshold:
            self._finish()
            return

        template = self.templates[best_index]
        min_length = round_half_up(self.min_length_factor * template.length)
        start, end_inclusive = self.suppression_range(best_pattern.range)

        if best_pattern.range.length >= min_length:
            self.patterns.append(best_pattern)
            for working_copy in self.working_copies:
                self._mask(working_copy, start, end_inclusive)

            self.log_info(
                f"Pattern accepted: type {best_pattern.type.id}, execution {best_pattern.execution.id}, "
                f"range [{best_pattern.range.start}, {best_pattern.range.end_inclusive}], "
                f"cost {best_pattern.cost:.4f}"
            )
            self.listener.on_best_pattern_chosen(best_pattern, self.calculations)
        else:
            # other templates may still claim this span
            self._mask(self.working_copies[best_index], start, end_inclusive)

            self.log_info(
                f"Pattern rejected: type {best_pattern.type.id} matched {best_pattern.range.length} "
                f"samples, shorter than {min_length}; masked [{start}, {end_inclusive}] for this template only",
                LoggerLevel.DEBUG,
            )

    def suppression_range(self, pattern_range: PatternRange):
        """
        Overlap-trimmed range masked by the LENGTH_RATIO policy.

        Each end of the match is pulled inwards by overlap_factor of its length, so
        neighbouring patterns may still claim the edges.
        """
        beta = self.overlap_factor
        start = pattern_range.start
        end_inclusive = pattern_range.end_inclusive

        start_approx = round_half_up((1 - beta) * start + beta * end_inclusive)
        end_approx = round_half_up(beta * start + (1 - beta) * end_inclusive)

        return min(start_approx, end_approx), max(start_approx, end_approx)

    @staticmethod
    def _mask(working_copy: np.ndarray, start: int, end_inclusive: int) -> None:
        working_copy[start : end_inclusive + 1, :] = np.inf

    def _finish(self) -> None:
        self.state = ExtractorState.FINISHED
        self.elapsed_time_ms = (time.perf_counter() - self._start_time) * 1000

        self.log_info(
            f"Extraction finished after {self.iteration_id} iterations: {len(self.patterns)} patterns, "
            f"{self.calculations.pruned_out}/{self.calculations.total} windows pruned, "
            f"{self.elapsed_time_ms:.1f} ms"
        )
        self.listener.on_finished(self.elapsed_time_ms)
