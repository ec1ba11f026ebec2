from __future__ import annotations
from typing import Callable, Optional, Sequence

from motionsearch.config import config
from motionsearch.enums.algorithm import (
    LocalWeights,
    GeneralizationStrategy,
    InterpolationStrategy,
    SearchStrategy,
)
from motionsearch.enums.extraction import SuppressionPolicy
from motionsearch.model.core.algorithm import dtw_cost
from motionsearch.model.core.distance import MetricLike
from motionsearch.model.core.extractor import GreedyPatternExtractor, CallbackListener, ExtractionListener
from motionsearch.model.core.reports import Pattern, CalculationsReport, ExtractionReport, SearchReport
from motionsearch.model.core.subsequence import search_pruned, search_exhaustive
from motionsearch.model.templates.template import Template


def align_cost(
    a,
    b,
    metric: MetricLike = config.DISTANCE_METRIC,
    local_weights: LocalWeights = config.LOCAL_WEIGHTS,
    global_constraint_width_factor: float = config.GLOBAL_CONSTRAINT_WIDTH_FACTOR,
    generalization_strategy: GeneralizationStrategy = config.GENERALIZATION_STRATEGY,
) -> float:
    """Constrained DTW cost between two whole sequences."""
    return dtw_cost(a, b, metric, local_weights, global_constraint_width_factor, generalization_strategy)


def extract_patterns(
    target,
    templates: Sequence[Template],
    metric: MetricLike = config.DISTANCE_METRIC,
    local_weights: LocalWeights = config.LOCAL_WEIGHTS,
    policy: SuppressionPolicy = config.SUPPRESSION_POLICY,
    cost_threshold: Optional[float] = None,
    min_length_factor: float = config.MIN_LENGTH_FACTOR,
    overlap_factor: float = config.OVERLAP_FACTOR,
    search_strategy: Optional[SearchStrategy] = None,
    on_next_iteration: Optional[Callable[[int], None]] = None,
    on_pattern_found: Optional[Callable[[Pattern, CalculationsReport], None]] = None,
    on_best_pattern_chosen: Optional[Callable[[Pattern, CalculationsReport], None]] = None,
    on_finished: Optional[Callable[[float], None]] = None,
    **search_parameters,
) -> ExtractionReport:
    """
    Find every occurrence of the templates in target.

    Extra keyword arguments (global_constraint_width_factor, generalization_strategy,
    down_sampling_step, length_tolerance_factor, interpolation_strategy,
    lower_bound_radius, max_workers) are forwarded to GreedyPatternExtractor.
    """
    listener = CallbackListener(on_next_iteration, on_pattern_found, on_best_pattern_chosen, on_finished)
    extractor = GreedyPatternExtractor(
        templates,
        metric=metric,
        local_weights=local_weights,
        policy=policy,
        search_strategy=search_strategy,
        cost_threshold=cost_threshold,
        min_length_factor=min_length_factor,
        overlap_factor=overlap_factor,
        listener=listener,
        **search_parameters,
    )
    return extractor.run(target)


class MotionSearchInterface:
    """
    Configuration-backed entry point: hyperparameters are read from config when the
    interface is created and can be changed on the instance afterwards.
    """

    def __init__(self) -> None:
        # Alignment
        self.metric: MetricLike = config.DISTANCE_METRIC
        self.local_weights: LocalWeights = config.LOCAL_WEIGHTS
        self.global_constraint_width_factor: float = config.GLOBAL_CONSTRAINT_WIDTH_FACTOR
        self.generalization_strategy: GeneralizationStrategy = config.GENERALIZATION_STRATEGY

        # Pruned search
        self.down_sampling_step: int = config.DOWN_SAMPLING_STEP
        self.length_tolerance_factor: float = config.LENGTH_TOLERANCE_FACTOR
        self.interpolation_strategy: InterpolationStrategy = config.INTERPOLATION_STRATEGY
        self.lower_bound_radius: float = config.LOWER_BOUND_RADIUS

        # Extraction
        self.policy: SuppressionPolicy = config.SUPPRESSION_POLICY
        self.cost_threshold: Optional[float] = None
        self.min_length_factor: float = config.MIN_LENGTH_FACTOR
        self.overlap_factor: float = config.OVERLAP_FACTOR
        self.max_workers: Optional[int] = config.MAX_WORKERS

        self.templates: list[Template] = []

    def add_template(self, template: Template) -> None:
        self.templates.append(template)

    def align_cost(self, a, b) -> float:
        return dtw_cost(
            a,
            b,
            self.metric,
            self.local_weights,
            self.global_constraint_width_factor,
            self.generalization_strategy,
        )

    def search_pruned(self, reference, target) -> SearchReport:
        return search_pruned(
            reference,
            target,
            self.metric,
            self.local_weights,
            self.global_constraint_width_factor,
            self.generalization_strategy,
            self.down_sampling_step,
            self.length_tolerance_factor,
            self.interpolation_strategy,
            self.lower_bound_radius,
        )

    def search_exhaustive(self, reference, target) -> SearchReport:
        return search_exhaustive(reference, target, self.metric, self.local_weights)

    def create_extractor(
        self,
        listener: Optional[ExtractionListener] = None,
        search_strategy: Optional[SearchStrategy] = None,
    ) -> GreedyPatternExtractor:
        return GreedyPatternExtractor(
            self.templates,
            metric=self.metric,
            local_weights=self.local_weights,
            global_constraint_width_factor=self.global_constraint_width_factor,
            generalization_strategy=self.generalization_strategy,
            down_sampling_step=self.down_sampling_step,
            length_tolerance_factor=self.length_tolerance_factor,
            interpolation_strategy=self.interpolation_strategy,
            lower_bound_radius=self.lower_bound_radius,
            policy=self.policy,
            search_strategy=search_strategy,
            cost_threshold=self.cost_threshold,
            min_length_factor=self.min_length_factor,
            overlap_factor=self.overlap_factor,
            listener=listener,
            max_workers=self.max_workers,
        )

    def extract_patterns(self, target, listener: Optional[ExtractionListener] = None) -> ExtractionReport:
        if not self.templates:
            raise ValueError("No templates added! Call add_template() first.")

        return self.create_extractor(listener).run(target)
