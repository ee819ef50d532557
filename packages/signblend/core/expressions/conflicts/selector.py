"""Strategy selection for articulator conflicts.

This module turns a ConflictAnalysis and its ConflictContext into a concrete
ResolutionStrategy: the rule table names the resolution family and blend
ratio, and the analysis fills in the family's derived parameters.
"""

from __future__ import annotations

import logging
import math

from signblend.core.expressions.conflicts.rules import find_rule
from signblend.core.expressions.models.conflict import ConflictAnalysis, ConflictContext
from signblend.core.expressions.models.enum import (
    CoordinationMode,
    Easing,
    Priority,
    RulePriority,
    Side,
    SyncMode,
)
from signblend.core.expressions.models.strategy import (
    AdaptationParameters,
    AlternationSequence,
    AlternationTiming,
    BlendWeights,
    ComponentCoordination,
    ComponentDistribution,
    ComponentSplitStrategy,
    EmotionPriorityStrategy,
    GrammarPriorityStrategy,
    MutualReinforcementStrategy,
    ResolutionStrategy,
    SideWeights,
    SmoothingFactors,
    SynchronizationParameters,
    TemporalAlternationStrategy,
    TransitionParameters,
    WeightedBlendStrategy,
)

logger = logging.getLogger(__name__)

# Points above this impact are kept by grammar
CRITICAL_IMPACT = 0.6


class StrategySelector:
    """Chooses and parameterizes a resolution strategy.

    Responsibilities:
    - Look up the rule for (function, articulator, emotion)
    - Fall back to the caller's priority, then to severity-based defaults
    - Derive each strategy's parameters from the conflict analysis
    """

    def select(self, analysis: ConflictAnalysis, context: ConflictContext) -> ResolutionStrategy:
        """Select a strategy for an analyzed conflict.

        Args:
            analysis: Conflict analysis of the articulator.
            context: What the conflict is about.

        Returns:
            Fully parameterized resolution strategy.

        Example:
            >>> selector = StrategySelector()
            >>> strategy = selector.select(
            ...     analysis,
            ...     ConflictContext(
            ...         grammatical_type=GrammaticalType.QUESTION,
            ...         component="eyebrows",
            ...         emotion_type=EmotionType.JOY,
            ...     ),
            ... )
            >>> strategy.type, strategy.blend_ratio
            (StrategyType.PRIORITIZE_GRAMMAR, 0.7)
        """
        rule = find_rule(context.grammatical_type, context.component, context.emotion_type)

        if rule is None:
            logger.debug(
                f"No rule for {context.grammatical_type.value}/{context.component}/"
                f"{context.emotion_type.value}, using default strategy"
            )
            return self.default_strategy(analysis, context.priority)

        logger.debug(
            f"Rule for {context.grammatical_type.value}/{context.component}/"
            f"{context.emotion_type.value}: {rule.priority.value} ({rule.blend_ratio})"
        )
        return self.build(rule.priority, rule.blend_ratio, analysis)

    def build(
        self, priority: RulePriority, blend_ratio: float, analysis: ConflictAnalysis
    ) -> ResolutionStrategy:
        """Build the strategy of a resolution family with derived parameters."""
        if priority == RulePriority.GRAMMAR:
            return GrammarPriorityStrategy(
                blend_ratio=blend_ratio,
                transitions=self._transitions(analysis, blend_ratio),
            )
        elif priority == RulePriority.EMOTION:
            return EmotionPriorityStrategy(
                blend_ratio=blend_ratio,
                adaptations=self._adaptations(analysis, blend_ratio),
            )
        elif priority == RulePriority.BLEND:
            return WeightedBlendStrategy(
                weights=self._blend_weights(analysis, blend_ratio),
                smoothing=self._smoothing(analysis),
            )
        elif priority == RulePriority.REINFORCE:
            return MutualReinforcementStrategy(
                amplification=blend_ratio * (0.8 + analysis.resolvability * 0.4),
                synchronization=self._synchronization(analysis),
            )
        elif priority == RulePriority.ALTERNATE:
            return TemporalAlternationStrategy(
                sequence=self._alternation_sequence(analysis, blend_ratio),
                timing=self._alternation_timing(analysis),
            )
        elif priority == RulePriority.SPLIT:
            return ComponentSplitStrategy(
                distribution=self._distribution(analysis, blend_ratio),
                coordination=self._coordination(analysis),
            )
        else:
            raise ValueError(f"Unknown rule priority: {priority}")

    def default_strategy(
        self, analysis: ConflictAnalysis, priority: Priority | None = None
    ) -> ResolutionStrategy:
        """Strategy used when the rule table has no entry.

        The caller's priority wins; without one, high-impact conflicts keep
        grammar, hard ones are split and everything else is blended.
        """
        if priority == Priority.GRAMMAR:
            return self.build(RulePriority.GRAMMAR, 0.8, analysis)
        elif priority == Priority.EMOTION:
            return self.build(RulePriority.EMOTION, 0.8, analysis)
        elif priority == Priority.BALANCED:
            return WeightedBlendStrategy(
                weights=BlendWeights(grammar=0.5, emotion=0.5),
                smoothing=self._smoothing(analysis),
            )

        if analysis.comprehension_impact > 0.7:
            return self.build(RulePriority.GRAMMAR, 0.7, analysis)
        if analysis.resolvability < 0.4:
            return self.build(RulePriority.SPLIT, 0.5, analysis)
        return WeightedBlendStrategy(
            weights=BlendWeights(grammar=0.6, emotion=0.4),
            smoothing=self._smoothing(analysis),
        )

    # -------------------------------------------------------------------------
    # Derived parameters
    # -------------------------------------------------------------------------

    def _transitions(self, analysis: ConflictAnalysis, blend_ratio: float) -> TransitionParameters:
        return TransitionParameters(
            duration=0.3 + analysis.severity * 0.4,
            easing=Easing.EASE_OUT_CUBIC if blend_ratio > 0.7 else Easing.EASE_IN_OUT_QUAD,
            control_points=[0.0, 0.3, 0.7, 1.0],
        )

    def _adaptations(self, analysis: ConflictAnalysis, blend_ratio: float) -> AdaptationParameters:
        return AdaptationParameters(
            intensity_factor=blend_ratio,
            spatial_offset=0.1 + (1 - analysis.resolvability) * 0.2,
            preserved_features=[
                p.component for p in analysis.points if p.comprehension_impact > CRITICAL_IMPACT
            ],
        )

    def _blend_weights(self, analysis: ConflictAnalysis, blend_ratio: float) -> BlendWeights:
        components: dict[str, SideWeights] = {}
        for point in analysis.points:
            # Higher impact leans further toward grammar
            grammar = min(1.0, blend_ratio * (1 + point.comprehension_impact * 0.5))
            components[point.component] = SideWeights(grammar=grammar, emotion=1 - grammar)

        return BlendWeights(grammar=blend_ratio, emotion=1 - blend_ratio, components=components)

    def _smoothing(self, analysis: ConflictAnalysis) -> SmoothingFactors:
        return SmoothingFactors(
            temporal=0.3 + analysis.severity * 0.4,
            spatial=0.2 + analysis.comprehension_impact * 0.5,
            intensity=0.4 + (1 - analysis.resolvability) * 0.3,
        )

    def _synchronization(self, analysis: ConflictAnalysis) -> SynchronizationParameters:
        if analysis.resolvability > 0.7:
            mode = SyncMode.PARALLEL
        elif analysis.resolvability < 0.4:
            mode = SyncMode.SEQUENTIAL
        else:
            mode = SyncMode.ADAPTIVE

        return SynchronizationParameters(
            temporal_offset=0.05 + analysis.severity * 0.1,
            mode=mode,
            sync_points=[0.0, 0.25, 0.5, 0.75, 1.0],
        )

    def _alternation_sequence(
        self, analysis: ConflictAnalysis, blend_ratio: float
    ) -> AlternationSequence:
        if analysis.comprehension_impact > CRITICAL_IMPACT:
            order = [Side.GRAMMAR, Side.EMOTION, Side.GRAMMAR]
        else:
            order = [Side.EMOTION, Side.GRAMMAR, Side.EMOTION]

        return AlternationSequence(
            order=order,
            weights=[blend_ratio, 1 - blend_ratio, blend_ratio],
            cycles=math.ceil(2 + (1 - analysis.resolvability) * 2),
        )

    def _alternation_timing(self, analysis: ConflictAnalysis) -> AlternationTiming:
        if analysis.comprehension_impact > CRITICAL_IMPACT:
            phases = [0.4, 0.3, 0.3]
        else:
            phases = [0.3, 0.4, 0.3]

        return AlternationTiming(
            total_duration=0.8 + analysis.severity * 0.4,
            phase_durations=phases,
            easing=Easing.EASE_IN_OUT_QUAD if analysis.resolvability > 0.6 else Easing.EASE_IN_OUT_CUBIC,
        )

    def _distribution(self, analysis: ConflictAnalysis, blend_ratio: float) -> ComponentDistribution:
        ranked = sorted(analysis.points, key=lambda p: p.comprehension_impact, reverse=True)
        return ComponentDistribution(
            grammatical_assignments=[
                p.component for p in ranked if p.comprehension_impact > CRITICAL_IMPACT
            ],
            emotional_assignments=[
                p.component for p in ranked if p.comprehension_impact <= CRITICAL_IMPACT
            ],
            separation_strength=blend_ratio,
        )

    def _coordination(self, analysis: ConflictAnalysis) -> ComponentCoordination:
        if analysis.resolvability > 0.7:
            mode = CoordinationMode.SYNCHRONOUS
        elif analysis.resolvability < 0.4:
            mode = CoordinationMode.ASYNCHRONOUS
        else:
            mode = CoordinationMode.CASCADING

        base_delay = 0.05 + analysis.severity * 0.1
        return ComponentCoordination(
            mode=mode,
            delays={p.component: base_delay * index for index, p in enumerate(analysis.points)},
            duration=0.5 + analysis.severity * 0.5,
        )


__all__ = [
    "CRITICAL_IMPACT",
    "StrategySelector",
]
