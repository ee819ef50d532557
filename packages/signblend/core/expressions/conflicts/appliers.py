"""Strategy application for articulator conflicts.

This module turns a grammatical state, an emotional state and a selected
ResolutionStrategy into a single resolved state plus quality estimates.
Each strategy has its own pure function; ``StrategyApplier`` dispatches on
the strategy tag.
"""

from __future__ import annotations

import logging

from signblend.core.expressions.errors import IntegrationError
from signblend.core.expressions.models.component import ExpressionComponent, PropertyValue
from signblend.core.expressions.models.enum import Side, StrategyType
from signblend.core.expressions.models.resolution import ConflictResolution, ResolutionMetadata
from signblend.core.expressions.models.strategy import (
    ComponentSplitStrategy,
    EmotionPriorityStrategy,
    GrammarPriorityStrategy,
    MutualReinforcementStrategy,
    ResolutionStrategy,
    TemporalAlternationStrategy,
    WeightedBlendStrategy,
)
from signblend.core.utils.math import clamp01, is_number, lerp

logger = logging.getLogger(__name__)


class StrategyApplier:
    """Applies a resolution strategy to a pair of articulator states.

    Responsibilities:
    - Dispatch on the strategy tag
    - Produce the resolved component (always inside the valid bounds)
    - Attach effectiveness, comprehensibility and naturalness estimates
    """

    def apply(
        self,
        grammatical: ExpressionComponent,
        emotional: ExpressionComponent,
        strategy: ResolutionStrategy,
        severity: float,
    ) -> ConflictResolution:
        """Apply a strategy.

        Args:
            grammatical: State required by grammar.
            emotional: State required by emotion.
            strategy: Strategy chosen by the StrategySelector.
            severity: Conflict severity from the analysis.

        Returns:
            Resolved component with metadata.

        Raises:
            IntegrationError: If the strategy tag is not recognized.

        Example:
            >>> applier = StrategyApplier()
            >>> resolution = applier.apply(grammatical, emotional, strategy, severity=0.4)
            >>> resolution.metadata.strategy.type
            StrategyType.PRIORITIZE_GRAMMAR
        """
        logger.debug(f"Applying {strategy.type!s} (severity={severity:.3f})")

        if strategy.type == StrategyType.PRIORITIZE_GRAMMAR:
            return apply_grammar_priority(grammatical, emotional, strategy, severity)
        elif strategy.type == StrategyType.PRIORITIZE_EMOTION:
            return apply_emotion_priority(grammatical, emotional, strategy, severity)
        elif strategy.type == StrategyType.WEIGHTED_BLEND:
            return apply_weighted_blend(grammatical, emotional, strategy, severity)
        elif strategy.type == StrategyType.MUTUAL_REINFORCEMENT:
            return apply_mutual_reinforcement(grammatical, emotional, strategy, severity)
        elif strategy.type == StrategyType.TEMPORAL_ALTERNATION:
            return apply_temporal_alternation(grammatical, emotional, strategy, severity)
        elif strategy.type == StrategyType.COMPONENT_SPLIT:
            return apply_component_split(grammatical, emotional, strategy, severity)
        else:
            raise IntegrationError(f"Unknown resolution strategy: {strategy.type!r}")


def apply_grammar_priority(
    grammatical: ExpressionComponent,
    emotional: ExpressionComponent,
    strategy: GrammarPriorityStrategy,
    severity: float,
) -> ConflictResolution:
    """Keep the grammatical state and leak emotion in by ``1 - blend_ratio``."""
    r = strategy.blend_ratio
    properties = dict(grammatical.properties)

    for key, e_value in emotional.properties.items():
        g_value = properties.get(key)
        if is_number(g_value) and is_number(e_value):
            properties[key] = lerp(e_value, g_value, r)

    resolved = grammatical.with_properties(
        properties,
        intensity=clamp01(lerp(emotional.intensity, grammatical.intensity, r)),
    )

    return _resolution(
        resolved,
        strategy,
        effectiveness=0.8 + 0.2 * (1 - severity),
        comprehensibility=0.9,
        naturalness=0.7 + 0.2 * (1 - r),
    )


def apply_emotion_priority(
    grammatical: ExpressionComponent,
    emotional: ExpressionComponent,
    strategy: EmotionPriorityStrategy,
    severity: float,
) -> ConflictResolution:
    """Keep the emotional state and reinstate preserved grammatical features."""
    adaptations = strategy.adaptations
    properties = dict(emotional.properties)

    for feature in adaptations.preserved_features:
        if feature in grammatical.properties:
            properties[feature] = grammatical.properties[feature]

    position = emotional.position
    if adaptations.spatial_offset > 0:
        # Move further away from the grammatical position
        direction = 1 if emotional.position > grammatical.position else -1
        position = clamp01(position + direction * adaptations.spatial_offset)

    resolved = emotional.with_properties(
        properties,
        position=position,
        intensity=clamp01(emotional.intensity * adaptations.intensity_factor),
        is_grammatical_marker=grammatical.is_grammatical_marker,
    )

    return _resolution(
        resolved,
        strategy,
        effectiveness=0.75 + 0.2 * (1 - severity),
        comprehensibility=0.7 + 0.2 * len(adaptations.preserved_features) / 3,
        naturalness=0.8,
    )


def apply_weighted_blend(
    grammatical: ExpressionComponent,
    emotional: ExpressionComponent,
    strategy: WeightedBlendStrategy,
    severity: float,
) -> ConflictResolution:
    """Mix both states property by property."""
    weights = strategy.weights
    smoothing = strategy.smoothing

    spatial_direction = -1 if grammatical.position > emotional.position else 1
    position = (
        grammatical.position * weights.grammar
        + emotional.position * weights.emotion
        + smoothing.spatial * spatial_direction
    )
    intensity = (
        grammatical.intensity * weights.grammar
        + emotional.intensity * weights.emotion
        + smoothing.intensity * 0.1
    )

    properties: dict[str, PropertyValue] = {}
    for key in dict.fromkeys([*grammatical.properties, *emotional.properties]):
        g_value = grammatical.properties.get(key)
        e_value = emotional.properties.get(key)

        if g_value is not None and e_value is not None:
            side = weights.for_property(key)
            if is_number(g_value) and is_number(e_value):
                properties[key] = g_value * side.grammar + e_value * side.emotion
            else:
                properties[key] = g_value if side.grammar >= side.emotion else e_value
        elif g_value is not None:
            properties[key] = g_value
        elif e_value is not None:
            properties[key] = e_value

    resolved = grammatical.with_properties(
        properties,
        position=clamp01(position),
        intensity=clamp01(intensity),
    )

    return _resolution(
        resolved,
        strategy,
        effectiveness=0.7 + 0.2 * (1 - severity),
        comprehensibility=0.7 + 0.2 * weights.grammar,
        naturalness=0.8 + 0.1 * (1 - abs(weights.grammar - 0.5) * 2),
    )


def apply_mutual_reinforcement(
    grammatical: ExpressionComponent,
    emotional: ExpressionComponent,
    strategy: MutualReinforcementStrategy,
    severity: float,
) -> ConflictResolution:
    """Amplify the stronger of both signals."""
    amp = strategy.amplification

    position = (grammatical.position + emotional.position) / 2 + strategy.synchronization.temporal_offset
    intensity = min(1.0, max(grammatical.intensity, emotional.intensity) * amp)

    properties: dict[str, PropertyValue] = {}
    for key in dict.fromkeys([*grammatical.properties, *emotional.properties]):
        g_value = grammatical.properties.get(key)
        e_value = emotional.properties.get(key)

        if g_value is not None and e_value is not None:
            if is_number(g_value) and is_number(e_value):
                properties[key] = min(1.0, max(g_value, e_value) * amp)
            else:
                # Contradicting flags keep the grammatical value
                properties[key] = g_value
        elif g_value is not None:
            properties[key] = g_value
        elif e_value is not None:
            properties[key] = e_value

    resolved = grammatical.with_properties(
        properties,
        position=clamp01(position),
        intensity=clamp01(intensity),
    )

    return _resolution(
        resolved,
        strategy,
        effectiveness=0.8 + 0.15 * amp,
        comprehensibility=0.7 + 0.1 * amp,
        naturalness=0.6 + 0.2 * amp,
    )


def apply_temporal_alternation(
    grammatical: ExpressionComponent,
    emotional: ExpressionComponent,
    strategy: TemporalAlternationStrategy,
    severity: float,
) -> ConflictResolution:
    """Render the keyframe of the second phase of the alternation.

    The full phase timeline (``sequence`` and ``timing``) travels with the
    strategy for the animation layer; the resolved component is the state
    shown mid-sequence.
    """
    sequence = strategy.sequence
    phase_index = 1 % len(sequence.order)
    phase = sequence.order[phase_index]
    weight = sequence.weights[phase_index]

    source = grammatical if phase == Side.GRAMMAR else emotional
    resolved = source.with_properties(
        source.properties,
        intensity=clamp01(source.intensity * weight),
        is_grammatical_marker=grammatical.is_grammatical_marker,
    )

    return _resolution(
        resolved,
        strategy,
        effectiveness=0.6 + 0.3 * (1 - severity),
        comprehensibility=0.6,
        naturalness=0.7,
    )


def apply_component_split(
    grammatical: ExpressionComponent,
    emotional: ExpressionComponent,
    strategy: ComponentSplitStrategy,
    severity: float,
) -> ConflictResolution:
    """Give each property to exactly one side.

    Keys assigned to emotion take the emotional value when emotion defines
    it; every other key keeps the grammatical value. A key defined by only
    one side keeps that side's value, so no key is dropped. Position and
    intensity always stay on the grammatical side.
    """
    distribution = strategy.distribution

    def pick(key: str, g_value: PropertyValue | None, e_value: PropertyValue | None) -> PropertyValue | None:
        if distribution.side_for(key) == Side.EMOTION and e_value is not None:
            return e_value
        return g_value if g_value is not None else e_value

    properties: dict[str, PropertyValue] = {}
    for key in dict.fromkeys([*grammatical.properties, *emotional.properties]):
        value = pick(key, grammatical.properties.get(key), emotional.properties.get(key))
        if value is not None:
            properties[key] = value

    resolved = grammatical.with_properties(properties)

    n_grammar = len(distribution.grammatical_assignments)
    n_emotion = len(distribution.emotional_assignments)
    emotional_share = n_emotion / (n_grammar + n_emotion) if n_grammar + n_emotion else 0.0

    return _resolution(
        resolved,
        strategy,
        effectiveness=0.7 - 0.2 * severity,
        comprehensibility=0.8 - 0.1 * emotional_share,
        naturalness=0.6,
    )


def _resolution(
    resolved: ExpressionComponent,
    strategy: ResolutionStrategy,
    effectiveness: float,
    comprehensibility: float,
    naturalness: float,
) -> ConflictResolution:
    return ConflictResolution(
        resolved_component=resolved,
        metadata=ResolutionMetadata(
            strategy=strategy,
            effectiveness=clamp01(effectiveness),
            comprehensibility=clamp01(comprehensibility),
            naturalness=clamp01(naturalness),
        ),
    )


__all__ = [
    "StrategyApplier",
    "apply_component_split",
    "apply_emotion_priority",
    "apply_grammar_priority",
    "apply_mutual_reinforcement",
    "apply_temporal_alternation",
    "apply_weighted_blend",
]
