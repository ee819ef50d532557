"""Integration weights and grammatical context helpers.

Derives how much each side contributes, globally and per articulator, from
the integration context, the emotion's intensity and the dominant
grammatical function.
"""

from __future__ import annotations

import logging
from collections import Counter
from types import MappingProxyType

from signblend.core.expressions.models.enum import (
    BlendMode,
    EmotionLevel,
    GrammaticalType,
    Priority,
    Purpose,
)
from signblend.core.expressions.models.integration import (
    ComponentWeight,
    EmotionContext,
    GrammaticalContext,
    GrammaticalMarker,
    IntegrationContext,
    IntegrationWeights,
)
from signblend.core.expressions.models.strategy import SideWeights
from signblend.core.utils.math import clamp01, weighted_mean

logger = logging.getLogger(__name__)

# Global (grammar, emotion) split per caller priority
PRIORITY_WEIGHTS: MappingProxyType[Priority, tuple[float, float]] = MappingProxyType(
    {
        Priority.GRAMMAR: (0.7, 0.3),
        Priority.EMOTION: (0.3, 0.7),
        Priority.BALANCED: (0.5, 0.5),
    }
)

# Per-articulator (grammar, emotion, blend mode)
COMPONENT_WEIGHTS: MappingProxyType[str, tuple[float, float, BlendMode]] = MappingProxyType(
    {
        "eyebrows": (0.4, 0.6, BlendMode.WEIGHTED),
        "eyes": (0.3, 0.7, BlendMode.PRIORITIZE_EMOTION),
        "mouth": (0.2, 0.8, BlendMode.WEIGHTED),
        "head": (0.6, 0.4, BlendMode.PRIORITIZE_GRAMMAR),
        "body": (0.5, 0.5, BlendMode.WEIGHTED),
    }
)

FORMALITY_THRESHOLD = 0.7
EMOTION_INTENSITY_THRESHOLD = 0.8
ADJUSTMENT = 0.1
QUESTION_EYEBROW_ADJUSTMENT = 0.2


def determine_integration_weights(
    grammatical_context: GrammaticalContext,
    emotion_intensity: float,
    context: IntegrationContext,
) -> IntegrationWeights:
    """Derive global and per-articulator weights.

    Args:
        grammatical_context: Grammatical analysis of the base expression.
        emotion_intensity: Intensity of the emotion being integrated.
        context: Caller's integration context.

    Returns:
        Weights with every value clamped to [0, 1].

    Example:
        >>> weights = determine_integration_weights(
        ...     GrammaticalContext(),
        ...     emotion_intensity=0.9,
        ...     context=IntegrationContext(priority=Priority.BALANCED, formality_level=0.3),
        ... )
        >>> weights.global_weights.emotion  # 0.6
    """
    grammar, emotion = PRIORITY_WEIGHTS[context.priority]

    if context.formality_level > FORMALITY_THRESHOLD:
        grammar += ADJUSTMENT
        emotion -= ADJUSTMENT

    if emotion_intensity > EMOTION_INTENSITY_THRESHOLD:
        emotion += ADJUSTMENT
        grammar -= ADJUSTMENT

    components: dict[str, ComponentWeight] = {}
    for articulator, (c_grammar, c_emotion, mode) in COMPONENT_WEIGHTS.items():
        if grammatical_context.function == GrammaticalType.QUESTION and articulator == "eyebrows":
            c_grammar += QUESTION_EYEBROW_ADJUSTMENT
            c_emotion -= QUESTION_EYEBROW_ADJUSTMENT
        components[articulator] = ComponentWeight(grammar=c_grammar, emotion=c_emotion, blend_mode=mode)

    weights = IntegrationWeights(
        global_weights=SideWeights(grammar=clamp01(grammar), emotion=clamp01(emotion)),
        components=components,
    )
    logger.debug(
        f"Integration weights: grammar={weights.global_weights.grammar:.2f}, "
        f"emotion={weights.global_weights.emotion:.2f}"
    )
    return weights


def adjust_for_purpose(weights: IntegrationWeights, purpose: Purpose) -> IntegrationWeights:
    """Teaching leans the global split toward grammar."""
    if purpose != Purpose.TEACHING:
        return weights

    global_weights = weights.global_weights
    return weights.model_copy(
        update={
            "global_weights": SideWeights(
                grammar=clamp01(global_weights.grammar + ADJUSTMENT),
                emotion=global_weights.emotion,
            )
        }
    )


def weight_for(weights: IntegrationWeights, articulator: str) -> ComponentWeight:
    """Articulator weight, or a weighted blend with the global split."""
    weight = weights.components.get(articulator)
    if weight is not None:
        return weight
    return ComponentWeight(
        grammar=weights.global_weights.grammar,
        emotion=weights.global_weights.emotion,
        blend_mode=BlendMode.WEIGHTED,
    )


def dominant_function(markers: list[GrammaticalMarker]) -> GrammaticalType:
    """Most frequent marker function; ties keep the first seen, no markers is NEUTRAL."""
    if not markers:
        return GrammaticalType.NEUTRAL
    # most_common is stable for equal counts (insertion order)
    return Counter(marker.function for marker in markers).most_common(1)[0][0]


def grammatical_intensity(markers: list[GrammaticalMarker]) -> float:
    """Importance-weighted average marker intensity (0.5 without markers)."""
    return weighted_mean(
        [m.intensity for m in markers],
        [m.importance for m in markers],
        default=0.5,
    )


def to_emotion_context(context: IntegrationContext) -> EmotionContext:
    """Emotion-service context for an integration context."""
    return EmotionContext(
        intensity=EmotionLevel.HIGH if context.priority == Priority.EMOTION else EmotionLevel.MEDIUM,
        formality_level=context.formality_level,
        cultural_context=context.cultural_context,
    )


__all__ = [
    "COMPONENT_WEIGHTS",
    "PRIORITY_WEIGHTS",
    "adjust_for_purpose",
    "determine_integration_weights",
    "dominant_function",
    "grammatical_intensity",
    "to_emotion_context",
    "weight_for",
]
