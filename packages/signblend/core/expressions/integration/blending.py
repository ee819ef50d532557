"""Coarse per-articulator blend modes.

Used by the integrator for articulators without conflict points, and as a
fallback when a full conflict resolution is rejected. Distinct from, and
simpler than, the six resolution strategies.
"""

from __future__ import annotations

import logging

from signblend.core.expressions.models.component import ExpressionComponent, PropertyValue
from signblend.core.expressions.models.enum import BlendMode
from signblend.core.expressions.models.integration import ComponentWeight
from signblend.core.utils.math import clamp01, is_number

logger = logging.getLogger(__name__)

# Properties a grammatical marker cannot give up
CRITICAL_PROPERTIES = frozenset({"position", "isRequired", "isMandatory"})
CRITICAL_DIFFERENCE = 0.3
EMOTION_BOOST_WEIGHT = 0.8
EMOTION_BOOST = 1.1


def blend_component(
    base: ExpressionComponent,
    emotional: ExpressionComponent,
    weight: ComponentWeight,
) -> ExpressionComponent:
    """Blend two states of one articulator with the weight's blend mode.

    Args:
        base: Grammatical (base) state.
        emotional: Emotional state.
        weight: Grammar/emotion split and blend mode.

    Returns:
        Blended component.
    """
    if weight.blend_mode == BlendMode.PRIORITIZE_EMOTION:
        return prioritize_emotion_blend(base, emotional, weight)
    elif weight.blend_mode == BlendMode.PRIORITIZE_GRAMMAR:
        return prioritize_grammar_blend(base, emotional, weight)
    else:
        return weighted_blend(base, emotional, weight)


def weighted_blend(
    base: ExpressionComponent,
    emotional: ExpressionComponent,
    weight: ComponentWeight,
) -> ExpressionComponent:
    """Mix position, intensity and the base's properties by weight."""
    properties: dict[str, PropertyValue] = {}
    for key, base_value in base.properties.items():
        emotional_value = emotional.properties.get(key)
        properties[key] = blend_value(base_value, emotional_value, weight)

    _adopt_emotional_only(properties, emotional, weight)

    return base.with_properties(
        properties,
        position=clamp01(base.position * weight.grammar + emotional.position * weight.emotion),
        intensity=clamp01(base.intensity * weight.grammar + emotional.intensity * weight.emotion),
        duration=max(base.duration, emotional.duration),
    )


def prioritize_emotion_blend(
    base: ExpressionComponent,
    emotional: ExpressionComponent,
    weight: ComponentWeight,
) -> ExpressionComponent:
    """Take the emotional state; a marker keeps its grammatical position."""
    intensity = emotional.intensity
    if weight.emotion > EMOTION_BOOST_WEIGHT:
        intensity = min(1.0, intensity * EMOTION_BOOST)

    position = base.position if base.is_grammatical_marker else emotional.position

    return emotional.with_properties(
        emotional.properties,
        position=position,
        intensity=clamp01(intensity),
        is_grammatical_marker=base.is_grammatical_marker,
    )


def prioritize_grammar_blend(
    base: ExpressionComponent,
    emotional: ExpressionComponent,
    weight: ComponentWeight,
) -> ExpressionComponent:
    """Keep the base state and blend in emotional properties that do not conflict."""
    properties = dict(base.properties)

    for key, emotional_value in emotional.properties.items():
        if conflicts_with_grammar(key, emotional_value, base):
            continue
        base_value = base.properties.get(key)
        if base_value is None:
            if weight.emotion > weight.grammar:
                properties[key] = emotional_value
            continue
        properties[key] = blend_value(base_value, emotional_value, weight)

    return base.with_properties(properties)


def blend_value(
    base_value: PropertyValue,
    emotional_value: PropertyValue | None,
    weight: ComponentWeight,
) -> PropertyValue:
    """Weighted mix for numbers; the dominant side's value otherwise."""
    if is_number(base_value) and is_number(emotional_value):
        return base_value * weight.grammar + emotional_value * weight.emotion
    if emotional_value is not None and weight.emotion > weight.grammar:
        return emotional_value
    return base_value


def conflicts_with_grammar(key: str, value: PropertyValue, base: ExpressionComponent) -> bool:
    """True when an emotional value would break a marker's critical property."""
    if key not in CRITICAL_PROPERTIES or not base.is_grammatical_marker:
        return False

    base_value = base.properties.get(key)
    if is_number(value) and is_number(base_value):
        return abs(base_value - value) > CRITICAL_DIFFERENCE
    if isinstance(value, bool):
        return value != base_value
    return False


def _adopt_emotional_only(
    properties: dict[str, PropertyValue],
    emotional: ExpressionComponent,
    weight: ComponentWeight,
) -> None:
    # Properties only emotion defines are kept when emotion dominates
    if weight.emotion <= weight.grammar:
        return
    for key, value in emotional.properties.items():
        properties.setdefault(key, value)


__all__ = [
    "CRITICAL_PROPERTIES",
    "blend_component",
    "blend_value",
    "conflicts_with_grammar",
    "prioritize_emotion_blend",
    "prioritize_grammar_blend",
    "weighted_blend",
]
