"""In-process grammar and emotion services.

Reference implementations of the collaborator protocols. They derive
everything from the expressions themselves so the integrator can run
without an external grammar engine or emotion generator.
"""

from __future__ import annotations

import logging
from types import MappingProxyType

from signblend.core.expressions.conflicts.validator import property_preservation
from signblend.core.expressions.models.component import (
    EmotionInput,
    ExpressionComponent,
    PropertyValue,
    SignExpression,
)
from signblend.core.expressions.models.enum import EmotionLevel, EmotionType, GrammaticalType
from signblend.core.expressions.models.integration import (
    EmotionalFeature,
    EmotionContext,
    GrammaticalConstraint,
    GrammaticalMarker,
)
from signblend.core.utils.math import clamp01, is_number, mean

logger = logging.getLogger(__name__)

# =============================================================================
# Grammar
# =============================================================================

# Importance of a marker for the grammatical structure, per articulator
MARKER_IMPORTANCE: MappingProxyType[str, float] = MappingProxyType(
    {
        "eyebrows": 0.9,
        "hands": 0.9,
        "head": 0.8,
        "eyes": 0.7,
        "gaze": 0.7,
        "mouth": 0.7,
        "face": 0.7,
        "body": 0.5,
        "posture": 0.5,
    }
)
DEFAULT_MARKER_IMPORTANCE = 0.5

# (constraint type, target articulator, required value, priority)
FUNCTION_CONSTRAINTS: MappingProxyType[
    GrammaticalType, tuple[tuple[str, str, PropertyValue | None, float], ...]
] = MappingProxyType(
    {
        GrammaticalType.QUESTION: (("EYEBROW_RAISE", "eyebrows", True, 0.9),),
        GrammaticalType.NEGATION: (("HEAD_SHAKE", "head", True, 0.9),),
        GrammaticalType.CONDITIONAL: (
            ("EYEBROW_RAISE", "eyebrows", True, 0.7),
            ("HEAD_TILT", "head", None, 0.6),
        ),
        GrammaticalType.EMPHASIS: (("INTENSITY_PEAK", "hands", None, 0.6),),
        GrammaticalType.NEUTRAL: (),
    }
)


class MarkerGrammarService:
    """Grammar service driven by ``is_grammatical_marker`` flags.

    Responsibilities:
    - Identify markers from flagged components
    - Score structural integrity as mean marker preservation
    - Provide per-function and per-expression constraints
    """

    async def identify_markers(self, expression: SignExpression) -> list[GrammaticalMarker]:
        function = expression.function or GrammaticalType.NEUTRAL
        return [
            GrammaticalMarker(
                articulator=articulator,
                function=function,
                importance=MARKER_IMPORTANCE.get(articulator, DEFAULT_MARKER_IMPORTANCE),
                intensity=component.intensity,
            )
            for articulator, component in expression.components.items()
            if component.is_grammatical_marker
        ]

    async def evaluate_structural_integrity(
        self, integrated: SignExpression, base: SignExpression
    ) -> float:
        """Mean preservation of the base expression's marker components.

        Each marker scores 0.4 property preservation + 0.3 position
        preservation + 0.3 intensity preservation; a missing marker scores 0.
        An expression without markers is structurally intact.
        """
        scores = []
        for articulator, marker in base.components.items():
            if not marker.is_grammatical_marker:
                continue
            kept = integrated.get(articulator)
            if kept is None:
                scores.append(0.0)
                continue
            scores.append(_marker_preservation(marker, kept))

        return clamp01(mean(scores, default=1.0))

    async def get_constraints_for_function(
        self, function: GrammaticalType
    ) -> list[GrammaticalConstraint]:
        return [
            GrammaticalConstraint(type=kind, target=target, value=value, priority=priority)
            for kind, target, value, priority in FUNCTION_CONSTRAINTS.get(function, ())
        ]

    async def analyze_expression_constraints(
        self, expression: SignExpression
    ) -> list[GrammaticalConstraint]:
        # Every marker must stay aligned with the manual sign
        return [
            GrammaticalConstraint(
                type="TIMING_ALIGNMENT",
                target=articulator,
                value=component.duration,
                priority=MARKER_IMPORTANCE.get(articulator, DEFAULT_MARKER_IMPORTANCE),
            )
            for articulator, component in expression.components.items()
            if component.is_grammatical_marker
        ]


def _marker_preservation(marker: ExpressionComponent, kept: ExpressionComponent) -> float:
    return (
        0.4 * property_preservation(marker, kept)
        + 0.3 * (1.0 - min(1.0, abs(marker.position - kept.position)))
        + 0.3 * (1.0 - min(1.0, abs(marker.intensity - kept.intensity)))
    )


# =============================================================================
# Emotion
# =============================================================================

Profile = dict[str, tuple[float, float, dict[str, PropertyValue]]]

# Full-intensity rendering of each emotion: articulator -> (position, intensity, properties)
EMOTION_PROFILES: MappingProxyType[EmotionType, Profile] = MappingProxyType(
    {
        EmotionType.JOY: {
            "eyebrows": (0.6, 0.6, {"raised": True}),
            "eyes": (0.5, 0.6, {"squint": 0.4}),
            "mouth": (0.5, 0.8, {"smile": 0.8, "mouth_open": False}),
        },
        EmotionType.SADNESS: {
            "eyebrows": (0.4, 0.6, {"raised": False, "inner_raise": 0.7}),
            "eyes": (0.3, 0.5, {"gaze_down": 0.6}),
            "mouth": (0.4, 0.6, {"corners_down": 0.7}),
            "head": (0.35, 0.4, {"tilt": 0.3}),
        },
        EmotionType.ANGER: {
            "eyebrows": (0.3, 0.9, {"furrowed": True, "raised": False}),
            "eyes": (0.5, 0.8, {"squint": 0.6}),
            "mouth": (0.5, 0.8, {"lips_pressed": True, "tension": 0.8}),
        },
        EmotionType.SURPRISE: {
            "eyebrows": (0.9, 0.9, {"raised": True}),
            "eyes": (0.6, 0.9, {"wide": 0.9}),
            "mouth": (0.5, 0.8, {"mouth_open": True}),
        },
        EmotionType.FEAR: {
            "eyebrows": (0.8, 0.8, {"raised": True, "inner_raise": 0.8}),
            "eyes": (0.6, 0.8, {"wide": 0.8}),
            "mouth": (0.5, 0.7, {"tension": 0.7}),
            "body": (0.4, 0.6, {"lean_back": 0.5}),
        },
        EmotionType.DISGUST: {
            "eyebrows": (0.35, 0.7, {"furrowed": True}),
            "mouth": (0.5, 0.7, {"upper_lip_raise": 0.7}),
            "head": (0.5, 0.5, {"turn_away": 0.4}),
        },
        EmotionType.NEUTRAL: {},
    }
)

LEVEL_FACTORS: MappingProxyType[EmotionLevel, float] = MappingProxyType(
    {
        EmotionLevel.LOW: 0.7,
        EmotionLevel.MEDIUM: 1.0,
        EmotionLevel.HIGH: 1.2,
    }
)

# How much each articulator contributes to recognizing an emotion
FEATURE_SALIENCE: MappingProxyType[str, float] = MappingProxyType(
    {
        "mouth": 0.9,
        "eyebrows": 0.8,
        "eyes": 0.7,
        "head": 0.5,
        "body": 0.4,
    }
)
DEFAULT_SALIENCE = 0.5
PROPERTY_SALIENCE_FACTOR = 0.8


class ProfileEmotionService:
    """Emotion service rendering fixed per-emotion profiles.

    Profile intensities and numeric properties are scaled by the emotion's
    intensity and the requested level; flags are copied unchanged.
    """

    async def process_emotion(self, emotion: EmotionInput, context: EmotionContext) -> SignExpression:
        profile = EMOTION_PROFILES.get(emotion.type, {})
        scale = emotion.intensity * LEVEL_FACTORS[context.intensity]

        components = {}
        for articulator, (position, intensity, properties) in profile.items():
            components[articulator] = ExpressionComponent(
                position=position,
                intensity=clamp01(intensity * scale),
                duration=emotion.duration,
                properties={
                    key: clamp01(value * scale) if is_number(value) else value
                    for key, value in properties.items()
                },
            )

        logger.debug(
            f"Rendered {emotion.type.value} at {emotion.intensity:.2f} "
            f"({context.intensity.value}) on {len(components)} articulators"
        )
        return SignExpression(components=components, emotion=emotion)

    async def extract_emotional_features(self, expression: SignExpression) -> list[EmotionalFeature]:
        features = []
        for articulator, component in expression.components.items():
            salience = FEATURE_SALIENCE.get(articulator, DEFAULT_SALIENCE)
            features.append(
                EmotionalFeature(
                    type="intensity",
                    component=articulator,
                    value=component.intensity,
                    importance=salience,
                )
            )
            for key, value in component.properties.items():
                if is_number(value):
                    features.append(
                        EmotionalFeature(
                            type=key,
                            component=articulator,
                            value=value,
                            importance=salience * PROPERTY_SALIENCE_FACTOR,
                        )
                    )
        return features


__all__ = [
    "EMOTION_PROFILES",
    "FEATURE_SALIENCE",
    "FUNCTION_CONSTRAINTS",
    "LEVEL_FACTORS",
    "MARKER_IMPORTANCE",
    "MarkerGrammarService",
    "ProfileEmotionService",
]
