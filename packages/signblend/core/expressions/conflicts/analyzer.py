"""Conflict analysis between a grammatical and an emotional articulator state.

This module measures how much two candidate states of the same articulator
disagree, which individual properties disagree, how much that disagreement
threatens comprehension and how easy it will be to reconcile.
"""

from __future__ import annotations

import logging
from types import MappingProxyType

from signblend.core.expressions.models.component import ExpressionComponent, PropertyValue
from signblend.core.expressions.models.conflict import ConflictAnalysis, ConflictPoint
from signblend.core.expressions.models.enum import GrammaticalType
from signblend.core.utils.math import clamp01, is_number, mean

logger = logging.getLogger(__name__)

# Importance of each property for comprehension
COMPONENT_IMPORTANCE: MappingProxyType[str, float] = MappingProxyType(
    {
        "position": 0.8,
        "intensity": 0.6,
        "eyebrows": 0.9,
        "gaze": 0.7,
        "head": 0.8,
        "hands": 0.9,
        "mouth": 0.7,
        "posture": 0.5,
    }
)
DEFAULT_IMPORTANCE = 0.5

# Impact multiplier per grammatical function
TYPE_FACTORS: MappingProxyType[GrammaticalType, float] = MappingProxyType(
    {
        GrammaticalType.QUESTION: 1.2,
        GrammaticalType.NEGATION: 1.3,
        GrammaticalType.CONDITIONAL: 1.1,
        GrammaticalType.EMPHASIS: 0.9,
    }
)
DEFAULT_TYPE_FACTOR = 1.0


def component_importance(key: str) -> float:
    """Comprehension importance of a property key."""
    return COMPONENT_IMPORTANCE.get(key, DEFAULT_IMPORTANCE)


def values_differ(a: PropertyValue, b: PropertyValue) -> bool:
    """Categorical comparison; a flag never equals a number."""
    return is_number(a) != is_number(b) or a != b


class ConflictAnalyzer:
    """Quantifies the disagreement between two states of one articulator.

    Responsibilities:
    - Compute an overall severity
    - Detect individual conflict points (properties, position, intensity)
    - Estimate the comprehension impact for the grammatical function
    - Derive a resolvability score

    The analyzer is pure: the same inputs always produce the same analysis.
    """

    def __init__(self, conflict_threshold: float = 0.2):
        """Initialize conflict analyzer.

        Args:
            conflict_threshold: Minimum numeric difference that counts as a conflict point.
        """
        self.conflict_threshold = conflict_threshold

    def analyze(
        self,
        grammatical: ExpressionComponent,
        emotional: ExpressionComponent,
        grammatical_type: GrammaticalType | None = None,
    ) -> ConflictAnalysis:
        """Analyze the conflict between two articulator states.

        Args:
            grammatical: State required by grammar.
            emotional: State required by emotion.
            grammatical_type: Grammatical function, used to weight the impact.

        Returns:
            ConflictAnalysis with severity, points, impact and resolvability.

        Example:
            >>> analyzer = ConflictAnalyzer()
            >>> analysis = analyzer.analyze(
            ...     ExpressionComponent(position=0.5, intensity=0.9, properties={"raised": True}),
            ...     ExpressionComponent(position=0.5, intensity=0.3, properties={"raised": False}),
            ...     GrammaticalType.QUESTION,
            ... )
            >>> len(analysis.points)
            2
        """
        severity = self.severity(grammatical, emotional)
        points = self.conflict_points(grammatical, emotional)
        impact = self.comprehension_impact(points, grammatical_type)
        resolvability = self.resolvability(severity, impact)

        logger.debug(
            f"Conflict analysis: severity={severity:.3f}, points={len(points)}, "
            f"impact={impact:.3f}, resolvability={resolvability:.3f}"
        )

        return ConflictAnalysis(
            severity=severity,
            points=points,
            comprehension_impact=impact,
            resolvability=resolvability,
        )

    def severity(self, grammatical: ExpressionComponent, emotional: ExpressionComponent) -> float:
        """Mean normalized difference over intensity, position and shared properties.

        A shared categorical property that differs counts as a full difference;
        one that matches is left out of the mean.
        """
        diffs = [
            abs(grammatical.intensity - emotional.intensity),
            abs(grammatical.position - emotional.position),
        ]

        for key, g_value in grammatical.properties.items():
            if key not in emotional.properties:
                continue
            e_value = emotional.properties[key]
            if is_number(g_value) and is_number(e_value):
                diffs.append(min(1.0, abs(g_value - e_value)))
            elif values_differ(g_value, e_value):
                diffs.append(1.0)

        return min(1.0, mean(diffs))

    def conflict_points(
        self, grammatical: ExpressionComponent, emotional: ExpressionComponent
    ) -> list[ConflictPoint]:
        """Detect the individual properties on which both sides disagree."""
        points: list[ConflictPoint] = []

        keys = dict.fromkeys([*grammatical.properties, *emotional.properties])
        for key in keys:
            point = self._point(
                key, grammatical.properties.get(key), emotional.properties.get(key)
            )
            if point is not None:
                points.append(point)

        # Position and intensity are always present on both sides
        for key, g_value, e_value in (
            ("position", grammatical.position, emotional.position),
            ("intensity", grammatical.intensity, emotional.intensity),
        ):
            point = self._point(key, g_value, e_value)
            if point is not None:
                points.append(point)

        return points

    def comprehension_impact(
        self, points: list[ConflictPoint], grammatical_type: GrammaticalType | None = None
    ) -> float:
        """Mean point impact scaled by the grammatical function's factor."""
        if not points:
            return 0.0

        factor = DEFAULT_TYPE_FACTOR
        if grammatical_type is not None:
            factor = TYPE_FACTORS.get(grammatical_type, DEFAULT_TYPE_FACTOR)
        return min(1.0, mean(p.comprehension_impact for p in points) * factor)

    @staticmethod
    def resolvability(severity: float, impact: float) -> float:
        """Severe, high-impact conflicts are harder to resolve."""
        return max(0.0, 1.0 - 0.8 * (0.7 * severity + 0.3 * impact))

    def _point(
        self, key: str, g_value: PropertyValue | None, e_value: PropertyValue | None
    ) -> ConflictPoint | None:
        if g_value is None or e_value is None:
            return None

        if is_number(g_value) and is_number(e_value):
            diff = abs(g_value - e_value)
            if diff <= self.conflict_threshold:
                return None
            degree = min(1.0, diff)
        elif values_differ(g_value, e_value):
            degree = 1.0
        else:
            return None

        return ConflictPoint(
            component=key,
            grammatical_value=g_value,
            emotional_value=e_value,
            conflict_degree=degree,
            comprehension_impact=clamp01(component_importance(key) * degree),
        )


__all__ = [
    "COMPONENT_IMPORTANCE",
    "ConflictAnalyzer",
    "DEFAULT_IMPORTANCE",
    "TYPE_FACTORS",
    "component_importance",
    "values_differ",
]
