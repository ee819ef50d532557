"""Collaborator protocols consumed by the ExpressionIntegrator.

Uses Protocol pattern for structural subtyping: any object with these async
methods can serve as grammar or emotion backend (no inheritance required).
"""

from __future__ import annotations

from typing import Protocol

from signblend.core.expressions.models.component import EmotionInput, SignExpression
from signblend.core.expressions.models.enum import GrammaticalType
from signblend.core.expressions.models.integration import (
    EmotionalFeature,
    EmotionContext,
    GrammaticalConstraint,
    GrammaticalMarker,
)


class GrammarRuleService(Protocol):
    """Grammar-rule backend.

    Example:
        >>> class StaticGrammar:
        ...     async def identify_markers(self, expression):
        ...         return []
        ...     async def evaluate_structural_integrity(self, integrated, base):
        ...         return 1.0
        ...     async def get_constraints_for_function(self, function):
        ...         return []
        ...     async def analyze_expression_constraints(self, expression):
        ...         return []
    """

    async def identify_markers(self, expression: SignExpression) -> list[GrammaticalMarker]:
        """Grammatical markers carried by an expression."""
        ...

    async def evaluate_structural_integrity(
        self, integrated: SignExpression, base: SignExpression
    ) -> float:
        """How well ``integrated`` keeps the grammatical structure of ``base`` [0, 1]."""
        ...

    async def get_constraints_for_function(
        self, function: GrammaticalType
    ) -> list[GrammaticalConstraint]:
        """Constraints every expression with this function must satisfy."""
        ...

    async def analyze_expression_constraints(
        self, expression: SignExpression
    ) -> list[GrammaticalConstraint]:
        """Additional constraints detected on a specific expression."""
        ...


class EmotionService(Protocol):
    """Emotion-generation backend."""

    async def process_emotion(self, emotion: EmotionInput, context: EmotionContext) -> SignExpression:
        """Render an emotion as a multi-articulator expression.

        Args:
            emotion: Emotion to render.
            context: Requested intensity level and register.

        Returns:
            Emotional expression.
        """
        ...

    async def extract_emotional_features(self, expression: SignExpression) -> list[EmotionalFeature]:
        """Measurable emotional features of an expression."""
        ...


__all__ = [
    "EmotionService",
    "GrammarRuleService",
]
