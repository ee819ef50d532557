"""Whole-expression integration of grammar and emotion."""

from signblend.core.expressions.integration.blending import blend_component
from signblend.core.expressions.integration.integrator import ExpressionIntegrator
from signblend.core.expressions.integration.protocols import EmotionService, GrammarRuleService
from signblend.core.expressions.integration.services import (
    MarkerGrammarService,
    ProfileEmotionService,
)
from signblend.core.expressions.integration.synchronization import synchronize
from signblend.core.expressions.integration.validation import HolisticValidator
from signblend.core.expressions.integration.weights import determine_integration_weights

__all__ = [
    "EmotionService",
    "ExpressionIntegrator",
    "GrammarRuleService",
    "HolisticValidator",
    "MarkerGrammarService",
    "ProfileEmotionService",
    "blend_component",
    "determine_integration_weights",
    "synchronize",
]
