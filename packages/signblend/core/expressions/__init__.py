"""Grammar/emotion expression blending."""

from signblend.core.expressions.conflicts import ConflictResolver
from signblend.core.expressions.errors import (
    IntegrationError,
    ResolutionValidationError,
    SignBlendError,
)
from signblend.core.expressions.integration import ExpressionIntegrator

__all__ = [
    "ConflictResolver",
    "ExpressionIntegrator",
    "IntegrationError",
    "ResolutionValidationError",
    "SignBlendError",
]
