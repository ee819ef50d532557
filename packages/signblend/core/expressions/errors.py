"""Typed failures of the expression blending engine."""

from __future__ import annotations

from typing import Any

from signblend.core.expressions.models.resolution import ValidationScores


class SignBlendError(Exception):
    """Base class for blending failures."""

    pass


class ResolutionValidationError(SignBlendError):
    """Raised when a resolved articulator fails the acceptance gate.

    Carries the full score vector so callers can decide how to recover.

    Attributes:
        scores: Scores computed for the rejected resolution.
    """

    def __init__(self, message: str, scores: ValidationScores) -> None:
        super().__init__(message)
        self.scores = scores


class IntegrationError(SignBlendError):
    """Raised when a whole-expression integration fails.

    Attributes:
        details: Inner cause: an exception or a validation detail mapping.
    """

    def __init__(self, message: str, details: Exception | dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details


__all__ = [
    "IntegrationError",
    "ResolutionValidationError",
    "SignBlendError",
]
