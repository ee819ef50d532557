"""Resolution outcome and validation score models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from signblend.core.expressions.models.component import ExpressionComponent
from signblend.core.expressions.models.strategy import ResolutionStrategy
from signblend.core.utils.math import clamp01


class ResolutionMetadata(BaseModel):
    """Quality estimates attached to a resolution by its applier.

    Scores are clamped to [0, 1] on construction.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    strategy: ResolutionStrategy
    effectiveness: float = Field(..., ge=0.0, le=1.0)
    comprehensibility: float = Field(..., ge=0.0, le=1.0)
    naturalness: float = Field(..., ge=0.0, le=1.0)

    @field_validator("effectiveness", "comprehensibility", "naturalness", mode="before")
    @classmethod
    def _clamp_score(cls, v: float) -> float:
        return clamp01(v)


class ConflictResolution(BaseModel):
    """A resolved articulator state and how it was obtained."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    resolved_component: ExpressionComponent
    metadata: ResolutionMetadata


class ValidationScores(BaseModel):
    """Quality vector of a single-articulator resolution."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    grammaticality: float = Field(..., ge=0.0, le=1.0)
    emotionality: float = Field(..., ge=0.0, le=1.0)
    naturalness: float = Field(..., ge=0.0, le=1.0)
    cultural: float = Field(..., ge=0.0, le=1.0)


__all__ = [
    "ConflictResolution",
    "ResolutionMetadata",
    "ValidationScores",
]
