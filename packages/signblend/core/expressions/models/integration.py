"""Whole-expression integration models.

Covers the inputs of the ExpressionIntegrator (context, grammatical and
emotional analyses), the weights it derives and the integrated result.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from signblend.core.expressions.models.component import PropertyValue, SignExpression
from signblend.core.expressions.models.enum import (
    BlendMode,
    EmotionLevel,
    GrammaticalType,
    OutcomeSource,
    Priority,
    Purpose,
)
from signblend.core.expressions.models.resolution import ValidationScores
from signblend.core.expressions.models.strategy import ResolutionStrategy, SideWeights
from signblend.core.utils.math import clamp01

# =============================================================================
# Inputs
# =============================================================================


class IntegrationContext(BaseModel):
    """How the caller wants grammar and emotion balanced.

    Attributes:
        purpose: What the expression is produced for.
        formality_level: Register formality [0, 1].
        priority: Which side wins when they disagree.
        cultural_context: Optional cultural register identifier.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    purpose: Purpose = Purpose.TRANSLATION
    formality_level: float = Field(default=0.5, ge=0.0, le=1.0)
    priority: Priority = Priority.BALANCED
    cultural_context: str | None = None


class EmotionContext(BaseModel):
    """Context handed to the emotion service."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    intensity: EmotionLevel = EmotionLevel.MEDIUM
    formality_level: float = Field(default=0.5, ge=0.0, le=1.0)
    cultural_context: str | None = None


class GrammaticalMarker(BaseModel):
    """A grammatical marker carried by one articulator."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    articulator: str
    function: GrammaticalType
    importance: float = Field(..., ge=0.0, le=1.0)
    intensity: float = Field(..., ge=0.0, le=1.0)


class GrammaticalConstraint(BaseModel):
    """A structural requirement the integrated expression must keep.

    Attributes:
        type: Constraint kind, e.g. ``EYEBROW_RAISE`` or ``TIMING_ALIGNMENT``.
        target: Articulator the constraint applies to.
        value: Required value, when the constraint has one.
        priority: Relative priority [0, 1].
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: str
    target: str
    value: PropertyValue | None = None
    priority: float = Field(default=0.5, ge=0.0, le=1.0)


class GrammaticalContext(BaseModel):
    """Grammatical analysis of the base expression."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    function: GrammaticalType = GrammaticalType.NEUTRAL
    markers: list[GrammaticalMarker] = Field(default_factory=list)
    constraints: list[GrammaticalConstraint] = Field(default_factory=list)
    intensity: float = Field(default=0.5, ge=0.0, le=1.0)


class EmotionalFeature(BaseModel):
    """A measurable emotional feature of an expression.

    Features are matched across expressions by ``(type, component)``.

    Attributes:
        type: Feature kind: ``intensity`` or a numeric property key.
        component: Articulator carrying the feature.
        value: Feature value.
        importance: Salience of the feature for recognizing the emotion.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: str
    component: str
    value: float
    importance: float = Field(default=0.5, ge=0.0, le=1.0)


# =============================================================================
# Weights
# =============================================================================


class ComponentWeight(BaseModel):
    """Grammar/emotion split and coarse blend mode of one articulator."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    emotion: float = Field(..., ge=0.0, le=1.0)
    grammar: float = Field(..., ge=0.0, le=1.0)
    blend_mode: BlendMode = BlendMode.WEIGHTED

    @field_validator("emotion", "grammar", mode="before")
    @classmethod
    def _clamp_weight(cls, v: float) -> float:
        return clamp01(v)


class IntegrationWeights(BaseModel):
    """Global and per-articulator weights for one integration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    global_weights: SideWeights
    components: dict[str, ComponentWeight] = Field(default_factory=dict)


# =============================================================================
# Results
# =============================================================================


class ValidationResult(BaseModel):
    """Outcome of one holistic validation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    is_valid: bool
    score: float = Field(..., ge=0.0, le=1.0)
    message: str = ""
    details: dict[str, Any] = Field(default_factory=dict)


class SynchronizationInfo(BaseModel):
    """Timing applied to the integrated expression."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_duration: float = Field(..., ge=0.0)
    global_emotion_weight: float = Field(..., ge=0.0, le=1.0)
    timestamp: datetime


class ComponentOutcome(BaseModel):
    """How one articulator of the integrated expression was produced.

    Attributes:
        source: Copy, coarse blend, validated resolution or fallback blend.
        conflict_points: Number of conflict points found by the analyzer.
        strategy: Strategy that produced the resolution, if one ran.
        rejection: Scores of a rejected resolution that led to a fallback.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    source: OutcomeSource
    conflict_points: int = Field(default=0, ge=0)
    strategy: ResolutionStrategy | None = None
    rejection: ValidationScores | None = None


class ConflictResolutionStats(BaseModel):
    """Articulators with conflicts and those resolved by a strategy."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    conflicts: int = Field(default=0, ge=0)
    resolutions: int = Field(default=0, ge=0)


class IntegrationMetadata(BaseModel):
    """Scores of an accepted integration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    grammatical_preservation: float = Field(..., ge=0.0, le=1.0)
    emotional_authenticity: float = Field(..., ge=0.0, le=1.0)
    naturalness: float = Field(..., ge=0.0, le=1.0)
    conflict_resolution: ConflictResolutionStats = Field(default_factory=ConflictResolutionStats)


class IntegratedExpression(BaseModel):
    """Final expression produced by the ExpressionIntegrator."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    expression: SignExpression
    synchronization: SynchronizationInfo
    outcomes: dict[str, ComponentOutcome] = Field(default_factory=dict)
    metadata: IntegrationMetadata


__all__ = [
    "ComponentOutcome",
    "ComponentWeight",
    "ConflictResolutionStats",
    "EmotionContext",
    "EmotionalFeature",
    "GrammaticalConstraint",
    "GrammaticalContext",
    "GrammaticalMarker",
    "IntegratedExpression",
    "IntegrationContext",
    "IntegrationMetadata",
    "IntegrationWeights",
    "SynchronizationInfo",
    "ValidationResult",
]
