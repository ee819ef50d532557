"""Conflict analysis models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from signblend.core.expressions.models.component import PropertyValue
from signblend.core.expressions.models.enum import (
    EmotionType,
    GrammaticalType,
    Priority,
    RulePriority,
)


class ConflictPoint(BaseModel):
    """A single detected disagreement between grammar and emotion.

    Attributes:
        component: Property key, or the synthetic ``position``/``intensity`` keys.
        grammatical_value: Value on the grammatical side (None when absent).
        emotional_value: Value on the emotional side (None when absent).
        conflict_degree: Normalized difference [0, 1].
        comprehension_impact: Importance-weighted degree [0, 1].
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    component: str
    grammatical_value: PropertyValue | None = None
    emotional_value: PropertyValue | None = None
    conflict_degree: float = Field(..., ge=0.0, le=1.0)
    comprehension_impact: float = Field(..., ge=0.0, le=1.0)


class ConflictAnalysis(BaseModel):
    """Aggregate conflict assessment for one articulator."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    severity: float = Field(..., ge=0.0, le=1.0)
    points: list[ConflictPoint] = Field(default_factory=list)
    comprehension_impact: float = Field(..., ge=0.0, le=1.0)
    resolvability: float = Field(..., ge=0.0, le=1.0)

    @property
    def has_conflicts(self) -> bool:
        """True when at least one conflict point was detected."""
        return bool(self.points)


class ConflictContext(BaseModel):
    """What a conflict is about, used for rule lookup.

    Attributes:
        grammatical_type: Grammatical function of the sentence.
        component: Articulator name (case-insensitive, aliases allowed).
        emotion_type: Emotion being rendered.
        priority: Optional caller preference used when no rule matches.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    grammatical_type: GrammaticalType = GrammaticalType.NEUTRAL
    component: str
    emotion_type: EmotionType = EmotionType.NEUTRAL
    priority: Priority | None = None


class ConflictRule(BaseModel):
    """Entry of the static conflict rule table."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    priority: RulePriority
    blend_ratio: float = Field(..., ge=0.0, le=1.0)


__all__ = [
    "ConflictAnalysis",
    "ConflictContext",
    "ConflictPoint",
    "ConflictRule",
]
