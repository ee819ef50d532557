"""Resolution strategy models.

This module defines the six resolution strategies as a tagged union:
- GrammarPriorityStrategy: grammar wins, emotion leaks in by blend ratio
- EmotionPriorityStrategy: emotion wins, critical grammar features kept
- WeightedBlendStrategy: per-property weighted mix
- MutualReinforcementStrategy: amplify the stronger of two agreeing signals
- TemporalAlternationStrategy: grammar and emotion take turns
- ComponentSplitStrategy: each property owned by exactly one side

Each strategy carries the parameters the StrategySelector derived from the
conflict analysis. ``ResolutionStrategy`` discriminates on ``type``.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from signblend.core.expressions.models.enum import (
    CoordinationMode,
    Easing,
    Side,
    StrategyType,
    SyncMode,
)

# =============================================================================
# Derived parameter models
# =============================================================================


class TransitionParameters(BaseModel):
    """Transition into a grammar-priority resolution.

    Attributes:
        duration: Transition duration in seconds.
        easing: Easing curve for the transition.
        control_points: Normalized control points of the transition curve.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    duration: float = Field(..., ge=0.0)
    easing: Easing
    control_points: list[float] = Field(default_factory=lambda: [0.0, 0.3, 0.7, 1.0])


class AdaptationParameters(BaseModel):
    """Adaptations applied by an emotion-priority resolution."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    intensity_factor: float = Field(..., ge=0.0, le=1.0)
    spatial_offset: float = Field(..., ge=0.0, le=1.0)
    preserved_features: list[str] = Field(default_factory=list)


class SideWeights(BaseModel):
    """Grammar/emotion weight pair."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    grammar: float = Field(..., ge=0.0, le=1.0)
    emotion: float = Field(..., ge=0.0, le=1.0)


class BlendWeights(BaseModel):
    """Global and per-property weights of a weighted blend.

    Properties without an entry in ``components`` use the global pair.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    grammar: float = Field(..., ge=0.0, le=1.0)
    emotion: float = Field(..., ge=0.0, le=1.0)
    components: dict[str, SideWeights] = Field(default_factory=dict)

    def for_property(self, key: str) -> SideWeights:
        """Weights for a property key, falling back to the global pair."""
        return self.components.get(key) or SideWeights(grammar=self.grammar, emotion=self.emotion)


class SmoothingFactors(BaseModel):
    """Smoothing applied on top of a weighted blend."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    temporal: float = Field(..., ge=0.0, le=1.0)
    spatial: float = Field(..., ge=0.0, le=1.0)
    intensity: float = Field(..., ge=0.0, le=1.0)


class SynchronizationParameters(BaseModel):
    """Synchronization of a mutual reinforcement."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    temporal_offset: float = Field(..., ge=0.0)
    mode: SyncMode
    sync_points: list[float] = Field(default_factory=lambda: [0.0, 0.25, 0.5, 0.75, 1.0])


class AlternationSequence(BaseModel):
    """Phase order and weights of a temporal alternation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    order: list[Side] = Field(..., min_length=1)
    weights: list[float] = Field(..., min_length=1)
    cycles: int = Field(..., ge=1)

    @model_validator(mode="after")
    def _validate_lengths(self) -> AlternationSequence:
        if len(self.order) != len(self.weights):
            raise ValueError(
                f"order and weights must align, got {len(self.order)} and {len(self.weights)}"
            )
        return self


class AlternationTiming(BaseModel):
    """Timing of a temporal alternation (normalized durations)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    total_duration: float = Field(..., ge=0.0)
    phase_durations: list[float] = Field(..., min_length=1)
    easing: Easing


class ComponentDistribution(BaseModel):
    """Assignment of conflicting keys to the grammatical or emotional side.

    A key appears in at most one list; keys in neither list belong to grammar.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    grammatical_assignments: list[str] = Field(default_factory=list)
    emotional_assignments: list[str] = Field(default_factory=list)
    separation_strength: float = Field(..., ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _validate_disjoint(self) -> ComponentDistribution:
        overlap = set(self.grammatical_assignments) & set(self.emotional_assignments)
        if overlap:
            raise ValueError(f"keys assigned to both sides: {sorted(overlap)}")
        return self

    def side_for(self, key: str) -> Side:
        """Side owning a key (grammar when unassigned)."""
        if key in self.emotional_assignments:
            return Side.EMOTION
        return Side.GRAMMAR


class ComponentCoordination(BaseModel):
    """Coordination of split components over time."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: CoordinationMode
    delays: dict[str, float] = Field(default_factory=dict)
    duration: float = Field(..., ge=0.0)


# =============================================================================
# Strategies
# =============================================================================


class GrammarPriorityStrategy(BaseModel):
    """Grammar wins; emotion contributes ``1 - blend_ratio``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal[StrategyType.PRIORITIZE_GRAMMAR] = StrategyType.PRIORITIZE_GRAMMAR
    blend_ratio: float = Field(..., ge=0.0, le=1.0)
    transitions: TransitionParameters


class EmotionPriorityStrategy(BaseModel):
    """Emotion wins; preserved grammatical features are reinstated."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal[StrategyType.PRIORITIZE_EMOTION] = StrategyType.PRIORITIZE_EMOTION
    blend_ratio: float = Field(..., ge=0.0, le=1.0)
    adaptations: AdaptationParameters


class WeightedBlendStrategy(BaseModel):
    """Per-property weighted mix of both sides."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal[StrategyType.WEIGHTED_BLEND] = StrategyType.WEIGHTED_BLEND
    weights: BlendWeights
    smoothing: SmoothingFactors


class MutualReinforcementStrategy(BaseModel):
    """Amplify the stronger of both signals."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal[StrategyType.MUTUAL_REINFORCEMENT] = StrategyType.MUTUAL_REINFORCEMENT
    amplification: float = Field(..., ge=0.0)
    synchronization: SynchronizationParameters


class TemporalAlternationStrategy(BaseModel):
    """Grammar and emotion take turns."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal[StrategyType.TEMPORAL_ALTERNATION] = StrategyType.TEMPORAL_ALTERNATION
    sequence: AlternationSequence
    timing: AlternationTiming


class ComponentSplitStrategy(BaseModel):
    """Each property owned by exactly one side."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal[StrategyType.COMPONENT_SPLIT] = StrategyType.COMPONENT_SPLIT
    distribution: ComponentDistribution
    coordination: ComponentCoordination


ResolutionStrategy = Annotated[
    GrammarPriorityStrategy
    | EmotionPriorityStrategy
    | WeightedBlendStrategy
    | MutualReinforcementStrategy
    | TemporalAlternationStrategy
    | ComponentSplitStrategy,
    Field(discriminator="type"),
]


__all__ = [
    "AdaptationParameters",
    "AlternationSequence",
    "AlternationTiming",
    "BlendWeights",
    "ComponentCoordination",
    "ComponentDistribution",
    "ComponentSplitStrategy",
    "EmotionPriorityStrategy",
    "GrammarPriorityStrategy",
    "MutualReinforcementStrategy",
    "ResolutionStrategy",
    "SideWeights",
    "SmoothingFactors",
    "SynchronizationParameters",
    "TemporalAlternationStrategy",
    "TransitionParameters",
    "WeightedBlendStrategy",
]
