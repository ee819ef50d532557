"""Expression blending data model."""

from signblend.core.expressions.models.component import (
    EmotionInput,
    ExpressionComponent,
    PropertyValue,
    SignExpression,
)
from signblend.core.expressions.models.conflict import (
    ConflictAnalysis,
    ConflictContext,
    ConflictPoint,
    ConflictRule,
)
from signblend.core.expressions.models.enum import (
    BlendMode,
    CoordinationMode,
    Easing,
    EmotionLevel,
    EmotionType,
    GrammaticalType,
    OutcomeSource,
    Priority,
    Purpose,
    RulePriority,
    Side,
    StrategyType,
    SyncMode,
)
from signblend.core.expressions.models.integration import (
    ComponentOutcome,
    ComponentWeight,
    ConflictResolutionStats,
    EmotionalFeature,
    EmotionContext,
    GrammaticalConstraint,
    GrammaticalContext,
    GrammaticalMarker,
    IntegratedExpression,
    IntegrationContext,
    IntegrationMetadata,
    IntegrationWeights,
    SynchronizationInfo,
    ValidationResult,
)
from signblend.core.expressions.models.resolution import (
    ConflictResolution,
    ResolutionMetadata,
    ValidationScores,
)
from signblend.core.expressions.models.strategy import (
    AdaptationParameters,
    AlternationSequence,
    AlternationTiming,
    BlendWeights,
    ComponentCoordination,
    ComponentDistribution,
    ComponentSplitStrategy,
    EmotionPriorityStrategy,
    GrammarPriorityStrategy,
    MutualReinforcementStrategy,
    ResolutionStrategy,
    SideWeights,
    SmoothingFactors,
    SynchronizationParameters,
    TemporalAlternationStrategy,
    TransitionParameters,
    WeightedBlendStrategy,
)

__all__ = [
    "AdaptationParameters",
    "AlternationSequence",
    "AlternationTiming",
    "BlendMode",
    "BlendWeights",
    "ComponentCoordination",
    "ComponentDistribution",
    "ComponentOutcome",
    "ComponentSplitStrategy",
    "ComponentWeight",
    "ConflictAnalysis",
    "ConflictContext",
    "ConflictPoint",
    "ConflictResolution",
    "ConflictResolutionStats",
    "ConflictRule",
    "CoordinationMode",
    "Easing",
    "EmotionContext",
    "EmotionInput",
    "EmotionLevel",
    "EmotionPriorityStrategy",
    "EmotionType",
    "EmotionalFeature",
    "ExpressionComponent",
    "GrammarPriorityStrategy",
    "GrammaticalConstraint",
    "GrammaticalContext",
    "GrammaticalMarker",
    "GrammaticalType",
    "IntegratedExpression",
    "IntegrationContext",
    "IntegrationMetadata",
    "IntegrationWeights",
    "MutualReinforcementStrategy",
    "OutcomeSource",
    "Priority",
    "PropertyValue",
    "Purpose",
    "ResolutionMetadata",
    "ResolutionStrategy",
    "RulePriority",
    "Side",
    "SideWeights",
    "SignExpression",
    "SmoothingFactors",
    "StrategyType",
    "SyncMode",
    "SynchronizationInfo",
    "SynchronizationParameters",
    "TemporalAlternationStrategy",
    "TransitionParameters",
    "ValidationResult",
    "ValidationScores",
    "WeightedBlendStrategy",
]
