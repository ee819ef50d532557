"""Enumerations shared by the expression blending engine."""

from enum import Enum


class GrammaticalType(str, Enum):
    """Grammatical function carried by non-manual markers."""

    QUESTION = "QUESTION"
    NEGATION = "NEGATION"
    CONDITIONAL = "CONDITIONAL"
    EMPHASIS = "EMPHASIS"
    NEUTRAL = "NEUTRAL"


class EmotionType(str, Enum):
    """Emotions the emotion service can render."""

    JOY = "JOY"
    SADNESS = "SADNESS"
    ANGER = "ANGER"
    SURPRISE = "SURPRISE"
    FEAR = "FEAR"
    DISGUST = "DISGUST"
    NEUTRAL = "NEUTRAL"


class Priority(str, Enum):
    """Caller preference when grammar and emotion disagree."""

    GRAMMAR = "GRAMMAR"
    EMOTION = "EMOTION"
    BALANCED = "BALANCED"


class Purpose(str, Enum):
    """What the integrated expression is produced for."""

    TRANSLATION = "TRANSLATION"
    TEACHING = "TEACHING"
    CONVERSATION = "CONVERSATION"


class RulePriority(str, Enum):
    """Resolution family named by an entry of the conflict rule table."""

    GRAMMAR = "GRAMMAR"
    EMOTION = "EMOTION"
    BLEND = "BLEND"
    REINFORCE = "REINFORCE"
    ALTERNATE = "ALTERNATE"
    SPLIT = "SPLIT"


class StrategyType(str, Enum):
    """Tag of a resolution strategy.

    Attributes:
        PRIORITIZE_GRAMMAR: Grammatical component wins, emotion leaks in by blend ratio.
        PRIORITIZE_EMOTION: Emotional component wins, critical grammar features kept.
        WEIGHTED_BLEND: Per-property weighted mix of both sides.
        MUTUAL_REINFORCEMENT: Both sides agree in spirit, amplify the stronger.
        TEMPORAL_ALTERNATION: Sides take turns over time.
        COMPONENT_SPLIT: Each property is owned by exactly one side.
    """

    PRIORITIZE_GRAMMAR = "PRIORITIZE_GRAMMAR"
    PRIORITIZE_EMOTION = "PRIORITIZE_EMOTION"
    WEIGHTED_BLEND = "WEIGHTED_BLEND"
    MUTUAL_REINFORCEMENT = "MUTUAL_REINFORCEMENT"
    TEMPORAL_ALTERNATION = "TEMPORAL_ALTERNATION"
    COMPONENT_SPLIT = "COMPONENT_SPLIT"


class BlendMode(str, Enum):
    """Coarse per-articulator blend used by the integrator."""

    WEIGHTED = "weighted"
    PRIORITIZE_EMOTION = "prioritize_emotion"
    PRIORITIZE_GRAMMAR = "prioritize_grammar"


class Side(str, Enum):
    """Which source expression a value comes from."""

    GRAMMAR = "grammar"
    EMOTION = "emotion"


class Easing(str, Enum):
    """Easing curve names handed to the animation collaborator."""

    EASE_OUT_CUBIC = "easeOutCubic"
    EASE_IN_OUT_QUAD = "easeInOutQuad"
    EASE_IN_OUT_CUBIC = "easeInOutCubic"


class SyncMode(str, Enum):
    """Synchronization of reinforcing grammar and emotion."""

    PARALLEL = "parallel"
    SEQUENTIAL = "sequential"
    ADAPTIVE = "adaptive"


class CoordinationMode(str, Enum):
    """Coordination of split components."""

    SYNCHRONOUS = "synchronous"
    ASYNCHRONOUS = "asynchronous"
    CASCADING = "cascading"


class EmotionLevel(str, Enum):
    """Coarse intensity requested from the emotion service."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class OutcomeSource(str, Enum):
    """How an articulator of the integrated expression was produced."""

    GRAMMATICAL_ONLY = "grammatical_only"
    EMOTIONAL_ONLY = "emotional_only"
    BLENDED = "blended"
    RESOLVED = "resolved"
    FALLBACK = "fallback"
