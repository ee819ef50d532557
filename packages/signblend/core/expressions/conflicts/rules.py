"""Static conflict rule table.

Maps (grammatical function, articulator, emotion) to the resolution family
and blend ratio that sign-language practice prescribes for that combination.
The nested table is flattened once at import into an immutable lookup.
"""

from __future__ import annotations

from types import MappingProxyType

from signblend.core.expressions.models.conflict import ConflictRule
from signblend.core.expressions.models.enum import EmotionType, GrammaticalType, RulePriority

RuleKey = tuple[GrammaticalType, str, EmotionType]

# Articulator names used by expressions -> names used by the rule table
COMPONENT_ALIASES: MappingProxyType[str, str] = MappingProxyType(
    {
        "EYES": "GAZE",
        "MOUTH": "FACE",
    }
)

_RULE_TABLE: dict[GrammaticalType, dict[str, dict[EmotionType, tuple[RulePriority, float]]]] = {
    GrammaticalType.QUESTION: {
        "EYEBROWS": {
            EmotionType.JOY: (RulePriority.GRAMMAR, 0.7),
            EmotionType.SADNESS: (RulePriority.BLEND, 0.5),
            EmotionType.ANGER: (RulePriority.EMOTION, 0.8),
            EmotionType.SURPRISE: (RulePriority.REINFORCE, 1.0),
            EmotionType.FEAR: (RulePriority.EMOTION, 0.9),
        },
        "GAZE": {
            EmotionType.JOY: (RulePriority.GRAMMAR, 0.6),
            EmotionType.SADNESS: (RulePriority.EMOTION, 0.7),
            EmotionType.ANGER: (RulePriority.SPLIT, 0.5),
            EmotionType.SURPRISE: (RulePriority.REINFORCE, 1.0),
            EmotionType.FEAR: (RulePriority.ALTERNATE, 0.5),
        },
    },
    GrammaticalType.NEGATION: {
        "HEAD": {
            EmotionType.JOY: (RulePriority.GRAMMAR, 0.8),
            EmotionType.SADNESS: (RulePriority.REINFORCE, 1.0),
            EmotionType.ANGER: (RulePriority.EMOTION, 0.7),
            EmotionType.SURPRISE: (RulePriority.GRAMMAR, 0.9),
            EmotionType.FEAR: (RulePriority.BLEND, 0.6),
        },
        "FACE": {
            EmotionType.JOY: (RulePriority.ALTERNATE, 0.5),
            EmotionType.SADNESS: (RulePriority.REINFORCE, 1.0),
            EmotionType.ANGER: (RulePriority.EMOTION, 0.8),
            EmotionType.SURPRISE: (RulePriority.GRAMMAR, 0.7),
            EmotionType.FEAR: (RulePriority.BLEND, 0.6),
        },
    },
}


def _flatten() -> MappingProxyType[RuleKey, ConflictRule]:
    flat: dict[RuleKey, ConflictRule] = {}
    for grammatical_type, components in _RULE_TABLE.items():
        for component, emotions in components.items():
            for emotion_type, (priority, blend_ratio) in emotions.items():
                flat[(grammatical_type, component, emotion_type)] = ConflictRule(
                    priority=priority, blend_ratio=blend_ratio
                )
    return MappingProxyType(flat)


CONFLICT_RULES = _flatten()


def normalize_component(component: str) -> str:
    """Upper-case an articulator name and apply table aliases.

    Example:
        >>> normalize_component("eyes")
        'GAZE'
    """
    name = component.upper()
    return COMPONENT_ALIASES.get(name, name)


def find_rule(
    grammatical_type: GrammaticalType, component: str, emotion_type: EmotionType
) -> ConflictRule | None:
    """Look up the rule for a combination, or None when the table is silent."""
    return CONFLICT_RULES.get((grammatical_type, normalize_component(component), emotion_type))


__all__ = [
    "COMPONENT_ALIASES",
    "CONFLICT_RULES",
    "RuleKey",
    "find_rule",
    "normalize_component",
]
