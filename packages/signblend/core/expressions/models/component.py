"""Articulator state and whole-expression models.

An ``ExpressionComponent`` is the instantaneous state of one articulator
(eyebrows, eyes, mouth, head, body, hands). A ``SignExpression`` maps
articulator names to components. Both are immutable: every transform in
the engine returns new instances.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from signblend.core.expressions.models.enum import EmotionType, GrammaticalType

PropertyValue = bool | float


class ExpressionComponent(BaseModel):
    """One articulator's instantaneous state.

    Attributes:
        position: Normalized articulator position [0, 1].
        intensity: Normalized articulation intensity [0, 1].
        duration: Duration in milliseconds.
        is_grammatical_marker: True when grammar requires this configuration.
        properties: Typed sub-properties (booleans are categorical, floats numeric).

    Example:
        >>> ExpressionComponent(
        ...     position=0.5,
        ...     intensity=0.9,
        ...     is_grammatical_marker=True,
        ...     properties={"raised": True},
        ... )
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    position: float = Field(..., ge=0.0, le=1.0)
    intensity: float = Field(..., ge=0.0, le=1.0)
    duration: float = Field(default=500.0, ge=0.0, description="Duration in milliseconds")
    is_grammatical_marker: bool = False
    properties: dict[str, PropertyValue] = Field(default_factory=dict)

    def with_properties(self, properties: dict[str, PropertyValue], **updates: Any) -> ExpressionComponent:
        """Return a copy with replaced properties and optional field updates.

        Uses ``model_validate`` so bounds are re-checked on the new instance.
        """
        data = self.model_dump()
        data.update(updates)
        data["properties"] = dict(properties)
        return ExpressionComponent.model_validate(data)


class EmotionInput(BaseModel):
    """Emotion requested from, or rendered by, the emotion service.

    Attributes:
        type: Emotion type (JOY, SADNESS, ...).
        intensity: Felt intensity [0, 1].
        valence: Negative to positive affect [-1, 1].
        duration: Duration in milliseconds.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: EmotionType
    intensity: float = Field(..., ge=0.0, le=1.0)
    valence: float = Field(default=0.0, ge=-1.0, le=1.0)
    duration: float = Field(default=1000.0, ge=0.0)


class SignExpression(BaseModel):
    """A multi-articulator expression.

    Attributes:
        components: Articulator name -> component.
        function: Grammatical function this expression marks, if any.
        emotion: Emotion this expression renders, if any.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    components: dict[str, ExpressionComponent] = Field(default_factory=dict)
    function: GrammaticalType | None = None
    emotion: EmotionInput | None = None

    def get(self, articulator: str) -> ExpressionComponent | None:
        """Component for an articulator, or None when absent."""
        return self.components.get(articulator)

    @property
    def articulators(self) -> list[str]:
        """Articulator names in insertion order."""
        return list(self.components)


__all__ = [
    "EmotionInput",
    "ExpressionComponent",
    "PropertyValue",
    "SignExpression",
]
