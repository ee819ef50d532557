"""Tests for integration weights and grammatical context helpers."""

from __future__ import annotations

import pytest

from signblend.core.expressions.integration.weights import (
    adjust_for_purpose,
    determine_integration_weights,
    dominant_function,
    grammatical_intensity,
    to_emotion_context,
    weight_for,
)
from signblend.core.expressions.models import (
    BlendMode,
    EmotionLevel,
    GrammaticalContext,
    GrammaticalMarker,
    GrammaticalType,
    IntegrationContext,
    Priority,
    Purpose,
)


def marker(function: GrammaticalType, intensity: float = 0.5, importance: float = 0.5) -> GrammaticalMarker:
    return GrammaticalMarker(
        articulator="eyebrows",
        function=function,
        importance=importance,
        intensity=intensity,
    )


class TestDetermineIntegrationWeights:
    """Global and per-articulator weights."""

    def test_balanced_intense_emotion(self) -> None:
        weights = determine_integration_weights(
            GrammaticalContext(),
            emotion_intensity=0.9,
            context=IntegrationContext(priority=Priority.BALANCED, formality_level=0.3),
        )

        assert weights.global_weights.emotion == pytest.approx(0.6)
        assert weights.global_weights.grammar == pytest.approx(0.4)

    def test_emotion_priority(self) -> None:
        weights = determine_integration_weights(
            GrammaticalContext(), 0.5, IntegrationContext(priority=Priority.EMOTION)
        )

        assert weights.global_weights.emotion == pytest.approx(0.7)
        assert weights.global_weights.grammar == pytest.approx(0.3)

    def test_formal_grammar_priority(self) -> None:
        weights = determine_integration_weights(
            GrammaticalContext(),
            0.5,
            IntegrationContext(priority=Priority.GRAMMAR, formality_level=0.8),
        )

        assert weights.global_weights.grammar == pytest.approx(0.8)
        assert weights.global_weights.emotion == pytest.approx(0.2)

    def test_formality_and_intensity_cancel(self) -> None:
        weights = determine_integration_weights(
            GrammaticalContext(),
            0.95,
            IntegrationContext(priority=Priority.BALANCED, formality_level=0.9),
        )

        assert weights.global_weights.grammar == pytest.approx(0.5)
        assert weights.global_weights.emotion == pytest.approx(0.5)

    def test_component_table(self) -> None:
        weights = determine_integration_weights(GrammaticalContext(), 0.5, IntegrationContext())

        assert weights.components["eyebrows"].grammar == pytest.approx(0.4)
        assert weights.components["eyes"].blend_mode == BlendMode.PRIORITIZE_EMOTION
        assert weights.components["mouth"].emotion == pytest.approx(0.8)
        assert weights.components["head"].blend_mode == BlendMode.PRIORITIZE_GRAMMAR

    def test_question_leans_eyebrows_to_grammar(self) -> None:
        weights = determine_integration_weights(
            GrammaticalContext(function=GrammaticalType.QUESTION), 0.5, IntegrationContext()
        )

        assert weights.components["eyebrows"].grammar == pytest.approx(0.6)
        assert weights.components["eyebrows"].emotion == pytest.approx(0.4)
        assert weights.components["head"].grammar == pytest.approx(0.6)


class TestAdjustForPurpose:
    """Teaching leans toward grammar."""

    def test_teaching(self) -> None:
        weights = determine_integration_weights(GrammaticalContext(), 0.5, IntegrationContext())

        adjusted = adjust_for_purpose(weights, Purpose.TEACHING)

        assert adjusted.global_weights.grammar == pytest.approx(0.6)
        assert adjusted.global_weights.emotion == pytest.approx(0.5)
        assert adjusted.components == weights.components

    def test_translation_unchanged(self) -> None:
        weights = determine_integration_weights(GrammaticalContext(), 0.5, IntegrationContext())

        assert adjust_for_purpose(weights, Purpose.TRANSLATION) is weights


class TestWeightFor:
    """Per-articulator lookup."""

    def test_unknown_articulator_uses_global(self) -> None:
        weights = determine_integration_weights(
            GrammaticalContext(), 0.5, IntegrationContext(priority=Priority.GRAMMAR)
        )

        weight = weight_for(weights, "hands")

        assert weight.grammar == pytest.approx(0.7)
        assert weight.emotion == pytest.approx(0.3)
        assert weight.blend_mode == BlendMode.WEIGHTED


class TestGrammaticalContextHelpers:
    """Dominant function, intensity and emotion context."""

    def test_dominant_function_majority(self) -> None:
        markers = [
            marker(GrammaticalType.QUESTION),
            marker(GrammaticalType.NEGATION),
            marker(GrammaticalType.NEGATION),
        ]

        assert dominant_function(markers) == GrammaticalType.NEGATION

    def test_dominant_function_tie_keeps_first(self) -> None:
        markers = [marker(GrammaticalType.QUESTION), marker(GrammaticalType.NEGATION)]

        assert dominant_function(markers) == GrammaticalType.QUESTION

    def test_dominant_function_empty(self) -> None:
        assert dominant_function([]) == GrammaticalType.NEUTRAL

    def test_grammatical_intensity(self) -> None:
        markers = [
            marker(GrammaticalType.QUESTION, intensity=0.6, importance=0.9),
            marker(GrammaticalType.QUESTION, intensity=0.9, importance=0.3),
        ]

        assert grammatical_intensity(markers) == pytest.approx(0.675)

    def test_grammatical_intensity_empty(self) -> None:
        assert grammatical_intensity([]) == 0.5

    @pytest.mark.parametrize(
        ("priority", "level"),
        [
            (Priority.EMOTION, EmotionLevel.HIGH),
            (Priority.GRAMMAR, EmotionLevel.MEDIUM),
            (Priority.BALANCED, EmotionLevel.MEDIUM),
        ],
    )
    def test_to_emotion_context(self, priority: Priority, level: EmotionLevel) -> None:
        context = to_emotion_context(
            IntegrationContext(priority=priority, formality_level=0.8, cultural_context="formal")
        )

        assert context.intensity == level
        assert context.formality_level == 0.8
        assert context.cultural_context == "formal"
