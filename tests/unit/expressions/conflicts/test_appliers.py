"""Tests for strategy application."""

from __future__ import annotations

import pytest

from signblend.core.expressions.conflicts.appliers import (
    StrategyApplier,
    apply_component_split,
    apply_emotion_priority,
    apply_mutual_reinforcement,
    apply_temporal_alternation,
    apply_weighted_blend,
)
from signblend.core.expressions.errors import IntegrationError
from signblend.core.expressions.models import (
    AdaptationParameters,
    AlternationSequence,
    AlternationTiming,
    BlendWeights,
    ComponentCoordination,
    ComponentDistribution,
    ComponentSplitStrategy,
    CoordinationMode,
    Easing,
    EmotionPriorityStrategy,
    ExpressionComponent,
    GrammarPriorityStrategy,
    MutualReinforcementStrategy,
    Side,
    SideWeights,
    SmoothingFactors,
    StrategyType,
    SynchronizationParameters,
    SyncMode,
    TemporalAlternationStrategy,
    TransitionParameters,
    WeightedBlendStrategy,
)


@pytest.fixture
def applier() -> StrategyApplier:
    return StrategyApplier()


def grammar_priority(blend_ratio: float) -> GrammarPriorityStrategy:
    return GrammarPriorityStrategy(
        blend_ratio=blend_ratio,
        transitions=TransitionParameters(duration=0.5, easing=Easing.EASE_IN_OUT_QUAD),
    )


class TestGrammarPriority:
    """Grammar wins with an emotional leak."""

    def test_question_joy(
        self,
        applier: StrategyApplier,
        raised_eyebrows: ExpressionComponent,
        joyful_eyebrows: ExpressionComponent,
    ) -> None:
        resolution = applier.apply(raised_eyebrows, joyful_eyebrows, grammar_priority(0.7), 1.6 / 3)

        resolved = resolution.resolved_component
        assert resolved.intensity == pytest.approx(0.72)
        assert resolved.position == 0.5
        assert resolved.properties == {"raised": True}
        assert resolved.is_grammatical_marker

        metadata = resolution.metadata
        assert metadata.strategy.type == StrategyType.PRIORITIZE_GRAMMAR
        assert metadata.effectiveness == pytest.approx(0.8 + 0.2 * (1 - 1.6 / 3))
        assert metadata.comprehensibility == 0.9
        assert metadata.naturalness == pytest.approx(0.76)

    def test_numeric_properties_mixed(self, applier: StrategyApplier) -> None:
        g = ExpressionComponent(position=0.5, intensity=0.5, properties={"tension": 1.0})
        e = ExpressionComponent(position=0.5, intensity=0.5, properties={"tension": 0.0, "smile": 0.9})

        resolved = applier.apply(g, e, grammar_priority(0.8), 0.5).resolved_component

        assert resolved.properties == {"tension": pytest.approx(0.8)}


class TestEmotionPriority:
    """Emotion wins with preserved grammatical features."""

    @pytest.fixture
    def strategy(self) -> EmotionPriorityStrategy:
        return EmotionPriorityStrategy(
            blend_ratio=0.8,
            adaptations=AdaptationParameters(
                intensity_factor=0.8,
                spatial_offset=0.2,
                preserved_features=["raised"],
            ),
        )

    def test_preserves_features_and_moves_away(self, strategy: EmotionPriorityStrategy) -> None:
        g = ExpressionComponent(
            position=0.5, intensity=0.9, is_grammatical_marker=True, properties={"raised": True}
        )
        e = ExpressionComponent(position=0.7, intensity=0.5, properties={"raised": False, "smile": 0.4})

        resolution = apply_emotion_priority(g, e, strategy, 0.5)

        resolved = resolution.resolved_component
        assert resolved.position == pytest.approx(0.9)
        assert resolved.intensity == pytest.approx(0.4)
        assert resolved.properties == {"raised": True, "smile": 0.4}
        assert resolved.is_grammatical_marker
        assert resolution.metadata.comprehensibility == pytest.approx(0.7 + 0.2 / 3)
        assert resolution.metadata.naturalness == 0.8

    def test_position_clamped(self, strategy: EmotionPriorityStrategy) -> None:
        g = ExpressionComponent(position=0.5, intensity=0.9)
        e = ExpressionComponent(position=0.95, intensity=0.5)

        resolved = apply_emotion_priority(g, e, strategy, 0.5).resolved_component

        assert resolved.position == 1.0

    def test_moves_down_when_below(self, strategy: EmotionPriorityStrategy) -> None:
        g = ExpressionComponent(position=0.5, intensity=0.9)
        e = ExpressionComponent(position=0.4, intensity=0.5)

        resolved = apply_emotion_priority(g, e, strategy, 0.5).resolved_component

        assert resolved.position == pytest.approx(0.2)


class TestWeightedBlend:
    """Per-property weighted mix."""

    def test_blend(self) -> None:
        g = ExpressionComponent(
            position=0.6, intensity=0.8, properties={"tension": 0.8, "raised": True}
        )
        e = ExpressionComponent(
            position=0.4, intensity=0.4, properties={"tension": 0.4, "raised": False, "smile": 0.5}
        )
        strategy = WeightedBlendStrategy(
            weights=BlendWeights(
                grammar=0.5,
                emotion=0.5,
                components={"tension": SideWeights(grammar=0.75, emotion=0.25)},
            ),
            smoothing=SmoothingFactors(temporal=0.3, spatial=0.2, intensity=0.5),
        )

        resolution = apply_weighted_blend(g, e, strategy, 0.4)

        resolved = resolution.resolved_component
        assert resolved.position == pytest.approx(0.3)
        assert resolved.intensity == pytest.approx(0.65)
        assert resolved.properties["tension"] == pytest.approx(0.7)
        assert resolved.properties["raised"] is True
        assert resolved.properties["smile"] == 0.5
        assert resolution.metadata.naturalness == pytest.approx(0.9)
        assert resolution.metadata.comprehensibility == pytest.approx(0.8)
        assert resolution.metadata.effectiveness == pytest.approx(0.82)

    def test_flag_follows_heavier_side(self) -> None:
        g = ExpressionComponent(position=0.5, intensity=0.5, properties={"raised": True})
        e = ExpressionComponent(position=0.5, intensity=0.5, properties={"raised": False})
        strategy = WeightedBlendStrategy(
            weights=BlendWeights(grammar=0.3, emotion=0.7),
            smoothing=SmoothingFactors(temporal=0.3, spatial=0.0, intensity=0.0),
        )

        resolved = apply_weighted_blend(g, e, strategy, 0.3).resolved_component

        assert resolved.properties["raised"] is False


class TestMutualReinforcement:
    """Amplify the stronger signal."""

    def test_reinforce(self) -> None:
        g = ExpressionComponent(
            position=0.4, intensity=0.5, properties={"wide": 0.5, "raised": True}
        )
        e = ExpressionComponent(
            position=0.6, intensity=0.7, properties={"wide": 0.6, "raised": False}
        )
        strategy = MutualReinforcementStrategy(
            amplification=1.2,
            synchronization=SynchronizationParameters(temporal_offset=0.1, mode=SyncMode.PARALLEL),
        )

        resolution = apply_mutual_reinforcement(g, e, strategy, 0.2)

        resolved = resolution.resolved_component
        assert resolved.position == pytest.approx(0.6)
        assert resolved.intensity == pytest.approx(0.84)
        assert resolved.properties["wide"] == pytest.approx(0.72)
        assert resolved.properties["raised"] is True
        assert resolution.metadata.effectiveness == pytest.approx(0.98)
        assert resolution.metadata.naturalness == pytest.approx(0.84)

    def test_intensity_capped(self) -> None:
        g = ExpressionComponent(position=0.5, intensity=0.9)
        e = ExpressionComponent(position=0.5, intensity=0.95)
        strategy = MutualReinforcementStrategy(
            amplification=1.5,
            synchronization=SynchronizationParameters(temporal_offset=0.05, mode=SyncMode.ADAPTIVE),
        )

        resolved = apply_mutual_reinforcement(g, e, strategy, 0.1).resolved_component

        assert resolved.intensity == 1.0


class TestTemporalAlternation:
    """The mid-sequence keyframe is rendered."""

    def test_grammar_phase(self) -> None:
        g = ExpressionComponent(
            position=0.5, intensity=0.8, is_grammatical_marker=True, properties={"raised": True}
        )
        e = ExpressionComponent(position=0.3, intensity=0.4, properties={"raised": False})
        strategy = TemporalAlternationStrategy(
            sequence=AlternationSequence(
                order=[Side.EMOTION, Side.GRAMMAR, Side.EMOTION],
                weights=[0.5, 0.5, 0.5],
                cycles=3,
            ),
            timing=AlternationTiming(
                total_duration=1.0, phase_durations=[0.3, 0.4, 0.3], easing=Easing.EASE_IN_OUT_CUBIC
            ),
        )

        resolution = apply_temporal_alternation(g, e, strategy, 0.5)

        resolved = resolution.resolved_component
        assert resolved.intensity == pytest.approx(0.4)
        assert resolved.position == 0.5
        assert resolved.properties == {"raised": True}
        assert resolution.metadata.comprehensibility == 0.6
        assert resolution.metadata.effectiveness == pytest.approx(0.75)

    def test_emotion_phase_keeps_marker_flag(self) -> None:
        g = ExpressionComponent(position=0.5, intensity=0.8, is_grammatical_marker=True)
        e = ExpressionComponent(position=0.3, intensity=0.4)
        strategy = TemporalAlternationStrategy(
            sequence=AlternationSequence(
                order=[Side.GRAMMAR, Side.EMOTION, Side.GRAMMAR],
                weights=[0.7, 0.5, 0.7],
                cycles=2,
            ),
            timing=AlternationTiming(
                total_duration=1.0, phase_durations=[0.4, 0.3, 0.3], easing=Easing.EASE_IN_OUT_QUAD
            ),
        )

        resolved = apply_temporal_alternation(g, e, strategy, 0.5).resolved_component

        assert resolved.position == 0.3
        assert resolved.intensity == pytest.approx(0.2)
        assert resolved.is_grammatical_marker


class TestComponentSplit:
    """Each key owned by one side."""

    def test_split(self, raised_eyebrows: ExpressionComponent, joyful_eyebrows: ExpressionComponent) -> None:
        strategy = ComponentSplitStrategy(
            distribution=ComponentDistribution(
                emotional_assignments=["raised", "intensity"],
                separation_strength=0.5,
            ),
            coordination=ComponentCoordination(mode=CoordinationMode.CASCADING, duration=0.8),
        )

        resolution = apply_component_split(raised_eyebrows, joyful_eyebrows, strategy, 0.5)

        resolved = resolution.resolved_component
        assert resolved.properties == {"raised": False}
        assert resolved.intensity == 0.9
        assert resolved.position == 0.5
        assert resolution.metadata.comprehensibility == pytest.approx(0.7)
        assert resolution.metadata.effectiveness == pytest.approx(0.6)

    def test_one_sided_keys_survive(self) -> None:
        g = ExpressionComponent(position=0.2, intensity=0.5, properties={"raised": True})
        e = ExpressionComponent(position=0.8, intensity=0.5, properties={"smile": 0.7})
        strategy = ComponentSplitStrategy(
            distribution=ComponentDistribution(
                grammatical_assignments=["position"],
                emotional_assignments=["raised"],
                separation_strength=0.5,
            ),
            coordination=ComponentCoordination(mode=CoordinationMode.SYNCHRONOUS, duration=0.5),
        )

        resolved = apply_component_split(g, e, strategy, 0.3).resolved_component

        assert resolved.properties == {"raised": True, "smile": 0.7}
        assert resolved.position == 0.2

    def test_position_and_intensity_stay_grammatical(self) -> None:
        g = ExpressionComponent(position=0.2, intensity=0.9, properties={"raised": True})
        e = ExpressionComponent(position=0.8, intensity=0.3, properties={"raised": False})
        strategy = ComponentSplitStrategy(
            distribution=ComponentDistribution(
                emotional_assignments=["position", "intensity", "raised"],
                separation_strength=0.8,
            ),
            coordination=ComponentCoordination(mode=CoordinationMode.CASCADING, duration=0.8),
        )

        resolved = apply_component_split(g, e, strategy, 0.5).resolved_component

        assert resolved.properties == {"raised": False}
        assert resolved.position == 0.2
        assert resolved.intensity == 0.9

    def test_overlapping_assignment_rejected(self) -> None:
        with pytest.raises(ValueError, match="both sides"):
            ComponentDistribution(
                grammatical_assignments=["raised"],
                emotional_assignments=["raised"],
                separation_strength=0.5,
            )


class TestDispatch:
    """Tests for StrategyApplier dispatch."""

    def test_unknown_strategy(
        self,
        applier: StrategyApplier,
        raised_eyebrows: ExpressionComponent,
        joyful_eyebrows: ExpressionComponent,
    ) -> None:
        bogus = GrammarPriorityStrategy.model_construct(
            type="TELEPORT",
            blend_ratio=0.5,
            transitions=TransitionParameters(duration=0.5, easing=Easing.EASE_OUT_CUBIC),
        )

        with pytest.raises(IntegrationError, match="Unknown resolution strategy"):
            applier.apply(raised_eyebrows, joyful_eyebrows, bogus, 0.5)

    def test_resolved_always_in_bounds(
        self,
        applier: StrategyApplier,
        raised_eyebrows: ExpressionComponent,
        joyful_eyebrows: ExpressionComponent,
    ) -> None:
        strategy = WeightedBlendStrategy(
            weights=BlendWeights(grammar=1.0, emotion=1.0),
            smoothing=SmoothingFactors(temporal=1.0, spatial=1.0, intensity=1.0),
        )

        resolved = applier.apply(raised_eyebrows, joyful_eyebrows, strategy, 1.0).resolved_component

        assert 0.0 <= resolved.position <= 1.0
        assert 0.0 <= resolved.intensity <= 1.0


class TestStrategyCarried:
    """The applied strategy travels with the resolution."""

    def test_alternation_timeline_readable(
        self,
        applier: StrategyApplier,
        raised_eyebrows: ExpressionComponent,
        joyful_eyebrows: ExpressionComponent,
    ) -> None:
        timing = AlternationTiming(
            total_duration=1.2, phase_durations=[0.4, 0.4, 0.4], easing=Easing.EASE_IN_OUT_CUBIC
        )
        strategy = TemporalAlternationStrategy(
            sequence=AlternationSequence(
                order=[Side.GRAMMAR, Side.EMOTION, Side.GRAMMAR],
                weights=[0.8, 0.6, 0.8],
                cycles=3,
            ),
            timing=timing,
        )

        resolution = applier.apply(raised_eyebrows, joyful_eyebrows, strategy, 0.5)

        carried = resolution.metadata.strategy
        assert carried.type == StrategyType.TEMPORAL_ALTERNATION
        assert carried.sequence.cycles == 3
        assert carried.sequence.order == [Side.GRAMMAR, Side.EMOTION, Side.GRAMMAR]
        assert carried.timing == timing

    def test_split_distribution_readable(
        self,
        applier: StrategyApplier,
        raised_eyebrows: ExpressionComponent,
        joyful_eyebrows: ExpressionComponent,
    ) -> None:
        strategy = ComponentSplitStrategy(
            distribution=ComponentDistribution(emotional_assignments=["raised"], separation_strength=0.6),
            coordination=ComponentCoordination(mode=CoordinationMode.SYNCHRONOUS, duration=0.5),
        )

        resolution = applier.apply(raised_eyebrows, joyful_eyebrows, strategy, 0.3)

        assert resolution.metadata.strategy == strategy
        assert resolution.metadata.strategy.coordination.duration == 0.5
