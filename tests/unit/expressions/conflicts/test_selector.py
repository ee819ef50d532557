"""Tests for the rule table and StrategySelector."""

from __future__ import annotations

import pytest

from signblend.core.expressions.conflicts.analyzer import ConflictAnalyzer
from signblend.core.expressions.conflicts.rules import (
    CONFLICT_RULES,
    find_rule,
    normalize_component,
)
from signblend.core.expressions.conflicts.selector import StrategySelector
from signblend.core.expressions.models import (
    ComponentSplitStrategy,
    ConflictAnalysis,
    ConflictContext,
    CoordinationMode,
    Easing,
    EmotionPriorityStrategy,
    EmotionType,
    ExpressionComponent,
    GrammarPriorityStrategy,
    GrammaticalType,
    MutualReinforcementStrategy,
    Priority,
    RulePriority,
    Side,
    StrategyType,
    SyncMode,
    TemporalAlternationStrategy,
    WeightedBlendStrategy,
)


@pytest.fixture
def selector() -> StrategySelector:
    return StrategySelector()


@pytest.fixture
def question_analysis(
    raised_eyebrows: ExpressionComponent, joyful_eyebrows: ExpressionComponent
) -> ConflictAnalysis:
    return ConflictAnalyzer().analyze(raised_eyebrows, joyful_eyebrows, GrammaticalType.QUESTION)


def make_analysis(impact: float, resolvability: float, severity: float = 0.5) -> ConflictAnalysis:
    return ConflictAnalysis(
        severity=severity,
        points=[],
        comprehension_impact=impact,
        resolvability=resolvability,
    )


class TestRules:
    """Tests for the conflict rule table."""

    def test_table_size(self) -> None:
        assert len(CONFLICT_RULES) == 20

    @pytest.mark.parametrize(
        ("component", "expected"),
        [("eyes", "GAZE"), ("mouth", "FACE"), ("Eyebrows", "EYEBROWS"), ("head", "HEAD")],
    )
    def test_normalize_component(self, component: str, expected: str) -> None:
        assert normalize_component(component) == expected

    def test_find_rule(self) -> None:
        rule = find_rule(GrammaticalType.QUESTION, "eyebrows", EmotionType.JOY)

        assert rule is not None
        assert rule.priority == RulePriority.GRAMMAR
        assert rule.blend_ratio == 0.7

    def test_find_rule_alias(self) -> None:
        rule = find_rule(GrammaticalType.NEGATION, "mouth", EmotionType.SADNESS)

        assert rule is not None
        assert rule.priority == RulePriority.REINFORCE

    def test_missing_rule(self) -> None:
        assert find_rule(GrammaticalType.EMPHASIS, "hands", EmotionType.JOY) is None
        assert find_rule(GrammaticalType.QUESTION, "eyebrows", EmotionType.DISGUST) is None


class TestSelectFromRules:
    """Rule-table selections with derived parameters."""

    def test_question_joy_eyebrows(self, selector: StrategySelector, question_analysis: ConflictAnalysis) -> None:
        context = ConflictContext(
            grammatical_type=GrammaticalType.QUESTION,
            component="Eyebrows",
            emotion_type=EmotionType.JOY,
        )

        strategy = selector.select(question_analysis, context)

        assert isinstance(strategy, GrammarPriorityStrategy)
        assert strategy.blend_ratio == 0.7
        assert strategy.transitions.easing == Easing.EASE_IN_OUT_QUAD
        assert strategy.transitions.duration == pytest.approx(0.3 + 0.4 * 1.6 / 3)
        assert strategy.transitions.control_points == [0.0, 0.3, 0.7, 1.0]

    def test_blend_component_weights(self, selector: StrategySelector, question_analysis: ConflictAnalysis) -> None:
        context = ConflictContext(
            grammatical_type=GrammaticalType.QUESTION,
            component="eyebrows",
            emotion_type=EmotionType.SADNESS,
        )

        strategy = selector.select(question_analysis, context)

        assert isinstance(strategy, WeightedBlendStrategy)
        assert strategy.weights.grammar == 0.5
        assert strategy.weights.components["raised"].grammar == pytest.approx(0.625)
        assert strategy.weights.components["raised"].emotion == pytest.approx(0.375)
        assert strategy.weights.components["intensity"].grammar == pytest.approx(0.59)
        assert strategy.smoothing.spatial == pytest.approx(0.2 + 0.516 * 0.5)

    def test_split_distribution(self, selector: StrategySelector, question_analysis: ConflictAnalysis) -> None:
        context = ConflictContext(
            grammatical_type=GrammaticalType.QUESTION,
            component="gaze",
            emotion_type=EmotionType.ANGER,
        )

        strategy = selector.select(question_analysis, context)

        assert isinstance(strategy, ComponentSplitStrategy)
        assert strategy.distribution.grammatical_assignments == []
        assert strategy.distribution.emotional_assignments == ["raised", "intensity"]
        assert strategy.distribution.separation_strength == 0.5
        assert strategy.coordination.mode == CoordinationMode.CASCADING
        assert strategy.coordination.delays["raised"] == 0.0
        assert strategy.coordination.delays["intensity"] == pytest.approx(0.05 + 0.1 * 1.6 / 3)

    def test_alternation_from_alias(self, selector: StrategySelector) -> None:
        context = ConflictContext(
            grammatical_type=GrammaticalType.QUESTION,
            component="eyes",
            emotion_type=EmotionType.FEAR,
        )

        strategy = selector.select(make_analysis(impact=0.3, resolvability=0.5), context)

        assert isinstance(strategy, TemporalAlternationStrategy)
        assert strategy.sequence.order == [Side.EMOTION, Side.GRAMMAR, Side.EMOTION]
        assert strategy.sequence.weights == [0.5, 0.5, 0.5]
        assert strategy.sequence.cycles == 3
        assert strategy.timing.phase_durations == [0.3, 0.4, 0.3]
        assert strategy.timing.easing == Easing.EASE_IN_OUT_CUBIC
        assert strategy.timing.total_duration == pytest.approx(1.0)

    def test_alternation_high_impact_starts_with_grammar(self, selector: StrategySelector) -> None:
        context = ConflictContext(
            grammatical_type=GrammaticalType.NEGATION,
            component="mouth",
            emotion_type=EmotionType.JOY,
        )

        strategy = selector.select(make_analysis(impact=0.7, resolvability=0.7), context)

        assert isinstance(strategy, TemporalAlternationStrategy)
        assert strategy.sequence.order == [Side.GRAMMAR, Side.EMOTION, Side.GRAMMAR]
        assert strategy.timing.phase_durations == [0.4, 0.3, 0.3]
        assert strategy.timing.easing == Easing.EASE_IN_OUT_QUAD

    def test_reinforcement(self, selector: StrategySelector) -> None:
        context = ConflictContext(
            grammatical_type=GrammaticalType.NEGATION,
            component="mouth",
            emotion_type=EmotionType.SADNESS,
        )

        strategy = selector.select(make_analysis(impact=0.2, resolvability=0.8, severity=0.2), context)

        assert isinstance(strategy, MutualReinforcementStrategy)
        assert strategy.amplification == pytest.approx(1.0 * (0.8 + 0.8 * 0.4))
        assert strategy.synchronization.mode == SyncMode.PARALLEL
        assert strategy.synchronization.temporal_offset == pytest.approx(0.07)

    def test_emotion_priority_preserves_critical_points(self, selector: StrategySelector) -> None:
        g = ExpressionComponent(position=0.1, intensity=0.9, properties={"raised": True})
        e = ExpressionComponent(position=0.9, intensity=0.3, properties={"raised": False})
        analysis = ConflictAnalyzer().analyze(g, e, GrammaticalType.QUESTION)
        context = ConflictContext(
            grammatical_type=GrammaticalType.QUESTION,
            component="eyebrows",
            emotion_type=EmotionType.ANGER,
        )

        strategy = selector.select(analysis, context)

        assert isinstance(strategy, EmotionPriorityStrategy)
        assert strategy.blend_ratio == 0.8
        assert strategy.adaptations.intensity_factor == 0.8
        assert strategy.adaptations.preserved_features == ["position"]


class TestDefaultStrategy:
    """Selections when the rule table is silent."""

    @pytest.fixture
    def unruled(self) -> ConflictContext:
        return ConflictContext(
            grammatical_type=GrammaticalType.EMPHASIS,
            component="hands",
            emotion_type=EmotionType.JOY,
        )

    def test_high_impact_keeps_grammar(self, selector: StrategySelector, unruled: ConflictContext) -> None:
        strategy = selector.select(make_analysis(impact=0.8, resolvability=0.6), unruled)

        assert isinstance(strategy, GrammarPriorityStrategy)
        assert strategy.blend_ratio == 0.7

    def test_hard_conflict_split(self, selector: StrategySelector, unruled: ConflictContext) -> None:
        strategy = selector.select(make_analysis(impact=0.5, resolvability=0.3), unruled)

        assert isinstance(strategy, ComponentSplitStrategy)
        assert strategy.distribution.separation_strength == 0.5
        assert strategy.coordination.mode == CoordinationMode.ASYNCHRONOUS

    def test_otherwise_weighted(self, selector: StrategySelector, unruled: ConflictContext) -> None:
        strategy = selector.select(make_analysis(impact=0.5, resolvability=0.6), unruled)

        assert isinstance(strategy, WeightedBlendStrategy)
        assert strategy.weights.grammar == 0.6
        assert strategy.weights.emotion == 0.4
        assert strategy.weights.components == {}

    def test_grammar_priority(self, selector: StrategySelector) -> None:
        strategy = selector.default_strategy(make_analysis(0.1, 0.9), Priority.GRAMMAR)

        assert strategy.type == StrategyType.PRIORITIZE_GRAMMAR
        assert strategy.blend_ratio == 0.8
        assert strategy.transitions.easing == Easing.EASE_OUT_CUBIC

    def test_emotion_priority(self, selector: StrategySelector) -> None:
        strategy = selector.default_strategy(make_analysis(0.9, 0.1), Priority.EMOTION)

        assert strategy.type == StrategyType.PRIORITIZE_EMOTION
        assert strategy.blend_ratio == 0.8

    def test_balanced_priority(self, selector: StrategySelector) -> None:
        strategy = selector.default_strategy(make_analysis(0.9, 0.1), Priority.BALANCED)

        assert isinstance(strategy, WeightedBlendStrategy)
        assert strategy.weights.grammar == 0.5
        assert strategy.weights.emotion == 0.5
        assert strategy.weights.components == {}

    def test_rule_beats_priority(self, selector: StrategySelector, question_analysis: ConflictAnalysis) -> None:
        context = ConflictContext(
            grammatical_type=GrammaticalType.QUESTION,
            component="eyebrows",
            emotion_type=EmotionType.JOY,
            priority=Priority.EMOTION,
        )

        assert selector.select(question_analysis, context).type == StrategyType.PRIORITIZE_GRAMMAR
