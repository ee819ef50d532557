"""Whole-expression integration of grammar and emotion.

The ExpressionIntegrator reconciles a grammatical expression with an
emotional expression articulator by articulator:
1. Analyze the grammatical context of the base expression
2. Derive integration weights from the context
3. Resolve every articulator (copy, coarse blend or conflict resolution)
4. Synchronize timing
5. Run the three holistic validations
6. Summarize the result
"""

from __future__ import annotations

import asyncio
import logging

from signblend.core.config.models import AppConfig
from signblend.core.expressions.conflicts.resolver import ConflictResolver
from signblend.core.expressions.conflicts.validator import CulturalConsistencyCheck
from signblend.core.expressions.errors import IntegrationError, ResolutionValidationError
from signblend.core.expressions.integration.blending import blend_component
from signblend.core.expressions.integration.protocols import EmotionService, GrammarRuleService
from signblend.core.expressions.integration.services import (
    MarkerGrammarService,
    ProfileEmotionService,
)
from signblend.core.expressions.integration.synchronization import synchronize
from signblend.core.expressions.integration.validation import HolisticValidator
from signblend.core.expressions.integration.weights import (
    adjust_for_purpose,
    determine_integration_weights,
    dominant_function,
    grammatical_intensity,
    to_emotion_context,
    weight_for,
)
from signblend.core.expressions.models.component import (
    EmotionInput,
    ExpressionComponent,
    SignExpression,
)
from signblend.core.expressions.models.conflict import ConflictContext
from signblend.core.expressions.models.enum import EmotionType, GrammaticalType, OutcomeSource
from signblend.core.expressions.models.integration import (
    ComponentOutcome,
    ConflictResolutionStats,
    GrammaticalContext,
    IntegratedExpression,
    IntegrationContext,
    IntegrationMetadata,
    IntegrationWeights,
)
from signblend.core.utils.logging import get_logger

logger = logging.getLogger(__name__)

DEFAULT_EMOTION_INTENSITY = 0.5


class ExpressionIntegrator:
    """Integrates an emotional expression into a grammatical one.

    Responsibilities:
    - Derive grammatical context and integration weights
    - Resolve articulators concurrently
    - Synchronize significant components
    - Gate the result with the holistic validations

    Example:
        >>> integrator = ExpressionIntegrator()
        >>> result = await integrator.integrate(
        ...     grammatical_expr,
        ...     emotional_expr,
        ...     IntegrationContext(priority=Priority.BALANCED),
        ... )
        >>> result.metadata.conflict_resolution.conflicts
        1
    """

    def __init__(
        self,
        grammar_service: GrammarRuleService | None = None,
        emotion_service: EmotionService | None = None,
        config: AppConfig | None = None,
        cultural_check: CulturalConsistencyCheck | None = None,
    ):
        """Initialize expression integrator.

        Args:
            grammar_service: Grammar-rule backend (marker-flag service by default).
            emotion_service: Emotion backend (profile service by default).
            config: Application configuration (defaults when None).
            cultural_check: Cultural consistency scorer for single-articulator validation.
        """
        self.config = config or AppConfig()
        self.grammar_service: GrammarRuleService = grammar_service or MarkerGrammarService()
        self.emotion_service: EmotionService = emotion_service or ProfileEmotionService()
        self.resolver = ConflictResolver(self.config.resolution, cultural_check=cultural_check)
        self.validator = HolisticValidator(
            self.grammar_service, self.emotion_service, self.config.integration
        )

    async def integrate_emotion(
        self,
        emotion: EmotionInput,
        base_expression: SignExpression,
        context: IntegrationContext | None = None,
    ) -> IntegratedExpression:
        """Render an emotion with the emotion service and integrate it.

        Args:
            emotion: Emotion to integrate.
            base_expression: Grammatical base expression.
            context: Integration context (balanced defaults when None).

        Returns:
            Integrated expression.

        Raises:
            IntegrationError: If rendering or integration fails.
        """
        context = context or IntegrationContext()

        try:
            emotional = await self.emotion_service.process_emotion(emotion, to_emotion_context(context))
        except Exception as e:
            raise IntegrationError("Failed to integrate emotion with expression", e) from e

        if emotional.emotion is None:
            emotional = emotional.model_copy(update={"emotion": emotion})

        return await self.integrate(base_expression, emotional, context)

    async def integrate(
        self,
        grammatical_expr: SignExpression,
        emotional_expr: SignExpression,
        context: IntegrationContext | None = None,
    ) -> IntegratedExpression:
        """Integrate an emotional expression into a grammatical expression.

        Args:
            grammatical_expr: Grammatical base expression.
            emotional_expr: Emotional expression (its ``emotion`` drives weights and rules).
            context: Integration context (balanced defaults when None).

        Returns:
            Integrated expression with synchronization, per-articulator outcomes and scores.

        Raises:
            IntegrationError: If a holistic validation fails, or a rejected
                resolution cannot fall back, or a collaborator fails.
        """
        context = context or IntegrationContext()

        try:
            return await self._integrate(grammatical_expr, emotional_expr, context)
        except IntegrationError:
            raise
        except Exception as e:
            raise IntegrationError("Failed to integrate emotion with expression", e) from e

    async def analyze_grammatical_context(self, expression: SignExpression) -> GrammaticalContext:
        """Markers, dominant function, constraints and intensity of an expression."""
        markers = await self.grammar_service.identify_markers(expression)
        function = dominant_function(markers)

        function_constraints, detected_constraints = await asyncio.gather(
            self.grammar_service.get_constraints_for_function(function),
            self.grammar_service.analyze_expression_constraints(expression),
        )

        return GrammaticalContext(
            function=function,
            markers=markers,
            constraints=[*function_constraints, *detected_constraints],
            intensity=grammatical_intensity(markers),
        )

    async def _integrate(
        self,
        grammatical_expr: SignExpression,
        emotional_expr: SignExpression,
        context: IntegrationContext,
    ) -> IntegratedExpression:
        grammatical_context = await self.analyze_grammatical_context(grammatical_expr)

        emotion = emotional_expr.emotion
        emotion_type = emotion.type if emotion else EmotionType.NEUTRAL
        emotion_intensity = emotion.intensity if emotion else DEFAULT_EMOTION_INTENSITY

        weights = determine_integration_weights(grammatical_context, emotion_intensity, context)
        blend_weights = adjust_for_purpose(weights, context.purpose)

        articulators = list(dict.fromkeys([*grammatical_expr.components, *emotional_expr.components]))
        logger.debug(
            f"Integrating {emotion_type.value} into {grammatical_context.function.value} "
            f"expression over {len(articulators)} articulators"
        )

        results = await asyncio.gather(
            *[
                self._integrate_articulator(
                    articulator,
                    grammatical_expr.get(articulator),
                    emotional_expr.get(articulator),
                    grammatical_context.function,
                    emotion_type,
                    context,
                    blend_weights,
                )
                for articulator in articulators
            ]
        )

        components = {a: component for a, (component, _) in zip(articulators, results, strict=True)}
        outcomes = {a: outcome for a, (_, outcome) in zip(articulators, results, strict=True)}

        synchronized, sync_info = synchronize(components, weights.global_weights.emotion)
        integrated = SignExpression(
            components=synchronized,
            function=grammatical_expr.function,
            emotion=emotion,
        )

        structural, emotional, naturalness = await self.validator.validate(
            integrated, grammatical_expr, emotional_expr, context, sync_info
        )

        stats = ConflictResolutionStats(
            conflicts=sum(1 for o in outcomes.values() if o.conflict_points > 0),
            resolutions=sum(1 for o in outcomes.values() if o.source == OutcomeSource.RESOLVED),
        )
        logger.info(
            f"Integrated {len(articulators)} articulators: {stats.conflicts} conflicts, "
            f"{stats.resolutions} resolved"
        )

        return IntegratedExpression(
            expression=integrated,
            synchronization=sync_info,
            outcomes=outcomes,
            metadata=IntegrationMetadata(
                grammatical_preservation=structural.score,
                emotional_authenticity=emotional.score,
                naturalness=naturalness.score,
                conflict_resolution=stats,
            ),
        )

    async def _integrate_articulator(
        self,
        articulator: str,
        base: ExpressionComponent | None,
        emotional: ExpressionComponent | None,
        function: GrammaticalType,
        emotion_type: EmotionType,
        context: IntegrationContext,
        weights: IntegrationWeights,
    ) -> tuple[ExpressionComponent, ComponentOutcome]:
        if emotional is None:
            if base is None:
                raise IntegrationError(f"Articulator {articulator} is missing from both expressions")
            return base, ComponentOutcome(source=OutcomeSource.GRAMMATICAL_ONLY)
        if base is None:
            return emotional, ComponentOutcome(source=OutcomeSource.EMOTIONAL_ONLY)

        weight = weight_for(weights, articulator)
        analysis = self.resolver.analyzer.analyze(base, emotional, function)

        if not analysis.has_conflicts:
            return blend_component(base, emotional, weight), ComponentOutcome(
                source=OutcomeSource.BLENDED
            )

        conflict_context = ConflictContext(
            grammatical_type=function,
            component=articulator,
            emotion_type=emotion_type,
            priority=context.priority,
        )

        try:
            resolution = self.resolver.resolve(base, emotional, conflict_context, analysis=analysis)
        except ResolutionValidationError as e:
            if not self.config.integration.fallback_to_blend_mode:
                raise IntegrationError(f"Conflict on {articulator} could not be resolved", e) from e

            get_logger(__name__, articulator=articulator).warning(
                f"Resolution rejected for {articulator}, using {weight.blend_mode.value} blend"
            )
            return blend_component(base, emotional, weight), ComponentOutcome(
                source=OutcomeSource.FALLBACK,
                conflict_points=len(analysis.points),
                rejection=e.scores,
            )

        return resolution.resolved_component, ComponentOutcome(
            source=OutcomeSource.RESOLVED,
            conflict_points=len(analysis.points),
            strategy=resolution.metadata.strategy,
        )


__all__ = ["ExpressionIntegrator"]
