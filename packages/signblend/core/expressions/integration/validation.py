"""Holistic validation of an integrated expression.

Three gates run in order and the first failure stops validation:
- Structural preservation against the grammatical source
- Emotional feature preservation against the emotional source
- Composite naturalness (temporal coherence, physical feasibility, cultural fit)
"""

from __future__ import annotations

import asyncio
import logging

from signblend.core.config.models import IntegrationConfig
from signblend.core.expressions.errors import IntegrationError
from signblend.core.expressions.integration.protocols import EmotionService, GrammarRuleService
from signblend.core.expressions.models.component import SignExpression
from signblend.core.expressions.models.integration import (
    EmotionalFeature,
    IntegrationContext,
    SynchronizationInfo,
    ValidationResult,
)
from signblend.core.utils.math import clamp01, mean

logger = logging.getLogger(__name__)

DEFAULT_EMOTIONAL_PRESERVATION = 0.5
BASE_TEMPORAL_COHERENCE = 0.9
SYNCHRONIZED_BONUS = 0.05
BASE_FEASIBILITY = 0.85
FEASIBLE_COMPONENT_COUNT = 5
FEASIBILITY_PENALTY = 0.02
MIN_FEASIBILITY = 0.6
BASE_CULTURAL_APPROPRIATENESS = 0.92
FORMAL_INTENSITY_PENALTY = 0.05


def emotional_preservation(
    original: list[EmotionalFeature], integrated: list[EmotionalFeature]
) -> float:
    """Importance-weighted preservation of the original emotional features.

    Features are matched by ``(type, component)``; each scores
    ``1 - min(|diff| / max(0.001, original), 1)``. Unmatched features are
    skipped. Nothing to compare scores 0.5.
    """
    if not original or not integrated:
        return DEFAULT_EMOTIONAL_PRESERVATION

    by_key = {(f.type, f.component): f for f in integrated}

    weighted = 0.0
    total = 0.0
    for feature in original:
        match = by_key.get((feature.type, feature.component))
        if match is None:
            continue
        diff = abs(feature.value - match.value)
        preservation = 1.0 - min(diff / max(0.001, feature.value), 1.0)
        weighted += preservation * feature.importance
        total += feature.importance

    return weighted / total if total > 0 else DEFAULT_EMOTIONAL_PRESERVATION


def temporal_coherence(synchronization: SynchronizationInfo | None) -> float:
    """Synchronized expressions are slightly more coherent."""
    score = BASE_TEMPORAL_COHERENCE
    if synchronization is not None:
        score += SYNCHRONIZED_BONUS
    return min(1.0, score)


def physical_feasibility(expression: SignExpression) -> float:
    """Every articulator beyond five costs a little feasibility."""
    penalty = max(0, len(expression.components) - FEASIBLE_COMPONENT_COUNT) * FEASIBILITY_PENALTY
    return max(MIN_FEASIBILITY, BASE_FEASIBILITY - penalty)


def cultural_appropriateness(expression: SignExpression, cultural_context: str | None) -> float:
    """Very intense expressions are slightly less appropriate in a formal register."""
    score = BASE_CULTURAL_APPROPRIATENESS
    if (cultural_context or "standard") == "formal":
        intensity = mean((c.intensity for c in expression.components.values()), default=0.5)
        if intensity > 0.8:
            score -= FORMAL_INTENSITY_PENALTY
    return min(1.0, score)


class HolisticValidator:
    """Runs the three whole-expression validations.

    Responsibilities:
    - Check critical markers and structural integrity
    - Check emotional feature preservation
    - Check composite naturalness
    - Fail the integration on the first failing gate
    """

    def __init__(
        self,
        grammar_service: GrammarRuleService,
        emotion_service: EmotionService,
        config: IntegrationConfig | None = None,
    ):
        """Initialize holistic validator.

        Args:
            grammar_service: Marker identification and structural integrity.
            emotion_service: Emotional feature extraction.
            config: Integration thresholds.
        """
        self.grammar_service = grammar_service
        self.emotion_service = emotion_service
        self.config = config or IntegrationConfig()

    async def validate(
        self,
        integrated: SignExpression,
        base: SignExpression,
        emotional: SignExpression,
        context: IntegrationContext,
        synchronization: SynchronizationInfo | None = None,
    ) -> tuple[ValidationResult, ValidationResult, ValidationResult]:
        """Run the three validations in order, stopping at the first failure.

        Args:
            integrated: Synchronized integrated expression.
            base: Grammatical source expression.
            emotional: Emotional source expression.
            context: Integration context.
            synchronization: Synchronization applied to ``integrated``.

        Returns:
            Structural, emotional and naturalness results (all valid).

        Raises:
            IntegrationError: If any validation fails; ``details`` describes the cause.
        """
        structural = _require(await self.validate_grammatical_preservation(integrated, base))
        emotion = _require(await self.validate_emotional_preservation(integrated, emotional))
        naturalness = _require(await self.validate_naturalness(integrated, context, synchronization))
        return structural, emotion, naturalness

    async def validate_grammatical_preservation(
        self, integrated: SignExpression, base: SignExpression
    ) -> ValidationResult:
        """Critical markers keep their intensity and the structure stays intact."""
        base_markers, integrated_markers, score = await asyncio.gather(
            self.grammar_service.identify_markers(base),
            self.grammar_service.identify_markers(integrated),
            self.grammar_service.evaluate_structural_integrity(integrated, base),
        )
        score = clamp01(score)

        critical = [m for m in base_markers if m.importance > self.config.critical_marker_importance]
        drifted = [
            marker
            for marker in critical
            if not any(
                kept.articulator == marker.articulator
                and abs(kept.intensity - marker.intensity) <= self.config.marker_drift
                for kept in integrated_markers
            )
        ]

        if drifted:
            return ValidationResult(
                is_valid=False,
                score=score,
                message="Critical grammatical markers not preserved",
                details={
                    "drifted_markers": [m.articulator for m in drifted],
                    "preservation_score": score,
                },
            )

        if score < self.config.structural_threshold:
            return ValidationResult(
                is_valid=False,
                score=score,
                message="Grammatical structure compromised",
                details={
                    "preservation_score": score,
                    "threshold": self.config.structural_threshold,
                },
            )

        return ValidationResult(is_valid=True, score=score, message="Grammatical preservation validated")

    async def validate_emotional_preservation(
        self, integrated: SignExpression, emotional: SignExpression
    ) -> ValidationResult:
        """Emotional features of the source survive integration."""
        original, kept = await asyncio.gather(
            self.emotion_service.extract_emotional_features(emotional),
            self.emotion_service.extract_emotional_features(integrated),
        )
        score = clamp01(emotional_preservation(original, kept))

        if score < self.config.emotional_threshold:
            return ValidationResult(
                is_valid=False,
                score=score,
                message="Emotional expression significantly compromised",
                details={
                    "preservation_score": score,
                    "threshold": self.config.emotional_threshold,
                    "critical_features": [
                        f"{f.component}.{f.type}" for f in original if f.importance > 0.7
                    ],
                },
            )

        return ValidationResult(is_valid=True, score=score, message="Emotional preservation validated")

    async def validate_naturalness(
        self,
        integrated: SignExpression,
        context: IntegrationContext,
        synchronization: SynchronizationInfo | None = None,
    ) -> ValidationResult:
        """Mean of temporal coherence, physical feasibility and cultural fit."""
        temporal = temporal_coherence(synchronization)
        feasibility = physical_feasibility(integrated)
        cultural = cultural_appropriateness(integrated, context.cultural_context)
        score = clamp01(mean([temporal, feasibility, cultural]))

        details = {
            "naturalness": score,
            "temporal_coherence": temporal,
            "physical_feasibility": feasibility,
            "cultural_appropriateness": cultural,
        }

        if score < self.config.naturalness_threshold:
            return ValidationResult(
                is_valid=False,
                score=score,
                message="Expression lacks naturalness",
                details=details,
            )

        return ValidationResult(is_valid=True, score=score, message="Naturalness validated", details=details)


def _require(result: ValidationResult) -> ValidationResult:
    if not result.is_valid:
        logger.warning(f"Integration rejected: {result.message} {result.details}")
        raise IntegrationError(result.message, result.details)
    return result


__all__ = [
    "HolisticValidator",
    "cultural_appropriateness",
    "emotional_preservation",
    "physical_feasibility",
    "temporal_coherence",
]
