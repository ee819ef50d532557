"""Resolution validation.

Scores a resolved articulator against the grammatical and emotional states
it came from, checks it for anatomically implausible combinations and
gates it on configurable minimum scores.
"""

from __future__ import annotations

import logging
from typing import Protocol

from signblend.core.config.models import ValidationThresholds
from signblend.core.expressions.errors import ResolutionValidationError
from signblend.core.expressions.models.component import ExpressionComponent
from signblend.core.expressions.models.resolution import ConflictResolution, ValidationScores
from signblend.core.utils.math import clamp01, is_number, mean

logger = logging.getLogger(__name__)

DEFAULT_CULTURAL_SCORE = 0.85

# Flags that cannot both be set on one articulator
INCOMPATIBLE_FLAGS: tuple[tuple[str, str], ...] = (
    ("raised", "furrowed"),
    ("eyebrows_raised", "eyebrows_furrowed"),
    ("mouth_open", "lips_pressed"),
)


class CulturalConsistencyCheck(Protocol):
    """Scores the cultural consistency of a resolution."""

    def __call__(self, resolution: ConflictResolution) -> float: ...


def default_cultural_check(resolution: ConflictResolution) -> float:
    """Constant score used until region-specific rules are plugged in."""
    return DEFAULT_CULTURAL_SCORE


def count_inconsistencies(component: ExpressionComponent) -> int:
    """Number of implausible combinations on one articulator."""
    props = component.properties
    count = sum(1 for a, b in INCOMPATIBLE_FLAGS if props.get(a) is True and props.get(b) is True)

    # High intensity with a slack articulator
    tension = props.get("tension")
    if component.intensity > 0.8 and is_number(tension) and tension < 0.3:
        count += 1

    return count


def property_preservation(reference: ExpressionComponent, resolved: ExpressionComponent) -> float:
    """Share of the reference properties the resolved component keeps.

    Numeric properties score ``1 - |diff|``; other properties score 1 when
    equal. Missing properties score 0. An empty reference scores 1.
    """
    if not reference.properties:
        return 1.0

    scores = []
    for key, original in reference.properties.items():
        value = resolved.properties.get(key)
        if value is None:
            scores.append(0.0)
        elif is_number(original) and is_number(value):
            scores.append(1.0 - min(1.0, abs(original - value)))
        elif is_number(original) == is_number(value) and original == value:
            scores.append(1.0)
        else:
            scores.append(0.0)
    return mean(scores)


class ResolutionValidator:
    """Scores and gates a single-articulator resolution.

    Responsibilities:
    - Grammaticality against the grammatical state
    - Emotionality against the emotional state
    - Naturalness from the incompatible-combination rules
    - Cultural consistency from a pluggable check
    """

    def __init__(
        self,
        thresholds: ValidationThresholds | None = None,
        cultural_check: CulturalConsistencyCheck | None = None,
    ):
        """Initialize resolution validator.

        Args:
            thresholds: Minimum scores for acceptance (defaults 0.6/0.5/0.5/0.7).
            cultural_check: Cultural consistency scorer (constant 0.85 by default).
        """
        self.thresholds = thresholds or ValidationThresholds()
        self.cultural_check = cultural_check or default_cultural_check

    def validate(
        self,
        resolution: ConflictResolution,
        grammatical: ExpressionComponent,
        emotional: ExpressionComponent,
    ) -> ValidationScores:
        """Score a resolution and reject it when any score is below threshold.

        Args:
            resolution: Resolution produced by the StrategyApplier.
            grammatical: Original grammatical state.
            emotional: Original emotional state.

        Returns:
            Scores of the accepted resolution.

        Raises:
            ResolutionValidationError: If any score is below its threshold.
        """
        scores = self.score(resolution, grammatical, emotional)
        self.check(scores)
        return scores

    def score(
        self,
        resolution: ConflictResolution,
        grammatical: ExpressionComponent,
        emotional: ExpressionComponent,
    ) -> ValidationScores:
        """Compute the score vector without gating."""
        resolved = resolution.resolved_component

        grammaticality = (
            0.5 * property_preservation(grammatical, resolved)
            + 0.3 * (1.0 - min(1.0, abs(resolved.position - grammatical.position)))
            + 0.2 * (1.0 - min(1.0, abs(resolved.intensity - grammatical.intensity)))
        )
        emotionality = 0.6 * property_preservation(emotional, resolved) + 0.4 * (
            1.0 - min(1.0, abs(resolved.intensity - emotional.intensity))
        )

        return ValidationScores(
            grammaticality=clamp01(grammaticality),
            emotionality=clamp01(emotionality),
            naturalness=self.naturalness(resolved),
            cultural=clamp01(self.cultural_check(resolution)),
        )

    def check(self, scores: ValidationScores) -> None:
        """Raise when a score vector misses any threshold."""
        t = self.thresholds
        failures = [
            name
            for name, value, minimum in (
                ("grammaticality", scores.grammaticality, t.grammaticality),
                ("emotionality", scores.emotionality, t.emotionality),
                ("naturalness", scores.naturalness, t.naturalness),
                ("cultural", scores.cultural, t.cultural),
            )
            if value < minimum
        ]

        if failures:
            logger.debug(f"Resolution rejected on {', '.join(failures)}: {scores.model_dump()}")
            raise ResolutionValidationError(
                f"Resolution validation failed: {', '.join(failures)} below threshold",
                scores,
            )

    @staticmethod
    def naturalness(component: ExpressionComponent) -> float:
        """0.9 minus 0.15 per implausible combination, floored at 0.3."""
        inconsistencies = count_inconsistencies(component)
        return max(0.3, 0.9 - min(0.5, inconsistencies * 0.15))


__all__ = [
    "CulturalConsistencyCheck",
    "DEFAULT_CULTURAL_SCORE",
    "INCOMPATIBLE_FLAGS",
    "count_inconsistencies",
    "ResolutionValidator",
    "default_cultural_check",
    "property_preservation",
]
