"""Single-articulator conflict resolution pipeline."""

from __future__ import annotations

import logging

from signblend.core.config.models import ResolutionConfig
from signblend.core.expressions.conflicts.analyzer import ConflictAnalyzer
from signblend.core.expressions.conflicts.appliers import StrategyApplier
from signblend.core.expressions.conflicts.selector import StrategySelector
from signblend.core.expressions.conflicts.validator import (
    CulturalConsistencyCheck,
    ResolutionValidator,
)
from signblend.core.expressions.models.component import ExpressionComponent
from signblend.core.expressions.models.conflict import ConflictAnalysis, ConflictContext
from signblend.core.expressions.models.resolution import ConflictResolution
from signblend.core.utils.logging import log_performance

logger = logging.getLogger(__name__)


class ConflictResolver:
    """Resolves a grammar/emotion conflict on one articulator.

    Runs analyze -> select -> apply -> validate. A rejected resolution is
    raised to the caller; the resolver never retries.
    """

    def __init__(
        self,
        config: ResolutionConfig | None = None,
        cultural_check: CulturalConsistencyCheck | None = None,
    ):
        """Initialize conflict resolver.

        Args:
            config: Resolution configuration (conflict threshold, acceptance thresholds).
            cultural_check: Optional cultural consistency scorer for the validator.
        """
        self.config = config or ResolutionConfig()
        self.analyzer = ConflictAnalyzer(conflict_threshold=self.config.conflict_threshold)
        self.selector = StrategySelector()
        self.applier = StrategyApplier()
        self.validator = ResolutionValidator(
            thresholds=self.config.thresholds, cultural_check=cultural_check
        )

    @log_performance
    def resolve(
        self,
        grammatical: ExpressionComponent,
        emotional: ExpressionComponent,
        context: ConflictContext,
        analysis: ConflictAnalysis | None = None,
    ) -> ConflictResolution:
        """Resolve a conflict.

        Args:
            grammatical: State required by grammar.
            emotional: State required by emotion.
            context: What the conflict is about.
            analysis: Precomputed analysis of the same pair, if available.

        Returns:
            Validated resolution.

        Raises:
            ResolutionValidationError: If the resolution fails validation.
        """
        if analysis is None:
            analysis = self.analyzer.analyze(grammatical, emotional, context.grammatical_type)

        strategy = self.selector.select(analysis, context)
        logger.debug(f"Selected {strategy.type.value} for {context.component}")

        resolution = self.applier.apply(grammatical, emotional, strategy, analysis.severity)
        scores = self.validator.validate(resolution, grammatical, emotional)

        logger.debug(
            f"Resolved {context.component} with {strategy.type.value}: "
            f"grammaticality={scores.grammaticality:.3f}, emotionality={scores.emotionality:.3f}"
        )
        return resolution


__all__ = ["ConflictResolver"]
