"""Single-articulator conflict analysis and resolution."""

from signblend.core.expressions.conflicts.analyzer import (
    COMPONENT_IMPORTANCE,
    ConflictAnalyzer,
    component_importance,
)
from signblend.core.expressions.conflicts.appliers import StrategyApplier
from signblend.core.expressions.conflicts.resolver import ConflictResolver
from signblend.core.expressions.conflicts.rules import (
    CONFLICT_RULES,
    find_rule,
    normalize_component,
)
from signblend.core.expressions.conflicts.selector import StrategySelector
from signblend.core.expressions.conflicts.validator import (
    CulturalConsistencyCheck,
    ResolutionValidator,
)

__all__ = [
    "COMPONENT_IMPORTANCE",
    "CONFLICT_RULES",
    "ConflictAnalyzer",
    "ConflictResolver",
    "CulturalConsistencyCheck",
    "ResolutionValidator",
    "StrategyApplier",
    "StrategySelector",
    "component_importance",
    "find_rule",
    "normalize_component",
]
