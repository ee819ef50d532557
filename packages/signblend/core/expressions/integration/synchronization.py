"""Timing synchronization of integrated components."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from signblend.core.expressions.models.component import ExpressionComponent
from signblend.core.expressions.models.integration import SynchronizationInfo

logger = logging.getLogger(__name__)

SIGNIFICANT_INTENSITY = 0.7


def is_significant(component: ExpressionComponent) -> bool:
    """Markers and strongly articulated components carry the timing."""
    return component.is_grammatical_marker or component.intensity > SIGNIFICANT_INTENSITY


def synchronize(
    components: dict[str, ExpressionComponent],
    global_emotion_weight: float,
) -> tuple[dict[str, ExpressionComponent], SynchronizationInfo]:
    """Stretch significant components to a common duration.

    The target duration is the longest duration among significant
    components; other components keep their own timing.

    Args:
        components: Integrated components by articulator.
        global_emotion_weight: Global emotion weight of the integration.

    Returns:
        Synchronized components and the applied synchronization info.
    """
    max_duration = max(
        (c.duration for c in components.values() if is_significant(c)),
        default=0.0,
    )

    synchronized = {
        articulator: (
            component.model_copy(update={"duration": max_duration})
            if is_significant(component)
            else component
        )
        for articulator, component in components.items()
    }

    logger.debug(
        f"Synchronized {sum(1 for c in components.values() if is_significant(c))} "
        f"of {len(components)} components to {max_duration:.0f}ms"
    )

    info = SynchronizationInfo(
        max_duration=max_duration,
        global_emotion_weight=global_emotion_weight,
        timestamp=datetime.now(UTC),
    )
    return synchronized, info


__all__ = [
    "SIGNIFICANT_INTENSITY",
    "is_significant",
    "synchronize",
]
