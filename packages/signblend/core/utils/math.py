"""Math utilities for common scoring operations."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, TypeGuard, TypeVar

import numpy as np

Number = TypeVar("Number", int, float, np.number)


def clamp(value: Number, min_val: Number, max_val: Number) -> Number:
    """Clamp value to range [min_val, max_val].

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def clamp01(value: float) -> float:
    """Clamp a score to the unit interval."""
    return float(clamp(float(value), 0.0, 1.0))


def lerp(a: Number, b: Number, t: float) -> float:
    """Linear interpolation between a and b.

    Args:
        a: Start value
        b: End value
        t: Interpolation factor [0, 1]

    Returns:
        Interpolated value
    """
    return float(a) + (float(b) - float(a)) * t


def is_number(value: Any) -> TypeGuard[int | float]:
    """Check whether a property value is numeric.

    Booleans are categorical here even though ``bool`` subclasses ``int``.

    Example:
        >>> is_number(0.4)
        True
        >>> is_number(True)
        False
    """
    return isinstance(value, int | float) and not isinstance(value, bool)


def mean(values: Iterable[float], default: float = 0.0) -> float:
    """Arithmetic mean that tolerates empty input.

    Args:
        values: Values to average
        default: Value returned when ``values`` is empty

    Returns:
        Mean of the values, or ``default``
    """
    arr = np.fromiter(values, dtype=float)
    if arr.size == 0:
        return default
    return float(arr.mean())


def weighted_mean(values: Sequence[float], weights: Sequence[float], default: float = 0.0) -> float:
    """Weighted mean that tolerates empty input and zero total weight.

    Args:
        values: Values to average
        weights: Weight per value (same length as ``values``)
        default: Value returned when there is nothing to average

    Returns:
        Weighted mean, or ``default``
    """
    if len(values) != len(weights):
        raise ValueError(
            f"values and weights must have the same length, got {len(values)} and {len(weights)}"
        )
    w = np.asarray(weights, dtype=float)
    if w.size == 0 or w.sum() <= 0.0:
        return default
    return float(np.average(np.asarray(values, dtype=float), weights=w))
