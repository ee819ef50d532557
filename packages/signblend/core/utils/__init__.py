"""Shared utilities for signblend."""

from signblend.core.utils.json import read_json
from signblend.core.utils.math import clamp, clamp01, is_number, lerp, mean, weighted_mean

__all__ = [
    "clamp",
    "clamp01",
    "is_number",
    "lerp",
    "mean",
    "read_json",
    "weighted_mean",
]
