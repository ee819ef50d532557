"""Shared pytest fixtures for signblend tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from signblend.core.expressions.models import (
    ConflictContext,
    EmotionInput,
    EmotionType,
    ExpressionComponent,
    GrammaticalType,
    SignExpression,
)

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def project_root() -> Path:
    """Get project root directory."""
    return Path(__file__).parent.parent


# ============================================================================
# Component Fixtures
# ============================================================================


@pytest.fixture
def raised_eyebrows() -> ExpressionComponent:
    """Question marker: strongly raised eyebrows."""
    return ExpressionComponent(
        position=0.5,
        intensity=0.9,
        is_grammatical_marker=True,
        properties={"raised": True},
    )


@pytest.fixture
def joyful_eyebrows() -> ExpressionComponent:
    """Relaxed eyebrows from a mild joy rendering."""
    return ExpressionComponent(
        position=0.5,
        intensity=0.3,
        properties={"raised": False},
    )


@pytest.fixture
def question_joy_context() -> ConflictContext:
    """Eyebrow conflict between a question and joy."""
    return ConflictContext(
        grammatical_type=GrammaticalType.QUESTION,
        component="eyebrows",
        emotion_type=EmotionType.JOY,
    )


# ============================================================================
# Expression Fixtures
# ============================================================================


@pytest.fixture
def question_expression() -> SignExpression:
    """Question with a moderate eyebrow marker."""
    return SignExpression(
        components={
            "eyebrows": ExpressionComponent(
                position=0.5,
                intensity=0.6,
                is_grammatical_marker=True,
                properties={"raised": True},
            ),
        },
        function=GrammaticalType.QUESTION,
    )


@pytest.fixture
def mild_joy_expression() -> SignExpression:
    """Joy that agrees with a raised-eyebrow question."""
    return SignExpression(
        components={
            "eyebrows": ExpressionComponent(
                position=0.55,
                intensity=0.5,
                properties={"raised": True},
            ),
            "mouth": ExpressionComponent(
                position=0.5,
                intensity=0.6,
                properties={"smile": 0.6},
            ),
        },
        emotion=EmotionInput(type=EmotionType.JOY, intensity=0.6, valence=0.8),
    )
