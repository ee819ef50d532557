"""Configuration models for signblend."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit one JSON object per log record")
    filename: str | None = Field(default=None, description="Log file path (stdout when unset)")


class ValidationThresholds(BaseModel):
    """Minimum scores a single articulator resolution must reach.

    Example:
        >>> thresholds = ValidationThresholds()
        >>> thresholds.grammaticality  # 0.6
        >>> thresholds.cultural        # 0.7
    """

    grammaticality: float = Field(default=0.6, ge=0.0, le=1.0)
    emotionality: float = Field(default=0.5, ge=0.0, le=1.0)
    naturalness: float = Field(default=0.5, ge=0.0, le=1.0)
    cultural: float = Field(default=0.7, ge=0.0, le=1.0)

    model_config = ConfigDict(extra="forbid", frozen=True)


class ResolutionConfig(BaseModel):
    """Conflict analysis and resolution configuration."""

    conflict_threshold: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        description="Minimum numeric difference that counts as a conflict point",
    )

    thresholds: ValidationThresholds = Field(
        default_factory=ValidationThresholds,
        description="Acceptance gate for resolved components",
    )

    model_config = ConfigDict(extra="forbid", frozen=True)


class IntegrationConfig(BaseModel):
    """Whole-expression integration configuration."""

    structural_threshold: float = Field(
        default=0.7, ge=0.0, le=1.0, description="Minimum structural preservation score"
    )

    critical_marker_importance: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Markers above this importance must keep their intensity",
    )

    marker_drift: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        description="Maximum intensity drift allowed for a critical marker",
    )

    emotional_threshold: float = Field(
        default=0.6, ge=0.0, le=1.0, description="Minimum emotional feature preservation"
    )

    naturalness_threshold: float = Field(
        default=0.65, ge=0.0, le=1.0, description="Minimum composite naturalness"
    )

    fallback_to_blend_mode: bool = Field(
        default=True,
        description=(
            "Blend a rejected articulator with its coarse blend mode "
            "instead of failing the whole integration"
        ),
    )

    model_config = ConfigDict(extra="forbid", frozen=True)


class AppConfig(BaseModel):
    """Top-level configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    resolution: ResolutionConfig = Field(default_factory=ResolutionConfig)
    integration: IntegrationConfig = Field(default_factory=IntegrationConfig)

    model_config = ConfigDict(extra="ignore")  # Forward compatibility
