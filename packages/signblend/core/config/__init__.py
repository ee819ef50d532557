"""Configuration management for signblend."""

from signblend.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
)
from signblend.core.config.models import (
    AppConfig,
    IntegrationConfig,
    LoggingConfig,
    ResolutionConfig,
    ValidationThresholds,
)

__all__ = [
    # Loaders
    "configure_logging",
    "detect_format",
    "load_app_config",
    "load_config",
    # Models
    "AppConfig",
    "IntegrationConfig",
    "LoggingConfig",
    "ResolutionConfig",
    "ValidationThresholds",
]
