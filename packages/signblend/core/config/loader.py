"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from signblend.core.config.models import AppConfig
from signblend.core.utils import logging as logging_utils
from signblend.core.utils.json import read_json

logger = logging.getLogger(__name__)

# Default app config path (can be overridden)
_DEFAULT_APP_CONFIG_PATH = Path("signblend.yaml")


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("signblend.json")
        'json'
        >>> detect_format("signblend.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Supports both JSON and YAML formats. Format is auto-detected
    from file extension.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            return read_json(path)
        except ValueError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    try:
        with path.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    # safe_load returns None for empty files
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Invalid YAML in {path}: expected a mapping, got {type(content).__name__}")
    return content


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    Args:
        path: Path to app config file (.json, .yaml, or .yml).
              Defaults to signblend.yaml in the working directory.

    Returns:
        Validated AppConfig instance with defaults for missing values

    Raises:
        ValidationError: If config is invalid
    """
    if path is None:
        path = _DEFAULT_APP_CONFIG_PATH

    if Path(path).exists():
        config = AppConfig.model_validate(load_config(path))
        logger.debug(f"Loaded app config from {path}")
    else:
        logger.debug(f"No config file at {path}, using defaults")
        config = AppConfig()

    return config


def configure_logging(config: AppConfig | None = None) -> None:
    """Configure Python logging from app config.

    Args:
        config: AppConfig instance (loads default if None)
    """
    if config is None:
        config = load_app_config()

    logging_utils.configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )
