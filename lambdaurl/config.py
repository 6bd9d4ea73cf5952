"""Configuration loading for lambdaurl.

Translation itself has no settings; configuration covers logging and the
local development server only. Sources, in order:

1. ``LAMBDAURL_CONFIG`` environment variable holding JSON
2. YAML file named by ``LAMBDAURL_CONFIG_FILE``
3. Built-in defaults
"""

import json
import logging
import os
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from lambdaurl.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "LAMBDAURL_CONFIG"
CONFIG_FILE_ENV_VAR = "LAMBDAURL_CONFIG_FILE"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_config: Optional["ShimConfig"] = None


class LoggingConfig(BaseModel):
    """Logging settings."""

    model_config = ConfigDict(extra="forbid")

    configure: bool = Field(
        default=True, description="Whether wrap_handler configures the root logger"
    )
    level: str = Field(default="INFO", description="Root log level")
    pretty: bool = Field(default=False, description="Indented JSON instead of compact")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Log level must be one of {', '.join(_LOG_LEVELS)}")
        return level


class LocalServerConfig(BaseModel):
    """Bind address of the local development server."""

    model_config = ConfigDict(extra="forbid")

    host: str = Field(default="localhost")
    port: int = Field(default=8000, ge=1, le=65535)


class ShimConfig(BaseModel):
    """Top-level configuration."""

    model_config = ConfigDict(extra="forbid")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    local_server: LocalServerConfig = Field(default_factory=LocalServerConfig)


def validate_config(raw: Any, source: str) -> ShimConfig:
    """Validate a parsed configuration document.

    Args:
        raw: Parsed JSON/YAML document
        source: Human-readable source name for error messages

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If validation fails
    """
    if raw is None:
        raise ConfigurationError(f"Configuration in {source} is empty")
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Configuration in {source} must be a mapping")

    try:
        return ShimConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {source}: {e}") from e


def load_config_file(config_path: str) -> ShimConfig:
    """Load and validate configuration from a YAML file.

    Raises:
        ConfigurationError: If the YAML or its contents are invalid
        FileNotFoundError: If the file doesn't exist
    """
    try:
        with open(config_path, "r") as f:
            raw = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    return validate_config(raw, config_path)


def _load_from_environment() -> Optional[ShimConfig]:
    config_json = os.environ.get(CONFIG_ENV_VAR)
    if config_json:
        try:
            raw: Dict[str, Any] = json.loads(config_json)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {CONFIG_ENV_VAR}: {e}") from e
        return validate_config(raw, CONFIG_ENV_VAR)

    config_path = os.environ.get(CONFIG_FILE_ENV_VAR)
    if config_path:
        return load_config_file(config_path)

    return None


def load_config() -> ShimConfig:
    """Load configuration once per process.

    Returns:
        Cached configuration
    """
    global _config

    if _config is not None:
        return _config

    config = _load_from_environment()
    if config is None:
        config = ShimConfig()
        logger.debug("No configuration supplied, using defaults")
    else:
        logger.debug("Loaded configuration", extra={"config": config.model_dump()})

    _config = config
    return _config


def reset_config() -> None:
    """Drop the cached configuration (used by tests)."""
    global _config
    _config = None
