"""
Configuration management for pagerduty-events.

Handles loading and validation of client configuration from files and
environment variables.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, validator

DEFAULT_USER_AGENT = "pagerduty-events/0.1.0"


def _resolve_env_reference(v: Optional[str]) -> Optional[str]:
    """Resolve a ``${VAR}`` reference to the value of that environment variable."""
    if isinstance(v, str) and v.startswith("${") and v.endswith("}"):
        return os.getenv(v[2:-1])
    return v


class PagerDutyConfig(BaseModel):
    """Configuration for the Events API v2 client."""

    integration_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("PAGERDUTY_INTEGRATION_KEY"),
        description="Integration (routing) key of the target service",
    )
    user_agent: Optional[str] = Field(
        default=DEFAULT_USER_AGENT, description="User-Agent header sent with every request"
    )
    timeout_seconds: float = Field(
        default=300.0, description="Request timeout for blocking requests"
    )

    @validator("integration_key", pre=True)
    def resolve_integration_key(cls, v: Optional[str]) -> Optional[str]:
        """Resolve integration key from environment variable if needed."""
        if v is None:
            return os.getenv("PAGERDUTY_INTEGRATION_KEY")
        return _resolve_env_reference(v)

    @validator("user_agent", pre=True)
    def resolve_user_agent(cls, v: Optional[str]) -> Optional[str]:
        """Resolve user agent from environment variable if needed."""
        return _resolve_env_reference(v)

    @validator("timeout_seconds")
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout."""
        if v <= 0:
            raise ValueError(f"Invalid timeout: {v}. Must be positive")
        return v


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Log rendering: console or json")

    @validator("log_level")
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @validator("log_format")
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        v_lower = v.lower()
        if v_lower not in ("console", "json"):
            raise ValueError(f"Invalid log format: {v}. Must be console or json")
        return v_lower


class Config(BaseModel):
    """Main configuration object."""

    version: str = Field(default="0.1.0", description="Configuration version")
    pagerduty: PagerDutyConfig = Field(default_factory=PagerDutyConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    class Config:
        extra = "forbid"  # Don't allow extra fields


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from file and environment variables.

    Args:
        config_path: Path to configuration file. If None, looks for
                    PAGERDUTY_EVENTS_CONFIG environment variable.

    Returns:
        Loaded and validated configuration

    Raises:
        FileNotFoundError: If config file specified but not found
        ValueError: If configuration is invalid
    """
    if config_path is None:
        env_path = os.getenv("PAGERDUTY_EVENTS_CONFIG")
        if env_path:
            config_path = Path(env_path)

    config_data: Dict[str, Any] = {}
    if config_path and config_path.exists():
        with open(config_path, "r") as f:
            config_data = json.load(f)
    elif config_path:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    env_overrides: Dict[str, Any] = {}

    log_level = os.getenv("PAGERDUTY_EVENTS_LOG_LEVEL")
    if log_level:
        env_overrides.setdefault("logging", {})["log_level"] = log_level

    log_format = os.getenv("PAGERDUTY_EVENTS_LOG_FORMAT")
    if log_format:
        env_overrides.setdefault("logging", {})["log_format"] = log_format

    user_agent = os.getenv("PAGERDUTY_USER_AGENT")
    if user_agent:
        env_overrides.setdefault("pagerduty", {})["user_agent"] = user_agent

    if env_overrides:
        config_data = _deep_merge(config_data, env_overrides)

    return Config(**config_data)


def create_default_config(config_path: Path) -> None:
    """
    Create a default configuration file.

    Args:
        config_path: Path where to create the configuration file
    """
    default_config = {
        "version": "0.1.0",
        "pagerduty": {
            "integration_key": "${PAGERDUTY_INTEGRATION_KEY}",
            "user_agent": DEFAULT_USER_AGENT,
            "timeout_seconds": 300.0,
        },
        "logging": {
            "log_level": "INFO",
            "log_format": "console",
        },
    }

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        json.dump(default_config, f, indent=2)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
