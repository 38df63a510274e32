"""Configuration for the client.

Precedence (highest to lowest):
1. Environment variables (CORAL_* prefix)
2. YAML config file passed to ``CoralConfig.load``
3. Built-in defaults
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml  # type: ignore[import-untyped]
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENDPOINT = "https://elasticmapreduce.amazonaws.com"


class CoralConfig(BaseSettings):
    """Client configuration.

    Environment variables:
    - CORAL_ENDPOINT: Service URL
    - CORAL_TIMEOUT: Request timeout in seconds
    - CORAL_VERIFY_SSL: Whether to verify SSL (true/false)
    - CORAL_LOG_LEVEL: Log level name
    - CORAL_LOG_FORMAT: "console" or "json"

    Example:
        >>> config = CoralConfig()
        >>> print(config.endpoint)
        'https://elasticmapreduce.amazonaws.com'
    """

    endpoint: str = Field(default=DEFAULT_ENDPOINT)
    timeout: int = Field(default=30, ge=1, le=300)
    verify_ssl: bool = Field(default=True)
    log_level: str = Field(default="INFO")
    log_format: Literal["console", "json"] = Field(default="console")

    model_config = SettingsConfigDict(
        env_prefix="CORAL_",
        case_sensitive=False,
    )

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Validate and normalize the endpoint URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Endpoint must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the log level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def load(cls, config_path: Path | None = None) -> CoralConfig:
        """Load configuration from an optional YAML file and the environment.

        Args:
            config_path: Optional config file path

        Returns:
            Loaded configuration

        Raises:
            ValueError: If the file is missing or invalid
        """
        file_data: dict[str, Any] = {}
        if config_path is not None:
            if not config_path.exists():
                raise ValueError(f"Config file not found: {config_path}")
            file_data = cls._load_yaml_file(config_path)

        # Values coming from the environment are the ones explicitly set
        from_env = cls()
        env_data = from_env.model_dump(include=from_env.model_fields_set)

        try:
            return cls(**{**file_data, **env_data})
        except Exception as e:
            raise ValueError(f"Invalid configuration: {e}") from e

    @staticmethod
    def _load_yaml_file(path: Path) -> dict[str, Any]:
        """Load and parse a YAML file.

        Raises:
            ValueError: If file is invalid YAML
        """
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
                return data if isinstance(data, dict) else {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
