"""Firecrawl MCP Configuration System.

Environment-driven settings with Pydantic validation, optionally layered
with a YAML file. Settings are read once at process start and then passed
explicitly to every component; nothing in the request path reads the
environment.

Config Layer Priority (highest to lowest):
1. YAML config file (--config)
2. Environment variables (FIRECRAWL_ prefix, plus DEBUG)
3. .env file
4. Defaults (defined on the Settings model)

Usage:
    from firecrawl_mcp.core.config import load_settings

    settings = load_settings()
    retry_config = settings.retry_config()
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import (
    AliasChoices,
    Field,
    PositiveFloat,
    PositiveInt,
    SecretStr,
    ValidationError,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from firecrawl_mcp.client.retry import RetryConfig
from firecrawl_mcp.core.exceptions import ConfigurationError


DEFAULT_API_BASE_URL = "https://api.firecrawl.dev/v1"


class Settings(BaseSettings):
    """Process-wide settings for the Firecrawl MCP server.

    Loads configuration from:
    1. Environment variables (FIRECRAWL_ prefix)
    2. Explicit keyword arguments (YAML file values)
    3. Defaults defined below

    Durations are in milliseconds to match the upstream API conventions.
    """

    model_config = SettingsConfigDict(
        env_prefix="FIRECRAWL_",
        extra="ignore",
        frozen=True,
    )

    api_key: SecretStr
    api_base_url: str = DEFAULT_API_BASE_URL
    timeout: PositiveInt = 30000  # ms
    max_retries: int = Field(default=3, ge=0)
    retry_delay: PositiveInt = 1000  # ms
    backoff_multiplier: PositiveFloat = 2.0
    max_backoff: PositiveInt = 8000  # ms
    debug: bool = Field(
        default=False,
        validation_alias=AliasChoices("FIRECRAWL_DEBUG", "DEBUG", "debug"),
    )
    log_level: str = "INFO"
    log_format: str = "console"

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: SecretStr) -> SecretStr:
        """Reject an empty or whitespace-only API key."""
        if not v.get_secret_value().strip():
            raise ValueError("api_key cannot be empty")
        return v

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid base URL: {v}. Must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log renderer name."""
        if v.lower() not in {"console", "json"}:
            raise ValueError(f"Invalid log format: {v}. Must be 'console' or 'json'")
        return v.lower()

    @property
    def timeout_seconds(self) -> float:
        """Per-request transport timeout in seconds."""
        return self.timeout / 1000

    def retry_config(self) -> RetryConfig:
        """Build the immutable retry configuration for the executor.

        Raises:
            ConfigurationError: If the retry values are inconsistent.
        """
        try:
            return RetryConfig(
                max_retries=self.max_retries,
                initial_delay_ms=self.retry_delay,
                backoff_multiplier=self.backoff_multiplier,
                max_delay_ms=self.max_backoff,
                debug=self.debug,
            )
        except ValueError as e:
            raise ConfigurationError(
                config_path="environment",
                message=f"Invalid retry configuration: {e}",
            ) from e


# =============================================================================
# Configuration Loading Functions
# =============================================================================


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML content as dictionary.

    Raises:
        ConfigurationError: If file cannot be read or parsed.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(
            config_path=str(path),
            message=f"Configuration file not found: {path}",
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(
            config_path=str(path),
            message=f"Invalid YAML in {path}: {e}",
        )

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(
            config_path=str(path),
            message=f"Top-level YAML in {path} must be a mapping",
        )
    return content


def load_settings(
    config_path: Optional[Path] = None,
    env_file: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Settings:
    """Create a Settings instance from the environment and optional files.

    Args:
        config_path: Optional YAML file whose keys override the environment.
        env_file: Optional .env file to load into the environment first.
            Defaults to ./.env when it exists.
        overrides: Optional explicit values, applied last.

    Returns:
        Validated, frozen Settings instance.

    Raises:
        ConfigurationError: If the API key is missing or any value is invalid.
    """
    if env_file is None:
        env_file = Path.cwd() / ".env"
    env_file = Path(env_file).expanduser()
    if env_file.exists():
        load_dotenv(env_file)

    values: Dict[str, Any] = {}
    if config_path is not None:
        values.update(load_yaml_file(Path(config_path).expanduser()))
    if overrides:
        values.update(overrides)

    source = str(config_path) if config_path is not None else "environment"
    try:
        return Settings(**values)
    except ValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        loc = first.get("loc") or ()
        key = str(loc[0]) if loc else None
        if key == "api_key" and first.get("type") == "missing":
            message = "FIRECRAWL_API_KEY environment variable is required"
        else:
            message = f"Configuration validation failed: {e}"
        raise ConfigurationError(config_path=source, key=key, message=message) from e
