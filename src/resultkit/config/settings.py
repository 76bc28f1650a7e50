"""Environment-based configuration using pydantic-settings.

Example:
    >>> from resultkit.config import get_settings
    >>> settings = get_settings()
    >>> settings.envelope.status_field
    'statusCode'
    >>> settings.logging.level
    'WARNING'

    # Or with environment variables:
    # RESULTKIT_INCLUDE_EXCEPTION=false
    # RESULTKIT_ENVELOPE_INCLUDE_EXTRA=false
    # RESULTKIT_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvelopeSettings(BaseSettings):
    """How results are rendered into HTTP response bodies."""

    model_config = SettingsConfigDict(
        env_prefix="RESULTKIT_ENVELOPE_",
        extra="ignore",
    )

    include_extra: bool = Field(default=True, description="Serialize error extra payloads")
    include_traceback: bool = Field(default=False, description="Attach tracebacks to serialized exceptions")
    status_field: str = Field(default="statusCode", min_length=1, description="Body key for the status code")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RESULTKIT_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["json", "text"] = "text"
    log_faults: bool = Field(default=True, description="Log faults captured by guarded combinators")

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class ResultkitSettings(BaseSettings):
    """Root settings.

    Example environment variables:
        RESULTKIT_INCLUDE_EXCEPTION=false
        RESULTKIT_EXPECT_MESSAGE="value required"
        RESULTKIT_ENVIRONMENT=production
        RESULTKIT_ENVELOPE__INCLUDE_EXTRA=false
    """

    model_config = SettingsConfigDict(
        env_prefix="RESULTKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    include_exception: bool = Field(default=True, description="Embed caught exceptions as error extra")
    expect_message: str = Field(default="Result was not Ok", description="Default expect() message")
    empty_message: str = Field(default="Empty", description="Error message for empty all_ok/any_ok input")
    environment: Literal["development", "staging", "production"] = "development"

    envelope: EnvelopeSettings = Field(default_factory=EnvelopeSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("environment", mode="before")
    @classmethod
    def _normalize_env(cls, v: str) -> str:
        """Normalize environment name to lowercase."""
        return v.lower() if isinstance(v, str) else v

    @computed_field
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> ResultkitSettings:
    """Get the global settings instance (cached)."""
    return ResultkitSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() reloads from environment."""
    get_settings.cache_clear()
