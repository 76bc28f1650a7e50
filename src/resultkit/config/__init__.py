"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .logging import JsonLineFormatter, configure_logging
from .settings import (
    EnvelopeSettings,
    LoggingSettings,
    ResultkitSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "EnvelopeSettings",
    "JsonLineFormatter",
    "LoggingSettings",
    "ResultkitSettings",
    "clear_settings_cache",
    "configure_logging",
    "get_settings",
]
