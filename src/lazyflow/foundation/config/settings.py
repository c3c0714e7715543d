"""Environment-based configuration using pydantic-settings.

Example:
    >>> from lazyflow.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.bridge.overflow
    'latest'
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # LAZYFLOW_BRIDGE_OVERFLOW=queue
    # LAZYFLOW_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LAZYFLOW_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class BridgeSettings(BaseSettings):
    """Push bridge defaults."""

    model_config = SettingsConfigDict(
        env_prefix="LAZYFLOW_BRIDGE_",
        extra="ignore",
    )

    overflow: Literal["latest", "queue"] = Field(
        default="latest",
        description="What happens to values emitted between two pulls: keep only the latest, or queue them all",
    )


class LazyflowSettings(BaseSettings):
    """Root settings for lazyflow.

    Loads configuration from environment variables with LAZYFLOW_ prefix.

    Example environment variables:
        LAZYFLOW_DEBUG=true
        LAZYFLOW_LOG_LEVEL=DEBUG
        LAZYFLOW_LOG_FORMAT=json
        LAZYFLOW_BRIDGE_OVERFLOW=queue
    """

    model_config = SettingsConfigDict(
        env_prefix="LAZYFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")

    # Nested settings (loaded with LAZYFLOW_LOG_, LAZYFLOW_BRIDGE_)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    bridge: BridgeSettings = Field(default_factory=BridgeSettings)

    @computed_field
    @property
    def effective_log_level(self) -> str:
        """Debug mode forces DEBUG logging."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> LazyflowSettings:
    """Get the global settings instance (cached)."""
    return LazyflowSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
