"""Configuration management using pydantic-settings."""

from .settings import (
    BridgeSettings,
    LazyflowSettings,
    LoggingSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "BridgeSettings",
    "LazyflowSettings",
    "LoggingSettings",
    "clear_settings_cache",
    "get_settings",
]
