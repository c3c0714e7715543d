"""Foundation: errors and configuration shared by every layer."""

from .config import LazyflowSettings, clear_settings_cache, get_settings
from .errors import ErrorCode, InvalidConstruction, StreamError, StreamException, UpstreamFailure

__all__ = [
    "LazyflowSettings", "clear_settings_cache", "get_settings",
    "ErrorCode", "StreamError", "StreamException", "InvalidConstruction", "UpstreamFailure",
]
