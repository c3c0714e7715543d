"""Error handling for lazyflow.

- ErrorCode: Error codes for library-raised failures
- StreamError/StreamException: Structured errors and exceptions
- InvalidConstruction/UpstreamFailure: The concrete failures the core raises
"""

from .errors import ErrorCode, InvalidConstruction, StreamError, StreamException, UpstreamFailure

__all__ = [
    "ErrorCode", "StreamError", "StreamException",
    "InvalidConstruction", "UpstreamFailure",
]
