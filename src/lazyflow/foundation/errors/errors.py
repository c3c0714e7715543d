"""Standardized errors for lazy sequences.

Provides error codes and a structured error payload carried by every
exception the library raises itself. Upstream errors raised by user code are
never wrapped: they propagate unchanged to the consumer.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class ErrorCode(StrEnum):
    """Error codes for failures raised by the library."""
    INVALID_CONSTRUCTION = "INVALID_CONSTRUCTION"
    UPSTREAM_FAILURE = "UPSTREAM_FAILURE"
    UNKNOWN = "UNKNOWN"


class StreamError(BaseModel):
    """Structured description of a stream failure.

    Attributes:
        source: Component that raised the error (e.g. "lazy", "bridge")
        message: Human-readable error message
        code: Machine-readable error code
        details: Optional detailed information (e.g. repr of a failure payload)
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        validate_default=True,
        json_schema_extra={
            "title": "Stream Error",
            "examples": [{
                "source": "bridge",
                "message": "bridge failed",
                "code": "UPSTREAM_FAILURE",
            }],
        },
    )

    source: Annotated[str, Field(min_length=1, description="Component that raised the error")]
    message: Annotated[str, Field(min_length=1, description="Human-readable error message")]
    code: ErrorCode = Field(default=ErrorCode.UNKNOWN, description="Machine-readable error classification")
    details: str | None = Field(default=None, description="Optional detailed error info")

    @field_validator("message", mode="before")
    @classmethod
    def _ensure_message(cls, v: str | Exception) -> str:
        """Accept Exception objects and extract message."""
        return str(v) if isinstance(v, Exception) else v

    @computed_field
    @property
    def is_fatal(self) -> bool:
        """Construction errors are programming mistakes and never recoverable."""
        return self.code is ErrorCode.INVALID_CONSTRUCTION

    @classmethod
    def create(
        cls,
        source: str,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN,
        *,
        details: str | None = None,
    ) -> Self:
        """Factory method for construction."""
        return cls(source=source, message=message, code=code, details=details)

    def render(self) -> str:
        parts = [f"[{self.code}] {self.source}: {self.message}"]
        if self.details:
            parts.append(f" ({self.details})")
        return "".join(parts)

    __str__ = render


class StreamException(Exception):
    """Exception wrapping a StreamError for raising."""

    __slots__ = ("error",)

    code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, error: StreamError) -> None:
        self.error = error
        super().__init__(error.message)

    @classmethod
    def create(cls, source: str, message: str, *, details: str | None = None) -> Self:
        """Create exception with this class's error code."""
        return cls(StreamError.create(source, message, cls.code, details=details))


class InvalidConstruction(StreamException):
    """A lazy sequence was built without an iterator factory."""

    code = ErrorCode.INVALID_CONSTRUCTION


class UpstreamFailure(StreamException):
    """A push source failed with a payload that is not an exception."""

    __slots__ = ("payload",)

    code = ErrorCode.UPSTREAM_FAILURE

    def __init__(self, error: StreamError, payload: object = None) -> None:
        super().__init__(error)
        self.payload = payload

    @classmethod
    def from_payload(cls, source: str, payload: object = None) -> Self:
        """Wrap an arbitrary failure payload."""
        details = None if payload is None else repr(payload)
        return cls(StreamError.create(source, f"{source} failed", cls.code, details=details), payload)
