"""lazyflow - Lazy, pull-based async sequences with composable operators.

A Lazy wraps an iterator factory and does no work until iterated. Operators
wrap a Lazy in another Lazy; terminal operators drive it to a result.
PushBridge lets push-driven producers (callbacks, timers, manual calls) feed
the pull model through a single rendezvous slot.

Quick Start:
    >>> from lazyflow import operators as ops
    >>>
    >>> await ops.to_list(ops.map(lambda n: n * 2, ops.filter(lambda n: n % 2, ops.range(1, 5))))
    [2, 6, 10]

Pipelines (operators are curried):
    >>> from lazyflow import pipe
    >>> double_odds = pipe(ops.filter(lambda n: n % 2), ops.map(lambda n: n * 2))
    >>> await ops.to_list(double_odds(ops.range(1, 5)))
    [2, 6, 10]
    >>> await ops.to_list(ops.range(1).pipe(ops.skip(2), ops.take(3)))
    [3, 4, 5]

Push-driven sources:
    >>> from lazyflow import PushBridge
    >>> bridge = PushBridge()
    >>> loop.call_later(0.1, bridge.emit, "tick")
    >>> async for value in ops.take(1, bridge):
    ...     print(value)
    tick
"""

from __future__ import annotations

__version__ = "0.1.0"

from . import operators
from .core import (
    BridgeState,
    Curried,
    Lazy,
    Overflow,
    PushBridge,
    compose,
    curry,
    get_iterator,
    identity,
    iterating,
    make_iterator,
    pipe,
)
from .foundation import (
    ErrorCode,
    InvalidConstruction,
    LazyflowSettings,
    StreamError,
    StreamException,
    UpstreamFailure,
    clear_settings_cache,
    get_settings,
)
from .observability import configure_logging, get_logger, log_context

__all__ = [
    "__version__",
    "operators",
    # Core
    "Lazy", "make_iterator", "get_iterator", "iterating",
    "PushBridge", "BridgeState", "Overflow",
    "Curried", "curry", "compose", "pipe", "identity",
    # Errors
    "ErrorCode", "StreamError", "StreamException", "InvalidConstruction", "UpstreamFailure",
    # Config
    "LazyflowSettings", "get_settings", "clear_settings_cache",
    # Logging
    "configure_logging", "get_logger", "log_context",
]
