"""Source operators: build lazy sequences from values, awaitables and events.

Key Operations:
    - range: Counting sequence, unbounded by default
    - from_iterable: Replay any finite iterable
    - from_awaitable: Single value from a future/coroutine
    - from_event: Payloads of a named event, via a PushBridge
    - empty: Sequence that ends immediately

Example:
    >>> await to_list(range(1, 3))
    [1, 2, 3]
    >>> await to_list(range(1, 3, lambda n: n * 10))
    [10, 20, 30]
"""

from __future__ import annotations

import asyncio
import math
from collections.abc import AsyncIterator, Awaitable, Iterable, Iterator
from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

from lazyflow.core import Lazy, PushBridge, curry, identity, iterating
from lazyflow.observability import get_logger

T = TypeVar("T")

__all__ = ["EventSource", "range", "from_iterable", "from_awaitable", "from_event", "empty"]

_log = get_logger("lazyflow.sources")

Listener = Callable[[Any], object]


@runtime_checkable
class EventSource(Protocol):
    """Anything that can register a callback for a named event.

    Sources that also provide ``remove_listener(event, callback)`` get the
    listener removed when iteration stops.
    """

    def on(self, event: str, callback: Listener) -> object: ...


def range(start: int, end: float = math.inf, mapper: Callable[[int], T] = identity) -> Lazy[T]:  # noqa: A001
    """Yield ``mapper(i)`` for i from start to end inclusive. Unbounded when end is omitted."""
    def count() -> Iterator[T]:
        i = start
        while i <= end:
            yield mapper(i)
            i += 1
    return Lazy(count)


def from_iterable(collection: Iterable[T]) -> Lazy[T]:
    """Yield every element of a finite iterable in its natural order."""
    def elements() -> Iterator[T]:
        yield from collection
    return Lazy(elements)


def from_awaitable(awaitable: Awaitable[T]) -> Lazy[T]:
    """Yield the result of an awaitable, then end.

    The awaitable is scheduled on first iteration and the resulting future is
    shared, so re-iterating yields the same value (or raises the same error)
    without awaiting a coroutine twice. Cancelling a consumer leaves the shared
    future running for the next iteration.

    A bare coroutine is only started by iterating; one that is never iterated
    is never awaited and Python warns when it is collected. Pass a task
    (``asyncio.create_task``) to start the work up front.
    """
    shared: asyncio.Future[T] | None = None

    async def single() -> AsyncIterator[T]:
        nonlocal shared
        if shared is None:
            shared = asyncio.ensure_future(awaitable)
        yield await asyncio.shield(shared)

    return Lazy(single)


@curry
def from_event(event: str, source: EventSource) -> Lazy[Any]:
    """Yield the payload of every ``event`` fired on ``source``.

    Each iteration gets its own PushBridge, registered as the listener when the
    iteration starts. Payloads fired between two pulls coalesce per the
    bridge's overflow policy. The sequence never completes on its own; bound it
    with take/take_until or close the iterator.
    """
    async def payloads() -> AsyncIterator[Any]:
        bridge: PushBridge[Any] = PushBridge()
        listener = bridge.emit
        source.on(event, listener)
        _log.debug("listener registered", event_name=event)
        try:
            async with iterating(bridge) as it:
                async for payload in it:
                    yield payload
        finally:
            if (remove := getattr(source, "remove_listener", None)) is not None:
                remove(event, listener)
                _log.debug("listener removed", event_name=event)

    return Lazy(payloads)


def empty() -> Lazy[Any]:
    """Sequence that yields nothing."""
    def nothing() -> Iterator[Any]:
        return iter(())
    return Lazy(nothing)
