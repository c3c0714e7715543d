"""Transform operators: derive one lazy sequence from another.

Every operator is curried and returns a new Lazy; nothing is pulled until the
result is iterated. Callbacks may be plain functions or coroutine functions.
Upstream errors are never caught: they propagate through the operator to the
consumer, ending the iteration.

Stopping early (take, take_while, take_until, merge, or a consumer that closes
the iterator) closes the upstream iterators, so sources see the end of the
iteration immediately.

Example:
    >>> odds_doubled = map(lambda n: n * 2, filter(lambda n: n % 2, range(1, 5)))
    >>> await to_list(odds_doubled)
    [2, 6, 10]
    >>> await to_list(take(3)(range(1)))
    [1, 2, 3]
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable
from typing import Callable, TypeVar

from lazyflow.core import Lazy, Source, curry, iterating
from lazyflow.observability import get_logger

from ._support import maybe_await, pull

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")

__all__ = [
    "map",
    "filter",
    "flat_map",
    "take",
    "skip",
    "take_while",
    "take_until",
    "skip_while",
    "skip_until",
    "tap",
    "delay",
    "merge",
]

_log = get_logger("lazyflow.operators")

Predicate = Callable[[T], "bool | Awaitable[bool]"]


@curry
def map(fn: Callable[[T], U | Awaitable[U]], source: Source[T]) -> Lazy[U]:  # noqa: A001
    """Yield ``fn(item)`` for each item, preserving order."""
    async def mapped() -> AsyncIterator[U]:
        async with iterating(source) as it:
            async for item in it:
                yield await maybe_await(fn(item))
    return Lazy(mapped)


@curry
def filter(pred: Predicate[T], source: Source[T]) -> Lazy[T]:  # noqa: A001
    """Yield only the items for which ``pred`` is truthy."""
    async def kept() -> AsyncIterator[T]:
        async with iterating(source) as it:
            async for item in it:
                if await maybe_await(pred(item)):
                    yield item
    return Lazy(kept)


@curry
def flat_map(fn: Callable[[T], Source[U] | Awaitable[Source[U]]], source: Source[T]) -> Lazy[U]:
    """Map each item to a sequence and drain it fully before advancing upstream.

    Example:
        >>> await to_list(flat_map(lambda n: range(0, n), range(1, 3)))
        [0, 1, 0, 1, 2, 0, 1, 2, 3]
    """
    async def flattened() -> AsyncIterator[U]:
        async with iterating(source) as it:
            async for item in it:
                async with iterating(await maybe_await(fn(item))) as inner:
                    async for sub in inner:
                        yield sub
    return Lazy(flattened)


@curry
def take(count: int, source: Source[T]) -> Lazy[T]:
    """Yield at most ``count`` items.

    Upstream is never pulled past the count-th item, and not at all when
    count is zero or negative.
    """
    async def taken() -> AsyncIterator[T]:
        if count <= 0:
            return
        remaining = count
        async with iterating(source) as it:
            async for item in it:
                yield item
                remaining -= 1
                if not remaining:
                    return
    return Lazy(taken)


@curry
def skip(count: int, source: Source[T]) -> Lazy[T]:
    """Drop the first ``count`` items, yield the rest."""
    async def rest() -> AsyncIterator[T]:
        remaining = count
        async with iterating(source) as it:
            async for item in it:
                if remaining > 0:
                    remaining -= 1
                    continue
                yield item
    return Lazy(rest)


@curry
def take_while(pred: Predicate[T], source: Source[T]) -> Lazy[T]:
    """Yield items until the first one failing ``pred``; that item and the rest are dropped."""
    async def prefix() -> AsyncIterator[T]:
        async with iterating(source) as it:
            async for item in it:
                if not await maybe_await(pred(item)):
                    return
                yield item
    return Lazy(prefix)


@curry
def take_until(pred: Predicate[T], source: Source[T]) -> Lazy[T]:
    """Yield items until the first one satisfying ``pred``; that item and the rest are dropped."""
    async def prefix() -> AsyncIterator[T]:
        async with iterating(source) as it:
            async for item in it:
                if await maybe_await(pred(item)):
                    return
                yield item
    return Lazy(prefix)


@curry
def skip_while(pred: Predicate[T], source: Source[T]) -> Lazy[T]:
    """Drop the leading run of items satisfying ``pred``, then yield everything once.

    The item that ends the run is yielded. ``pred`` is not consulted again
    after the run ends.
    """
    async def rest() -> AsyncIterator[T]:
        skipping = True
        async with iterating(source) as it:
            async for item in it:
                if skipping and await maybe_await(pred(item)):
                    continue
                skipping = False
                yield item
    return Lazy(rest)


@curry
def skip_until(pred: Predicate[T], source: Source[T]) -> Lazy[T]:
    """Drop items until the first one satisfying ``pred``, then yield everything once.

    The item that satisfies ``pred`` is yielded. ``pred`` is not consulted
    again afterwards.
    """
    async def rest() -> AsyncIterator[T]:
        skipping = True
        async with iterating(source) as it:
            async for item in it:
                if skipping and not await maybe_await(pred(item)):
                    continue
                skipping = False
                yield item
    return Lazy(rest)


@curry
def tap(fn: Callable[[T], object], source: Source[T]) -> Lazy[T]:
    """Call ``fn(item)`` for its side effect, then yield the item unchanged."""
    async def tapped() -> AsyncIterator[T]:
        async with iterating(source) as it:
            async for item in it:
                await maybe_await(fn(item))
                yield item
    return Lazy(tapped)


@curry
def delay(seconds: float, source: Source[T]) -> Lazy[T]:
    """Sleep ``seconds`` after pulling each item, before yielding it."""
    async def delayed() -> AsyncIterator[T]:
        async with iterating(source) as it:
            async for item in it:
                await asyncio.sleep(seconds)
                yield item
    return Lazy(delayed)


@curry
def merge(fn: Callable[[T, U], V | Awaitable[V]], first: Source[T], second: Source[U]) -> Lazy[V]:
    """Pair two sequences by position and yield ``fn(a, b)`` for each pair.

    Both branches are pulled concurrently once per step and the step resumes
    only after both pulls settle. The sequence ends as soon as either branch
    is exhausted; the other branch has then been advanced one item beyond the
    last yielded pair. An error from either branch propagates (the first
    branch's error wins when both fail in the same step).

    Example:
        >>> await to_list(merge(lambda a, b: a + b, range(1, 3), range(1, 2)))
        [2, 4]
    """
    async def paired() -> AsyncIterator[V]:
        async with iterating(first) as left, iterating(second) as right:
            while True:
                outcomes = await asyncio.gather(pull(left), pull(right), return_exceptions=True)
                for outcome in outcomes:
                    if isinstance(outcome, BaseException):
                        raise outcome
                (a, a_more), (b, b_more) = outcomes
                if not (a_more and b_more):
                    _log.debug("merge ended", exhausted="first" if not a_more else "second")
                    return
                yield await maybe_await(fn(a, b))  # type: ignore[arg-type]
    return Lazy(paired)
