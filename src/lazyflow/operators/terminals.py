"""Terminal operators: drive a sequence to the end and produce one result.

Each returns a coroutine. The first upstream error is raised from it.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from lazyflow.core import Source, curry, iterating

from ._support import maybe_await

T = TypeVar("T")
A = TypeVar("A")

__all__ = ["reduce", "for_each", "to_list"]


@curry
async def reduce(fn: Callable[[A, T], A], initial: A, source: Source[T]) -> A:
    """Fold the sequence left-to-right; ``initial`` for an empty sequence.

    Example:
        >>> await reduce(lambda acc, n: acc + n, 0, range(1, 5))
        15
    """
    acc = initial
    async with iterating(source) as it:
        async for item in it:
            acc = await maybe_await(fn(acc, item))
    return acc


@curry
async def for_each(fn: Callable[[T], object], source: Source[T]) -> None:
    """Call ``fn`` on every item in order, awaiting coroutine results."""
    async with iterating(source) as it:
        async for item in it:
            await maybe_await(fn(item))


async def to_list(source: Source[T]) -> list[T]:
    """Collect every item into a list. Never returns for an infinite sequence."""
    async with iterating(source) as it:
        return [item async for item in it]
