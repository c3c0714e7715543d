"""The lazy sequence: an async iterable built from an iterator factory.

A Lazy does no work until iterated. Every ``async for`` (or get_iterator call)
invokes the factory again, so a Lazy over a pure factory can be replayed,
while one over a factory that closes over shared state shares that state
between iterations.

Example:
    >>> def numbers():
    ...     yield 1
    ...     yield 2
    >>> seq = Lazy(numbers)
    >>> [n async for n in seq]
    [1, 2]
"""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from contextlib import asynccontextmanager
from typing import Any, Callable, Generic, TypeAlias, TypeVar

from lazyflow.foundation.errors import InvalidConstruction

from .compose import pipe

T = TypeVar("T")

__all__ = ["Lazy", "Source", "IteratorFactory", "make_iterator", "get_iterator", "iterating"]

IteratorFactory: TypeAlias = Callable[[], AsyncIterator[T] | Iterator[T]]


class Lazy(Generic[T]):
    """Async iterable wrapping a zero-argument iterator factory.

    The factory may return an async iterator or a plain iterator; plain
    iterators are adapted so consumers always see the async protocol.

    Raises:
        InvalidConstruction: If no factory is given
    """

    __slots__ = ("_factory",)

    def __init__(self, factory: IteratorFactory[T] | None) -> None:
        if factory is None:
            raise InvalidConstruction.create("lazy", "Lazy requires an iterator factory")
        self._factory = factory

    def __aiter__(self) -> AsyncIterator[T]:
        return _as_async(self._factory())

    def pipe(self, *operators: Callable[[Any], Any]) -> Any:
        """Apply unary operators left-to-right.

        Example:
            >>> range(1, 5).pipe(filter(is_odd), map(double))
        """
        return pipe(*operators)(self)

    def __repr__(self) -> str:
        name = getattr(self._factory, "__qualname__", type(self._factory).__name__)
        return f"{type(self).__name__}({name})"


# Anything an operator accepts as upstream
Source: TypeAlias = Lazy[T] | AsyncIterable[T] | Iterable[T]


def make_iterator(factory: IteratorFactory[T]) -> Lazy[T]:
    """Build a Lazy from an iterator factory."""
    return Lazy(factory)


def get_iterator(source: Source[T]) -> AsyncIterator[T]:
    """Fresh async iterator for a Lazy, an async iterable or a plain iterable.

    Raises:
        TypeError: If source is not iterable at all
    """
    if isinstance(source, AsyncIterable):
        return source.__aiter__()
    if isinstance(source, Iterable):
        return _drain_sync(iter(source))
    raise TypeError(f"{type(source).__name__!r} object is not an iterable or async iterable")


@asynccontextmanager
async def iterating(source: Source[T]) -> AsyncIterator[AsyncIterator[T]]:
    """Iterate a source and close its iterator on exit.

    Closing propagates: an operator closed by its consumer closes its
    upstream, so early termination reaches the first source in the chain.
    """
    iterator = get_iterator(source)
    try:
        yield iterator
    finally:
        if (aclose := getattr(iterator, "aclose", None)) is not None:
            await aclose()


def _as_async(iterator: AsyncIterator[T] | Iterator[T]) -> AsyncIterator[T]:
    if isinstance(iterator, AsyncIterator):
        return iterator
    if isinstance(iterator, Iterator):
        return _drain_sync(iterator)
    raise TypeError(f"iterator factory returned {type(iterator).__name__!r}, expected an iterator")


async def _drain_sync(iterator: Iterator[T]) -> AsyncIterator[T]:
    for item in iterator:
        yield item
