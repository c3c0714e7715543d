"""Helpers shared by operator implementations."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import TypeVar

T = TypeVar("T")


async def maybe_await(result: T) -> T:
    """Await coroutine results of user callbacks; pass plain values through."""
    if asyncio.iscoroutine(result):
        result = await result
    return result


async def pull(iterator: AsyncIterator[T]) -> tuple[T | None, bool]:
    """Fetch one item as (value, has_more) so exhaustion never escapes as an exception."""
    try:
        return await anext(iterator), True
    except StopAsyncIteration:
        return None, False
