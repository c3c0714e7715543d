"""Tests for terminal operators."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest

from lazyflow import Lazy
from lazyflow import operators as ops


class TestReduce:
    @pytest.mark.asyncio
    async def test_folds_sequence(self) -> None:
        assert await ops.reduce(lambda acc, n: acc + n, 0, ops.range(1, 5)) == 15

    @pytest.mark.asyncio
    async def test_empty_returns_initial(self) -> None:
        initial = {"untouched": True}
        assert await ops.reduce(lambda acc, _: acc, initial, ops.empty()) is initial

    @pytest.mark.asyncio
    async def test_curried(self) -> None:
        total = ops.reduce(lambda acc, n: acc + n)(0)
        assert await total(ops.range(1, 3)) == 6

    @pytest.mark.asyncio
    async def test_async_reducer(self) -> None:
        async def collect(acc: list[int], n: int) -> list[int]:
            return [*acc, n]

        assert await ops.reduce(collect, [], ops.range(1, 3)) == [1, 2, 3]


class TestForEach:
    @pytest.mark.asyncio
    async def test_visits_every_value_in_order(self) -> None:
        seen: list[int] = []
        result = await ops.for_each(seen.append, ops.range(1, 3))
        assert result is None
        assert seen == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_awaits_coroutine_callback(self) -> None:
        seen: list[int] = []

        async def record(n: int) -> None:
            seen.append(n)

        await ops.for_each(record, ops.from_iterable([5, 6]))
        assert seen == [5, 6]


class TestToList:
    @pytest.mark.asyncio
    async def test_collects_in_order(self) -> None:
        assert await ops.to_list(ops.from_iterable([2, 1])) == [2, 1]

    @pytest.mark.asyncio
    async def test_accepts_plain_iterables(self) -> None:
        assert await ops.to_list([1, 2]) == [1, 2]


@pytest.mark.asyncio
async def test_terminal_raises_first_upstream_error() -> None:
    first = TimeoutError("first")

    async def gen() -> AsyncIterator[int]:
        yield 1
        raise first

    with pytest.raises(TimeoutError) as info:
        await ops.reduce(lambda acc, n: acc + n, 0, Lazy(gen))
    assert info.value is first
