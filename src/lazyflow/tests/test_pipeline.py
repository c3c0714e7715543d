"""End-to-end pipeline tests: operator composition and cross-cutting properties."""

from __future__ import annotations

import asyncio
from typing import Any, Callable

import pytest

from lazyflow import Lazy, PushBridge, compose, pipe
from lazyflow import operators as ops

Counted = Callable[[list[Any]], tuple[Lazy[Any], list[Any]]]

SAMPLES = [[], [1], [3, 1, 2], list(range(20))]


def is_odd(n: int) -> bool:
    return n % 2 != 0


def double(n: int) -> int:
    return n * 2


# ─────────────────────────────────────────────────────────────────────────────
# Properties
# ─────────────────────────────────────────────────────────────────────────────


class TestProperties:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("xs", SAMPLES)
    async def test_from_iterable_round_trips(self, xs: list[int]) -> None:
        assert await ops.to_list(ops.from_iterable(xs)) == xs

    @pytest.mark.asyncio
    @pytest.mark.parametrize("xs", SAMPLES)
    async def test_map_matches_elementwise(self, xs: list[int]) -> None:
        assert await ops.to_list(ops.map(double, ops.from_iterable(xs))) == [double(x) for x in xs]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("n", "m"), [(0, 3), (2, 3), (3, 3), (5, 3), (4, 0)])
    async def test_take_length_and_pulls(self, counted: Counted, n: int, m: int) -> None:
        upstream, pulled = counted(list(range(m)))
        assert len(await ops.to_list(ops.take(n, upstream))) == min(n, m)
        assert len(pulled) == min(n, m)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("n", "m"), [(0, 3), (2, 3), (3, 3), (5, 3)])
    async def test_skip_length_and_order(self, n: int, m: int) -> None:
        xs = list(range(m))
        assert await ops.to_list(ops.skip(n, ops.from_iterable(xs))) == xs[n:]
        assert len(xs[n:]) == max(0, m - n)

    @pytest.mark.asyncio
    async def test_reduce_over_empty(self) -> None:
        zero = object()
        assert await ops.reduce(lambda acc, _: acc, zero, ops.empty()) is zero


# ─────────────────────────────────────────────────────────────────────────────
# Composition
# ─────────────────────────────────────────────────────────────────────────────


class TestComposition:
    @pytest.mark.asyncio
    async def test_nested_calls(self) -> None:
        result = ops.map(double, ops.filter(is_odd, ops.range(1, 5)))
        assert await ops.to_list(result) == [2, 6, 10]

    @pytest.mark.asyncio
    async def test_pipe_of_curried_operators(self) -> None:
        odd_doubles = pipe(ops.filter(is_odd), ops.map(double))
        assert await ops.to_list(odd_doubles(ops.range(1, 5))) == [2, 6, 10]

    @pytest.mark.asyncio
    async def test_compose_of_curried_operators(self) -> None:
        odd_doubles = compose(ops.map(double), ops.filter(is_odd))
        assert await ops.to_list(odd_doubles(ops.range(1, 5))) == [2, 6, 10]

    @pytest.mark.asyncio
    async def test_pipeline_is_replayable(self) -> None:
        seq = ops.range(1, 10).pipe(ops.skip_while(lambda n: n < 4), ops.take_until(lambda n: n > 7))
        assert await ops.to_list(seq) == [4, 5, 6, 7]
        assert await ops.to_list(seq) == [4, 5, 6, 7]

    @pytest.mark.asyncio
    async def test_pipeline_ending_in_terminal(self) -> None:
        total = pipe(ops.filter(is_odd), ops.map(double), ops.reduce(lambda acc, n: acc + n, 0))
        assert await total(ops.range(1, 5)) == 18

    @pytest.mark.asyncio
    async def test_flat_map_with_merge(self) -> None:
        pairs = ops.flat_map(
            lambda n: ops.merge(lambda a, b: (a, b), ops.range(1, n), ops.range(n)),
            ops.range(1, 3),
        )
        assert await ops.to_list(pairs) == [(1, 1), (1, 2), (2, 3), (1, 3), (2, 4), (3, 5)]


# ─────────────────────────────────────────────────────────────────────────────
# Push-driven pipelines
# ─────────────────────────────────────────────────────────────────────────────


class TestPushPipelines:
    @pytest.mark.asyncio
    async def test_bridge_through_operators(self) -> None:
        bridge: PushBridge[int] = PushBridge()
        seen: list[int] = []
        pipeline = bridge.pipe(ops.tap(seen.append), ops.filter(is_odd), ops.map(double))
        task = asyncio.create_task(ops.to_list(pipeline))
        await asyncio.sleep(0)

        for n in range(1, 6):
            bridge.emit(n)
            await asyncio.sleep(0)
        bridge.complete()
        bridge.emit(0)  # wakes the parked pull; becomes the final value

        assert await task == [2, 6, 10]
        assert seen == [1, 2, 3, 4, 5, 0]

    @pytest.mark.asyncio
    async def test_event_stream_until_sentinel(self, emitter: Any) -> None:
        words = ops.take_until(lambda w: w == "stop", ops.from_event("word", emitter))
        task = asyncio.create_task(ops.to_list(ops.map(str.upper, words)))
        await asyncio.sleep(0)

        for word in ("go", "on", "stop", "never"):
            emitter.fire("word", word)
            await asyncio.sleep(0)

        assert await task == ["GO", "ON"]
        assert emitter.listeners("word") == []

    @pytest.mark.asyncio
    async def test_for_each_over_delayed_bridge(self) -> None:
        bridge: PushBridge[str] = PushBridge(overflow="queue")
        for item in ("a", "b", "c"):
            bridge.emit(item)
        bridge.complete()

        seen: list[str] = []
        await ops.for_each(seen.append, ops.delay(0, bridge))
        assert seen == ["a", "b", "c"]
