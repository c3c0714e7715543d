"""Shared fixtures: isolate settings and provide small test sources."""

from __future__ import annotations

import os
from collections import defaultdict
from collections.abc import Iterator
from typing import Any, Callable

import pytest

from lazyflow import Lazy
from lazyflow.foundation.config import clear_settings_cache


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop LAZYFLOW_* variables and the cached settings around every test."""
    for key in list(os.environ):
        if key.startswith("LAZYFLOW_"):
            monkeypatch.delenv(key)
    clear_settings_cache()
    yield
    clear_settings_cache()


class Emitter:
    """Minimal event source with on/remove_listener."""

    def __init__(self) -> None:
        self._listeners: defaultdict[str, list[Callable[[Any], object]]] = defaultdict(list)

    def on(self, event: str, callback: Callable[[Any], object]) -> None:
        self._listeners[event].append(callback)

    def remove_listener(self, event: str, callback: Callable[[Any], object]) -> None:
        self._listeners[event].remove(callback)

    def fire(self, event: str, payload: Any) -> None:
        for callback in list(self._listeners[event]):
            callback(payload)

    def listeners(self, event: str) -> list[Callable[[Any], object]]:
        return list(self._listeners[event])


@pytest.fixture
def emitter() -> Emitter:
    return Emitter()


@pytest.fixture
def counted() -> Callable[[list[Any]], tuple[Lazy[Any], list[Any]]]:
    """Factory for a sequence that records every item pulled from it."""
    def make(items: list[Any]) -> tuple[Lazy[Any], list[Any]]:
        pulled: list[Any] = []

        def produce() -> Iterator[Any]:
            for item in items:
                pulled.append(item)
                yield item

        return Lazy(produce), pulled
    return make
