"""Push-to-pull bridge: feed a lazy sequence from outside its iteration.

A PushBridge lets a producer that emits at its own pace (event callbacks,
timers, manual calls) drive a pull-based consumer through a single rendezvous
slot:

    - emit(value): hand a value to the consumer
    - complete(): end the sequence
    - fail(error): end the sequence with an error

Values emitted while no consumer is waiting are held in the slot. Under the
default LATEST overflow policy the slot holds one value and a newer emit
overwrites an unconsumed one (last value wins). The QUEUE policy keeps every
value instead.

Example:
    >>> bridge = PushBridge()
    >>> bridge.emit("a")
    >>> bridge.emit("b")        # overwrites "a"
    >>> it = aiter(bridge)
    >>> await anext(it)
    'b'
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import AsyncIterator
from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

from lazyflow.foundation.config import get_settings
from lazyflow.foundation.errors import UpstreamFailure
from lazyflow.observability import get_logger

from .lazy import Lazy

T = TypeVar("T")

__all__ = ["PushBridge", "BridgeState", "Overflow"]

_log = get_logger("lazyflow.bridge")


class BridgeState(StrEnum):
    """Lifecycle of a bridge. COMPLETED and FAILED are terminal."""
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"


class Overflow(StrEnum):
    """What happens to values emitted between two pulls."""
    LATEST = "latest"
    QUEUE = "queue"


@dataclass(slots=True, frozen=True)
class _Signal(Generic[T]):
    """An emitted value or failure waiting in the slot."""

    value: T | None = None
    error: BaseException | None = None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


class PushBridge(Lazy[T]):
    """Lazy sequence driven by emit/complete/fail calls.

    Iteration loops while the bridge is active. Each pull takes the value held
    in the slot, or parks a fresh waiter future that the next emit resolves.
    State changes are observed when the loop resumes, so:

    - complete() does not wake a parked consumer; the next emit still reaches
      it and becomes the final value.
    - fail() rejects a parked consumer's waiter, otherwise the error is held
      behind any unconsumed value. Either way it surfaces exactly once.

    Iterating the same bridge twice shares its slot. One producer and one
    consumer at a time is the supported usage.

    Args:
        overflow: Slot policy; defaults to LAZYFLOW_BRIDGE_OVERFLOW
    """

    def __init__(self, *, overflow: Overflow | str | None = None) -> None:
        super().__init__(self._drain)
        self._state = BridgeState.ACTIVE
        self._overflow = Overflow(overflow or get_settings().bridge.overflow)
        self._waiter: asyncio.Future[T] | None = None
        self._ready: deque[_Signal[T]] = deque()

    @property
    def state(self) -> BridgeState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state is BridgeState.ACTIVE

    @property
    def overflow(self) -> Overflow:
        return self._overflow

    # ─────────────────────────────────────────────────────────────────────────
    # Producer side
    # ─────────────────────────────────────────────────────────────────────────

    def emit(self, value: T) -> None:
        """Hand a value to the consumer, or hold it until the next pull."""
        if (waiter := self._waiter) is not None and not waiter.done():
            # A parked pull is still in flight, including one that outlived complete()
            waiter.set_result(value)
            return
        if self._state is not BridgeState.ACTIVE:
            _log.debug("emit ignored", state=str(self._state))
            return
        self._hold(_Signal(value=value))

    def complete(self) -> None:
        """End the sequence once the consumer next resumes."""
        if self._state is not BridgeState.ACTIVE:
            _log.debug("complete ignored", state=str(self._state))
            return
        self._state = BridgeState.COMPLETED
        _log.debug("bridge completed", held=len(self._ready))

    def fail(self, error: object = None) -> None:
        """End the sequence with an error.

        Non-exception payloads (including None) are wrapped in UpstreamFailure.
        """
        if self._state is not BridgeState.ACTIVE:
            _log.debug("fail ignored", state=str(self._state))
            return
        exc = error if isinstance(error, BaseException) else UpstreamFailure.from_payload("bridge", error)
        self._state = BridgeState.FAILED
        _log.debug("bridge failed", error=repr(exc))
        if (waiter := self._waiter) is not None and not waiter.done():
            waiter.set_exception(exc)
        else:
            self._ready.append(_Signal(error=exc))

    def _hold(self, signal: _Signal[T]) -> None:
        if self._overflow is Overflow.LATEST and self._ready:
            _log.debug("unconsumed value dropped")
            self._ready.clear()
        self._ready.append(signal)

    # ─────────────────────────────────────────────────────────────────────────
    # Consumer side
    # ─────────────────────────────────────────────────────────────────────────

    def _has_backlog(self) -> bool:
        """Held signals still deliverable after the bridge left ACTIVE."""
        if not self._ready:
            return False
        return self._state is BridgeState.FAILED or self._overflow is Overflow.QUEUE

    async def _drain(self) -> AsyncIterator[T]:
        while self._state is BridgeState.ACTIVE or self._has_backlog():
            if self._ready:
                value = self._ready.popleft().unwrap()
            else:
                self._waiter = waiter = asyncio.get_running_loop().create_future()
                try:
                    value = await waiter
                finally:
                    if self._waiter is waiter:
                        self._waiter = None
            yield value

    def __repr__(self) -> str:
        return f"PushBridge(state={self._state}, overflow={self._overflow}, held={len(self._ready)})"
