# procedures/scheduling.py
"""
Timer seam for the navigation controller.

The controller only needs two primitives, both returning a cancellable
handle:

  - call_soon(callback): run after the current rendering pass
  - call_later(delay_ms, callback): run after a fixed delay

``LoopScheduler`` adapts a live asyncio event loop. ``ManualScheduler`` is a
virtual clock driven explicitly; views use it to render one frame per
request and tests use it to step time.
"""
from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Callable, Optional, Protocol


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_soon(self, callback: Callable[[], None]) -> Handle: ...

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> Handle: ...


# ---------------------------------------------------------------------
# asyncio adapter
# ---------------------------------------------------------------------


class LoopScheduler:
    """Schedule on an asyncio loop. Delays are given in milliseconds."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.loop = loop or asyncio.get_running_loop()

    def call_soon(self, callback):
        return self.loop.call_soon(callback)

    def call_later(self, delay_ms, callback):
        return self.loop.call_later(delay_ms / 1000.0, callback)


# ---------------------------------------------------------------------
# Virtual clock
# ---------------------------------------------------------------------


class ManualHandle:
    __slots__ = ("when", "seq", "callback", "cancelled")

    def __init__(self, when: int, seq: int, callback: Callable[[], None]):
        self.when = when
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def __lt__(self, other: "ManualHandle") -> bool:
        return (self.when, self.seq) < (other.when, other.seq)


class ManualScheduler:
    """
    Deterministic scheduler with a millisecond clock that only moves when
    ``advance`` is called.

    ``call_soon`` callbacks run on the next ``run_ready``/``advance`` at the
    current time, in submission order. Callbacks scheduled by a callback run
    in the same pass when they are due.
    """

    def __init__(self):
        self.now = 0
        self._queue: list[ManualHandle] = []
        self._seq = itertools.count()

    def call_soon(self, callback):
        return self._push(self.now, callback)

    def call_later(self, delay_ms, callback):
        return self._push(self.now + max(int(delay_ms), 0), callback)

    def _push(self, when, callback) -> ManualHandle:
        handle = ManualHandle(when, next(self._seq), callback)
        heapq.heappush(self._queue, handle)
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for h in self._queue if not h.cancelled)

    def run_ready(self) -> int:
        """Run everything due at the current time. Returns the number of callbacks run."""
        return self._run_until(self.now)

    def advance(self, ms: int) -> int:
        """Move the clock forward by ``ms``, running callbacks as they come due."""
        if ms < 0:
            raise ValueError("Cannot move the clock backwards")
        return self._run_until(self.now + ms)

    def _run_until(self, target: int) -> int:
        ran = 0
        while self._queue and self._queue[0].when <= target:
            handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = max(self.now, handle.when)
            handle.callback()
            ran += 1
        self.now = target
        return ran
