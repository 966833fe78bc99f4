"""Frame-driven timers shared by the mini-games and the reward dialog.

Nothing here reads the wall clock: the owner of the frame loop passes the
elapsed seconds into `Scheduler.advance(dt)` exactly like a scene's
`update(dt)`, which keeps every delayed effect reproducible in tests.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List


@dataclass(order=True)
class _Timer:
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)


class Scheduler:
    """Single-threaded queue of delayed callbacks.

    Callbacks fire in due-time order, FIFO for equal due times. A callback
    scheduled while advancing fires in the same call when it is already
    due. There is no cancel: owners guard their callbacks instead.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: List[_Timer] = []
        self._counter = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        """Run `callback` once, `delay` seconds from the current time."""
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        heapq.heappush(
            self._queue, _Timer(self._now + delay, next(self._counter), callback)
        )

    def advance(self, dt: float) -> int:
        """Move time forward by `dt` seconds; returns the number of callbacks fired."""
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        target = self._now + dt
        fired = 0
        while self._queue and self._queue[0].due <= target:
            timer = heapq.heappop(self._queue)
            # callbacks observe the time they were due at
            self._now = max(self._now, timer.due)
            timer.callback()
            fired += 1
        self._now = target
        return fired

    def pending(self) -> int:
        return len(self._queue)
