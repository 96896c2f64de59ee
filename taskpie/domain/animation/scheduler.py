"""Frame scheduling and clocks.

The engine is single-threaded and frame driven. A surface calls
``FrameScheduler.tick(now)`` once per displayed frame; every callback that
was pending when the tick started runs with that same ``now``, so all
animated quantities advance in lockstep. A callback that asks for another
frame while running is queued for the next tick.
"""

import itertools
import logging
import time
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class Clock(Protocol):
    """Source of the current time in milliseconds."""

    def now(self) -> float: ...


class MonotonicClock:
    """Wall clock backed by ``time.monotonic``."""

    def now(self) -> float:
        return time.monotonic() * 1000.0


class ManualClock:
    """Clock that only moves when told to; for tests and offline rendering."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, ms: float) -> float:
        """Move forward by ``ms`` and return the new time."""
        self._now += ms
        return self._now

    def set(self, ms: float) -> None:
        self._now = ms


class FrameScheduler:
    """Per-frame callback registry, the analogue of a display refresh signal."""

    def __init__(self) -> None:
        self._callbacks: dict[int, FrameCallback] = {}
        self._due: dict[int, FrameCallback] = {}
        self._handles = itertools.count(1)

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for the next tick."""
        return len(self._callbacks)

    def request_frame(self, callback: FrameCallback) -> int:
        """Run ``callback(now)`` on the next tick; returns a cancel handle."""
        handle = next(self._handles)
        self._callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        """Drop a pending callback. Unknown or already-run handles are ignored."""
        self._callbacks.pop(handle, None)
        self._due.pop(handle, None)

    def tick(self, now: float) -> int:
        """Run every callback pending at the start of this tick.

        Returns:
            Number of callbacks that ran
        """
        self._due, self._callbacks = self._callbacks, {}
        ran = 0
        while self._due:
            handle = next(iter(self._due))
            callback = self._due.pop(handle)
            callback(now)
            ran += 1
        return ran

    def drain(self, clock: ManualClock, frame_ms: float, max_frames: int = 10_000) -> int:
        """Step a manual clock frame by frame until nothing is pending.

        Returns:
            Number of frames ticked
        """
        frames = 0
        while self._callbacks and frames < max_frames:
            self.tick(clock.advance(frame_ms))
            frames += 1
        if self._callbacks:
            logger.warning(f"Scheduler still busy after {frames} frames")
        return frames
