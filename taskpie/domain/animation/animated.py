"""Animated scalars driven by the frame scheduler.

An ``AnimatedScalar`` owns at most one frame subscription. Starting a new
animation always cancels the previous subscription first, so two writers
can never race on the same value. Without an explicit start value a new
animation begins from the value currently shown, which is what keeps
interrupted transitions continuous.
"""

from collections.abc import Callable

from taskpie.domain.pie.layers import Radii

from .easing import Easing, ease_in_out, lerp
from .scheduler import FrameScheduler


class AnimatedScalar:
    """A number that moves from a start value to a target over a fixed time."""

    def __init__(
        self,
        scheduler: FrameScheduler,
        value: float = 0.0,
        duration_ms: float = 1500.0,
        easing: Easing = ease_in_out,
        on_settle: Callable[[], None] | None = None,
    ) -> None:
        if duration_ms <= 0:
            raise ValueError(f"Animation duration must be positive, got {duration_ms}")
        self._scheduler = scheduler
        self._duration = duration_ms
        self._easing = easing
        self._on_settle = on_settle
        self._value = value
        self._start_value = value
        self._target = value
        self._start_time = 0.0
        self._handle: int | None = None

    @property
    def value(self) -> float:
        """Value as of the last frame."""
        return self._value

    @property
    def target(self) -> float:
        return self._target

    @property
    def start_value(self) -> float:
        return self._start_value

    @property
    def is_running(self) -> bool:
        return self._handle is not None

    def progress_at(self, now: float) -> float:
        """Clamped time fraction ``min(elapsed / duration, 1)``."""
        return min(max((now - self._start_time) / self._duration, 0.0), 1.0)

    def value_at(self, now: float) -> float:
        """Sample the animation at ``now`` without advancing it."""
        if not self.is_running:
            return self._value
        return lerp(self._start_value, self._target, self._easing(self.progress_at(now)))

    def animate_to(self, target: float, now: float, start: float | None = None) -> None:
        """Animate towards ``target`` starting at ``now``.

        Args:
            target: Resting value to reach after the duration
            now: Timestamp the animation starts at
            start: Value to start from; defaults to the value shown now.
                Re-requesting the current target without a start is a no-op.
        """
        unchanged = target == self._target and (self.is_running or self._value == target)
        if start is None and unchanged:
            return
        self.cancel()
        self._start_value = self._value if start is None else start
        self._value = self._start_value
        self._target = target
        self._start_time = now
        self._handle = self._scheduler.request_frame(self._step)

    def snap_to(self, value: float) -> None:
        """Jump to ``value`` with no animation."""
        self.cancel()
        self._value = self._start_value = self._target = value

    def cancel(self) -> None:
        """Stop at the value shown now; any pending frame is dropped."""
        if self._handle is not None:
            self._scheduler.cancel_frame(self._handle)
            self._handle = None

    def _step(self, now: float) -> None:
        self._handle = None
        t = self.progress_at(now)
        if t < 1.0:
            self._value = lerp(self._start_value, self._target, self._easing(t))
            self._handle = self._scheduler.request_frame(self._step)
            return
        self._value = self._target
        if self._on_settle is not None:
            self._on_settle()


class AnimatedRadii:
    """Inner and outer radius animated as a pair."""

    def __init__(
        self,
        scheduler: FrameScheduler,
        value: Radii,
        duration_ms: float = 1500.0,
        easing: Easing = ease_in_out,
    ) -> None:
        self.inner = AnimatedScalar(scheduler, value.inner, duration_ms, easing)
        self.outer = AnimatedScalar(scheduler, value.outer, duration_ms, easing)

    @property
    def value(self) -> Radii:
        return Radii(inner=self.inner.value, outer=self.outer.value)

    @property
    def target(self) -> Radii:
        return Radii(inner=self.inner.target, outer=self.outer.target)

    @property
    def is_running(self) -> bool:
        return self.inner.is_running or self.outer.is_running

    def animate_to(self, target: Radii, now: float, start: Radii | None = None) -> None:
        self.inner.animate_to(target.inner, now, None if start is None else start.inner)
        self.outer.animate_to(target.outer, now, None if start is None else start.outer)

    def snap_to(self, value: Radii) -> None:
        self.inner.snap_to(value.inner)
        self.outer.snap_to(value.outer)

    def cancel(self) -> None:
        self.inner.cancel()
        self.outer.cancel()
