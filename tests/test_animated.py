"""Tests for the frame scheduler and eased scalars."""

import pytest

from taskpie.domain.animation import (
    AnimatedRadii,
    AnimatedScalar,
    FrameScheduler,
    ManualClock,
    ease_in_out,
    lerp,
)
from taskpie.domain.pie import Radii


def test_ease_in_out_endpoints_and_midpoint() -> None:
    assert ease_in_out(0.0) == pytest.approx(0.0)
    assert ease_in_out(0.5) == pytest.approx(0.5)
    assert ease_in_out(1.0) == pytest.approx(1.0)
    assert ease_in_out(0.25) < 0.25


def test_lerp() -> None:
    assert lerp(10, 20, 0.25) == 12.5


# =============================================================================
# Scheduler
# =============================================================================


def test_tick_passes_the_same_now_to_every_callback(scheduler) -> None:
    seen: list[float] = []
    scheduler.request_frame(seen.append)
    scheduler.request_frame(seen.append)

    assert scheduler.tick(16.0) == 2
    assert seen == [16.0, 16.0]
    assert scheduler.pending == 0


def test_callbacks_requested_during_a_tick_run_next_tick(scheduler) -> None:
    seen: list[float] = []

    def again(now: float) -> None:
        seen.append(now)
        if len(seen) < 3:
            scheduler.request_frame(again)

    scheduler.request_frame(again)
    scheduler.tick(1.0)
    assert seen == [1.0]
    scheduler.tick(2.0)
    scheduler.tick(3.0)
    scheduler.tick(4.0)
    assert seen == [1.0, 2.0, 3.0]


def test_cancel_frame(scheduler) -> None:
    seen: list[float] = []
    handle = scheduler.request_frame(seen.append)
    scheduler.cancel_frame(handle)
    scheduler.cancel_frame(handle)

    assert scheduler.tick(1.0) == 0
    assert seen == []


def test_cancel_from_inside_a_tick_skips_the_callback(scheduler) -> None:
    seen: list[str] = []
    handles: dict[str, int] = {}

    def first(_now: float) -> None:
        seen.append("first")
        scheduler.cancel_frame(handles["second"])

    handles["first"] = scheduler.request_frame(first)
    handles["second"] = scheduler.request_frame(lambda _now: seen.append("second"))

    assert scheduler.tick(1.0) == 1
    assert seen == ["first"]


def test_drain_steps_until_idle() -> None:
    scheduler = FrameScheduler()
    clock = ManualClock()
    scalar = AnimatedScalar(scheduler, 0.0, duration_ms=100)
    scalar.animate_to(1.0, clock.now())

    assert scheduler.drain(clock, frame_ms=10) == 10
    assert clock.now() == 100
    assert scalar.value == 1.0


# =============================================================================
# Animated scalars
# =============================================================================


def test_duration_must_be_positive(scheduler) -> None:
    with pytest.raises(ValueError):
        AnimatedScalar(scheduler, 0.0, duration_ms=0)


def test_animate_to_follows_the_easing_curve(scheduler) -> None:
    scalar = AnimatedScalar(scheduler, 0.0, duration_ms=1500)
    scalar.animate_to(10.0, now=0.0)

    assert scalar.is_running
    assert scalar.value == 0.0
    assert scalar.value_at(750.0) == pytest.approx(5.0)

    scheduler.tick(750.0)
    assert scalar.value == pytest.approx(5.0)

    scheduler.tick(1500.0)
    assert scalar.value == 10.0
    assert not scalar.is_running
    assert scheduler.pending == 0


def test_on_settle_runs_once(scheduler) -> None:
    settled: list[bool] = []
    scalar = AnimatedScalar(scheduler, 0.0, 100, on_settle=lambda: settled.append(True))
    scalar.animate_to(1.0, 0.0)

    scheduler.tick(50.0)
    assert settled == []
    scheduler.tick(100.0)
    scheduler.tick(200.0)
    assert settled == [True]


def test_retarget_mid_flight_starts_from_the_shown_value(scheduler) -> None:
    scalar = AnimatedScalar(scheduler, 0.0, 1000)
    scalar.animate_to(10.0, 0.0)
    scheduler.tick(500.0)

    scalar.animate_to(0.0, 500.0)
    assert scalar.start_value == pytest.approx(5.0)
    assert scalar.value == pytest.approx(5.0)
    # Only one subscription exists at a time.
    assert scheduler.pending == 1

    scheduler.tick(1000.0)
    assert scalar.value == pytest.approx(2.5)


def test_explicit_start_value(scheduler) -> None:
    scalar = AnimatedScalar(scheduler, 3.0, 1000)
    scalar.animate_to(1.0, 0.0, start=0.0)
    assert scalar.value == 0.0
    scheduler.tick(500.0)
    assert scalar.value == pytest.approx(0.5)


def test_same_target_does_not_restart(scheduler) -> None:
    scalar = AnimatedScalar(scheduler, 0.0, 1000)
    scalar.animate_to(10.0, 0.0)
    scheduler.tick(500.0)
    scalar.animate_to(10.0, 500.0)

    scheduler.tick(1000.0)
    assert scalar.value == 10.0
    assert not scalar.is_running

    scalar.animate_to(10.0, 2000.0)
    assert not scalar.is_running


def test_snap_and_cancel_release_the_subscription(scheduler) -> None:
    scalar = AnimatedScalar(scheduler, 0.0, 1000)
    scalar.animate_to(10.0, 0.0)
    scalar.snap_to(4.0)
    assert scheduler.pending == 0
    assert (scalar.value, scalar.target) == (4.0, 4.0)

    scalar.animate_to(8.0, 0.0)
    scheduler.tick(500.0)
    scalar.cancel()
    assert scheduler.pending == 0
    assert scalar.value == pytest.approx(6.0)


def test_animated_radii_moves_both_edges(scheduler) -> None:
    radii = AnimatedRadii(scheduler, Radii(0.0, 70.0), 1000)
    radii.animate_to(Radii(28.0, 70.0), 0.0, start=Radii(75.0, 100.0))

    assert radii.value == Radii(75.0, 100.0)
    scheduler.tick(500.0)
    assert radii.value.inner == pytest.approx(51.5)
    assert radii.value.outer == pytest.approx(85.0)
    scheduler.tick(1000.0)
    assert radii.value == Radii(28.0, 70.0)
    assert radii.target == Radii(28.0, 70.0)
