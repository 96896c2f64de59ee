"""Tests for the effort-proportional angular layout."""

import math

import pytest

from taskpie.domain.pie import (
    FULL_CIRCLE,
    AngleInfo,
    calculate_angles,
    calculate_rotation,
    child_angles,
    interpolate_angles,
    scale_angles,
)

from .conftest import make_task


def test_empty_list_has_no_angles() -> None:
    assert calculate_angles([]) == []


def test_single_task_fills_the_circle() -> None:
    (only,) = calculate_angles([make_task(1, "Only", effort=7)])
    assert only.start == 0.0
    assert only.end == pytest.approx(FULL_CIRCLE)
    assert only.mid == pytest.approx(math.pi)


def test_spans_are_contiguous_and_proportional() -> None:
    tasks = [make_task(1, "a", 1), make_task(2, "b", 3), make_task(3, "c", 4)]
    angles = calculate_angles(tasks)

    assert angles[0].start == 0.0
    assert angles[-1].end == pytest.approx(FULL_CIRCLE)
    for left, right in zip(angles, angles[1:]):
        assert left.end == right.start
    total = sum(task.effort for task in tasks)
    for task, angle in zip(tasks, angles):
        assert angle.span == pytest.approx(task.effort / total * FULL_CIRCLE)
        assert angle.start <= angle.mid <= angle.end


def test_one_to_three_split() -> None:
    small, large = calculate_angles([make_task(2, "s", 1), make_task(3, "l", 3)])
    assert small.end == pytest.approx(math.pi / 2)
    assert small.mid == pytest.approx(math.pi / 4)
    assert large.mid == pytest.approx(5 * math.pi / 4)


def test_zero_effort_task_gets_an_empty_span() -> None:
    angles = calculate_angles([make_task(1, "a", 0), make_task(2, "b", 2)])
    assert angles[0].span == 0.0
    assert angles[1].span == pytest.approx(FULL_CIRCLE)


def test_scale_angles_maps_onto_the_sub_arc() -> None:
    full = calculate_angles([make_task(1, "a", 1), make_task(2, "b", 1)])
    scaled = scale_angles(full, math.pi / 2, math.pi)

    assert scaled[0].start == pytest.approx(math.pi / 2)
    assert scaled[0].end == pytest.approx(3 * math.pi / 4)
    assert scaled[1].end == pytest.approx(math.pi)


def test_child_angles_line_up_with_the_parent_slice() -> None:
    parent = AngleInfo(start=1.0, end=2.0, mid=1.5)
    children = [make_task(5, "x", 1), make_task(6, "y", 1), make_task(7, "z", 2)]
    angles = child_angles(parent, children)

    assert angles[0].start == pytest.approx(parent.start)
    assert angles[-1].end == pytest.approx(parent.end)
    assert angles[2].span == pytest.approx(0.5)


def test_interpolate_angles_blends_componentwise() -> None:
    a = [AngleInfo(0.0, 1.0, 0.5), AngleInfo(1.0, FULL_CIRCLE, 3.5)]
    b = [AngleInfo(0.0, 3.0, 1.5), AngleInfo(3.0, FULL_CIRCLE, 4.5)]

    assert interpolate_angles(a, b, 0.0) == a
    assert interpolate_angles(a, b, 1.0) == b
    half = interpolate_angles(a, b, 0.5)
    assert half[0].end == pytest.approx(2.0)
    assert half[1].mid == pytest.approx(4.0)


def test_interpolate_angles_requires_equal_lengths() -> None:
    with pytest.raises(ValueError):
        interpolate_angles([AngleInfo(0, 1, 0.5)], [], 0.5)


def test_rotation_turns_the_mid_angle_to_the_reference() -> None:
    mid = 5 * math.pi / 4
    assert calculate_rotation(mid) == pytest.approx(-mid)
    assert calculate_rotation(mid, is_mobile=True) == pytest.approx(-math.pi / 2 - mid)
    # The selected mid lands on the reference direction.
    assert mid + calculate_rotation(mid) == pytest.approx(0.0)
