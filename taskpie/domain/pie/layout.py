"""Angular layout of sibling lists.

A sibling list is split into contiguous angular spans proportional to each
task's effort. Angles are radians, measured from the positive x-axis and
increasing clockwise on screen (y grows downward).
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

FULL_CIRCLE = 2 * math.pi

# Reference directions the selected slice is turned towards.
WIDE_REFERENCE = 0.0
NARROW_REFERENCE = -math.pi / 2


class Weighted(Protocol):
    """Anything with an ``effort`` weight can be laid out."""

    @property
    def effort(self) -> float: ...


@dataclass(frozen=True, slots=True)
class AngleInfo:
    """Angular span of one slice, ``start <= mid <= end``."""

    start: float
    end: float
    mid: float

    @property
    def span(self) -> float:
        return self.end - self.start


def calculate_angles(items: Sequence[Weighted]) -> list[AngleInfo]:
    """Partition the full circle proportionally to the items' efforts.

    Spans are contiguous: each ``end`` is the next ``start``, the first
    starts at 0 and the last ends at 2π. An empty list yields ``[]``.
    A non-empty list must have a positive total effort.
    """
    if not items:
        return []

    total = sum(item.effort for item in items)
    angles: list[AngleInfo] = []
    acc = 0.0
    for item in items:
        start = acc / total * FULL_CIRCLE
        acc += item.effort
        end = acc / total * FULL_CIRCLE
        angles.append(AngleInfo(start=start, end=end, mid=(start + end) / 2))
    return angles


def scale_angles(
    angles: Sequence[AngleInfo],
    range_start: float,
    range_end: float,
) -> list[AngleInfo]:
    """Remap a full-circle partition onto the arc ``[range_start, range_end]``.

    Used to lay a selected task's subtasks out under the parent slice so
    the child ring's boundaries line up with it radially.
    """
    scale = (range_end - range_start) / FULL_CIRCLE

    def remap(value: float) -> float:
        return range_start + value * scale

    return [AngleInfo(start=remap(a.start), end=remap(a.end), mid=remap(a.mid)) for a in angles]


def interpolate_angles(
    from_angles: Sequence[AngleInfo],
    to_angles: Sequence[AngleInfo],
    t: float,
) -> list[AngleInfo]:
    """Blend two layouts of the same sibling list component-wise.

    Raises:
        ValueError: If the lists differ in length
    """
    if len(from_angles) != len(to_angles):
        raise ValueError(
            f"Cannot interpolate {len(from_angles)} angles into {len(to_angles)}"
        )
    return [
        AngleInfo(
            start=a.start + (b.start - a.start) * t,
            end=a.end + (b.end - a.end) * t,
            mid=a.mid + (b.mid - a.mid) * t,
        )
        for a, b in zip(from_angles, to_angles)
    ]


def child_angles(parent: AngleInfo, children: Sequence[Weighted]) -> list[AngleInfo]:
    """Lay ``children`` out inside the span of their parent slice."""
    return scale_angles(calculate_angles(children), parent.start, parent.end)


def calculate_rotation(mid_angle: float, is_mobile: bool = False) -> float:
    """Rotation that turns ``mid_angle`` onto the on-screen reference direction.

    Wide viewports point the selected slice right (0 rad), narrow ones
    point it up (-π/2 rad).
    """
    reference = NARROW_REFERENCE if is_mobile else WIDE_REFERENCE
    return reference - mid_angle
