"""Arc geometry: polar coordinates and SVG path descriptions.

Path strings use absolute SVG commands (``M``, ``L``, ``A``, ``Z``) so any
surface that understands SVG path data can draw them directly.
"""

import math
from dataclasses import dataclass

###############################################################################
# Points
###############################################################################


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float


def polar_to_cartesian(cx: float, cy: float, r: float, angle: float) -> Point:
    """Convert a polar offset around ``(cx, cy)`` to a cartesian point."""
    return Point(cx + r * math.cos(angle), cy + r * math.sin(angle))


def _fmt(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _pt(point: Point) -> str:
    return f"{_fmt(point.x)} {_fmt(point.y)}"


###############################################################################
# Path descriptions
###############################################################################


def large_arc_flag(start: float, end: float) -> int:
    """1 when the span is longer than half a turn, else 0."""
    return 1 if end - start > math.pi else 0


def describe_arc(cx: float, cy: float, r: float, start: float, end: float) -> str:
    """Closed pie slice: center, out to the start point, arc to the end, close."""
    p_start = polar_to_cartesian(cx, cy, r, start)
    p_end = polar_to_cartesian(cx, cy, r, end)
    flag = large_arc_flag(start, end)
    return (
        f"M {_fmt(cx)} {_fmt(cy)} L {_pt(p_start)} "
        f"A {_fmt(r)} {_fmt(r)} 0 {flag} 1 {_pt(p_end)} Z"
    )


def describe_ring_arc(
    cx: float,
    cy: float,
    r_inner: float,
    r_outer: float,
    start: float,
    end: float,
) -> str:
    """Closed annular sector between ``r_inner`` and ``r_outer``.

    The outer arc sweeps clockwise from start to end, the inner arc sweeps
    back the opposite way.
    """
    outer_start = polar_to_cartesian(cx, cy, r_outer, start)
    outer_end = polar_to_cartesian(cx, cy, r_outer, end)
    inner_end = polar_to_cartesian(cx, cy, r_inner, end)
    inner_start = polar_to_cartesian(cx, cy, r_inner, start)
    flag = large_arc_flag(start, end)
    return " ".join(
        [
            f"M {_pt(outer_start)}",
            f"A {_fmt(r_outer)} {_fmt(r_outer)} 0 {flag} 1 {_pt(outer_end)}",
            f"L {_pt(inner_end)}",
            f"A {_fmt(r_inner)} {_fmt(r_inner)} 0 {flag} 0 {_pt(inner_start)}",
            "Z",
        ]
    )


def describe_circle(cx: float, cy: float, r: float) -> str:
    """Full disk as two half arcs (a single arc with coinciding ends draws nothing)."""
    left = _pt(Point(cx - r, cy))
    right = _pt(Point(cx + r, cy))
    return f"M {right} A {_fmt(r)} {_fmt(r)} 0 1 1 {left} A {_fmt(r)} {_fmt(r)} 0 1 1 {right} Z"


def describe_ring(cx: float, cy: float, r_inner: float, r_outer: float) -> str:
    """Full annulus; draw with ``fill-rule="evenodd"``.

    Falls back to a disk when the inner radius is zero.
    """
    outer = describe_circle(cx, cy, r_outer)
    if r_inner <= 0:
        return outer
    return f"{outer} {describe_circle(cx, cy, r_inner)}"
