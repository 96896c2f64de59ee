"""Interpolation and easing curves."""

import math
from collections.abc import Callable

Easing = Callable[[float], float]


def lerp(start: float, end: float, t: float) -> float:
    """Linear blend: ``start`` at t=0, ``end`` at t=1."""
    return start + (end - start) * t


def ease_in_out(t: float) -> float:
    """Cosine ease-in-out: slow start, slow finish, ``e(0)=0``, ``e(1)=1``."""
    return (1 - math.cos(math.pi * t)) / 2
