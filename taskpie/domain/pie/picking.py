"""Point-to-selection mapping for click handling.

The inverse of drawing: given a point relative to the pie center, find
the selection path a click there asks for. Only live layers are pickable;
outgoing layers that are fading away never take clicks.
"""

import math

from taskpie.domain.task import TaskPath

from .layers import AnimatedLayers, RingLayer
from .layout import FULL_CIRCLE


def _slice_at(ring: RingLayer, radius: float, angle: float) -> int | None:
    if not ring.radii.inner <= radius <= ring.radii.outer:
        return None
    local = (angle - math.radians(ring.rotation_deg)) % FULL_CIRCLE
    for index, span in enumerate(ring.angles):
        if span.start <= local < span.end:
            return index
    return None


def pick(layers: AnimatedLayers, x: float, y: float) -> TaskPath | None:
    """Return the path selected by a click at ``(x, y)``, or None for a miss.

    Coordinates are in pie units with the center at the origin and y
    growing downward, the same frame the layer radii are expressed in.
    """
    if layers.is_empty:
        return None

    radius = math.hypot(x, y)
    angle = math.atan2(y, x)

    for ring in (layers.child, layers.current):
        if ring is None:
            continue
        index = _slice_at(ring, radius, angle)
        if index is not None:
            return (*ring.path_prefix, ring.tasks[index].id)

    hub = layers.hub
    if hub is not None and hub.clickable and radius <= hub.radius:
        return hub.up_path
    return None


def locate(layers: AnimatedLayers, x: float, y: float) -> tuple[str, RingLayer | None, int | None]:
    """Classify a point for drawing: which layer covers it, and which slice.

    Returns ``(kind, ring, index)`` where kind is one of ``"hub"``,
    ``"previous_hub"``, ``"ring"`` or ``"none"``. Rings paint over the
    hubs, and among rings the topmost in paint order wins.
    """
    if layers.is_empty:
        return "none", None, None

    radius = math.hypot(x, y)
    angle = math.atan2(y, x)

    for ring in reversed(layers.rings_back_to_front()):
        index = _slice_at(ring, radius, angle)
        if index is not None:
            return "ring", ring, index

    previous_hub = layers.previous_hub
    if previous_hub is not None and radius <= previous_hub.radius:
        return "previous_hub", None, None
    hub = layers.hub
    if hub is not None and radius <= hub.radius:
        return "hub", None, None
    return "none", None, None
