"""Pie domain - proportional angular layout and arc geometry.

Layout Functions:
    calculate_angles - Effort-proportional split of the circle
    scale_angles - Remap a split onto a sub-arc
    interpolate_angles - Blend two layouts of one sibling list
    child_angles - Lay subtasks out under their parent slice
    calculate_rotation - Turn the selected slice to the reference direction

Geometry Functions:
    polar_to_cartesian, describe_arc, describe_ring_arc,
    describe_circle, describe_ring

Layers:
    AnimatedLayers, RingLayer, HubLayer, Radii - one render-ready frame
    pick / locate - map a point back onto the layers
"""

from .geometry import (
    Point,
    describe_arc,
    describe_circle,
    describe_ring,
    describe_ring_arc,
    large_arc_flag,
    polar_to_cartesian,
)
from .layers import AnimatedLayers, HubLayer, Radii, RingLayer
from .layout import (
    FULL_CIRCLE,
    AngleInfo,
    calculate_angles,
    calculate_rotation,
    child_angles,
    interpolate_angles,
    scale_angles,
)
from .picking import locate, pick

__all__ = [
    # Layout
    "FULL_CIRCLE",
    "AngleInfo",
    "calculate_angles",
    "scale_angles",
    "interpolate_angles",
    "child_angles",
    "calculate_rotation",
    # Geometry
    "Point",
    "polar_to_cartesian",
    "large_arc_flag",
    "describe_arc",
    "describe_ring_arc",
    "describe_circle",
    "describe_ring",
    # Layers
    "Radii",
    "RingLayer",
    "HubLayer",
    "AnimatedLayers",
    "pick",
    "locate",
]
