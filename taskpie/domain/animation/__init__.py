"""Animation domain - frame-driven interpolation of the pie layers.

Key Types:
    FrameScheduler - Per-frame callback registry ticked by a surface
    MonotonicClock / ManualClock - Time sources in milliseconds
    AnimatedScalar / AnimatedRadii - Eased values with one subscription each
    PieAnimator - Transition state machine producing AnimatedLayers
    RingGeometry - Design radii and the shared duration
    Idle / Transitioning - Explicit transition states
"""

from .animated import AnimatedRadii, AnimatedScalar
from .easing import Easing, ease_in_out, lerp
from .scheduler import Clock, FrameScheduler, ManualClock, MonotonicClock
from .transition import (
    IDLE,
    Idle,
    LayerSnapshot,
    PieAnimator,
    RingGeometry,
    TransitionKind,
    TransitionState,
    Transitioning,
)

__all__ = [
    # Easing
    "Easing",
    "lerp",
    "ease_in_out",
    # Scheduling
    "Clock",
    "MonotonicClock",
    "ManualClock",
    "FrameScheduler",
    # Animated values
    "AnimatedScalar",
    "AnimatedRadii",
    # Transitions
    "RingGeometry",
    "TransitionKind",
    "LayerSnapshot",
    "Idle",
    "Transitioning",
    "TransitionState",
    "IDLE",
    "PieAnimator",
]
