"""Render-ready layer descriptions.

A frame of the pie is a set of concentric layers, each already resolved to
the current animation instant. Surfaces only convert these values into
drawables; they never compute layout themselves.
"""

from dataclasses import dataclass, field

from taskpie.domain.task import Task, TaskPath

from .layout import AngleInfo


@dataclass(frozen=True, slots=True)
class Radii:
    """Inner and outer radius of a ring; ``inner`` may be 0 for a full disk."""

    inner: float
    outer: float


@dataclass(frozen=True)
class RingLayer:
    """One ring: its slices, their angles and how the ring is drawn.

    ``path_prefix`` is the selection path each slice extends: clicking
    slice ``i`` selects ``(*path_prefix, tasks[i].id)``.
    """

    tasks: tuple[Task, ...]
    angles: tuple[AngleInfo, ...]
    radii: Radii
    rotation_deg: float
    opacity: float = 1.0
    path_prefix: TaskPath = ()
    selected_id: int | None = None


@dataclass(frozen=True)
class HubLayer:
    """The center disk; clicking it selects ``up_path`` when ``clickable``."""

    radius: float
    opacity: float = 1.0
    label: str = ""
    up_path: TaskPath = ()
    clickable: bool = False


@dataclass(frozen=True)
class AnimatedLayers:
    """Everything needed to draw one frame.

    ``previous``, ``previous_hub`` and ``fading_child`` are only present
    while a depth-changing transition is in flight.
    """

    hub: HubLayer | None = None
    current: RingLayer | None = None
    child: RingLayer | None = None
    previous: RingLayer | None = None
    previous_hub: HubLayer | None = None
    fading_child: RingLayer | None = None
    progress: float = 1.0
    is_empty: bool = False
    path: TaskPath = field(default=())

    @classmethod
    def empty(cls) -> "AnimatedLayers":
        """Frame for an empty forest: no layers, surfaces show a placeholder."""
        return cls(is_empty=True)

    def rings_back_to_front(self) -> list[RingLayer]:
        """Rings in paint order: outgoing layers under the live ones."""
        ordered = [self.previous, self.current, self.child, self.fading_child]
        return [ring for ring in ordered if ring is not None]
