"""Transition state machine for drilling through the pie.

``PieAnimator`` watches the selected path. When its length changes it
captures a snapshot of the outgoing layout and animates three concentric
layers (hub, current ring, child ring) plus the outgoing ones from where
the content was to where it now belongs:

    drill-in   the current ring collapses into the hub, the child ring
               moves inward to become the current ring, and a new child
               ring grows in from just outside the rim.
    drill-out  the hub expands and fades, the current ring moves out to
               become the child ring, the old child ring drifts outward
               and fades, and a new current ring grows from the center.
    lateral    same depth: only the rotation re-centers the selection and
               the child ring content is swapped in place.

Every "from" value is read from the layer the content was shown in at the
moment of the change. At rest those are the fixed design radii; in the
middle of a transition they are the in-flight values, so selecting again
before a transition finishes continues smoothly instead of snapping back.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from taskpie.domain.pie.layers import AnimatedLayers, HubLayer, Radii, RingLayer
from taskpie.domain.pie.layout import (
    AngleInfo,
    calculate_angles,
    calculate_rotation,
    child_angles,
    interpolate_angles,
)
from taskpie.domain.task import Forest, Task, TaskPath, resolve_list, resolve_node

from .animated import AnimatedRadii, AnimatedScalar
from .scheduler import Clock, FrameScheduler

logger = logging.getLogger(__name__)


# =============================================================================
# Geometry and state
# =============================================================================


@dataclass(frozen=True)
class RingGeometry:
    """Fixed design radii in pie units and the shared animation duration."""

    r1: float = 70.0
    r2: float = 100.0
    gap: float = 5.0
    hub_ratio: float = 0.4
    duration_ms: float = 1500.0

    @property
    def hub_radius(self) -> float:
        return self.r1 * self.hub_ratio

    def hub_target(self, path: TaskPath) -> float:
        return self.hub_radius if path else 0.0

    def current_target(self, path: TaskPath) -> Radii:
        return Radii(inner=self.hub_radius if path else 0.0, outer=self.r1)

    def child_target(self) -> Radii:
        return Radii(inner=self.r1 + self.gap, outer=self.r2)

    def beyond(self, outer: float) -> Radii:
        """Thin band just outside ``outer``: where rings appear and vanish."""
        return Radii(inner=outer + self.gap, outer=outer + 2 * self.gap)


class TransitionKind(str, Enum):
    """Kind of transition, from the sign of the path depth change."""

    DRILL_IN = "drill-in"
    DRILL_OUT = "drill-out"
    LATERAL = "lateral"

    @classmethod
    def from_depths(cls, previous: int, new: int) -> "TransitionKind":
        if new > previous:
            return cls.DRILL_IN
        if new < previous:
            return cls.DRILL_OUT
        return cls.LATERAL


@dataclass(frozen=True)
class LayerSnapshot:
    """The outgoing layout, captured once when the path changes.

    Held fixed for the whole transition: later edits to the tree do not
    reach a layer that is already fading out.
    """

    tasks: tuple[Task, ...]
    angles: tuple[AngleInfo, ...]
    rotation_deg: float
    path_prefix: TaskPath
    selected_id: int | None
    child_tasks: tuple[Task, ...]
    child_angles: tuple[AngleInfo, ...]
    child_prefix: TaskPath


@dataclass(frozen=True)
class Idle:
    """No transition in flight; every layer rests at its target."""


@dataclass(frozen=True)
class Transitioning:
    """A depth-changing transition is in flight."""

    kind: TransitionKind
    snapshot: LayerSnapshot
    started_at: float


TransitionState = Idle | Transitioning

IDLE = Idle()


# =============================================================================
# Animator
# =============================================================================


def _find_index(tasks: Sequence[Task], task_id: int | None) -> int | None:
    if task_id is None:
        return None
    for index, task in enumerate(tasks):
        if task.id == task_id:
            return index
    return None


class PieAnimator:
    """Turns (forest, path) inputs over time into render-ready frames.

    The animator never mutates the forest or the path; the caller owns both
    and hands them in through ``sync``. A surface ticks the shared
    ``FrameScheduler`` once per frame and then reads ``layers()``.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        clock: Clock,
        geometry: RingGeometry | None = None,
        is_mobile: bool = False,
    ) -> None:
        self._scheduler = scheduler
        self._clock = clock
        self._geometry = geometry or RingGeometry()
        self._is_mobile = is_mobile

        g = self._geometry
        duration = g.duration_ms
        self._rotation = AnimatedScalar(scheduler, 0.0, duration)
        self._hub = AnimatedScalar(scheduler, 0.0, duration)
        self._current = AnimatedRadii(scheduler, g.current_target(()), duration)
        self._child = AnimatedRadii(scheduler, g.child_target(), duration)
        self._previous = AnimatedRadii(scheduler, Radii(0.0, 0.0), duration)
        self._previous_hub = AnimatedScalar(scheduler, 0.0, duration)
        self._fading_child = AnimatedRadii(scheduler, Radii(0.0, 0.0), duration)
        self._reveal = AnimatedScalar(scheduler, 1.0, duration, on_settle=self._finish_transition)
        self._relayout = AnimatedScalar(scheduler, 1.0, duration)

        self._state: TransitionState = IDLE
        self._forest: Forest = []
        self._path: TaskPath | None = None
        self._angles_from: list[AngleInfo] | None = None

    # -------------------------------------------------------------------------
    # Inputs
    # -------------------------------------------------------------------------

    @property
    def geometry(self) -> RingGeometry:
        return self._geometry

    @property
    def state(self) -> TransitionState:
        return self._state

    @property
    def path(self) -> TaskPath:
        return self._path or ()

    @property
    def is_mobile(self) -> bool:
        return self._is_mobile

    @is_mobile.setter
    def is_mobile(self, value: bool) -> None:
        if value == self._is_mobile:
            return
        self._is_mobile = value
        if self._path is not None and self._forest:
            target = self._target_rotation(self._forest, self._path)
            self._rotation.animate_to(target, self._clock.now())

    @property
    def is_animating(self) -> bool:
        return any(
            scalar.is_running
            for scalar in (
                self._rotation,
                self._hub,
                self._current,
                self._child,
                self._reveal,
                self._relayout,
            )
        )

    def sync(self, forest: Forest, path: Sequence[int]) -> None:
        """Feed the latest forest and selection.

        The path must resolve in ``forest``; repairing a dangling selection
        is the caller's job (see ``truncate_path``).
        """
        path = tuple(path)
        now = self._clock.now()

        if self._path is None:
            self._rest_at(forest, path)
        elif path != self._path:
            if forest and self._forest:
                self._change_path(forest, self._path, path, now)
            else:
                self._rest_at(forest, path)
        elif forest != self._forest:
            self._change_forest(forest, path, now)

        self._forest = forest
        self._path = path

    def frame(self, forest: Forest, path: Sequence[int]) -> AnimatedLayers:
        """``sync`` then ``layers`` in one call."""
        self.sync(forest, path)
        return self.layers()

    def dispose(self) -> None:
        """Cancel every frame subscription (the surface is going away)."""
        for scalar in self._all_scalars():
            scalar.cancel()
        self._state = IDLE

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def _rest_at(self, forest: Forest, path: TaskPath) -> None:
        """Jump straight to the resting layout for ``path``."""
        g = self._geometry
        self._hub.snap_to(g.hub_target(path))
        self._current.snap_to(g.current_target(path))
        self._child.snap_to(g.child_target())
        self._rotation.snap_to(self._target_rotation(forest, path) if forest else 0.0)
        self._reveal.snap_to(1.0)
        self._reset_relayout()
        self._drop_outgoing()
        self._state = IDLE

    def _change_path(self, forest: Forest, old: TaskPath, new: TaskPath, now: float) -> None:
        kind = TransitionKind.from_depths(len(old), len(new))
        target_rotation = self._target_rotation(forest, new)

        if kind is TransitionKind.LATERAL:
            logger.debug(f"Lateral move {old} -> {new}")
            self._reset_relayout()
            self._rotation.animate_to(target_rotation, now)
            return

        g = self._geometry
        # Read every in-flight value before anything is re-targeted.
        hub_now = self._hub.value
        current_now = self._current.value
        child_now = self._child.value
        snapshot = self._snapshot(self._forest, old)

        self._drop_outgoing()
        self._reset_relayout()

        if kind is TransitionKind.DRILL_IN:
            self._hub.animate_to(g.hub_target(new), now, start=current_now.outer)
            self._current.animate_to(g.current_target(new), now, start=child_now)
            self._child.animate_to(g.child_target(), now, start=g.beyond(child_now.outer))
            self._previous.animate_to(Radii(0.0, g.hub_radius), now, start=current_now)
        else:
            self._hub.animate_to(g.hub_target(new), now, start=0.0)
            self._current.animate_to(g.current_target(new), now, start=Radii(0.0, hub_now))
            self._child.animate_to(g.child_target(), now, start=current_now)
            self._previous_hub.animate_to(g.r1, now, start=hub_now)
            self._fading_child.animate_to(g.beyond(g.r2), now, start=child_now)

        self._rotation.animate_to(target_rotation, now)
        self._reveal.animate_to(1.0, now, start=0.0)
        if isinstance(self._state, Transitioning):
            logger.debug(f"Interrupting {self._state.kind.value} with {kind.value}")
        self._state = Transitioning(kind=kind, snapshot=snapshot, started_at=now)
        logger.debug(f"Transition {kind.value}: {old} -> {new}")

    def _change_forest(self, forest: Forest, path: TaskPath, now: float) -> None:
        """Same selection, edited tree: re-center and blend slice sizes."""
        if forest and self._forest:
            old_tasks = resolve_list(self._forest, path[:-1])
            new_tasks = resolve_list(forest, path[:-1])
            old_ids = [task.id for task in old_tasks]
            new_ids = [task.id for task in new_tasks]
            if old_ids == new_ids and old_tasks:
                shown = self._current_angles(old_tasks)
                if shown != calculate_angles(new_tasks):
                    self._angles_from = shown
                    self._relayout.animate_to(1.0, now, start=0.0)
            else:
                self._reset_relayout()
            self._rotation.animate_to(self._target_rotation(forest, path), now)
        else:
            self._rest_at(forest, path)

    def _finish_transition(self) -> None:
        if isinstance(self._state, Transitioning):
            logger.debug(f"Transition {self._state.kind.value} finished")
        self._drop_outgoing()
        self._state = IDLE

    def _drop_outgoing(self) -> None:
        for radii in (self._previous, self._fading_child):
            radii.snap_to(Radii(0.0, 0.0))
        self._previous_hub.snap_to(0.0)

    def _reset_relayout(self) -> None:
        self._relayout.snap_to(1.0)
        self._angles_from = None

    def _all_scalars(self) -> list[AnimatedScalar | AnimatedRadii]:
        return [
            self._rotation,
            self._hub,
            self._current,
            self._child,
            self._previous,
            self._previous_hub,
            self._fading_child,
            self._reveal,
            self._relayout,
        ]

    # -------------------------------------------------------------------------
    # Layout helpers
    # -------------------------------------------------------------------------

    def _target_rotation(self, forest: Forest, path: TaskPath) -> float:
        tasks = resolve_list(forest, path[:-1])
        index = _find_index(tasks, path[-1] if path else None)
        if index is None:
            return 0.0
        return calculate_rotation(calculate_angles(tasks)[index].mid, self._is_mobile)

    def _current_angles(self, tasks: Sequence[Task]) -> list[AngleInfo]:
        """Angles of the current ring as shown now, mid-blend if re-laying out."""
        target = calculate_angles(tasks)
        if self._angles_from is not None and len(self._angles_from) == len(target):
            return interpolate_angles(self._angles_from, target, self._relayout.value)
        return target

    def _snapshot(self, forest: Forest, path: TaskPath) -> LayerSnapshot:
        parent = path[:-1]
        tasks = resolve_list(forest, parent)
        angles = self._current_angles(tasks)
        selected_id = path[-1] if path else None
        index = _find_index(tasks, selected_id)
        children: list[Task] = []
        children_angles: list[AngleInfo] = []
        if index is not None:
            children = list(tasks[index].subtasks)
            children_angles = child_angles(angles[index], children)
        return LayerSnapshot(
            tasks=tuple(tasks),
            angles=tuple(angles),
            rotation_deg=math.degrees(self._rotation.value),
            path_prefix=parent,
            selected_id=selected_id,
            child_tasks=tuple(children),
            child_angles=tuple(children_angles),
            child_prefix=path,
        )

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def layers(self) -> AnimatedLayers:
        """Describe the frame at the current instant."""
        forest = self._forest
        path = self.path
        if not forest:
            return AnimatedLayers.empty()

        parent_path = path[:-1]
        tasks = resolve_list(forest, parent_path)
        if not tasks:
            logger.warning(f"Selection {path} does not resolve; nothing to draw")
            return AnimatedLayers.empty()

        angles = self._current_angles(tasks)
        selected_id = path[-1] if path else None
        index = _find_index(tasks, selected_id)
        rotation_deg = math.degrees(self._rotation.value)

        state = self._state
        transitioning = isinstance(state, Transitioning)
        progress = self._reveal.value if transitioning else 1.0

        parent_task = resolve_node(forest, parent_path) if parent_path else None
        hub = HubLayer(
            radius=self._hub.value,
            opacity=progress,
            label=parent_task.name if parent_task else "",
            up_path=parent_path,
            clickable=bool(parent_path),
        )
        current = RingLayer(
            tasks=tuple(tasks),
            angles=tuple(angles),
            radii=self._current.value,
            rotation_deg=rotation_deg,
            path_prefix=parent_path,
            selected_id=selected_id,
        )

        child = None
        if index is not None and tasks[index].subtasks:
            subtasks = tasks[index].subtasks
            child = RingLayer(
                tasks=tuple(subtasks),
                angles=tuple(child_angles(angles[index], subtasks)),
                radii=self._child.value,
                rotation_deg=rotation_deg,
                path_prefix=path,
            )

        previous = previous_hub = fading_child = None
        if isinstance(state, Transitioning):
            snapshot = state.snapshot
            fade = 1.0 - progress
            if state.kind is TransitionKind.DRILL_IN and snapshot.tasks:
                previous = RingLayer(
                    tasks=snapshot.tasks,
                    angles=snapshot.angles,
                    radii=self._previous.value,
                    rotation_deg=snapshot.rotation_deg,
                    opacity=fade,
                    path_prefix=snapshot.path_prefix,
                    selected_id=snapshot.selected_id,
                )
            elif state.kind is TransitionKind.DRILL_OUT:
                previous_hub = HubLayer(radius=self._previous_hub.value, opacity=fade)
                if snapshot.child_tasks:
                    fading_child = RingLayer(
                        tasks=snapshot.child_tasks,
                        angles=snapshot.child_angles,
                        radii=self._fading_child.value,
                        rotation_deg=snapshot.rotation_deg,
                        opacity=fade,
                        path_prefix=snapshot.child_prefix,
                    )

        return AnimatedLayers(
            hub=hub,
            current=current,
            child=child,
            previous=previous,
            previous_hub=previous_hub,
            fading_child=fading_child,
            progress=progress,
            path=path,
        )
