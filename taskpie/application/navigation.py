"""Navigation session: the caller-owned state around the pie engine.

The session owns the forest, the selected path and the id counter. Every
change goes through the pure task service and is then handed to the
``PieAnimator`` with ``sync``; the animator only ever reads.
"""

import logging
from collections.abc import Sequence
from typing import Any

from taskpie.domain.animation import (
    Clock,
    FrameScheduler,
    MonotonicClock,
    PieAnimator,
    RingGeometry,
)
from taskpie.domain.pie import AnimatedLayers
from taskpie.domain.shared import Err, Ok, Result
from taskpie.domain.task import (
    Forest,
    Task,
    TaskDocument,
    TaskPath,
    format_path,
    max_task_id,
    resolve_node,
    truncate_path,
)

from . import task_service

logger = logging.getLogger(__name__)


class IdAllocator:
    """Monotonically increasing task ids; never hands out the same id twice."""

    def __init__(self, start: int = 1) -> None:
        self._next = start

    @classmethod
    def for_forest(cls, forest: Forest) -> "IdAllocator":
        return cls(max_task_id(forest) + 1)

    def peek(self) -> int:
        return self._next

    def allocate(self) -> int:
        task_id = self._next
        self._next += 1
        return task_id


class NavigationSession:
    """Forest, selection and animation for one open task document."""

    def __init__(
        self,
        forest: Forest | None = None,
        path: Sequence[int] = (),
        scheduler: FrameScheduler | None = None,
        clock: Clock | None = None,
        geometry: RingGeometry | None = None,
        is_mobile: bool = False,
    ) -> None:
        self._forest: Forest = list(forest or [])
        self._path: TaskPath = truncate_path(self._forest, path)
        self._ids = IdAllocator.for_forest(self._forest)
        self.scheduler = scheduler or FrameScheduler()
        self.clock = clock or MonotonicClock()
        self.animator = PieAnimator(self.scheduler, self.clock, geometry, is_mobile)
        self.dirty = False
        self._sync()

    @classmethod
    def from_document(cls, document: TaskDocument, **kwargs: Any) -> "NavigationSession":
        return cls(forest=document.tasks, **kwargs)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def forest(self) -> Forest:
        return self._forest

    @property
    def path(self) -> TaskPath:
        return self._path

    @property
    def selected_task(self) -> Task | None:
        return resolve_node(self._forest, self._path)

    def document(self) -> TaskDocument:
        return TaskDocument(tasks=self._forest)

    def frame(self) -> AnimatedLayers:
        """Layers at the current instant (tick the scheduler first)."""
        return self.animator.layers()

    def tick(self) -> AnimatedLayers:
        """Advance every animation to now and return the frame."""
        self.scheduler.tick(self.clock.now())
        return self.frame()

    def _sync(self) -> None:
        self.animator.sync(self._forest, self._path)

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select(self, path: Sequence[int]) -> Result[TaskPath, str]:
        """Select the task at ``path`` (``()`` clears the selection)."""
        path = tuple(path)
        if path and resolve_node(self._forest, path) is None:
            return Err(f"Task not found at path: {format_path(path)}")
        if path != self._path:
            logger.debug(f"Select {format_path(path)}")
            self._path = path
            self._sync()
        return Ok(self._path)

    def go_up(self) -> TaskPath:
        """Select the parent of the current selection."""
        if self._path:
            self.select(self._path[:-1])
        return self._path

    # -------------------------------------------------------------------------
    # Edits
    # -------------------------------------------------------------------------

    def _apply(self, forest: Forest, path: TaskPath | None = None) -> None:
        self._forest = forest
        if path is not None:
            self._path = path
        self.dirty = True
        self._sync()

    def add_task(
        self,
        parent_path: Sequence[int] | None = None,
        name: str | None = None,
        select: bool = True,
    ) -> Result[Task, str]:
        """Add a task under ``parent_path`` (defaults to the selection's list).

        The new task is selected unless ``select`` is False.
        """
        if parent_path is None:
            parent_path = self._path[:-1]
        parent_path = tuple(parent_path)

        result = task_service.add_task(self._forest, parent_path, self._ids.peek(), name)
        if isinstance(result, Err):
            return result

        forest, task = result.value
        self._ids.allocate()
        self._apply(forest, (*parent_path, task.id) if select else None)
        logger.info(f"Added task {task.id} under {format_path(parent_path)}")
        return Ok(task)

    def update_task(self, path: Sequence[int], **fields: Any) -> Result[Task, str]:
        """Update plain fields (name, description, effort, completed)."""
        result = task_service.edit_task(self._forest, path, fields)
        if isinstance(result, Err):
            return result
        self._apply(result.value)
        return Ok(resolve_node(self._forest, path))

    def toggle_completed(self, path: Sequence[int] | None = None) -> Result[Task, str]:
        target = self._path if path is None else tuple(path)
        result = task_service.toggle_completed(self._forest, target)
        if isinstance(result, Err):
            return result
        self._apply(result.value)
        return Ok(resolve_node(self._forest, target))

    def delete_task(self, path: Sequence[int] | None = None) -> Result[TaskPath, str]:
        """Delete a task and its subtree; the selection falls back to a survivor.

        Returns:
            Ok(new_selection) or Err(str) if nothing is at ``path``.
        """
        target = self._path if path is None else tuple(path)
        if not target:
            return Err("No task selected")

        result = task_service.remove_task(self._forest, target, self._path)
        if isinstance(result, Err):
            return result

        forest, selection = result.value
        self._apply(forest, selection)
        logger.info(f"Deleted task at {format_path(target)}")
        return Ok(selection)

    def mark_saved(self) -> None:
        self.dirty = False
