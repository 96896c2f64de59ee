"""Task application service.

Orchestrates task edits by combining domain functions. All functions are
pure - no I/O, no side effects. Expected failures (a path that does not
resolve, a bad field value) come back as ``Err``.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from taskpie.domain.shared import Err, Ok, Result
from taskpie.domain.task import (
    DEFAULT_EFFORT,
    Forest,
    Task,
    TaskPath,
    delete_at,
    fold_forest,
    format_path,
    insert_at,
    resolve_list,
    resolve_node,
    truncate_path,
    update_at,
)

EDITABLE_FIELDS = ("name", "description", "effort", "completed")


class ForestStats(BaseModel):
    """Summary of a forest for progress display."""

    total: int
    completed: int
    total_effort: float
    completed_effort: float

    @property
    def progress_percent(self) -> float:
        """Completed share of the total effort."""
        if self.total_effort == 0:
            return 0.0
        return round(self.completed_effort / self.total_effort * 100, 1)


def new_task(task_id: int, siblings: Sequence[Task], name: str | None = None) -> Task:
    """Create a task with the default name and effort for its sibling list."""
    return Task(
        id=task_id,
        name=name or f"New Task {len(siblings) + 1}",
        effort=DEFAULT_EFFORT,
    )


def add_task(
    forest: Forest,
    parent_path: Sequence[int],
    task_id: int,
    name: str | None = None,
) -> Result[tuple[Forest, Task], str]:
    """Append a new task under ``parent_path`` (the forest for ``()``).

    Returns:
        Ok((new_forest, task)) or Err(str) if the parent does not exist.
    """
    parent_path = tuple(parent_path)
    if parent_path and resolve_node(forest, parent_path) is None:
        return Err(f"Task not found at path: {format_path(parent_path)}")

    task = new_task(task_id, resolve_list(forest, parent_path), name)
    return Ok((insert_at(forest, parent_path, task), task))


def validate_fields(fields: Mapping[str, Any]) -> Result[dict[str, Any], str]:
    """Check and normalise user-supplied field values."""
    unknown = sorted(set(fields) - set(EDITABLE_FIELDS))
    if unknown:
        return Err(f"Unknown field(s): {', '.join(unknown)}")

    clean = dict(fields)
    if "name" in clean:
        name = str(clean["name"]).strip()
        if not name:
            return Err("Name must not be empty")
        clean["name"] = name
    if "effort" in clean:
        try:
            effort = float(clean["effort"])
        except (TypeError, ValueError):
            return Err(f"Effort must be a number, got {clean['effort']!r}")
        if effort < 0:
            return Err("Effort must not be negative")
        clean["effort"] = effort
    if "completed" in clean:
        clean["completed"] = bool(clean["completed"])
    return Ok(clean)


def edit_task(
    forest: Forest,
    path: Sequence[int],
    fields: Mapping[str, Any],
) -> Result[Forest, str]:
    """Update plain fields of the task at ``path``."""
    if resolve_node(forest, path) is None:
        return Err(f"Task not found at path: {format_path(path)}")

    checked = validate_fields(fields)
    if isinstance(checked, Err):
        return checked

    updated = update_at(forest, path, checked.value)
    siblings = resolve_list(updated, tuple(path)[:-1])
    if "effort" in checked.value and not _has_positive_effort(siblings):
        return Err("At least one sibling must keep a positive effort")
    return Ok(updated)


def toggle_completed(forest: Forest, path: Sequence[int]) -> Result[Forest, str]:
    """Flip the completed flag of the task at ``path``."""
    task = resolve_node(forest, path)
    if task is None:
        return Err(f"Task not found at path: {format_path(path)}")
    return Ok(update_at(forest, path, {"completed": not task.completed}))


def remove_task(
    forest: Forest,
    path: Sequence[int],
    selection: Sequence[int],
) -> Result[tuple[Forest, TaskPath], str]:
    """Delete the task at ``path`` and repair ``selection`` if it pointed into it.

    Returns:
        Ok((new_forest, new_selection)) where the selection has been cut back
        to its deepest prefix that still resolves. Err if the task does not
        exist or its remaining siblings would all have zero effort.
    """
    if resolve_node(forest, path) is None:
        return Err(f"Task not found at path: {format_path(path)}")

    updated = delete_at(forest, path)
    if not _has_positive_effort(resolve_list(updated, tuple(path)[:-1])):
        return Err("At least one sibling must keep a positive effort")
    return Ok((updated, truncate_path(updated, selection)))


def get_forest_stats(forest: Forest) -> ForestStats:
    """Count tasks and completed effort over the whole forest."""

    def count(acc: ForestStats, task: Task, _path: TaskPath) -> ForestStats:
        return ForestStats(
            total=acc.total + 1,
            completed=acc.completed + int(task.completed),
            total_effort=acc.total_effort + task.effort,
            completed_effort=acc.completed_effort + (task.effort if task.completed else 0.0),
        )

    empty = ForestStats(total=0, completed=0, total_effort=0.0, completed_effort=0.0)
    return fold_forest(forest, empty, count)


def _has_positive_effort(tasks: Sequence[Task]) -> bool:
    return not tasks or any(task.effort > 0 for task in tasks)


def check_layout(forest: Forest) -> Result[None, str]:
    """Verify every non-empty sibling list has a positive total effort.

    Documents written by hand can break this; the pie cannot lay such a
    list out, so they are rejected at load time.
    """

    def bad_lists(acc: list[str], task: Task, path: TaskPath) -> list[str]:
        if not _has_positive_effort(task.subtasks):
            acc.append(format_path(path))
        return acc

    broken = fold_forest(forest, [], bad_lists)
    if not _has_positive_effort(forest):
        broken.insert(0, "/")
    if broken:
        return Err(f"Subtasks of {', '.join(broken)} have no positive effort")
    return Ok(None)
