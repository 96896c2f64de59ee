"""Path addressing over the task forest.

All functions in this module are pure - no I/O, no side effects.
Lookups never raise: a path that does not resolve yields an empty list
or ``None``. Updates rebuild only the nodes along the addressed path and
hand every other subtree back by identity.
"""

from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any, TypeVar

from .models import Forest, Task, TaskPath

T = TypeVar("T")

# Fields that must go through insert_at / delete_at rather than update_at.
_STRUCTURAL_FIELDS = frozenset({"id", "subtasks"})


# =============================================================================
# Lookup
# =============================================================================


def _find(tasks: Sequence[Task], task_id: int) -> Task | None:
    for task in tasks:
        if task.id == task_id:
            return task
    return None


def resolve_list(forest: Forest, path: Sequence[int]) -> list[Task]:
    """Return the child list of the task addressed by ``path``.

    The empty path addresses the forest itself.

    Returns:
        The addressed child list, or ``[]`` if any id is missing
    """
    tasks: Sequence[Task] = forest
    for task_id in path:
        task = _find(tasks, task_id)
        if task is None:
            return []
        tasks = task.subtasks
    return list(tasks)


def resolve_node(forest: Forest, path: Sequence[int]) -> Task | None:
    """Return the task addressed by ``path``.

    Returns:
        The task, or None for the empty path or a path that does not resolve
    """
    tasks: Sequence[Task] = forest
    current: Task | None = None
    for task_id in path:
        current = _find(tasks, task_id)
        if current is None:
            return None
        tasks = current.subtasks
    return current


def resolve_siblings(forest: Forest, path: Sequence[int]) -> list[Task]:
    """Return the list that contains the task addressed by ``path``."""
    return resolve_list(forest, tuple(path)[:-1])


def truncate_path(forest: Forest, path: Sequence[int]) -> TaskPath:
    """Cut ``path`` back to its deepest prefix that still resolves.

    Used after a deletion so a dangling selection becomes its nearest
    surviving ancestor (or the empty path).
    """
    valid: list[int] = []
    tasks: Sequence[Task] = forest
    for task_id in path:
        task = _find(tasks, task_id)
        if task is None:
            break
        valid.append(task_id)
        tasks = task.subtasks
    return tuple(valid)


# =============================================================================
# Copy-on-write updates
# =============================================================================


def map_at(
    forest: Forest,
    path: Sequence[int],
    update: Callable[[Task], Task],
) -> Forest:
    """Replace the task at ``path`` with ``update(task)``.

    Args:
        forest: The forest to update
        path: Path to the task (list of ids from the root)
        update: Function (task) -> new_task

    Returns:
        New forest; nodes off the path are the same objects as before
    """
    if not path:
        return list(forest)

    head, rest = path[0], path[1:]

    def rebuild(task: Task) -> Task:
        if task.id != head:
            return task
        if not rest:
            return update(task)
        return task.model_copy(update={"subtasks": map_at(task.subtasks, rest, update)})

    return [rebuild(task) for task in forest]


def update_at(
    forest: Forest,
    path: Sequence[int],
    fields: Mapping[str, Any],
) -> Forest:
    """Set plain fields (name, description, effort, completed) on one task.

    Raises:
        ValueError: If ``fields`` tries to change ``id`` or ``subtasks``
    """
    forbidden = _STRUCTURAL_FIELDS.intersection(fields)
    if forbidden:
        raise ValueError(f"Cannot update structural fields: {', '.join(sorted(forbidden))}")
    changes = dict(fields)
    return map_at(forest, path, lambda task: task.model_copy(update=changes))


def insert_at(forest: Forest, parent_path: Sequence[int], task: Task) -> Forest:
    """Append ``task`` to the child list addressed by ``parent_path``.

    The empty path appends to the forest. A parent path that does not
    resolve leaves the forest unchanged.
    """
    if not parent_path:
        return [*forest, task]

    return map_at(
        forest,
        parent_path,
        lambda parent: parent.model_copy(update={"subtasks": [*parent.subtasks, task]}),
    )


def delete_at(forest: Forest, path: Sequence[int]) -> Forest:
    """Remove the task at ``path`` together with its whole subtree."""
    if not path:
        return list(forest)
    if len(path) == 1:
        return [task for task in forest if task.id != path[0]]

    head, rest = path[0], path[1:]
    return [
        task
        if task.id != head
        else task.model_copy(update={"subtasks": delete_at(task.subtasks, rest)})
        for task in forest
    ]


# =============================================================================
# Traversal
# =============================================================================


def fold_forest(
    forest: Forest,
    initial: T,
    f: Callable[[T, Task, TaskPath], T],
) -> T:
    """Fold over every task in depth-first order with its path.

    Args:
        forest: The forest to fold over
        initial: Starting accumulator value
        f: Function (accumulator, task, path) -> new_accumulator

    Returns:
        Final accumulated value after visiting all tasks
    """

    def fold_task(acc: T, task: Task, parent: TaskPath) -> T:
        current = (*parent, task.id)
        acc = f(acc, task, current)
        for child in task.subtasks:
            acc = fold_task(acc, child, current)
        return acc

    result = initial
    for task in forest:
        result = fold_task(result, task, ())
    return result


def iter_tasks(forest: Forest) -> Iterator[tuple[Task, TaskPath]]:
    """Yield every task with its path, depth first."""

    def walk(tasks: Sequence[Task], parent: TaskPath) -> Iterator[tuple[Task, TaskPath]]:
        for task in tasks:
            current = (*parent, task.id)
            yield task, current
            yield from walk(task.subtasks, current)

    return walk(forest, ())


def max_task_id(forest: Forest) -> int:
    """Largest id in the forest, 0 when it is empty."""
    return fold_forest(forest, 0, lambda acc, task, _path: max(acc, task.id))


def path_names(forest: Forest, path: Sequence[int]) -> list[str]:
    """Names along ``path``, stopping where it no longer resolves."""
    names: list[str] = []
    tasks: Sequence[Task] = forest
    for task_id in path:
        task = _find(tasks, task_id)
        if task is None:
            break
        names.append(task.name)
        tasks = task.subtasks
    return names


def parse_path(text: str) -> TaskPath:
    """Parse ``"1/3/7"`` into ``(1, 3, 7)``; ``""`` and ``"/"`` are the empty path.

    Raises:
        ValueError: If a segment is not an integer
    """
    segments = [segment for segment in text.strip().split("/") if segment]
    return tuple(int(segment) for segment in segments)


def format_path(path: Sequence[int]) -> str:
    """Inverse of ``parse_path``; the empty path renders as ``/``."""
    return "/".join(str(task_id) for task_id in path) or "/"
