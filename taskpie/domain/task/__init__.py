"""Task domain - the weighted task tree and path addressing.

All exports are pure (no I/O, no side effects).

Key Types:
    Task - Tree node with an effort weight
    TaskDocument - Persisted ``{"tasks": [...]}`` layout
    TaskPath - Root-to-node id sequence
    Forest - Ordered top-level task list

Addressing Functions:
    resolve_list / resolve_node / resolve_siblings - Lookup by path
    map_at / update_at / insert_at / delete_at - Copy-on-write updates
    truncate_path - Repair a selection after deletion
    fold_forest / iter_tasks - Traversal
"""

from .addressing import (
    delete_at,
    fold_forest,
    format_path,
    insert_at,
    iter_tasks,
    map_at,
    max_task_id,
    parse_path,
    path_names,
    resolve_list,
    resolve_node,
    resolve_siblings,
    truncate_path,
    update_at,
)
from .models import DEFAULT_EFFORT, Forest, Task, TaskDocument, TaskPath

__all__ = [
    # Models
    "DEFAULT_EFFORT",
    "Forest",
    "Task",
    "TaskDocument",
    "TaskPath",
    # Lookup
    "resolve_list",
    "resolve_node",
    "resolve_siblings",
    "truncate_path",
    # Updates
    "map_at",
    "update_at",
    "insert_at",
    "delete_at",
    # Traversal
    "fold_forest",
    "iter_tasks",
    "max_task_id",
    "path_names",
    "parse_path",
    "format_path",
]
