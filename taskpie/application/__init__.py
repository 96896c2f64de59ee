"""Application service layer for taskpie.

Services:
    task_service - Pure task edits returning Results
    navigation - NavigationSession: forest, selection, ids and the animator

Example usage:
    >>> from taskpie.application import NavigationSession
    >>> session = NavigationSession()
    >>> task = session.add_task(()).value
    >>> session.path == (task.id,)
    True
"""

from taskpie.application.navigation import IdAllocator, NavigationSession
from taskpie.application.task_service import (
    ForestStats,
    add_task,
    check_layout,
    edit_task,
    get_forest_stats,
    remove_task,
    toggle_completed,
    validate_fields,
)

__all__ = [
    # Task service
    "add_task",
    "edit_task",
    "remove_task",
    "toggle_completed",
    "validate_fields",
    "check_layout",
    "get_forest_stats",
    "ForestStats",
    # Navigation
    "IdAllocator",
    "NavigationSession",
]
