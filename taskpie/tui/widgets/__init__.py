"""TUI widgets for taskpie."""

from .pie_view import PieView
from .task_panel import TaskPanel

__all__ = ["PieView", "TaskPanel"]
