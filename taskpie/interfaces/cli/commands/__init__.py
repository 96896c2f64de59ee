"""CLI command groups for taskpie.

This package contains individual command groups that are registered
with the main Typer app. Each module provides a set of related commands.

Command groups:
- task: Task document editing (show, add, edit, done, delete)
- render: Layout inspection and SVG frame rendering (layout, render)
"""

from taskpie.interfaces.cli.commands import render, task

__all__ = ["task", "render"]
