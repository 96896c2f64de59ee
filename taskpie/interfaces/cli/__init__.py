"""CLI interface for taskpie using Typer.

Usage:
    taskpie task show           # Show the task tree
    taskpie task add 1 -n Docs  # Add a subtask under task 1
    taskpie layout 1/3          # Print the resting layout for a selection
    taskpie render --from 1 --to 1/3 --at 750 -o mid.svg
    taskpie tui                 # Open the interactive pie

The CLI is structured as:
- app: Main Typer application
- commands/: Individual command groups (task, render)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

import logging
from pathlib import Path
from typing import Optional

import typer

from taskpie import __version__
from taskpie.interfaces.cli.commands import render, task

# Create the main Typer application
app = typer.Typer(
    name="taskpie",
    help="Hierarchical task pie: drill through weighted task trees",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"taskpie version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """taskpie - Weighted task trees drawn as a drillable pie.

    Every task is a slice sized by its effort; selecting a task drills
    into its subtasks.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(task.app, name="task")


# =============================================================================
# Top-Level Commands
# =============================================================================

app.command("layout")(render.layout)
app.command("render")(render.render)


@app.command("tui")
def tui(
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Task document (or set TASKPIE_FILE env var)",
        envvar="TASKPIE_FILE",
    ),
) -> None:
    """Open the interactive pie in the terminal."""
    from taskpie.interfaces.cli.common import get_document_path, load_document
    from taskpie.tui.app import TaskPieApp

    path = get_document_path(file)
    document = load_document(path)
    TaskPieApp(path, document).run()


__all__ = ["app"]
