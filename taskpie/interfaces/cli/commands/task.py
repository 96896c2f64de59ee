"""Task management CLI commands.

Commands for editing a task document from the shell: showing the tree,
adding, editing, completing and deleting tasks.
"""

from pathlib import Path
from typing import Optional

import typer

from taskpie.application import (
    IdAllocator,
    add_task,
    edit_task,
    get_forest_stats,
    remove_task,
)
from taskpie.domain.shared import Err
from taskpie.domain.task import Task, TaskDocument, format_path, resolve_node
from taskpie.interfaces.cli.common import (
    get_document_path,
    load_document,
    parse_path_argument,
    print_error,
    print_header,
    print_info,
    print_success,
    save_document,
)

app = typer.Typer(help="Task management commands")


# =============================================================================
# Output Formatting Helpers
# =============================================================================


def format_share(task: Task, siblings: list[Task]) -> str:
    """Share of the parent's circle taken by ``task``, as a percentage."""
    total = sum(sibling.effort for sibling in siblings)
    if total <= 0:
        return "-"
    return f"{task.effort / total * 100:.1f}%"


def print_tree_recursive(
    tasks: list[Task],
    prefix: tuple[int, ...] = (),
    indent: int = 0,
) -> None:
    """Recursively print tasks with their path, status and share."""
    pad = "  " * indent
    for task in tasks:
        status = "[x]" if task.completed else "[ ]"
        path = format_path((*prefix, task.id))
        share = format_share(task, tasks)
        typer.echo(f"{pad}- {status} {task.name}  ({path}, effort {task.effort:g}, {share})")
        if task.subtasks:
            print_tree_recursive(task.subtasks, (*prefix, task.id), indent + 1)


# =============================================================================
# Commands
# =============================================================================


@app.command("show")
def show(
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Task document (or set TASKPIE_FILE env var)",
        envvar="TASKPIE_FILE",
    ),
) -> None:
    """Show the task tree with each task's share of its parent."""
    path = get_document_path(file)
    document = load_document(path)

    print_header(f"TASKS: {path.name}")
    if not document.tasks:
        typer.echo("No tasks yet. Add one with: taskpie task add --name NAME")
        return

    print_tree_recursive(document.tasks)

    stats = get_forest_stats(document.tasks)
    typer.echo("")
    typer.echo(
        f"{stats.completed}/{stats.total} tasks done, "
        f"{stats.progress_percent}% of total effort"
    )


@app.command("add")
def add(
    parent: str = typer.Argument("", help="Parent path like 1/3 (empty for a root task)"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Task name"),
    effort: Optional[float] = typer.Option(None, "--effort", "-e", help="Relative effort"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Description"),
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Task document (or set TASKPIE_FILE env var)",
        envvar="TASKPIE_FILE",
    ),
) -> None:
    """Add a task under PARENT (or at the top level)."""
    path = get_document_path(file)
    document = load_document(path)
    parent_path = parse_path_argument(parent)

    ids = IdAllocator.for_forest(document.tasks)
    result = add_task(document.tasks, parent_path, ids.allocate(), name)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    forest, task = result.value
    task_path = (*parent_path, task.id)

    fields: dict[str, object] = {}
    if effort is not None:
        fields["effort"] = effort
    if description is not None:
        fields["description"] = description
    if fields:
        edited = edit_task(forest, task_path, fields)
        if isinstance(edited, Err):
            print_error(edited.error)
            raise typer.Exit(1)
        forest = edited.value

    save_document(path, TaskDocument(tasks=forest))
    print_success(f"Added: {task.name} ({format_path(task_path)})")


@app.command("edit")
def edit(
    task_path: str = typer.Argument(..., help="Task path like 1/3"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="New name"),
    effort: Optional[float] = typer.Option(None, "--effort", "-e", help="New effort"),
    description: Optional[str] = typer.Option(
        None, "--description", "-d", help="New description"
    ),
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Task document (or set TASKPIE_FILE env var)",
        envvar="TASKPIE_FILE",
    ),
) -> None:
    """Change the name, effort or description of a task."""
    fields: dict[str, object] = {}
    if name is not None:
        fields["name"] = name
    if effort is not None:
        fields["effort"] = effort
    if description is not None:
        fields["description"] = description
    if not fields:
        print_info("Nothing to change. Pass --name, --effort or --description.")
        return

    path = get_document_path(file)
    document = load_document(path)
    target = parse_path_argument(task_path)

    result = edit_task(document.tasks, target, fields)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    save_document(path, TaskDocument(tasks=result.value))
    print_success(f"Updated {format_path(target)}")


@app.command("done")
def done(
    task_path: str = typer.Argument(..., help="Task path like 1/3"),
    undo: bool = typer.Option(False, "--undo", help="Mark the task as not done"),
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Task document (or set TASKPIE_FILE env var)",
        envvar="TASKPIE_FILE",
    ),
) -> None:
    """Mark a task as done (or not done with --undo)."""
    path = get_document_path(file)
    document = load_document(path)
    target = parse_path_argument(task_path)

    result = edit_task(document.tasks, target, {"completed": not undo})
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    save_document(path, TaskDocument(tasks=result.value))
    task = resolve_node(result.value, target)
    state = "not done" if undo else "done"
    print_success(f"Marked {state}: {task.name if task else format_path(target)}")


@app.command("delete")
def delete(
    task_path: str = typer.Argument(..., help="Task path like 1/3"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Task document (or set TASKPIE_FILE env var)",
        envvar="TASKPIE_FILE",
    ),
) -> None:
    """Delete a task together with all of its subtasks."""
    path = get_document_path(file)
    document = load_document(path)
    target = parse_path_argument(task_path)

    task = resolve_node(document.tasks, target)
    if task is None:
        print_error(f"Task not found at path: {format_path(target)}")
        raise typer.Exit(1)

    if not yes:
        count = 1 + _count_subtasks(task)
        typer.confirm(f"Delete '{task.name}' ({count} task(s))?", abort=True)

    result = remove_task(document.tasks, target, ())
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    forest, _ = result.value
    save_document(path, TaskDocument(tasks=forest))
    print_success(f"Deleted: {task.name}")


def _count_subtasks(task: Task) -> int:
    return sum(1 + _count_subtasks(sub) for sub in task.subtasks)
