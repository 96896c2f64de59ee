"""Shared utilities for taskpie CLI commands.

This module provides common utilities used across CLI commands:
- Task document resolution and loading
- Path argument parsing
- Formatted output helpers (error, success, info)
"""

from pathlib import Path

import typer

from taskpie.application import check_layout
from taskpie.domain.shared import Err
from taskpie.domain.task import TaskDocument, TaskPath, parse_path
from taskpie.global_config import get_last_document, save_last_document
from taskpie.infrastructure.storage import TaskDocumentRepository

DEFAULT_DOCUMENT = "tasks.json"


def get_document_path(explicit: Path | None = None) -> Path:
    """Resolve the task document to work on.

    Resolution order:
    1. Explicit path (from -f/--file or TASKPIE_FILE)
    2. The last document opened, if it still exists
    3. ./tasks.json

    Args:
        explicit: Path given on the command line.

    Returns:
        Path to the task document (it may not exist yet).
    """
    if explicit is not None:
        return explicit

    last = get_last_document()
    if last is not None and last.exists():
        return last

    return Path.cwd() / DEFAULT_DOCUMENT


def load_document(path: Path) -> TaskDocument:
    """Load a task document, exiting with an error message on failure.

    A missing file is an empty document.
    """
    result = TaskDocumentRepository().load_or_empty(path)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    checked = check_layout(result.value.tasks)
    if isinstance(checked, Err):
        print_error(checked.error)
        raise typer.Exit(1)
    return result.value


def save_document(path: Path, document: TaskDocument) -> None:
    """Save a task document and remember it as the last one used."""
    result = TaskDocumentRepository().save(path, document)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)
    save_last_document(path)


def parse_path_argument(text: str) -> TaskPath:
    """Parse a ``1/3/7`` style path, exiting on malformed input."""
    try:
        return parse_path(text)
    except ValueError:
        print_error(f"Invalid task path: {text!r} (expected ids like 1/3/7)")
        raise typer.Exit(1)


def print_error(msg: str) -> None:
    """Print a formatted error message.

    Args:
        msg: Error message to display
    """
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    """Print a formatted success message."""
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    """Print a formatted info message."""
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_separator(char: str = "=", width: int = 60) -> None:
    """Print a separator line."""
    typer.echo(char * width)


def print_header(title: str, width: int = 60) -> None:
    """Print a formatted header with separators."""
    print_separator("=", width)
    typer.echo(title)
    print_separator("=", width)


__all__ = [
    "DEFAULT_DOCUMENT",
    "get_document_path",
    "load_document",
    "save_document",
    "parse_path_argument",
    "print_error",
    "print_success",
    "print_info",
    "print_separator",
    "print_header",
]
