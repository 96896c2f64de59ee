"""Layout and rendering CLI commands.

Inspect the resting layout of a selection and render transition frames
to SVG without a terminal UI. Frames are produced on a manual clock, so
the output is the same on every run.
"""

import math
from pathlib import Path
from typing import Optional

import typer

from taskpie.application import NavigationSession
from taskpie.domain.animation import FrameScheduler, ManualClock
from taskpie.domain.pie import calculate_angles, calculate_rotation, child_angles
from taskpie.domain.shared import Err
from taskpie.domain.task import format_path, resolve_list, resolve_node
from taskpie.global_config import get_global_config
from taskpie.interfaces.cli.common import (
    get_document_path,
    load_document,
    parse_path_argument,
    print_error,
    print_header,
    print_success,
)
from taskpie.render import render_svg


def _degrees(radians: float) -> str:
    return f"{math.degrees(radians):7.1f}"


def layout(
    task_path: str = typer.Argument("", help="Selected path like 1/3 (empty for the root)"),
    mobile: bool = typer.Option(False, "--mobile", help="Use the narrow-screen reference angle"),
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Task document (or set TASKPIE_FILE env var)",
        envvar="TASKPIE_FILE",
    ),
) -> None:
    """Print the resting ring layout for a selection.

    Lists the slices of the current ring (the selection and its siblings)
    and of the child ring, with angles in degrees before rotation.
    """
    document = load_document(get_document_path(file))
    path = parse_path_argument(task_path)
    if path and resolve_node(document.tasks, path) is None:
        print_error(f"Task not found at path: {format_path(path)}")
        raise typer.Exit(1)

    tasks = resolve_list(document.tasks, path[:-1])
    angles = calculate_angles(tasks)
    total = sum(task.effort for task in tasks)

    print_header(f"LAYOUT: {format_path(path)}")
    if not tasks:
        typer.echo("No tasks yet.")
        return

    rotation = 0.0
    selected_children = []
    selected_angle = None
    typer.echo("Current ring:")
    for task, angle in zip(tasks, angles):
        marker = "*" if path and task.id == path[-1] else " "
        share = task.effort / total * 100 if total else 0.0
        typer.echo(
            f" {marker} {task.id:>4}  {_degrees(angle.start)} -> {_degrees(angle.end)}"
            f"  {share:5.1f}%  {task.name}"
        )
        if marker == "*":
            rotation = calculate_rotation(angle.mid, mobile)
            selected_children = task.subtasks
            selected_angle = angle

    if selected_angle is not None and selected_children:
        typer.echo("")
        typer.echo("Child ring:")
        child_total = sum(task.effort for task in selected_children)
        for task, angle in zip(selected_children, child_angles(selected_angle, selected_children)):
            share = task.effort / child_total * 100 if child_total else 0.0
            typer.echo(
                f"   {task.id:>4}  {_degrees(angle.start)} -> {_degrees(angle.end)}"
                f"  {share:5.1f}%  {task.name}"
            )

    typer.echo("")
    typer.echo(f"Rotation: {math.degrees(rotation):.1f} deg")


def render(
    from_path: str = typer.Option("", "--from", help="Selection before the transition"),
    to_path: Optional[str] = typer.Option(
        None, "--to", help="Selection after the transition (default: same as --from)"
    ),
    at: float = typer.Option(-1.0, "--at", help="Milliseconds into the transition"),
    output: Path = typer.Option(Path("pie.svg"), "--output", "-o", help="SVG file to write"),
    frames: int = typer.Option(0, "--frames", help="Render N evenly spaced frames instead"),
    out_dir: Path = typer.Option(Path("frames"), "--out-dir", help="Directory for --frames"),
    mobile: bool = typer.Option(False, "--mobile", help="Use the narrow-screen reference angle"),
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Task document (or set TASKPIE_FILE env var)",
        envvar="TASKPIE_FILE",
    ),
) -> None:
    """Render the transition between two selections as SVG.

    Without --at the settled frame is written. With --frames N, N frames
    spanning the whole transition are written to --out-dir; a single
    frame is the settled one.
    """
    config = get_global_config()
    geometry = config.ring_geometry()
    document = load_document(get_document_path(file))
    start = parse_path_argument(from_path)
    end = start if to_path is None else parse_path_argument(to_path)

    for path in (start, end):
        if path and resolve_node(document.tasks, path) is None:
            print_error(f"Task not found at path: {format_path(path)}")
            raise typer.Exit(1)

    clock = ManualClock()
    scheduler = FrameScheduler()
    session = NavigationSession(
        document.tasks,
        start,
        scheduler=scheduler,
        clock=clock,
        geometry=geometry,
        is_mobile=mobile,
    )
    result = session.select(end)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    if frames > 0:
        out_dir.mkdir(parents=True, exist_ok=True)
        if frames == 1:
            times = [geometry.duration_ms]
        else:
            times = [index * geometry.duration_ms / (frames - 1) for index in range(frames)]
        for index, now in enumerate(times):
            scheduler.tick(now)
            target = out_dir / f"frame_{index:04d}.svg"
            target.write_text(render_svg(session.frame(), config.view_size), encoding="utf-8")
        print_success(f"Wrote {frames} frame(s) to {out_dir}")
        return

    scheduler.tick(geometry.duration_ms if at < 0 else at)
    output.write_text(render_svg(session.frame(), config.view_size), encoding="utf-8")
    print_success(f"Wrote {output}")
