"""Shared fixtures: a small task forest and a deterministic clock."""

import pytest

from taskpie.domain.animation import FrameScheduler, ManualClock, PieAnimator
from taskpie.domain.task import Task


def make_task(task_id: int, name: str, effort: float = 100.0, subtasks=(), completed=False) -> Task:
    return Task(
        id=task_id,
        name=name,
        effort=effort,
        completed=completed,
        subtasks=list(subtasks),
    )


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep config and last-document state out of the real home directory."""
    home = tmp_path / "home"
    monkeypatch.setenv("TASKPIE_HOME", str(home))
    monkeypatch.delenv("TASKPIE_FILE", raising=False)
    return home


@pytest.fixture
def forest() -> list[Task]:
    """One root with two subtasks weighted 1:3, plus a second root."""
    return [
        make_task(
            1,
            "Design",
            subtasks=[
                make_task(2, "Sketch", effort=1),
                make_task(3, "Review", effort=3),
            ],
        ),
        make_task(4, "Build"),
    ]


@pytest.fixture
def single_root() -> list[Task]:
    """A forest with exactly one root, so the root fills the whole circle."""
    return [
        make_task(
            1,
            "Root",
            subtasks=[
                make_task(2, "Small", effort=1),
                make_task(3, "Large", effort=3, subtasks=[make_task(5, "Leaf")]),
            ],
        )
    ]


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def scheduler() -> FrameScheduler:
    return FrameScheduler()


@pytest.fixture
def animator(scheduler, clock) -> PieAnimator:
    return PieAnimator(scheduler, clock)
