"""Tests for the navigation session that owns forest, selection and ids."""

import pytest

from taskpie.application import IdAllocator, NavigationSession
from taskpie.domain.animation import FrameScheduler, ManualClock, Transitioning, TransitionKind
from taskpie.domain.shared import Err, Ok
from taskpie.domain.task import TaskDocument, resolve_node

from .conftest import make_task


@pytest.fixture
def session(forest, scheduler, clock) -> NavigationSession:
    return NavigationSession(forest, (), scheduler=scheduler, clock=clock)


def test_id_allocator_never_reuses_ids(forest) -> None:
    ids = IdAllocator.for_forest(forest)
    assert ids.peek() == 5
    assert ids.allocate() == 5
    assert ids.allocate() == 6
    assert ids.peek() == 7


def test_initial_path_is_repaired(forest) -> None:
    session = NavigationSession(forest, (1, 99), scheduler=FrameScheduler(), clock=ManualClock())
    assert session.path == (1,)


def test_select_and_go_up(session) -> None:
    assert session.select((1, 3)) == Ok((1, 3))
    assert session.selected_task.name == "Review"
    assert isinstance(session.animator.state, Transitioning)

    assert session.go_up() == (1,)
    assert session.go_up() == ()
    assert session.go_up() == ()


def test_select_rejects_missing_paths(session) -> None:
    result = session.select((1, 99))
    assert isinstance(result, Err)
    assert "1/99" in result.error
    assert session.path == ()


def test_selection_drives_the_animator(session, scheduler, clock) -> None:
    session.select((1,))
    assert session.animator.state.kind is TransitionKind.DRILL_IN

    clock.advance(1500.0)
    layers = session.tick()
    assert layers.path == (1,)
    assert layers.previous is None
    assert scheduler.pending == 0


def test_add_task_appends_and_selects(session) -> None:
    session.select((1, 2))
    result = session.add_task()

    assert isinstance(result, Ok)
    task = result.value
    assert task.id == 5
    assert task.name == "New Task 3"
    assert task.effort == 100.0
    assert session.path == (1, 5)
    assert session.dirty


def test_add_child_without_selecting(session) -> None:
    session.select((4,))
    result = session.add_task((4,), name="Tests", select=False)

    assert result.value.name == "Tests"
    assert session.path == (4,)
    assert [t.id for t in session.selected_task.subtasks] == [5]


def test_add_task_under_missing_parent(session) -> None:
    assert isinstance(session.add_task((42,)), Err)
    assert not session.dirty


def test_add_to_an_empty_document() -> None:
    session = NavigationSession(scheduler=FrameScheduler(), clock=ManualClock())
    assert session.frame().is_empty

    task = session.add_task(()).value
    assert task.id == 1
    assert session.path == (1,)
    assert not session.frame().is_empty


def test_update_and_toggle(session) -> None:
    session.select((1, 2))
    assert session.update_task((1, 2), name="Wireframes", effort="2").value.effort == 2.0
    assert session.toggle_completed().value.completed
    assert resolve_node(session.forest, (1, 2)).name == "Wireframes"

    assert isinstance(session.update_task((1, 2), effort=-1), Err)


def test_delete_falls_back_to_the_parent(session) -> None:
    session.select((1, 3))
    result = session.delete_task()

    assert result == Ok((1,))
    assert session.path == (1,)
    assert resolve_node(session.forest, session.path) is not None
    assert [t.id for t in session.selected_task.subtasks] == [2]


def test_delete_unselected_task_keeps_the_selection(session) -> None:
    session.select((4,))
    assert session.delete_task((1, 2)) == Ok((4,))
    assert session.path == (4,)


def test_delete_last_task_empties_the_pie(scheduler, clock) -> None:
    session = NavigationSession(scheduler=scheduler, clock=clock)
    session.add_task(())
    session.delete_task()

    assert session.path == ()
    assert session.forest == []
    assert session.frame().is_empty


def test_delete_needs_a_target(session) -> None:
    assert isinstance(session.delete_task(), Err)


def test_ids_stay_unique_after_deletes(session) -> None:
    first = session.add_task(()).value
    session.delete_task((first.id,))
    second = session.add_task(()).value
    assert (first.id, second.id) == (5, 6)


def test_document_and_saved_flag(session) -> None:
    session.add_task(())
    document = session.document()
    assert isinstance(document, TaskDocument)
    assert [t.id for t in document.tasks] == [1, 4, 5]

    session.mark_saved()
    assert not session.dirty


def test_delete_refuses_to_leave_only_zero_effort_siblings(scheduler, clock) -> None:
    session = NavigationSession(
        [make_task(1, "A"), make_task(2, "B")], (1,), scheduler=scheduler, clock=clock
    )
    assert isinstance(session.update_task((2,), effort=0), Ok)

    result = session.delete_task((1,))
    assert isinstance(result, Err)
    assert [t.id for t in session.forest] == [1, 2]
    assert session.path == (1,)
    assert not session.frame().is_empty


def test_apply_edits_then_navigate(session) -> None:
    session.select((1, 2))
    edited = session.update_task((1, 2), name="Wireframes", effort="2")
    assert isinstance(edited, Ok)
    assert session.select((4,)) == Ok((4,))

    assert resolve_node(session.forest, (1, 2)).name == "Wireframes"
    assert resolve_node(session.forest, (1, 2)).effort == 2.0
    assert session.path == (4,)
    assert session.dirty
    assert session.animator.state.kind is TransitionKind.DRILL_OUT


def test_rejected_edits_leave_forest_and_selection(session) -> None:
    session.select((1, 2))
    before = session.forest

    assert isinstance(session.update_task((1, 2), effort="lots"), Err)
    assert session.forest is before
    assert session.path == (1, 2)
    assert not session.dirty
