"""Tests for the pure task edit service."""

from taskpie.application import (
    add_task,
    check_layout,
    edit_task,
    get_forest_stats,
    remove_task,
    toggle_completed,
    validate_fields,
)
from taskpie.domain.shared import Err, Ok
from taskpie.domain.task import resolve_list, resolve_node

from .conftest import make_task


def test_add_task_uses_default_name_and_effort(forest) -> None:
    result = add_task(forest, (1,), 10)
    assert isinstance(result, Ok)

    updated, task = result.value
    assert (task.id, task.name, task.effort) == (10, "New Task 3", 100.0)
    assert [t.id for t in resolve_list(updated, (1,))] == [2, 3, 10]


def test_add_task_with_name_at_top_level(forest) -> None:
    updated, task = add_task(forest, (), 10, "Ship").value
    assert task.name == "Ship"
    assert [t.id for t in updated] == [1, 4, 10]


def test_add_task_missing_parent(forest) -> None:
    assert isinstance(add_task(forest, (7,), 10), Err)


def test_validate_fields() -> None:
    assert validate_fields({"name": "  Plan  ", "effort": "2.5"}) == Ok(
        {"name": "Plan", "effort": 2.5}
    )
    assert isinstance(validate_fields({"colour": "red"}), Err)
    assert isinstance(validate_fields({"name": "   "}), Err)
    assert isinstance(validate_fields({"effort": "lots"}), Err)
    assert isinstance(validate_fields({"effort": -1}), Err)


def test_edit_task(forest) -> None:
    updated = edit_task(forest, (1, 2), {"description": "rough first pass"}).value
    assert resolve_node(updated, (1, 2)).description == "rough first pass"
    assert isinstance(edit_task(forest, (9,), {"name": "x"}), Err)


def test_edit_task_keeps_one_positive_sibling(forest) -> None:
    zero_one = edit_task(forest, (1, 2), {"effort": 0}).value
    assert resolve_node(zero_one, (1, 2)).effort == 0.0

    result = edit_task(zero_one, (1, 3), {"effort": 0})
    assert isinstance(result, Err)
    assert "positive" in result.error


def test_toggle_completed(forest) -> None:
    once = toggle_completed(forest, (4,)).value
    assert resolve_node(once, (4,)).completed
    twice = toggle_completed(once, (4,)).value
    assert not resolve_node(twice, (4,)).completed
    assert isinstance(toggle_completed(forest, (8,)), Err)


def test_remove_task_repairs_the_selection(forest) -> None:
    updated, selection = remove_task(forest, (1,), (1, 3)).value
    assert [t.id for t in updated] == [4]
    assert selection == ()

    _, kept = remove_task(forest, (1, 2), (1, 3)).value
    assert kept == (1, 3)
    assert isinstance(remove_task(forest, (1, 7), ()), Err)


def test_forest_stats(forest) -> None:
    done = toggle_completed(forest, (1, 3)).value
    stats = get_forest_stats(done)

    assert (stats.total, stats.completed) == (4, 1)
    assert stats.total_effort == 204.0
    assert stats.completed_effort == 3.0
    assert stats.progress_percent == 1.5
    assert get_forest_stats([]).progress_percent == 0.0


def test_check_layout(forest) -> None:
    assert check_layout(forest) == Ok(None)
    assert check_layout([]) == Ok(None)

    broken = [make_task(1, "a", subtasks=[make_task(2, "b", 0), make_task(3, "c", 0)])]
    result = check_layout(broken)
    assert isinstance(result, Err)
    assert "1" in result.error

    assert isinstance(check_layout([make_task(1, "z", 0)]), Err)


def test_remove_task_keeps_one_positive_sibling() -> None:
    forest = [make_task(1, "A"), make_task(2, "B", 0)]

    result = remove_task(forest, (1,), (1,))
    assert isinstance(result, Err)
    assert "positive" in result.error

    updated, selection = remove_task(forest, (2,), (1,)).value
    assert [t.id for t in updated] == [1]
    assert selection == (1,)
    assert check_layout(updated) == Ok(None)


def test_remove_last_task_of_a_list_is_allowed() -> None:
    forest = [make_task(1, "A", subtasks=[make_task(2, "B")])]
    updated, selection = remove_task(forest, (1, 2), (1, 2)).value
    assert resolve_node(updated, (1,)).subtasks == []
    assert selection == (1,)
