# tests/test_mem_store.py

from __future__ import annotations

from datetime import timedelta

import pytest

from cadence.domain.shared import ErrorKind, InvariantViolation, is_err, is_ok
from cadence.domain.task import TaskId, TodoCompleted, TodoId
from cadence.infrastructure import MemStore

from .conftest import T0


def test_ids_start_at_one_and_are_never_reused(store: MemStore) -> None:
    task_a = store.create_task("Water plants")
    task_b = store.create_task("Call grandma")
    assert (task_a, task_b) == (1, 2)

    todo = store.create_todo(task_a, T0)
    assert todo == 1
    assert is_ok(store.delete_todo(todo))

    assert store.create_todo(task_a, T0) == 2
    assert store.get_todo(todo) is None


def test_second_open_todo_is_rejected(store: MemStore) -> None:
    task_id = store.create_task("Water plants")
    store.create_todo(task_id, T0)

    with pytest.raises(InvariantViolation):
        store.create_todo(task_id, T0 + timedelta(days=1))


def test_todo_for_unknown_task_is_rejected(store: MemStore) -> None:
    with pytest.raises(InvariantViolation):
        store.create_todo(TaskId(7), T0)


def test_unknown_todo_mutations_return_not_found(store: MemStore) -> None:
    missing = TodoId(5)
    for result in (
        store.set_todo_completed(missing, TodoCompleted(date=T0)),
        store.set_todo_due(missing, T0),
        store.delete_todo(missing),
    ):
        assert is_err(result)
        assert result.error.kind is ErrorKind.NOT_FOUND


def test_completing_frees_the_open_slot(store: MemStore) -> None:
    task_id = store.create_task("Water plants")
    first = store.create_todo(task_id, T0)
    store.set_todo_completed(first, TodoCompleted(date=T0))

    second = store.create_todo(task_id, T0 + timedelta(days=7))
    open_todo = store.find_open_todo(task_id)
    assert open_todo is not None
    assert open_todo.id == second


def test_get_todos_filters_are_independent(store: MemStore) -> None:
    water = store.create_task("Water plants")
    call = store.create_task("Call grandma")
    done = store.create_todo(water, T0)
    store.set_todo_completed(done, TodoCompleted(date=T0))
    water_open = store.create_todo(water, T0)
    call_open = store.create_todo(call, T0)

    assert [t.id for t in store.get_todos()] == [done, water_open, call_open]
    assert [t.id for t in store.get_todos(task_id=water)] == [done, water_open]
    assert [t.id for t in store.get_todos(completed=True)] == [done]
    assert [t.id for t in store.get_todos(completed=False)] == [water_open, call_open]
    assert [t.id for t in store.get_todos(task_id=call, completed=True)] == []


def test_set_todo_due_replaces_record(store: MemStore) -> None:
    task_id = store.create_task("Water plants")
    todo_id = store.create_todo(task_id, T0)
    before = store.get_todo(todo_id)

    store.set_todo_due(todo_id, T0 + timedelta(days=2))

    after = store.get_todo(todo_id)
    assert after is not None and before is not None
    assert after.due == T0 + timedelta(days=2)
    assert before.due == T0
    assert [task.title for task in store.get_tasks()] == ["Water plants"]
