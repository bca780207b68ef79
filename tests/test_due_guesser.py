# tests/test_due_guesser.py

from __future__ import annotations

from datetime import timedelta
from types import SimpleNamespace

import pytest

from cadence.domain.shared import InvariantViolation
from cadence.domain.task import (
    DEFAULT_PERIOD,
    MAX_SAMPLES,
    DueGuesser,
    Fixed,
    Learned,
    TaskId,
    Todo,
    TodoCompleted,
    TodoId,
    add_sample,
)

from .conftest import T0
from .fakes import FakeClock

DAY = timedelta(days=1)
TASK = TaskId(1)


def _lookup(*todos: Todo) -> SimpleNamespace:
    by_id = {todo.id: todo for todo in todos}
    return SimpleNamespace(get_todo=by_id.get)


def _complete(guesser: DueGuesser, when) -> None:
    todo = Todo(id=TodoId(1), task=TASK, due=T0)
    guesser.handle_completion(_lookup(todo), todo.id, TodoCompleted(date=when))


def test_first_sample_replaces_fixed_interval(clock: FakeClock) -> None:
    guesser = DueGuesser(clock)
    guesser.init_task(TASK, 5 * DAY)

    _complete(guesser, T0)
    assert guesser.guess_due(TASK) == T0 + 5 * DAY

    _complete(guesser, T0 + 2 * DAY)
    assert guesser.guess_due(TASK) == T0 + 4 * DAY
    assert guesser.interval(TASK) == 2 * DAY


def test_learned_average_of_observed_gaps(clock: FakeClock) -> None:
    guesser = DueGuesser(clock)
    guesser.init_task(TASK)
    assert guesser.guess_due(TASK) == T0 + DEFAULT_PERIOD

    _complete(guesser, T0)
    _complete(guesser, T0 + 2 * DAY)
    _complete(guesser, T0 + 6 * DAY)

    assert guesser.interval(TASK) == 3 * DAY
    assert guesser.guess_due(TASK) == T0 + 9 * DAY


def test_sample_count_is_capped() -> None:
    due_in = Learned(DAY, 1)
    for _ in range(20):
        due_in = add_sample(due_in, DAY)
    assert due_in.count == MAX_SAMPLES
    assert due_in.get() == DAY

    # The eleventh sample weighs a tenth, not an eleventh.
    due_in = add_sample(due_in, 11 * DAY)
    assert due_in.count == MAX_SAMPLES
    assert due_in.get() == 2 * DAY


def test_add_sample_from_fixed_or_nothing() -> None:
    assert add_sample(Fixed(5 * DAY), 2 * DAY) == Learned(2 * DAY, 1)
    assert add_sample(None, 7 * DAY) == Learned(7 * DAY, 1)


def test_unknown_task_uses_default_period(clock: FakeClock) -> None:
    guesser = DueGuesser(clock)
    assert guesser.guess_due(TaskId(42)) == T0 + DEFAULT_PERIOD
    assert guesser.interval(TaskId(42)) == DEFAULT_PERIOD


def test_completion_before_previous_one_is_fatal(clock: FakeClock) -> None:
    guesser = DueGuesser(clock)
    guesser.init_task(TASK)
    _complete(guesser, T0)

    with pytest.raises(InvariantViolation):
        _complete(guesser, T0 - DAY)


def test_completion_of_missing_todo_is_fatal(clock: FakeClock) -> None:
    guesser = DueGuesser(clock)
    guesser.init_task(TASK)
    with pytest.raises(InvariantViolation):
        guesser.handle_completion(_lookup(), TodoId(9), TodoCompleted(date=T0))


def test_copy_task_copies_state(clock: FakeClock) -> None:
    guesser = DueGuesser(clock)
    guesser.init_task(TASK, 5 * DAY)
    _complete(guesser, T0)

    guesser.copy_task(TaskId(2), TASK)
    assert guesser.guess_due(TaskId(2)) == guesser.guess_due(TASK)

    with pytest.raises(InvariantViolation):
        guesser.copy_task(TaskId(3), TaskId(99))


def test_pause_forgets_last_completion_but_keeps_interval(clock: FakeClock) -> None:
    guesser = DueGuesser(clock)
    guesser.init_task(TASK)
    _complete(guesser, T0)
    _complete(guesser, T0 + 2 * DAY)

    guesser.handle_pause(TASK)
    clock.advance(30 * DAY)
    assert guesser.guess_due(TASK) == clock.now + 2 * DAY

    # First completion after the pause only records its date.
    _complete(guesser, clock.now)
    assert guesser.interval(TASK) == 2 * DAY


def test_guess_later_without_predictor_info_moves_one_day(clock: FakeClock) -> None:
    guesser = DueGuesser(clock)
    todo = Todo(id=TodoId(1), task=TASK, due=T0 - 5 * DAY)

    assert guesser.guess_later(_lookup(todo), todo.id) == T0 + DAY


def test_guess_later_moves_a_fifth_of_the_interval(clock: FakeClock) -> None:
    guesser = DueGuesser(clock)
    guesser.init_task(TASK, 30 * DAY)
    todo = Todo(id=TodoId(1), task=TASK, due=T0 + 10 * DAY)

    assert guesser.guess_later(_lookup(todo), todo.id) == T0 + 16 * DAY


def test_guess_later_moves_at_least_one_day(clock: FakeClock) -> None:
    guesser = DueGuesser(clock)
    guesser.init_task(TASK, 2 * DAY)
    todo = Todo(id=TodoId(1), task=TASK, due=T0)

    assert guesser.guess_later(_lookup(todo), todo.id) == T0 + DAY
