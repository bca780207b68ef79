"""Due date prediction.

Turns a task's completion history into the due date of its next
occurrence. The estimate starts from a fixed interval (or a default period)
and is replaced by a running average of the observed gaps between
completions once two completions have been seen.

No I/O here. The only outside input is the clock, which is injectable.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Protocol

from cadence.domain.shared.errors import InvariantViolation

from .models import TaskId, Todo, TodoCompleted, TodoId

# =============================================================================
# Prediction Constants
# =============================================================================

DEFAULT_PERIOD = timedelta(days=30)  # Used when nothing is known about a task
MIN_POSTPONE = timedelta(days=1)  # Postponing always moves at least this far
POSTPONE_DIVISOR = 5  # Postponing moves by a fifth of the interval
MAX_SAMPLES = 10  # Cap on the running average's effective sample count

Clock = Callable[[], datetime]


class TodoLookup(Protocol):
    """The one store query the predictor needs."""

    def get_todo(self, todo_id: TodoId) -> Todo | None: ...


# =============================================================================
# Value Objects
# =============================================================================


@dataclass(frozen=True, slots=True)
class Fixed:
    """Interval given by the user when the task was created."""

    interval: timedelta

    def get(self) -> timedelta:
        return self.interval


@dataclass(frozen=True, slots=True)
class Learned:
    """Running average of observed intervals.

    Attributes:
        total: Sum of the samples, re-weighted to ``count`` units.
        count: Effective sample count, at most MAX_SAMPLES.
    """

    total: timedelta
    count: int

    def get(self) -> timedelta:
        return self.total / self.count


DueIn = Fixed | Learned | None


@dataclass(frozen=True, slots=True)
class DueInfo:
    """Predictor state for a single task."""

    due_in: DueIn = None
    last_completed: datetime | None = None


# =============================================================================
# Estimation Functions
# =============================================================================


def interval_of(due_in: DueIn) -> timedelta:
    """Return the interval currently predicted by ``due_in``."""
    if due_in is None:
        return DEFAULT_PERIOD
    return due_in.get()


def add_sample(due_in: DueIn, sample: timedelta) -> Learned:
    """Fold an observed interval into the running average.

    The previous average is re-weighted to ``new_count - 1`` samples before
    the new one is added, so once the cap is reached older behaviour decays
    geometrically instead of being dropped. The first sample replaces a
    fixed interval outright.

    Examples:
        >>> day = timedelta(days=1)
        >>> add_sample(Fixed(5 * day), 2 * day).get() == 2 * day
        True
        >>> add_sample(Learned(2 * day, 1), 4 * day).get() == 3 * day
        True
    """
    if isinstance(due_in, Learned):
        new_count = min(MAX_SAMPLES, due_in.count + 1)
        return Learned(sample + due_in.get() * (new_count - 1), new_count)
    return Learned(sample, 1)


class DueGuesser:
    """Per-task predictor state plus the guessing rules.

    State is derived only: it is rebuilt by replaying the event log and is
    never stored on its own.
    """

    def __init__(self, clock: Clock = datetime.now) -> None:
        self._clock = clock
        self._info: dict[TaskId, DueInfo] = {}

    def init_task(self, task_id: TaskId, due_after: timedelta | None = None) -> None:
        """Start tracking a task, with a fixed interval if one was given."""
        due_in = Fixed(due_after) if due_after is not None else None
        self._info[task_id] = DueInfo(due_in=due_in)

    def copy_task(self, task_id: TaskId, other_task_id: TaskId) -> None:
        """Give ``task_id`` the exact state of ``other_task_id``."""
        try:
            self._info[task_id] = self._info[other_task_id]
        except KeyError:
            raise InvariantViolation(f"no predictor state for task {other_task_id}") from None

    def handle_completion(
        self,
        store: TodoLookup,
        todo_id: TodoId,
        completed: TodoCompleted,
    ) -> None:
        """Learn from a completion.

        The gap since the previous completion is folded into the estimate;
        a first completion only records its date.

        Raises:
            InvariantViolation: If the todo is unknown, the completion goes
                back in time, or the next due date would be out of range.
                State is left untouched in each case.
        """
        todo = store.get_todo(todo_id)
        if todo is None:
            raise InvariantViolation(f"todo {todo_id} vanished before completion")

        info = self._info.get(todo.task)
        if info is None:
            return

        due_in = info.due_in
        if info.last_completed is not None:
            diff = completed.date - info.last_completed
            if diff < timedelta(0):
                raise InvariantViolation(
                    f"completion of todo {todo_id} at {completed.date} precedes "
                    f"the previous completion at {info.last_completed}"
                )
            due_in = add_sample(due_in, diff)

        # guess_due runs after the store is updated, so it must not fail there.
        try:
            completed.date + interval_of(due_in)
        except OverflowError:
            raise InvariantViolation(
                f"next due date of todo {todo_id} is out of range "
                f"({completed.date} + {interval_of(due_in)})"
            ) from None

        self._info[todo.task] = DueInfo(due_in=due_in, last_completed=completed.date)

    def handle_pause(self, task_id: TaskId) -> None:
        """Forget the last completion but keep the learned interval.

        The completion after an unpause then starts a fresh pair instead of
        measuring the whole pause as one interval.
        """
        info = self._info.get(task_id)
        if info is not None:
            self._info[task_id] = replace(info, last_completed=None)

    def interval(self, task_id: TaskId) -> timedelta:
        """Return the interval currently predicted for a task."""
        info = self._info.get(task_id)
        return interval_of(info.due_in) if info is not None else DEFAULT_PERIOD

    def guess_due(self, task_id: TaskId) -> datetime:
        """Predict when the next occurrence of a task is due."""
        info = self._info.get(task_id)
        if info is None:
            return self._clock() + DEFAULT_PERIOD
        base = info.last_completed if info.last_completed is not None else self._clock()
        return base + interval_of(info.due_in)

    def guess_later(self, store: TodoLookup, todo_id: TodoId) -> datetime:
        """Predict a postponed due date for an open todo.

        Anchored at the later of now and the current due date, moved by the
        larger of one day and a fifth of the interval.
        """
        todo = store.get_todo(todo_id)
        if todo is None:
            raise InvariantViolation(f"todo {todo_id} vanished before postponing")

        step = MIN_POSTPONE
        info = self._info.get(todo.task)
        if info is not None:
            step = max(MIN_POSTPONE, interval_of(info.due_in) / POSTPONE_DIVISOR)
        return max(self._clock(), todo.due) + step
