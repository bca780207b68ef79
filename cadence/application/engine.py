"""Task engine.

Orchestrates the store and the due date predictor into the task lifecycle:
create, clone, complete, postpone, pause and unpause. The engine owns the
invariant that an active task has exactly one open todo and a paused task
has none.

This engine does not log. ``JournaledEngine`` wraps it to append each
operation to the event log, and replay drives it directly so replaying
never re-appends.
"""

import logging
from datetime import datetime, timedelta

from cadence.domain.shared import (
    EngineError,
    Err,
    ErrorKind,
    InvariantViolation,
    Ok,
    Result,
)
from cadence.domain.task import Clock, DueGuesser, TaskId, TodoCompleted, TodoId
from cadence.infrastructure.storage import TaskStore

logger = logging.getLogger(__name__)


def _require(result: Result[None, EngineError]) -> None:
    """Fail hard when a store call rejects an id the engine just checked."""
    if isinstance(result, Err):
        raise InvariantViolation(f"store out of sync with engine: {result.error}")


class TaskEngine:
    """Lifecycle operations over a store.

    Args:
        store: Backend holding tasks and todos. The engine is its only writer.
        clock: Source of "now". Pin it to make replays reproducible.
    """

    def __init__(self, store: TaskStore, *, clock: Clock = datetime.now) -> None:
        self._store = store
        self._clock = clock
        self._due_guesser = DueGuesser(clock)

    @property
    def store(self) -> TaskStore:
        """The underlying store. Callers outside the engine only read from it."""
        return self._store

    def guess_due(self, task_id: TaskId) -> datetime:
        return self._due_guesser.guess_due(task_id)

    def interval(self, task_id: TaskId) -> timedelta:
        return self._due_guesser.interval(task_id)

    def create_task(
        self,
        title: str,
        due_every: timedelta | None = None,
    ) -> tuple[TaskId, TodoId]:
        """Create a task with an open todo due immediately.

        Args:
            title: Task title.
            due_every: Fixed interval until enough completions are observed.

        Returns:
            The new task id and the id of its first todo.
        """
        task_id = self._store.create_task(title)
        self._due_guesser.init_task(task_id, due_every)
        todo_id = self._store.create_todo(task_id, self._clock())
        logger.debug("Created task %s (todo %s) every=%s", task_id, todo_id, due_every)
        return task_id, todo_id

    def clone_task(
        self,
        task_id: TaskId,
        title: str,
    ) -> Result[tuple[TaskId, TodoId], EngineError]:
        """Copy a task with its completion history under a new title.

        The clone gets the source's predictor state, a completed todo for
        each completed todo of the source (same due and completion dates),
        and an open todo with the source's open due date.

        Returns:
            Ok((new_task_id, todo_id)), Err(NOT_FOUND) for an unknown task,
            or Err(PAUSED) when the source has no open todo.
        """
        if self._store.get_task(task_id) is None:
            return Err(EngineError.not_found("task", task_id))
        open_todo = self._store.find_open_todo(task_id)
        if open_todo is None:
            return Err(
                EngineError(ErrorKind.PAUSED, f"cloning paused tasks is unsupported (task {task_id})")
            )

        new_task_id = self._store.create_task(title)
        self._due_guesser.copy_task(new_task_id, task_id)
        for todo in self._store.get_todos(task_id, completed=True):
            cloned_id = self._store.create_todo(new_task_id, todo.due)
            _require(self._store.set_todo_completed(cloned_id, todo.completed))
        todo_id = self._store.create_todo(new_task_id, open_todo.due)

        logger.debug("Cloned task %s into %s (todo %s)", task_id, new_task_id, todo_id)
        return Ok((new_task_id, todo_id))

    def complete_todo(
        self,
        todo_id: TodoId,
        completed: TodoCompleted,
    ) -> Result[None, EngineError]:
        """Complete a todo and open the next occurrence of its task.

        Returns:
            Ok(None), Err(NOT_FOUND) for an unknown todo, or
            Err(ALREADY_COMPLETED).

        Raises:
            InvariantViolation: If the predictor rejects the completion. The
                store is not touched in that case.
        """
        todo = self._store.get_todo(todo_id)
        if todo is None:
            return Err(EngineError.not_found("todo", todo_id))
        if not todo.is_open:
            return Err(
                EngineError(ErrorKind.ALREADY_COMPLETED, f"todo {todo_id} is already completed")
            )

        self._due_guesser.handle_completion(self._store, todo_id, completed)
        _require(self._store.set_todo_completed(todo_id, completed))
        due = self._due_guesser.guess_due(todo.task)
        next_id = self._store.create_todo(todo.task, due)

        logger.debug("Completed todo %s; next todo %s due %s", todo_id, next_id, due)
        return Ok(None)

    def todo_later(self, todo_id: TodoId) -> Result[None, EngineError]:
        """Push a todo's due date back in place.

        Returns:
            Ok(None) or Err(NOT_FOUND) for an unknown todo.
        """
        if self._store.get_todo(todo_id) is None:
            return Err(EngineError.not_found("todo", todo_id))

        due = self._due_guesser.guess_later(self._store, todo_id)
        _require(self._store.set_todo_due(todo_id, due))
        logger.debug("Postponed todo %s to %s", todo_id, due)
        return Ok(None)

    def pause_task(self, task_id: TaskId) -> Result[None, EngineError]:
        """Remove a task's open todo.

        Returns:
            Ok(None), Err(NOT_FOUND) for an unknown task, or Err(PAUSED) when
            the task has no open todo.
        """
        if self._store.get_task(task_id) is None:
            return Err(EngineError.not_found("task", task_id))
        todo = self._store.find_open_todo(task_id)
        if todo is None:
            return Err(
                EngineError(ErrorKind.PAUSED, f"task not found or already paused: {task_id}")
            )

        _require(self._store.delete_todo(todo.id))
        self._due_guesser.handle_pause(task_id)
        logger.debug("Paused task %s (deleted todo %s)", task_id, todo.id)
        return Ok(None)

    def unpause_task(self, task_id: TaskId) -> Result[TodoId, EngineError]:
        """Give a paused task a new open todo due immediately.

        Only call this on paused tasks: on an active task the store's
        open-todo invariant raises.

        Returns:
            Ok(todo_id) or Err(NOT_FOUND) for an unknown task.
        """
        if self._store.get_task(task_id) is None:
            return Err(EngineError.not_found("task", task_id))

        todo_id = self._store.create_todo(task_id, self._clock())
        logger.debug("Unpaused task %s (todo %s)", task_id, todo_id)
        return Ok(todo_id)
