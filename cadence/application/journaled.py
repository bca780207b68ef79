"""Journaled engine.

Pairs a ``TaskEngine`` with an ``EventLog``. Construction replays the log
into the engine. After that every successful mutating call is appended to
the log, after it has been applied.

A failed append is reported as a failed operation but is not rolled back:
the store can be one operation ahead of the durable log until the process
exits. Replaying the log afterwards yields the state without that operation.
"""

import logging
from datetime import datetime, timedelta
from typing import TypeVar

from cadence.application.engine import TaskEngine
from cadence.domain.shared import EngineError, Err, ErrorKind, LogWriteError, Result
from cadence.domain.task import (
    Clock,
    LogEvent,
    TaskCloned,
    TaskCreated,
    TaskId,
    TaskPaused,
    TaskUnpaused,
    TodoCompleted,
    TodoDone,
    TodoId,
    TodoPostponed,
)
from cadence.infrastructure.eventlog import EventLog
from cadence.infrastructure.storage import TaskStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JournaledEngine:
    """Engine whose mutations are persisted to an event log.

    Args:
        store: Fresh, empty store to rebuild state into.
        event_log: Log to replay from and append to.
        clock: Source of "now", shared with the inner engine.

    Raises:
        ReplayError: If the log cannot be replayed. No partially rebuilt
            engine is returned.
    """

    def __init__(
        self,
        store: TaskStore,
        event_log: EventLog,
        *,
        clock: Clock = datetime.now,
    ) -> None:
        engine = TaskEngine(store, clock=clock)
        event_log.replay(engine)
        self._engine = engine
        self._log = event_log

    @property
    def store(self) -> TaskStore:
        return self._engine.store

    def guess_due(self, task_id: TaskId) -> datetime:
        return self._engine.guess_due(task_id)

    def interval(self, task_id: TaskId) -> timedelta:
        return self._engine.interval(task_id)

    def _record(self, event: LogEvent, result: Result[T, EngineError]) -> Result[T, EngineError]:
        try:
            self._log.append(event)
        except LogWriteError as e:
            logger.error("Operation applied but not logged: %s", e)
            return Err(EngineError(ErrorKind.LOG_WRITE, str(e)))
        return result

    def create_task(
        self,
        title: str,
        due_every: timedelta | None = None,
    ) -> tuple[TaskId, TodoId]:
        """Create a task and log it.

        Raises:
            LogWriteError: If the record cannot be appended. The task still
                exists in the store.
        """
        task_id, todo_id = self._engine.create_task(title, due_every)
        self._log.append(
            TaskCreated(title=title, due_every=due_every, task_id=task_id, todo_id=todo_id)
        )
        return task_id, todo_id

    def clone_task(
        self,
        task_id: TaskId,
        title: str,
    ) -> Result[tuple[TaskId, TodoId], EngineError]:
        result = self._engine.clone_task(task_id, title)
        if isinstance(result, Err):
            return result
        new_task_id, todo_id = result.value
        event = TaskCloned(
            source_task_id=task_id,
            title=title,
            new_task_id=new_task_id,
            todo_id=todo_id,
        )
        return self._record(event, result)

    def complete_todo(
        self,
        todo_id: TodoId,
        completed: TodoCompleted,
    ) -> Result[None, EngineError]:
        result = self._engine.complete_todo(todo_id, completed)
        if isinstance(result, Err):
            return result
        return self._record(TodoDone(todo_id=todo_id, completed=completed.date), result)

    def todo_later(self, todo_id: TodoId) -> Result[None, EngineError]:
        result = self._engine.todo_later(todo_id)
        if isinstance(result, Err):
            return result
        return self._record(TodoPostponed(todo_id=todo_id), result)

    def pause_task(self, task_id: TaskId) -> Result[None, EngineError]:
        result = self._engine.pause_task(task_id)
        if isinstance(result, Err):
            return result
        return self._record(TaskPaused(task_id=task_id), result)

    def unpause_task(self, task_id: TaskId) -> Result[TodoId, EngineError]:
        result = self._engine.unpause_task(task_id)
        if isinstance(result, Err):
            return result
        return self._record(TaskUnpaused(task_id=task_id), result)
