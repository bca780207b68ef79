"""Re-applying logged events to an engine.

Each handler repeats one operation on a bare ``TaskEngine``, which never
logs, so replaying is silent. Operations that allocate ids must produce the
ids that were recorded, and any operation that failed now but succeeded when
it was logged means the log and the code disagree. Both are fatal.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

from cadence.domain.shared import EngineError, Err, ReplayError, Result
from cadence.domain.task import (
    LogEvent,
    TaskCloned,
    TaskCreated,
    TaskPaused,
    TaskUnpaused,
    TodoCompleted,
    TodoDone,
    TodoPostponed,
)

if TYPE_CHECKING:
    from cadence.application.engine import TaskEngine

T = TypeVar("T")


def _unwrap(event: LogEvent, result: Result[T, EngineError]) -> T:
    if isinstance(result, Err):
        raise ReplayError(f"{event.prefix()} failed during replay: {result.error}")
    return result.value


def _check_ids(event: LogEvent, expected: tuple[int, int], found: tuple[int, int]) -> None:
    if expected != found:
        raise ReplayError(
            f"mismatch in task or todo ids for {event.prefix()}: "
            f"expected {expected}, found {found}"
        )


def _replay_create(engine: "TaskEngine", event: TaskCreated) -> None:
    found = engine.create_task(event.title, event.due_every)
    _check_ids(event, (event.task_id, event.todo_id), found)


def _replay_clone(engine: "TaskEngine", event: TaskCloned) -> None:
    found = _unwrap(event, engine.clone_task(event.source_task_id, event.title))
    _check_ids(event, (event.new_task_id, event.todo_id), found)


def _replay_complete(engine: "TaskEngine", event: TodoDone) -> None:
    _unwrap(event, engine.complete_todo(event.todo_id, TodoCompleted(date=event.completed)))


def _replay_later(engine: "TaskEngine", event: TodoPostponed) -> None:
    _unwrap(event, engine.todo_later(event.todo_id))


def _replay_pause(engine: "TaskEngine", event: TaskPaused) -> None:
    _unwrap(event, engine.pause_task(event.task_id))


def _replay_unpause(engine: "TaskEngine", event: TaskUnpaused) -> None:
    _unwrap(event, engine.unpause_task(event.task_id))


_HANDLERS: dict[type[LogEvent], Callable[["TaskEngine", Any], None]] = {
    TaskCreated: _replay_create,
    TaskCloned: _replay_clone,
    TodoDone: _replay_complete,
    TodoPostponed: _replay_later,
    TaskPaused: _replay_pause,
    TaskUnpaused: _replay_unpause,
}


def apply_event(engine: "TaskEngine", event: LogEvent) -> None:
    """Repeat the operation recorded by ``event`` on ``engine``.

    Raises:
        ReplayError: If the operation fails or produces different ids.
    """
    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise ReplayError(f"no replay handler for {event.prefix()}")
    handler(engine, event)
