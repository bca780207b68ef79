"""Storage contract for tasks and todos.

The engine depends on this Protocol instead of a concrete backend, so other
backends can be added without touching it. These are the only mutations and
queries the rest of the system may use.

Backends must enforce the open-todo invariant themselves: ``create_todo``
raises ``InvariantViolation`` rather than store a second open todo for a
task. Query results come back in ascending id order.
"""

from datetime import datetime
from typing import Protocol

from cadence.domain.shared import EngineError, Result
from cadence.domain.task import Task, TaskId, Todo, TodoCompleted, TodoId


class TaskStore(Protocol):
    # Mutations
    def create_task(self, title: str) -> TaskId: ...
    def create_todo(self, task_id: TaskId, due: datetime) -> TodoId: ...
    def set_todo_completed(
        self,
        todo_id: TodoId,
        completed: TodoCompleted | None,
    ) -> Result[None, EngineError]: ...
    def set_todo_due(self, todo_id: TodoId, due: datetime) -> Result[None, EngineError]: ...
    def delete_todo(self, todo_id: TodoId) -> Result[None, EngineError]: ...

    # Queries (read-only, also used by presentation code)
    def get_task(self, task_id: TaskId) -> Task | None: ...
    def get_tasks(self) -> list[Task]: ...
    def get_todo(self, todo_id: TodoId) -> Todo | None: ...
    def get_todos(
        self,
        task_id: TaskId | None = None,
        completed: bool | None = None,
    ) -> list[Todo]: ...
    def find_open_todo(self, task_id: TaskId) -> Todo | None: ...
