"""In-memory task store.

Reference implementation of the storage contract, backed by id-keyed dicts.
It keeps nothing across restarts: state is rebuilt by replaying the event
log into a fresh instance.
"""

from datetime import datetime

from cadence.domain.shared import EngineError, Err, InvariantViolation, Ok, Result
from cadence.domain.task import Task, TaskId, Todo, TodoCompleted, TodoId


class MemStore:
    """Tasks and todos held in memory.

    Ids start at 1 and are never reused, not even after a todo is deleted.
    Ids grow with insertion, so dict order is id order.

    Example:
        store = MemStore()
        task_id = store.create_task("Water plants")
        todo_id = store.create_todo(task_id, datetime.now())
        assert store.find_open_todo(task_id).id == todo_id
    """

    def __init__(self) -> None:
        self._tasks: dict[TaskId, Task] = {}
        self._todos: dict[TodoId, Todo] = {}
        self._last_task_id = 0
        self._last_todo_id = 0

    # ---- mutations ----

    def create_task(self, title: str) -> TaskId:
        self._last_task_id += 1
        task_id = TaskId(self._last_task_id)
        self._tasks[task_id] = Task(id=task_id, title=title)
        return task_id

    def create_todo(self, task_id: TaskId, due: datetime) -> TodoId:
        """Add an open todo to a task.

        Raises:
            InvariantViolation: If the task is unknown or already has an
                open todo.
        """
        if task_id not in self._tasks:
            raise InvariantViolation(f"cannot create a todo for unknown task {task_id}")
        other = self.find_open_todo(task_id)
        if other is not None:
            raise InvariantViolation(f"task {task_id} already has an open todo ({other.id})")

        self._last_todo_id += 1
        todo_id = TodoId(self._last_todo_id)
        self._todos[todo_id] = Todo(id=todo_id, task=task_id, due=due)
        return todo_id

    def set_todo_completed(
        self,
        todo_id: TodoId,
        completed: TodoCompleted | None,
    ) -> Result[None, EngineError]:
        todo = self._todos.get(todo_id)
        if todo is None:
            return Err(EngineError.not_found("todo", todo_id))
        self._todos[todo_id] = todo.model_copy(update={"completed": completed})
        return Ok(None)

    def set_todo_due(self, todo_id: TodoId, due: datetime) -> Result[None, EngineError]:
        todo = self._todos.get(todo_id)
        if todo is None:
            return Err(EngineError.not_found("todo", todo_id))
        self._todos[todo_id] = todo.model_copy(update={"due": due})
        return Ok(None)

    def delete_todo(self, todo_id: TodoId) -> Result[None, EngineError]:
        if self._todos.pop(todo_id, None) is None:
            return Err(EngineError.not_found("todo", todo_id))
        return Ok(None)

    # ---- queries ----

    def get_task(self, task_id: TaskId) -> Task | None:
        return self._tasks.get(task_id)

    def get_tasks(self) -> list[Task]:
        return list(self._tasks.values())

    def get_todo(self, todo_id: TodoId) -> Todo | None:
        return self._todos.get(todo_id)

    def get_todos(
        self,
        task_id: TaskId | None = None,
        completed: bool | None = None,
    ) -> list[Todo]:
        """Return todos, optionally filtered by task and by completion."""
        return [
            todo
            for todo in self._todos.values()
            if (task_id is None or todo.task == task_id)
            and (completed is None or completed == (todo.completed is not None))
        ]

    def find_open_todo(self, task_id: TaskId) -> Todo | None:
        for todo in self._todos.values():
            if todo.task == task_id and todo.is_open:
                return todo
        return None
