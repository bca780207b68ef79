"""Task domain models.

Pure domain models for recurring tasks and their occurrences. Uses Pydantic
so records compare by value and copy cheaply with ``model_copy``.
"""

from datetime import datetime
from typing import NewType

from pydantic import BaseModel

TaskId = NewType("TaskId", int)
TodoId = NewType("TodoId", int)


class Task(BaseModel):
    """A recurring item the user wants to be reminded about.

    The title is fixed at creation. Tasks are never deleted.
    """

    id: TaskId
    title: str

    model_config = {"frozen": True}


class TodoCompleted(BaseModel):
    """Completion record of a todo."""

    date: datetime

    model_config = {"frozen": True}


class Todo(BaseModel):
    """One occurrence of a task, open or completed.

    A task has at most one open todo (``completed is None``) at a time.
    """

    id: TodoId
    task: TaskId
    due: datetime
    completed: TodoCompleted | None = None

    model_config = {"frozen": True}

    @property
    def is_open(self) -> bool:
        return self.completed is None
