"""Task domain events.

Each mutating engine operation is recorded as one event, and the event log
is the only persistent state. An event carries exactly the arguments needed
to repeat the operation, plus the ids the operation produced where replay
has to verify them.

Events are written as a positional JSON array, in field declaration order,
behind a ``<name><version>:`` prefix. Bumping ``version`` lets the format
change without breaking old logs.

All events are pure data structures - no I/O, no side effects.
"""

from datetime import datetime, timedelta
from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, Field, field_serializer, field_validator

from .dates import format_timestamp, interval_from_json, interval_to_json, parse_timestamp

RecordId = Annotated[int, Field(ge=1)]


class LogEvent(BaseModel):
    """Base class for all logged events."""

    name: ClassVar[str]
    version: ClassVar[int] = 1

    model_config = {"frozen": True, "strict": True}

    @classmethod
    def prefix(cls) -> str:
        return f"{cls.name}{cls.version}"

    @classmethod
    def from_args(cls, args: Any) -> "LogEvent":
        """Build the event from its positional JSON arguments.

        Raises:
            ValueError: If ``args`` is not a list of the right length or a
                value fails validation (pydantic's ValidationError is a
                ValueError).
        """
        fields = list(cls.model_fields)
        if not isinstance(args, list) or len(args) != len(fields):
            raise ValueError(f"{cls.prefix()} expects {len(fields)} arguments, got {args!r}")
        return cls.model_validate(dict(zip(fields, args)))

    def to_args(self) -> list[Any]:
        """Return the positional JSON arguments of the event."""
        return list(self.model_dump(mode="json").values())


class TaskCreated(LogEvent):
    """A task was created with its first todo."""

    name: ClassVar[str] = "create_task"

    title: str
    due_every: timedelta | None
    task_id: RecordId
    todo_id: RecordId

    @field_validator("due_every", mode="before")
    @classmethod
    def _parse_interval(cls, value: Any) -> timedelta | None:
        if isinstance(value, timedelta):
            return value
        return interval_from_json(value)

    @field_serializer("due_every")
    def _dump_interval(self, value: timedelta | None) -> int | float | None:
        return interval_to_json(value)


class TaskCloned(LogEvent):
    """A task was cloned, history included."""

    name: ClassVar[str] = "clone_task"

    source_task_id: RecordId
    title: str
    new_task_id: RecordId
    todo_id: RecordId


class TodoDone(LogEvent):
    """A todo was completed."""

    name: ClassVar[str] = "complete_todo"

    todo_id: RecordId
    completed: datetime

    @field_validator("completed", mode="before")
    @classmethod
    def _parse_completed(cls, value: Any) -> datetime:
        if isinstance(value, datetime):
            return value
        if not isinstance(value, str):
            raise ValueError(f"completion date must be a string, got {value!r}")
        return parse_timestamp(value)

    @field_serializer("completed")
    def _dump_completed(self, value: datetime) -> str:
        return format_timestamp(value)


class TodoPostponed(LogEvent):
    """A todo's due date was pushed back."""

    name: ClassVar[str] = "todo_later"

    todo_id: RecordId


class TaskPaused(LogEvent):
    """A task's open todo was removed."""

    name: ClassVar[str] = "pause_task"

    task_id: RecordId


class TaskUnpaused(LogEvent):
    """A paused task got a new open todo."""

    name: ClassVar[str] = "unpause_task"

    task_id: RecordId


EVENT_TYPES: dict[str, type[LogEvent]] = {
    event_type.prefix(): event_type
    for event_type in (
        TaskCreated,
        TaskCloned,
        TodoDone,
        TodoPostponed,
        TaskPaused,
        TaskUnpaused,
    )
}
