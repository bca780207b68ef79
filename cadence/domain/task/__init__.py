"""Task domain - recurring tasks, their todos and due date prediction.

All exports are pure (no I/O, no side effects), apart from the injectable
clock the predictor reads.

Key Types:
    Task - A recurring item
    Todo - One occurrence of a task
    TodoCompleted - Completion record
    TaskId, TodoId - Store-assigned identifiers

Prediction:
    DueGuesser - Per-task predictor state and guessing rules
    Fixed, Learned - Interval sources
    add_sample - Running average step
    DEFAULT_PERIOD - Interval used when nothing is known

Log Events:
    LogEvent - Base class
    TaskCreated, TaskCloned, TodoDone, TodoPostponed, TaskPaused, TaskUnpaused
    EVENT_TYPES - Prefix to event type registry
"""

from .dates import (
    MAX_INTERVAL,
    format_timestamp,
    interval_from_json,
    interval_to_json,
    parse_duration,
    parse_timestamp,
)
from .due_guesser import (
    DEFAULT_PERIOD,
    MAX_SAMPLES,
    MIN_POSTPONE,
    Clock,
    DueGuesser,
    DueInfo,
    Fixed,
    Learned,
    add_sample,
    interval_of,
)
from .events import (
    EVENT_TYPES,
    LogEvent,
    TaskCloned,
    TaskCreated,
    TaskPaused,
    TaskUnpaused,
    TodoDone,
    TodoPostponed,
)
from .models import Task, TaskId, Todo, TodoCompleted, TodoId

__all__ = [
    # Models
    "Task",
    "TaskId",
    "Todo",
    "TodoCompleted",
    "TodoId",
    # Dates
    "MAX_INTERVAL",
    "format_timestamp",
    "parse_timestamp",
    "interval_to_json",
    "interval_from_json",
    "parse_duration",
    # Prediction
    "DEFAULT_PERIOD",
    "MAX_SAMPLES",
    "MIN_POSTPONE",
    "Clock",
    "DueGuesser",
    "DueInfo",
    "Fixed",
    "Learned",
    "add_sample",
    "interval_of",
    # Events
    "EVENT_TYPES",
    "LogEvent",
    "TaskCreated",
    "TaskCloned",
    "TodoDone",
    "TodoPostponed",
    "TaskPaused",
    "TaskUnpaused",
]
