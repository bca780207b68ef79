"""Shared utilities for cadence CLI commands.

This module provides common utilities used across CLI commands:
- Event log resolution and engine assembly
- Formatted output helpers (error, success, info)
- Row formatting for task and todo listings

Listings go to stdout. Status messages go to stderr, because stdout also
carries the event log when the log file is ``-``.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Annotated, Optional, TypeVar

import typer

from cadence.application import JournaledEngine
from cadence.domain.shared import EngineError, Err, ReplayError, Result
from cadence.domain.task import TaskId, Todo, parse_duration
from cadence.global_config import get_global_config, resolve_log_file
from cadence.infrastructure import EventLog, MemStore
from cadence.infrastructure.storage import TaskStore

T = TypeVar("T")

# Reusable log file option for CLI commands
# Usage: def my_command(ctx: typer.Context, file: FileOption = None) -> None:
FileOption = Annotated[
    Optional[str],
    typer.Option(
        "--file",
        "-f",
        help="Event log to read and append to, '-' for stdin/stdout (or set CADENCE_FILE)",
        envvar="CADENCE_FILE",
    ),
]


# =============================================================================
# Engine Assembly
# =============================================================================


def get_log_path(ctx: typer.Context | None, explicit_file: str | None = None) -> str:
    """Get the event log path.

    Resolution order:
    1. Explicit command option (-f/--file, or CADENCE_FILE)
    2. The same option given before the command name
    3. ``log_file`` from the global config
    4. events.log in the config directory

    Args:
        ctx: Current Typer context, used to find the top-level option.
        explicit_file: Log path given to the command itself.

    Returns:
        Log path, or ``-`` for stdin/stdout.
    """
    if explicit_file:
        return explicit_file
    if ctx is not None:
        obj = ctx.find_root().obj
        if isinstance(obj, dict) and obj.get("file"):
            return obj["file"]
    return resolve_log_file(get_global_config())


@contextmanager
def open_engine(ctx: typer.Context | None, file: str | None = None) -> Iterator[JournaledEngine]:
    """Replay the event log and yield an engine that appends to it.

    Raises:
        typer.Exit: If the log cannot be opened or replayed.
    """
    path = get_log_path(ctx, file)
    try:
        event_log = EventLog.open(path)
    except OSError as e:
        print_error(f"Cannot open event log {path}: {e}")
        raise typer.Exit(1) from e

    with event_log:
        try:
            engine = JournaledEngine(MemStore(), event_log)
        except ReplayError as e:
            print_error(f"Cannot replay event log {path}: {e}")
            raise typer.Exit(1) from e
        yield engine


def unwrap_or_exit(result: Result[T, EngineError]) -> T:
    """Return the value of an Ok, or print the error and exit 1."""
    if isinstance(result, Err):
        print_error(str(result.error))
        raise typer.Exit(1)
    return result.value


def require_open_todo(store: TaskStore, task_id: TaskId) -> Todo:
    """Get the open todo of a task.

    Raises:
        typer.Exit: If the task is unknown or paused.
    """
    if store.get_task(task_id) is None:
        print_error(f"task not found: {task_id}")
        raise typer.Exit(1)
    todo = store.find_open_todo(task_id)
    if todo is None:
        print_error(f"task {task_id} is paused")
        raise typer.Exit(1)
    return todo


def parse_every(value: str) -> timedelta:
    """Parse an ``--every`` value.

    Raises:
        typer.BadParameter: If the duration cannot be parsed.
    """
    try:
        return parse_duration(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


# =============================================================================
# Output Helpers
# =============================================================================


def print_error(msg: str) -> None:
    """Print a formatted error message.

    Args:
        msg: Error message to display
    """
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    """Print a formatted success message to stderr.

    Args:
        msg: Success message to display
    """
    typer.echo(typer.style(msg, fg=typer.colors.GREEN), err=True)


def id_width(ids: list[int]) -> int:
    """Width of the widest id, used to zero-pad an id column."""
    return max((len(str(i)) for i in ids), default=1)


def format_row(task_id: int, date: datetime, title: str, width: int) -> str:
    """Format one listing row: padded task id, date, title."""
    return f"{task_id:0{width}d} {date:%Y-%m-%d} {title}"


__all__ = [
    "FileOption",
    "get_log_path",
    "open_engine",
    "unwrap_or_exit",
    "require_open_todo",
    "parse_every",
    "print_error",
    "print_success",
    "id_width",
    "format_row",
]
