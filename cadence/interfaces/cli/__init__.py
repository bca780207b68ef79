"""CLI interface for cadence using Typer.

This module provides the command-line interface for cadence, a tracker
for recurring tasks whose due dates adapt to when you actually do them.

Usage:
    cadence                     # Show what is due
    cadence add "Water plants"  # Add a recurring task
    cadence do 3                # Complete task 3
    cadence later 3             # Postpone task 3

The CLI is structured as:
- app: Main Typer application
- commands/: Individual command groups (task, todo, config)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

import sys
from typing import Optional

import typer

from cadence import __version__
from cadence.global_config import get_global_config
from cadence.interfaces.cli.commands import config, task, todo
from cadence.interfaces.cli.common import FileOption, print_error
from cadence.logging_setup import setup_logging

# Create the main Typer application
app = typer.Typer(
    name="cadence",
    help="Recurring tasks with adaptive due dates",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"cadence version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    file: FileOption = None,
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Diagnostic log level (default from config)",
    ),
) -> None:
    """cadence - recurring tasks with adaptive due dates.

    Every change is appended to an event log; the current state is rebuilt
    from it on each run. Without a command, shows what is due.
    """
    ctx.obj = {"file": file}
    try:
        setup_logging(log_level or get_global_config().log_level)
    except ValueError as e:
        print_error(f"invalid log level: {e}")
        raise typer.Exit(1) from e

    if ctx.invoked_subcommand is None:
        todo.list_todos(ctx, show_all=not sys.stdout.isatty(), file=None)


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(task.app, name="task")
app.add_typer(todo.app, name="todo")
app.add_typer(config.app, name="config")


# =============================================================================
# Top-Level Shortcuts for Common Commands
# =============================================================================


@app.command("list")
def list_todos(
    ctx: typer.Context,
    show_all: bool = typer.Option(
        False, "--all", "-a", help="Show all todos (default: only the next few)"
    ),
    file: FileOption = None,
) -> None:
    """Show what is due (shortcut for 'todo list')."""
    todo.list_todos(ctx, show_all=show_all, file=file)


app.command("ls", hidden=True)(list_todos)


@app.command("add")
def add(
    ctx: typer.Context,
    description: str = typer.Argument(..., help="Task title"),
    every: Optional[str] = typer.Option(
        None,
        "--every",
        "-e",
        help="Expected interval such as 30days or 2w (default from config)",
    ),
    file: FileOption = None,
) -> None:
    """Add a recurring task (shortcut for 'task add')."""
    task.add(ctx, description=description, every=every, file=file)


@app.command("do")
def do(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task whose open todo to complete"),
    file: FileOption = None,
) -> None:
    """Complete a task now (shortcut for 'todo do')."""
    todo.do(ctx, task_id=task_id, file=file)


@app.command("done")
def done(
    ctx: typer.Context,
    file: FileOption = None,
) -> None:
    """Show completed todos (shortcut for 'todo done')."""
    todo.list_done(ctx, file=file)


@app.command("later")
def later(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task whose open todo to postpone"),
    file: FileOption = None,
) -> None:
    """Postpone a task (shortcut for 'todo later')."""
    todo.later(ctx, task_id=task_id, file=file)


@app.command("pause")
def pause(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task to pause"),
    file: FileOption = None,
) -> None:
    """Pause a task (shortcut for 'task pause')."""
    task.pause(ctx, task_id=task_id, file=file)


@app.command("unpause")
def unpause(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task to unpause"),
    file: FileOption = None,
) -> None:
    """Unpause a task (shortcut for 'task unpause')."""
    task.unpause(ctx, task_id=task_id, file=file)


@app.command("clone")
def clone(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task to copy"),
    title: str = typer.Argument(..., help="Title of the copy"),
    file: FileOption = None,
) -> None:
    """Copy a task with its history (shortcut for 'task clone')."""
    task.clone(ctx, task_id=task_id, title=title, file=file)


@app.command("tasks")
def tasks(
    ctx: typer.Context,
    file: FileOption = None,
) -> None:
    """List all tasks (shortcut for 'task list')."""
    task.list_tasks(ctx, file=file)


__all__ = ["app"]
