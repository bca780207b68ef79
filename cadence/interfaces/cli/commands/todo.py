"""Todo CLI commands.

Commands for the open and completed occurrences of tasks: listing what is
due, completing, postponing, and showing completion history.
"""

from datetime import datetime, timedelta

import typer

from cadence.domain.task import TaskId, Todo, TodoCompleted
from cadence.interfaces.cli.common import (
    FileOption,
    format_row,
    id_width,
    open_engine,
    print_success,
    require_open_todo,
    unwrap_or_exit,
)

app = typer.Typer(help="Todo commands (what is due, do, later)")

# Short listing: at least MIN_SHOWN rows, at most MAX_SHOWN, and nothing due
# after tomorrow once MIN_SHOWN rows are out.
MIN_SHOWN = 3
MAX_SHOWN = 5


# =============================================================================
# Listing Helpers
# =============================================================================


def visible_todos(
    todos: list[Todo],
    *,
    now: datetime,
    show_all: bool,
) -> tuple[list[Todo], bool]:
    """Pick the open todos to show, soonest due first.

    Args:
        todos: Open todos in any order.
        now: Reference time for "due by tomorrow".
        show_all: Skip truncation.

    Returns:
        The todos to show, and whether todos due by tomorrow were left out.
    """
    ordered = sorted(todos, key=lambda todo: todo.due)
    if show_all:
        return ordered, False

    tomorrow = now + timedelta(days=1)
    for count, todo in enumerate(ordered):
        if count >= MIN_SHOWN and (todo.due > tomorrow or count >= MAX_SHOWN):
            return ordered[:count], todo.due <= tomorrow
    return ordered, False


# =============================================================================
# Commands
# =============================================================================


@app.command("list")
def list_todos(
    ctx: typer.Context,
    show_all: bool = typer.Option(
        False, "--all", "-a", help="Show all todos (default: only the next few)"
    ),
    file: FileOption = None,
) -> None:
    """List open todos, soonest due first.

    Example:
        cadence todo list --all
    """
    with open_engine(ctx, file) as engine:
        store = engine.store
        shown, more = visible_todos(
            store.get_todos(completed=False), now=datetime.now(), show_all=show_all
        )
        width = id_width([todo.task for todo in shown])
        for todo in shown:
            task = store.get_task(todo.task)
            typer.echo(format_row(todo.task, todo.due, task.title if task else "?", width))
        if more:
            typer.echo("(and more)")


@app.command("done")
def list_done(
    ctx: typer.Context,
    file: FileOption = None,
) -> None:
    """List completed todos, oldest completion first."""
    with open_engine(ctx, file) as engine:
        store = engine.store
        todos = sorted(
            store.get_todos(completed=True),
            key=lambda todo: todo.completed.date if todo.completed else todo.due,
        )
        width = id_width([todo.task for todo in todos])
        for todo in todos:
            task = store.get_task(todo.task)
            completed = todo.completed.date if todo.completed else todo.due
            typer.echo(format_row(todo.task, completed, task.title if task else "?", width))


@app.command("do")
def do(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task whose open todo to complete"),
    file: FileOption = None,
) -> None:
    """Complete a task's open todo now."""
    with open_engine(ctx, file) as engine:
        todo = require_open_todo(engine.store, TaskId(task_id))
        unwrap_or_exit(engine.complete_todo(todo.id, TodoCompleted(date=datetime.now())))
        next_due = engine.guess_due(todo.task)
        print_success(f"Done: task {task_id}, next due {next_due:%Y-%m-%d}")


@app.command("later")
def later(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task whose open todo to postpone"),
    file: FileOption = None,
) -> None:
    """Postpone a task's open todo."""
    with open_engine(ctx, file) as engine:
        todo = require_open_todo(engine.store, TaskId(task_id))
        unwrap_or_exit(engine.todo_later(todo.id))
        moved = engine.store.get_todo(todo.id)
        due = moved.due if moved else todo.due
        print_success(f"Postponed: task {task_id}, now due {due:%Y-%m-%d}")
