"""Task CLI commands.

Commands for the task lifecycle: adding, cloning, pausing, unpausing and
listing tasks.
"""

import typer

from cadence.domain.shared import LogWriteError
from cadence.domain.task import TaskId
from cadence.global_config import get_global_config
from cadence.infrastructure.storage import TaskStore
from cadence.interfaces.cli.common import (
    FileOption,
    id_width,
    open_engine,
    parse_every,
    print_error,
    print_success,
    unwrap_or_exit,
)

app = typer.Typer(help="Task commands (add, clone, pause, unpause)")


def print_tasks(store: TaskStore, *, err: bool = False) -> None:
    """Print every task sorted by title.

    Args:
        store: Store to read tasks from.
        err: Print to stderr, for output that follows a mutation.
    """
    tasks = sorted(store.get_tasks(), key=lambda task: task.title)
    width = id_width([task.id for task in tasks])
    for task in tasks:
        typer.echo(f"{task.id:0{width}d} {task.title}", err=err)


# =============================================================================
# Commands
# =============================================================================


@app.command("add")
def add(
    ctx: typer.Context,
    description: str = typer.Argument(..., help="Task title"),
    every: str | None = typer.Option(
        None,
        "--every",
        "-e",
        help="Expected interval such as 30days or 2w (default from config)",
    ),
    file: FileOption = None,
) -> None:
    """Add a recurring task, due now.

    Example:
        cadence add "Water plants" --every 1w
    """
    due_every = parse_every(every or get_global_config().default_every)
    with open_engine(ctx, file) as engine:
        try:
            task_id, _todo_id = engine.create_task(description, due_every)
        except LogWriteError as e:
            print_error(str(e))
            raise typer.Exit(1) from e
        print_success(f"Added task {task_id}")
        print_tasks(engine.store, err=True)


@app.command("clone")
def clone(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task to copy"),
    title: str = typer.Argument(..., help="Title of the copy"),
    file: FileOption = None,
) -> None:
    """Copy a task with its completion history under a new title."""
    with open_engine(ctx, file) as engine:
        new_task_id, _todo_id = unwrap_or_exit(engine.clone_task(TaskId(task_id), title))
        print_success(f"Cloned task {task_id} into {new_task_id}")


@app.command("pause")
def pause(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task to pause"),
    file: FileOption = None,
) -> None:
    """Pause a task: drop its open todo until it is unpaused."""
    with open_engine(ctx, file) as engine:
        unwrap_or_exit(engine.pause_task(TaskId(task_id)))
        print_success(f"Paused task {task_id}")


@app.command("unpause")
def unpause(
    ctx: typer.Context,
    task_id: int = typer.Argument(..., help="Task to unpause"),
    file: FileOption = None,
) -> None:
    """Unpause a task: it is due again now."""
    with open_engine(ctx, file) as engine:
        if engine.store.find_open_todo(TaskId(task_id)) is not None:
            print_error(f"task {task_id} is not paused")
            raise typer.Exit(1)
        unwrap_or_exit(engine.unpause_task(TaskId(task_id)))
        print_success(f"Unpaused task {task_id}")


@app.command("list")
def list_tasks(
    ctx: typer.Context,
    file: FileOption = None,
) -> None:
    """List all tasks sorted by title."""
    with open_engine(ctx, file) as engine:
        print_tasks(engine.store)
