"""CLI command groups for cadence.

This package contains individual command groups that are registered
with the main Typer app. Each module provides a set of related commands.

Command groups:
- task: Task lifecycle (add, clone, pause, unpause, list)
- todo: Occurrences (list, do, later, done)
- config: Global configuration (show, set)

Each command group is a Typer app that gets registered
with the main app using app.add_typer().
"""

from cadence.interfaces.cli.commands import config, task, todo

__all__ = ["task", "todo", "config"]
