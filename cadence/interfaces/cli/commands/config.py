"""Configuration CLI commands.

Commands for viewing and changing the global configuration in
~/.cadence/config.json.
"""

import logging

import typer
from pydantic import ValidationError

from cadence.domain.task import parse_duration
from cadence.global_config import (
    CONFIG_FILE,
    CadenceConfig,
    get_config_dir,
    get_global_config,
    resolve_log_file,
    save_global_config,
)
from cadence.interfaces.cli.common import print_error, print_success

app = typer.Typer(help="Configuration commands")


def _check_value(key: str, value: str) -> str | None:
    """Return why ``value`` is unusable for ``key``, or None if it is fine."""
    if key == "default_every":
        try:
            parse_duration(value)
        except ValueError as e:
            return str(e)
    elif key == "log_level":
        if not isinstance(logging.getLevelName(value.upper()), int):
            return f"unknown log level: {value}"
    return None


@app.command("show")
def show() -> None:
    """Show the effective configuration."""
    config = get_global_config()
    typer.echo(f"config file:   {get_config_dir() / CONFIG_FILE}")
    typer.echo(f"log_file:      {resolve_log_file(config)}")
    typer.echo(f"default_every: {config.default_every}")
    typer.echo(f"log_level:     {config.log_level}")


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help="One of: log_file, default_every, log_level"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Change one configuration value.

    Example:
        cadence config set default_every 2weeks
    """
    if key not in CadenceConfig.model_fields:
        print_error(f"unknown config key: {key}")
        raise typer.Exit(1)

    problem = _check_value(key, value)
    if problem:
        print_error(problem)
        raise typer.Exit(1)

    try:
        config = get_global_config().model_copy(update={key: value})
        config = CadenceConfig.model_validate(config.model_dump())
    except ValidationError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    save_global_config(config)
    print_success(f"Set {key} = {value}")
