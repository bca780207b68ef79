"""Global configuration storage for cadence.

Stores user preferences in ~/.cadence/config.json. Set CADENCE_HOME to use
another directory.
"""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.json"
DEFAULT_LOG_FILE = "events.log"


class CadenceConfig(BaseModel):
    """User preferences.

    Attributes:
        log_file: Event log path. None means DEFAULT_LOG_FILE inside the
            config directory.
        default_every: Interval used by ``add`` when ``--every`` is omitted.
        log_level: Diagnostic logging level name for the CLI.
    """

    log_file: str | None = None
    default_every: str = "30days"
    log_level: str = "WARNING"


def get_config_dir() -> Path:
    """Get the cadence config directory."""
    override = os.environ.get("CADENCE_HOME")
    config_dir = Path(override) if override else Path.home() / ".cadence"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_global_config() -> CadenceConfig:
    """Load global configuration, falling back to defaults."""
    config_file = get_config_dir() / CONFIG_FILE
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            return CadenceConfig(**data)
        except (json.JSONDecodeError, TypeError, ValidationError) as e:
            logger.warning("Ignoring invalid config file %s: %s", config_file, e)
    return CadenceConfig()


def save_global_config(config: CadenceConfig) -> None:
    """Save global configuration."""
    config_file = get_config_dir() / CONFIG_FILE
    config_file.write_text(
        json.dumps(config.model_dump(), indent=2),
        encoding="utf-8",
    )


def resolve_log_file(config: CadenceConfig) -> str:
    """Return the event log path configured, or the default one."""
    if config.log_file:
        return config.log_file
    return str(get_config_dir() / DEFAULT_LOG_FILE)
