"""Diagnostic logging for the CLI.

Diagnostics go to stderr only. Stdout carries command output, and the
event log itself when the log file is ``-``.
"""

import logging
import sys


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable:
    - allow cadence logs at the configured level
    - suppress third-party noise unless ERROR+
    - suppress Python warnings (captured as 'py.warnings') unless ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == "cadence" or name.startswith("cadence."):
            return True

        # Python warnings captured into logging.
        if name == "py.warnings":
            return record.levelno >= logging.ERROR

        return record.levelno >= logging.ERROR


def setup_logging(level: int | str = logging.WARNING) -> None:
    """
    Configure the root logger with a single filtered stderr handler.

    Call this ONCE, before the first command runs.

    Raises:
        ValueError: If ``level`` is not a known level name.
    """
    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
