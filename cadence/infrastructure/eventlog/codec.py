"""Event log line format.

One record per line::

    <name><version>: <json array of arguments>

For example ``create_task1: ["Water plants", 604800, 1, 1]``.
"""

import json

from cadence.domain.task import EVENT_TYPES, LogEvent


def encode_line(event: LogEvent) -> str:
    """Render an event as a newline-terminated log line."""
    payload = json.dumps(event.to_args(), ensure_ascii=False)
    return f"{event.prefix()}: {payload}\n"


def decode_line(line: str) -> LogEvent:
    """Parse one log line (without its line terminator).

    Raises:
        ValueError: If the line has no prefix, the prefix is unknown, the
            payload is not JSON, or the arguments do not validate.
    """
    prefix, separator, payload = line.partition(":")
    if not separator:
        raise ValueError("invalid line: missing ':' separator")

    event_type = EVENT_TYPES.get(prefix)
    if event_type is None:
        raise ValueError(f"unknown operation {prefix!r}")

    try:
        args = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ValueError(f"invalid JSON arguments for {prefix}: {e}") from e
    return event_type.from_args(args)
