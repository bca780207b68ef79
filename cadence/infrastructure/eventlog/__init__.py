"""Event log infrastructure for cadence.

Provides the append-only log that persists every mutating operation and
the replay procedure that rebuilds state from it.
"""

from cadence.infrastructure.eventlog.codec import decode_line, encode_line
from cadence.infrastructure.eventlog.event_log import STDIO, EventLog
from cadence.infrastructure.eventlog.replay import apply_event

__all__ = [
    "EventLog",
    "STDIO",
    "apply_event",
    "decode_line",
    "encode_line",
]
