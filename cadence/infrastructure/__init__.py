"""Infrastructure layer for cadence.

Exports:
    Storage:
        - TaskStore: Storage contract (Protocol)
        - MemStore: In-memory backend

    Event log:
        - EventLog: Append-only log with one-shot replay
"""

from cadence.infrastructure.eventlog import EventLog
from cadence.infrastructure.storage import MemStore, TaskStore

__all__ = [
    # Storage
    "TaskStore",
    "MemStore",
    # Event log
    "EventLog",
]
