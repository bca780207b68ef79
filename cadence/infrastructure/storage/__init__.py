"""Storage infrastructure for cadence.

Provides the storage contract the engine depends on and the in-memory
backend. Persistence comes from event log replay, not from the store.
"""

from cadence.infrastructure.storage.mem_store import MemStore
from cadence.infrastructure.storage.store import TaskStore

__all__ = [
    "MemStore",
    "TaskStore",
]
