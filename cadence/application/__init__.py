"""Application layer for cadence.

Engines that orchestrate the store and the due date predictor:

    TaskEngine - Lifecycle operations, never logs (used directly by replay)
    JournaledEngine - TaskEngine plus replay at construction and one log
        record per successful mutation

Example usage:
    >>> from cadence.application import JournaledEngine
    >>> from cadence.infrastructure import EventLog, MemStore
    >>>
    >>> with EventLog.open("todo.log") as log:
    ...     engine = JournaledEngine(MemStore(), log)
    ...     task_id, todo_id = engine.create_task("Water plants")
"""

from cadence.application.engine import TaskEngine
from cadence.application.journaled import JournaledEngine

__all__ = [
    "TaskEngine",
    "JournaledEngine",
]
