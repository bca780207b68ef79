# tests/conftest.py

from __future__ import annotations

import io
from datetime import datetime

import pytest

from cadence.application import TaskEngine
from cadence.infrastructure import EventLog, MemStore

from .fakes import FakeClock

T0 = datetime(2024, 3, 1, 8, 30)


@pytest.fixture()
def clock() -> FakeClock:
    """Clock pinned at T0; tests advance it explicitly."""
    return FakeClock(T0)


@pytest.fixture()
def store() -> MemStore:
    return MemStore()


@pytest.fixture()
def engine(store: MemStore, clock: FakeClock) -> TaskEngine:
    """Log-silent engine over a fresh store and the pinned clock."""
    return TaskEngine(store, clock=clock)


@pytest.fixture()
def make_log():
    """
    Build an in-memory EventLog.

    Returns a factory taking the prior log text; the append target is a
    fresh StringIO exposed as ``log.target`` for assertions.
    """

    def _make(history: str = "", target: io.StringIO | None = None) -> EventLog:
        target = target if target is not None else io.StringIO()
        log = EventLog(io.StringIO(history), target)
        log.target = target  # type: ignore[attr-defined]
        return log

    return _make
