"""Append-only event log.

The log is the only persistent state. ``EventLog`` reads prior records once,
to replay them into a fresh engine, and then only appends. One writer at a
time is assumed.
"""

import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from cadence.domain.shared import InvariantViolation, LogWriteError, ReplayError
from cadence.domain.task import LogEvent
from cadence.infrastructure.eventlog.codec import decode_line, encode_line
from cadence.infrastructure.eventlog.replay import apply_event

if TYPE_CHECKING:
    from cadence.application.engine import TaskEngine

logger = logging.getLogger(__name__)

STDIO = "-"


class EventLog:
    """Replay source plus append target.

    Args:
        source: Prior log lines, or None for an empty history.
        target: Text stream new records are appended to.

    Example:
        with EventLog.open(Path("todo.log")) as log:
            engine = JournaledEngine(MemStore(), log)
            engine.create_task("Water plants")
    """

    def __init__(self, source: Iterable[str] | None, target: TextIO) -> None:
        self._source = source
        self._target = target
        self._owned: list[TextIO] = []

    @classmethod
    def open(cls, path: str | Path) -> "EventLog":
        """Open a log file for replay and appending.

        ``-`` replays from stdin and appends to stdout. A missing file is
        created empty.

        Raises:
            OSError: If the file cannot be opened.
        """
        if str(path) == STDIO:
            return cls(sys.stdin, sys.stdout)

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        target = path.open("a", encoding="utf-8")
        try:
            source = path.open("r", encoding="utf-8")
        except OSError:
            target.close()
            raise
        log = cls(source, target)
        log._owned = [source, target]
        return log

    def replay(self, engine: "TaskEngine") -> int:
        """Re-apply every prior record to ``engine`` without appending.

        The source is consumed and released; a second call raises.

        Returns:
            Number of records replayed.

        Raises:
            ReplayError: On the first line that cannot be parsed or applied.
                Nothing is skipped or repaired.
        """
        if self._source is None:
            raise RuntimeError("event log source already consumed")
        source, self._source = self._source, None

        count = 0
        try:
            for number, raw in enumerate(source, start=1):
                line = raw.rstrip("\r\n")
                try:
                    event = decode_line(line)
                    apply_event(engine, event)
                except ReplayError as e:
                    raise ReplayError(e.reason, line_number=number, line=line) from e
                except (ValueError, InvariantViolation, OverflowError) as e:
                    raise ReplayError(str(e), line_number=number, line=line) from e
                count += 1
        finally:
            self._release(source)

        logger.info("Replayed %d event(s)", count)
        return count

    def append(self, event: LogEvent) -> None:
        """Write one record and flush it.

        Raises:
            LogWriteError: If the target rejects the write.
        """
        line = encode_line(event)
        try:
            self._target.write(line)
            self._target.flush()
        except (OSError, ValueError) as e:
            raise LogWriteError(f"could not append {event.prefix()} record: {e}") from e
        logger.debug("Appended %s", line.rstrip("\n"))

    def close(self) -> None:
        """Close the files opened by ``open``."""
        for handle in self._owned:
            handle.close()
        self._owned = []

    def _release(self, source: Iterable[str]) -> None:
        for handle in self._owned:
            if handle is source:
                handle.close()
                self._owned.remove(handle)
                return

    def __enter__(self) -> "EventLog":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
