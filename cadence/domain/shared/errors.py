"""Error taxonomy.

Two families of failures exist:

- Recoverable failures are values. ``EngineError`` travels inside an
  ``Err`` and the caller decides how to report it.
- Fatal failures are exceptions derived from ``CadenceError``. They signal
  a programming or data error (a second open todo, a corrupt log) and are
  never caught inside the core.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of recoverable failure."""

    NOT_FOUND = "not-found"
    PAUSED = "paused"
    ALREADY_COMPLETED = "already-completed"
    LOG_WRITE = "log-write"


@dataclass(frozen=True, slots=True)
class EngineError:
    """A recoverable failure returned inside ``Err``.

    Attributes:
        kind: Machine-readable category.
        message: Human-readable description.
    """

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return self.message

    @classmethod
    def not_found(cls, what: str, ident: int) -> "EngineError":
        return cls(ErrorKind.NOT_FOUND, f"{what} not found: {ident}")


class CadenceError(Exception):
    """Base class for fatal errors."""


class InvariantViolation(CadenceError):
    """Engine, predictor and store disagree, or a store precondition was broken."""


class LogWriteError(CadenceError):
    """Appending a record to the event log failed."""


class ReplayError(CadenceError):
    """The event log cannot be replayed.

    Attributes:
        reason: What went wrong.
        line_number: 1-based number of the offending line, when known.
        line: Content of the offending line, when known.
    """

    def __init__(
        self,
        reason: str,
        *,
        line_number: int | None = None,
        line: str | None = None,
    ) -> None:
        self.reason = reason
        self.line_number = line_number
        self.line = line
        message = reason
        if line_number is not None:
            message = f"line {line_number}: {reason}"
        if line is not None:
            message += f"\nLine content: {line}"
        super().__init__(message)
