"""Shared domain utilities for cadence.

This package provides common building blocks used across domain modules:

- Result monad for recoverable failures
- Error taxonomy (recoverable ``EngineError`` values, fatal exceptions)

Example usage:
    >>> from cadence.domain.shared import Err, EngineError, Ok, Result
    >>>
    >>> def lookup(task_id: int) -> Result[str, EngineError]:
    ...     if task_id != 1:
    ...         return Err(EngineError.not_found("task", task_id))
    ...     return Ok("Water plants")
"""

from cadence.domain.shared.errors import (
    CadenceError,
    EngineError,
    ErrorKind,
    InvariantViolation,
    LogWriteError,
    ReplayError,
)
from cadence.domain.shared.result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # Result monad
    "Ok",
    "Err",
    "Result",
    "is_ok",
    "is_err",
    # Errors
    "ErrorKind",
    "EngineError",
    "CadenceError",
    "InvariantViolation",
    "LogWriteError",
    "ReplayError",
]
