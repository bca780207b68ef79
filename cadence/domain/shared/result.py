"""Result monad for recoverable failures in engine and store operations.

Operations that can fail for an expected reason (an unknown id, a paused
task) return either ``Ok(value)`` or ``Err(error)`` instead of raising.
Exceptions are reserved for fatal conditions such as invariant violations
and log corruption.

Example usage:
    >>> def find_title(titles: dict[int, str], task_id: int) -> Result[str, str]:
    ...     if task_id not in titles:
    ...         return Err(f"task not found: {task_id}")
    ...     return Ok(titles[task_id])
    ...
    >>> result = find_title({1: "Water plants"}, 1)
    >>> if is_ok(result):
    ...     print(result.value)
    Water plants
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Represents a successful result containing a value.

    Attributes:
        value: The success value of type T.
    """

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Represents a failed result containing an error.

    Attributes:
        error: The error value of type E.
    """

    error: E


# Using Union here as TypeVar aliases don't work with | syntax at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def is_ok(result: Ok[T] | Err[E]) -> bool:
    """Check if a result is successful."""
    return isinstance(result, Ok)


def is_err(result: Ok[T] | Err[E]) -> bool:
    """Check if a result is an error."""
    return isinstance(result, Err)
