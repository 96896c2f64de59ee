"""Result type for operations that can fail in expected ways.

Storage and editing code returns ``Ok`` or ``Err`` instead of raising, so
callers at the CLI and TUI boundary decide how a failure is shown.

Example usage:
    >>> def parse_effort(raw: str) -> Result[float, str]:
    ...     try:
    ...         value = float(raw)
    ...     except ValueError:
    ...         return Err(f"Not a number: {raw}")
    ...     if value < 0:
    ...         return Err("Effort must not be negative")
    ...     return Ok(value)
    ...
    >>> parse_effort("abc")
    Err(error='Not a number: abc')
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result carrying ``value``."""

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result carrying ``error``."""

    error: E


# Union keeps the alias subscriptable at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007
