"""
Explicit success/failure results for interaction primitives.

`ElementActions.try_*` methods return an `Outcome` so the caller decides
whether to propagate (`unwrap()`) or absorb the failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .errors import InteractionError


T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    Result of one interaction primitive.

    Attributes:
        value: Result value on success
        error: Classified failure, None on success
        attempts: Number of driver attempts that were made
    """

    value: Optional[T] = None
    error: Optional[InteractionError] = None
    attempts: int = 1

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise the classified failure."""
        if self.error is not None:
            raise self.error
        return self.value

    def value_or(self, default: T) -> T:
        return self.value if self.error is None else default

    @classmethod
    def success(cls, value: Optional[T] = None, attempts: int = 1) -> "Outcome[T]":
        return cls(value=value, attempts=attempts)

    @classmethod
    def failure(cls, error: InteractionError, attempts: int = 1) -> "Outcome[T]":
        return cls(error=error, attempts=attempts)


__all__ = ["Outcome"]
