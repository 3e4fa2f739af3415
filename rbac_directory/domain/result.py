from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from ..errors import AppError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a directory operation: a value or a typed error, never both.

    Core operations return failures instead of raising them. Callers decide
    whether to notify, render, or re-raise via ``unwrap``.
    """

    value: T | None = None
    error: AppError | None = None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: AppError) -> Result[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
