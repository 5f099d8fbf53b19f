"""Result values returned by application services instead of raising."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorCode(str, Enum):
    """Failure categories understood by every transport."""

    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Outcome of a service operation.

    ``data`` is only meaningful when ``success`` is true; ``error_code`` and
    ``message`` describe the failure otherwise.
    """

    success: bool
    data: T | None = None
    error_code: ErrorCode | None = None
    message: str | None = None

    @classmethod
    def ok(cls, data: T) -> "ServiceResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error_code: ErrorCode, message: str) -> "ServiceResult[T]":
        return cls(success=False, error_code=error_code, message=message)


__all__ = ["ErrorCode", "ServiceResult"]
