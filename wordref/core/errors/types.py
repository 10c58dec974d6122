"""Monadic Error Handling Types

Result/Either types used across the lookup pipeline. Every fallible step
(fetching, parsing, cache access, command parsing) returns ``Ok`` or ``Err``
instead of raising, so the worker can turn any failure into a single
user-facing message without unwinding the task.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Generic, NoReturn, TypeVar, Union, final
from uuid import uuid4

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound="AppError")
F = TypeVar("F", bound="AppError")


class ErrorCode(Enum):
    """Error code taxonomy.

    E1xxx: Network/site failures
    E2xxx: User input errors
    E4xxx: Lookup/storage errors
    E9xxx: Internal/Unknown errors
    """
    # Network (E1xxx)
    E1000_NETWORK_FAILURE = 1000
    E1021_SITE_UNAVAILABLE = 1021

    # User input (E2xxx)
    E2001_UNSUPPORTED_LANGUAGE = 2001
    E2002_UNKNOWN_COMMAND = 2002
    E2003_MISSING_ARGUMENT = 2003

    # Lookup / storage (E4xxx)
    E4002_QUERY_FAILED = 4002
    E4010_NOT_FOUND = 4010
    E4020_MALFORMED_MARKUP = 4020
    E4021_CACHE_CORRUPTED = 4021

    # Internal (E9xxx)
    E9001_UNEXPECTED_ERROR = 9001

    @property
    def category(self) -> str:
        """Human-readable error category."""
        code = self.value
        if 1000 <= code < 2000:
            return "network"
        if 2000 <= code < 3000:
            return "input"
        if 4000 <= code < 5000:
            return "lookup"
        return "internal"

    @property
    def is_fatal(self) -> bool:
        """Errors that point at a broken installation rather than bad input."""
        return self in (ErrorCode.E4021_CACHE_CORRUPTED, ErrorCode.E4002_QUERY_FAILED)


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Immutable context for error tracing."""
    correlation_id: str = field(default_factory=lambda: str(uuid4())[:8])
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    origin: str = ""

    def with_origin(self, origin: str) -> ErrorContext:
        return ErrorContext(
            correlation_id=self.correlation_id,
            timestamp=self.timestamp,
            origin=origin,
        )


@dataclass(frozen=True, slots=True)
class AppError:
    """Application error.

    ``message`` is always safe to show to the user; technical detail goes
    into ``metadata`` and ``cause`` and only reaches the log.
    """
    code: ErrorCode
    message: str
    context: ErrorContext = field(default_factory=ErrorContext)
    metadata: dict = field(default_factory=dict)
    cause: Exception | None = None

    def with_origin(self, origin: str) -> AppError:
        """Create new error tagged with the boundary it crossed."""
        return AppError(
            code=self.code,
            message=self.message,
            context=self.context.with_origin(origin),
            metadata=self.metadata,
            cause=self.cause,
        )

    def with_metadata(self, **kwargs) -> AppError:
        """Create new error with additional metadata."""
        return AppError(
            code=self.code,
            message=self.message,
            context=self.context,
            metadata={**self.metadata, **kwargs},
            cause=self.cause,
        )

    def to_dict(self) -> dict:
        """Serialize error for structured logs."""
        return {
            "code": self.code.name,
            "code_num": self.code.value,
            "message": self.message,
            "category": self.code.category,
            "correlation_id": self.context.correlation_id,
            "origin": self.context.origin,
            "metadata": self.metadata,
        }

    def __str__(self) -> str:
        return f"[{self.code.name}] {self.message} (correlation_id={self.context.correlation_id})"


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success variant of Result."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U, AppError]:
        """Transform the success value."""
        return Ok(f(self.value))

    def and_then(self, f: Callable[[T], Result[U, AppError]]) -> Result[U, AppError]:
        """Chain operations that may fail."""
        return f(self.value)


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failure variant of Result."""
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raises because Err has no value to unwrap."""
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_err(self) -> E:
        return self.error

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """No-op for Err variant."""
        return self  # type: ignore

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """No-op for Err variant."""
        return self  # type: ignore


# Type alias for Result monad
Result = Union[Ok[T], Err[E]]
