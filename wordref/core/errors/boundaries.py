"""Error Boundary Mappers

Maps exceptions raised inside a module to ``AppError`` at the module
boundary, so callers above the cache store only ever see ``Result`` values.
"""
from __future__ import annotations

from functools import wraps
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import OperationalError, SQLAlchemyError

from .types import AppError, Err, Ok, Result
from .builders import query_failed

T = TypeVar("T")


class DatabaseErrorMapper:
    """Maps SQLAlchemy exceptions to cache errors."""

    def __init__(self, origin: str = "database"):
        self.origin = origin

    def map_error(self, error: AppError) -> AppError:
        """Tag error with this boundary's origin unless it already has one."""
        if error.context.origin:
            return error
        return error.with_origin(self.origin)

    def map_result(self, result: Result[T, AppError]) -> Result[T, AppError]:
        """Map errors in Result while preserving success values."""
        match result:
            case Ok(_):
                return result
            case Err(e):
                return Err(self.map_error(e))

    def map_exception(self, exc: SQLAlchemyError) -> AppError:
        """Map SQLAlchemy exception to AppError."""
        if isinstance(exc, OperationalError) and exc.orig:
            return query_failed(str(exc.orig), origin=self.origin, cause=exc).error
        return query_failed(str(exc), origin=self.origin, cause=exc).error


def map_db_errors(origin: str = "database"):
    """Decorator mapping database exceptions at a function boundary.

    Usage:
        @map_db_errors("cache.conjugations")
        async def get_conjugations(self, language, verb) -> Result[..., AppError]:
            ...
    """
    mapper = DatabaseErrorMapper(origin)

    def decorator(fn: Callable[..., Awaitable[Result[T, AppError]]]):
        @wraps(fn)
        async def wrapper(*args, **kwargs) -> Result[T, AppError]:
            try:
                result = await fn(*args, **kwargs)
                return mapper.map_result(result)
            except SQLAlchemyError as e:
                return Err(mapper.map_exception(e))
        return wrapper
    return decorator
