"""Monadic Error Handling System

Result-based error propagation for the lookup pipeline.

Key components:
- Result[T, E]: container for success/failure
- AppError: error type carrying a user-facing message plus log context
- ErrorCode: error code taxonomy
- Builder functions: ergonomic error construction

Usage:
    from wordref.core.errors import Ok, Err, Result, AppError, verb_not_found

    def first_table(page) -> Result[Tag, AppError]:
        tables = page.select("table.neoConj")
        if not tables:
            return verb_not_found(verb, language, origin="conjugations")
        return Ok(tables[0])

    match first_table(page):
        case Ok(table):
            ...
        case Err(error):
            log.warning("lookup_failed", **error.to_dict())
"""
from .types import (
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
)

from .builders import (
    # Network (E1xxx)
    network_error,
    network_failure,
    site_unavailable,
    # User input (E2xxx)
    input_error,
    unsupported_language,
    unknown_command,
    missing_argument,
    # Lookup / storage (E4xxx)
    lookup_error,
    verb_not_found,
    word_not_found,
    malformed_markup,
    cache_corrupted,
    query_failed,
    # Internal (E9xxx)
    internal_error,
)

from .boundaries import (
    DatabaseErrorMapper,
    map_db_errors,
)

__all__ = [
    # Core types
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    # Network (E1xxx)
    "network_error",
    "network_failure",
    "site_unavailable",
    # User input (E2xxx)
    "input_error",
    "unsupported_language",
    "unknown_command",
    "missing_argument",
    # Lookup / storage (E4xxx)
    "lookup_error",
    "verb_not_found",
    "word_not_found",
    "malformed_markup",
    "cache_corrupted",
    "query_failed",
    # Internal (E9xxx)
    "internal_error",
    # Boundary mapping
    "DatabaseErrorMapper",
    "map_db_errors",
]
