"""Domain-Specific Error Builders

Ergonomic constructors for the lookup tool's error taxonomy.
Each builder returns ``Err(AppError)`` carrying a user-facing message.
"""
from .types import AppError, ErrorCode, ErrorContext, Err


# =============================================================================
# Network Errors (E1xxx)
# =============================================================================

def network_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E1000_NETWORK_FAILURE,
    url: str | None = None,
    status_code: int | None = None,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create network/site error."""
    meta = {"url": url, "status_code": status_code, **metadata}
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in meta.items() if v is not None},
        cause=cause,
    ))


def network_failure(
    url: str, cause: Exception | None = None, origin: str = ""
) -> Err[AppError]:
    return network_error(
        "Could not reach WordReference, please check your network connection "
        "and spelling",
        url=url,
        origin=origin,
        cause=cause,
    )


def site_unavailable(url: str, status_code: int, origin: str = "") -> Err[AppError]:
    return network_error(
        f"WordReference is unavailable right now (HTTP {status_code}), "
        "please try again later",
        code=ErrorCode.E1021_SITE_UNAVAILABLE,
        url=url,
        status_code=status_code,
        origin=origin,
    )


# =============================================================================
# User Input Errors (E2xxx)
# =============================================================================

def input_error(
    message: str,
    *,
    code: ErrorCode,
    value: str | None = None,
    origin: str = "",
    **metadata,
) -> Err[AppError]:
    """Create user input error."""
    meta = {"value": value, **metadata}
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in meta.items() if v is not None},
    ))


def unsupported_language(language: str, supported: list[str], origin: str = "") -> Err[AppError]:
    return input_error(
        f"The language '{language}' is not supported. "
        f"Choose one of: {', '.join(supported)}",
        code=ErrorCode.E2001_UNSUPPORTED_LANGUAGE,
        value=language,
        origin=origin,
    )


def unknown_command(token: str, origin: str = "") -> Err[AppError]:
    return input_error(
        f"Unknown command '{token}'. Type 'help' to list the available commands",
        code=ErrorCode.E2002_UNKNOWN_COMMAND,
        value=token,
        origin=origin,
    )


def missing_argument(command: str, argument: str, origin: str = "") -> Err[AppError]:
    return input_error(
        f"Usage: {command} <{argument}>",
        code=ErrorCode.E2003_MISSING_ARGUMENT,
        value=command,
        origin=origin,
    )


# =============================================================================
# Lookup / Storage Errors (E4xxx)
# =============================================================================

def lookup_error(
    message: str,
    *,
    code: ErrorCode,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create lookup or storage error."""
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in metadata.items() if v is not None},
        cause=cause,
    ))


def verb_not_found(verb: str, language: str, origin: str = "") -> Err[AppError]:
    return lookup_error(
        f"The verb '{verb}' does not exist in the selected language "
        f"({language}). Please double check your spelling",
        code=ErrorCode.E4010_NOT_FOUND,
        origin=origin,
        verb=verb,
        language=language,
    )


def word_not_found(
    word: str,
    from_language: str,
    *,
    code: ErrorCode = ErrorCode.E4010_NOT_FOUND,
    origin: str = "",
) -> Err[AppError]:
    return lookup_error(
        f"The word '{word}' does not exist in the selected language "
        f"({from_language}). Please double check your spelling",
        code=code,
        origin=origin,
        word=word,
        language=from_language,
    )


def malformed_markup(to_language: str, reason: str, origin: str = "") -> Err[AppError]:
    return lookup_error(
        f"Translations to '{to_language}' could not be found for the word. "
        "Please double check your spelling",
        code=ErrorCode.E4020_MALFORMED_MARKUP,
        origin=origin,
        reason=reason,
    )


def cache_corrupted(
    table: str, key: tuple, path: str, cause: Exception | None = None, origin: str = ""
) -> Err[AppError]:
    return lookup_error(
        f"The cached entry for {' / '.join(key)} is corrupted. "
        f"Delete the cache file ({path}) to rebuild it",
        code=ErrorCode.E4021_CACHE_CORRUPTED,
        origin=origin,
        cause=cause,
        table=table,
        key=list(key),
    )


def query_failed(reason: str, origin: str = "", cause: Exception | None = None) -> Err[AppError]:
    return lookup_error(
        "The local cache could not be read or written",
        code=ErrorCode.E4002_QUERY_FAILED,
        origin=origin,
        cause=cause,
        reason=reason,
    )


# =============================================================================
# Internal Errors (E9xxx)
# =============================================================================

def internal_error(
    message: str,
    *,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create internal/unexpected error."""
    return Err(AppError(
        code=ErrorCode.E9001_UNEXPECTED_ERROR,
        message=message,
        context=ErrorContext(origin=origin),
        metadata=metadata,
        cause=cause,
    ))
