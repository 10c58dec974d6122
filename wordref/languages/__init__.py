"""Language name handling for WordReference lookups."""
from .codes import (
    BRIDGE_LANGUAGE,
    LANGUAGE_CODES,
    is_supported,
    map_language,
    normalize,
    supported_languages,
)

__all__ = [
    "BRIDGE_LANGUAGE",
    "LANGUAGE_CODES",
    "is_supported",
    "map_language",
    "normalize",
    "supported_languages",
]
