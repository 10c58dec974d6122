"""Event types passed between the input source, dispatcher and worker.

Each category is a closed set of frozen dataclasses; consumers dispatch
on them with ``match``.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Literal, Union


class KeyCode(Enum):
    CHAR = auto()
    ENTER = auto()
    BACKSPACE = auto()
    LEFT = auto()
    RIGHT = auto()
    ESC = auto()
    OTHER = auto()


# =============================================================================
# Input events
# =============================================================================

@dataclass(frozen=True, slots=True)
class KeyPress:
    code: KeyCode
    char: str = ""  # Set only for KeyCode.CHAR

    @classmethod
    def of_char(cls, char: str) -> "KeyPress":
        return cls(KeyCode.CHAR, char)


@dataclass(frozen=True, slots=True)
class Tick:
    pass


InputEvent = Union[KeyPress, Tick]


# =============================================================================
# Lookup requests
# =============================================================================

@dataclass(frozen=True, slots=True)
class VerbLookup:
    verb: str
    language: str


@dataclass(frozen=True, slots=True)
class DefinitionLookup:
    word: str
    from_language: str
    to_language: str
    kind: Literal["definition", "translation"] = "definition"


LookupRequest = Union[VerbLookup, DefinitionLookup]


def describe(request: LookupRequest) -> dict:
    """Log fields for a lookup request."""
    match request:
        case VerbLookup(verb=verb, language=language):
            return {"kind": "conjugation", "word": verb, "language": language}
        case DefinitionLookup(word=word, from_language=src, to_language=dst, kind=kind):
            return {"kind": kind, "word": word, "from_language": src, "to_language": dst}
