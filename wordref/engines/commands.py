"""Command parsing.

The only place raw input text is matched: the first whitespace-delimited
token picks the command, the remainder is its argument.
"""
from dataclasses import dataclass
from typing import Union

from wordref.core.errors import AppError, Ok, Result, missing_argument, unknown_command


@dataclass(frozen=True, slots=True)
class SetLanguage:
    language: str


@dataclass(frozen=True, slots=True)
class Conjugate:
    verb: str


@dataclass(frozen=True, slots=True)
class Define:
    word: str


@dataclass(frozen=True, slots=True)
class Translate:
    word: str


@dataclass(frozen=True, slots=True)
class Help:
    pass


Command = Union[SetLanguage, Conjugate, Define, Translate, Help]

# (command, argument name, description)
COMMANDS: list[tuple[str, str, str]] = [
    ("help", "", "Show this table"),
    ("lang", "language", "Set the active language (french, italian, spanish, english)"),
    ("conj", "verb", "Conjugate a verb in the active language"),
    ("def", "word", "Define a word of the active language in English"),
    ("trans", "word", "Translate an English word into the active language"),
]

KEYS: list[tuple[str, str]] = [
    ("Left / Right", "Previous / next table"),
    ("Enter", "Run the typed command"),
    ("Backspace", "Delete a character"),
    ("Esc", "Quit"),
]

_WITH_ARGUMENT = {
    "lang": SetLanguage,
    "conj": Conjugate,
    "def": Define,
    "trans": Translate,
}


def help_rows() -> list[list[str]]:
    rows = [[f"{name} <{arg}>" if arg else name, text] for name, arg, text in COMMANDS]
    rows.extend([key, text] for key, text in KEYS)
    return rows


def parse_command(buffer: str) -> Result[Command | None, AppError]:
    """Parse a command line. An empty line parses to ``None``."""
    parts = buffer.strip().split(maxsplit=1)
    if not parts:
        return Ok(None)

    token = parts[0]
    name = token.lower()
    argument = parts[1].strip() if len(parts) > 1 else ""

    if name == "help":
        return Ok(Help())

    command_type = _WITH_ARGUMENT.get(name)
    if command_type is None:
        return unknown_command(token, origin="commands")
    if not argument:
        arg_name = next(arg for cmd, arg, _ in COMMANDS if cmd == name)
        return missing_argument(name, arg_name, origin="commands")
    return Ok(command_type(argument))
