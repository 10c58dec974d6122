import pytest

from wordref.core.errors import ErrorCode, Ok
from wordref.engines.commands import Conjugate, Define, Help, SetLanguage, Translate, help_rows, parse_command


@pytest.mark.parametrize(
    "line, expected",
    [
        ("lang spanish", SetLanguage("spanish")),
        ("conj parler", Conjugate("parler")),
        ("def chat", Define("chat")),
        ("trans cat", Translate("cat")),
        ("help", Help()),
        ("  CONJ   parler  ", Conjugate("parler")),
        ("def pomme de terre", Define("pomme de terre")),
    ],
)
def test_parse_known_commands(line, expected):
    assert parse_command(line) == Ok(expected)


def test_empty_line_parses_to_nothing():
    assert parse_command("   ") == Ok(None)


def test_unknown_command_names_the_token():
    error = parse_command("frobnicate parler").unwrap_err()
    assert error.code is ErrorCode.E2002_UNKNOWN_COMMAND
    assert "'frobnicate'" in error.message


def test_lookup_without_argument_shows_usage():
    error = parse_command("conj").unwrap_err()
    assert error.code is ErrorCode.E2003_MISSING_ARGUMENT
    assert error.message == "Usage: conj <verb>"


def test_help_rows_list_every_command():
    names = [row[0].split()[0] for row in help_rows()]
    for command in ("help", "lang", "conj", "def", "trans"):
        assert command in names
