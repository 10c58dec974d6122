"""WordReference URL builders."""
from urllib.parse import quote

from wordref.core.config import settings
from wordref.core.errors import AppError, Ok, Result, unsupported_language
from wordref.languages import map_language, supported_languages


def _code(language: str) -> Result[str, AppError]:
    code = map_language(language)
    if not code:
        return unsupported_language(language, supported_languages(), origin="urls")
    return Ok(code)


def conjugation_url(language: str, verb: str, base_url: str | None = None) -> Result[str, AppError]:
    """``{base}/conj/{code}verbs.aspx?v={verb}``"""
    base = (base_url or settings.BASE_URL).rstrip("/")
    return _code(language).map(
        lambda code: f"{base}/conj/{code}verbs.aspx?v={quote(verb, safe='')}"
    )


def definition_url(
    from_language: str,
    to_language: str,
    word: str,
    base_url: str | None = None,
) -> Result[str, AppError]:
    """``{base}/{from_code}{to_code}/{word}``"""
    base = (base_url or settings.BASE_URL).rstrip("/")
    return _code(from_language).and_then(
        lambda from_code: _code(to_language).map(
            lambda to_code: f"{base}/{from_code}{to_code}/{quote(word, safe='')}"
        )
    )
