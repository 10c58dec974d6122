"""WordReference access: URLs, HTTP client and page extraction."""
from .client import Fetcher, FetchClient
from .conjugations import parse_conjugation_page
from .definitions import parse_definition_page
from .urls import conjugation_url, definition_url

__all__ = [
    "Fetcher",
    "FetchClient",
    "parse_conjugation_page",
    "parse_definition_page",
    "conjugation_url",
    "definition_url",
]
