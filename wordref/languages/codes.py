"""WordReference language codes.

Maps human-readable language names to the two-letter codes used in
WordReference URLs. An unsupported name maps to the empty string.
"""

# Language name -> site code
LANGUAGE_CODES = {
    "french": "fr",
    "italian": "it",
    "spanish": "es",
    "english": "en",
}

# Definition lookups translate into or out of this language
BRIDGE_LANGUAGE = "english"


def normalize(language: str) -> str:
    return language.strip().lower()


def map_language(language: str) -> str:
    """Return the site code for ``language``, or ``""`` if unsupported."""
    return LANGUAGE_CODES.get(normalize(language), "")


def is_supported(language: str) -> bool:
    return map_language(language) != ""


def supported_languages() -> list[str]:
    """Supported language names in display order."""
    return list(LANGUAGE_CODES)
