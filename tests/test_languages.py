from wordref.languages import BRIDGE_LANGUAGE, is_supported, map_language, supported_languages
from wordref.wordreference import conjugation_url, definition_url
from wordref.core.errors import ErrorCode


def test_known_languages_map_to_site_codes():
    assert map_language("french") == "fr"
    assert map_language("italian") == "it"
    assert map_language("spanish") == "es"
    assert map_language("english") == "en"


def test_unknown_language_maps_to_empty_string():
    assert map_language("bogus") == ""
    assert not is_supported("bogus")


def test_language_names_are_case_and_space_insensitive():
    assert map_language("  French ") == "fr"
    assert is_supported("SPANISH")


def test_bridge_language_is_supported():
    assert BRIDGE_LANGUAGE in supported_languages()


def test_conjugation_url():
    url = conjugation_url("french", "parler", "https://wordref.test/")
    assert url.unwrap() == "https://wordref.test/conj/frverbs.aspx?v=parler"


def test_urls_encode_user_text():
    url = conjugation_url("spanish", "tener miedo", "https://wordref.test")
    assert url.unwrap() == "https://wordref.test/conj/esverbs.aspx?v=tener%20miedo"

    url = definition_url("french", "english", "être", "https://wordref.test")
    assert url.unwrap() == "https://wordref.test/fren/%C3%AAtre"


def test_url_with_unsupported_language_is_rejected():
    url = definition_url("klingon", "english", "qapla", "https://wordref.test")
    assert url.is_err()
    assert url.unwrap_err().code is ErrorCode.E2001_UNSUPPORTED_LANGUAGE
