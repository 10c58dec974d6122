import asyncio

from wordref.engines.dispatcher import CommandDispatcher
from wordref.engines.events import DefinitionLookup, KeyCode, KeyPress, Tick, VerbLookup
from wordref.engines.state import AppState, SharedState


def _run(line: str, language: str = "french", extra_keys=()):
    """Type ``line``, press Enter, return (state, queued lookup requests)."""
    shared = SharedState(AppState(language=language))
    lookups: asyncio.Queue = asyncio.Queue(maxsize=10)
    dispatcher = CommandDispatcher(shared, lookups)

    async def scenario():
        for char in line:
            await dispatcher.handle_event(KeyPress.of_char(char))
        await dispatcher.handle_event(Tick())
        await dispatcher.handle_event(KeyPress(KeyCode.ENTER))
        for key in extra_keys:
            await dispatcher.handle_event(key)
        queued = []
        while not lookups.empty():
            queued.append(lookups.get_nowait())
        async with shared.locked() as state:
            return state, queued

    return asyncio.run(scenario())


def test_conj_queues_verb_lookup_in_active_language():
    state, queued = _run("conj parler")
    assert queued == [VerbLookup(verb="parler", language="french")]
    assert state.input == ""


def test_def_looks_up_from_active_language_into_english():
    state, queued = _run("def chat", language="italian")
    assert queued == [
        DefinitionLookup(word="chat", from_language="italian", to_language="english", kind="definition")
    ]


def test_trans_looks_up_from_english_into_active_language():
    state, queued = _run("trans cat")
    assert queued == [
        DefinitionLookup(word="cat", from_language="english", to_language="french", kind="translation")
    ]


def test_lang_switches_language():
    state, queued = _run("lang Spanish")
    assert state.language == "spanish"
    assert state.input == ""
    assert state.error is None
    assert queued == []


def test_unsupported_lang_leaves_language_unchanged():
    state, queued = _run("lang bogus")
    assert state.language == "french"
    assert "bogus" in state.error
    # Buffer kept so the user can fix the typo
    assert state.input == "lang bogus"
    assert queued == []


def test_unknown_command_sets_error_naming_token():
    state, queued = _run("blah parler")
    assert "'blah'" in state.error
    assert queued == []


def test_help_shows_command_table():
    state, queued = _run("help")
    table = state.table_data()
    assert table.title == "Help"
    assert table.header == ["Command", "Description"]
    assert any(row[0].startswith("conj") for row in table.items)
    assert queued == []


def test_empty_enter_does_nothing():
    state, queued = _run("")
    assert state.error is None
    assert queued == []


def test_backspace_and_navigation_keys():
    state, _ = _run(
        "",
        extra_keys=[
            KeyPress.of_char("a"),
            KeyPress.of_char("b"),
            KeyPress(KeyCode.BACKSPACE),
            KeyPress(KeyCode.RIGHT),
            KeyPress(KeyCode.LEFT),
            KeyPress(KeyCode.OTHER),
        ],
    )
    assert state.input == "a"
    assert state.current_table_index == 0
    assert state.running


def test_escape_stops_the_app():
    state, _ = _run("", extra_keys=[KeyPress(KeyCode.ESC)])
    assert not state.running
