"""Command Dispatcher

Applies input events to the shared state. Editing, navigation, ``lang``
and ``help`` are handled synchronously under the state lock; lookups are
handed to the worker through the lookup queue.
"""
import asyncio

from wordref.core.errors import Err, Ok, unsupported_language
from wordref.core.logging import lookup_logger
from wordref.languages import BRIDGE_LANGUAGE, is_supported, normalize, supported_languages

from .commands import Conjugate, Define, Help, SetLanguage, Translate, help_rows, parse_command
from .events import (
    DefinitionLookup,
    InputEvent,
    KeyCode,
    KeyPress,
    LookupRequest,
    Tick,
    VerbLookup,
)
from .state import SharedState

log = lookup_logger()


class CommandDispatcher:
    """Consumes input events against the shared state."""

    __slots__ = ("_shared", "_lookups")

    def __init__(self, shared: SharedState, lookups: asyncio.Queue):
        self._shared = shared
        self._lookups = lookups

    async def handle_event(self, event: InputEvent) -> None:
        match event:
            case Tick():
                return
            case KeyPress(code=KeyCode.ENTER):
                await self.submit()
            case KeyPress(code=code, char=char):
                async with self._shared.locked() as state:
                    match code:
                        case KeyCode.ESC:
                            state.close()
                        case KeyCode.RIGHT:
                            state.next()
                        case KeyCode.LEFT:
                            state.prev()
                        case KeyCode.BACKSPACE:
                            state.pop_char()
                        case KeyCode.CHAR if char:
                            state.put_char(char)

    async def submit(self) -> None:
        """Parse the input buffer and run the command."""
        request: LookupRequest | None = None

        async with self._shared.locked() as state:
            line = state.input
            match parse_command(line):
                case Err(error):
                    log.info("command_rejected", line=line, code=error.code.name)
                    state.set_error(error.message)
                    return
                case Ok(None):
                    return
                case Ok(Help()):
                    state.clear_input()
                    state.show_help(help_rows())
                case Ok(SetLanguage(language=language)):
                    if not is_supported(language):
                        error = unsupported_language(language, supported_languages(), origin="dispatcher").error
                        log.info("language_rejected", language=language)
                        state.set_error(error.message)
                        return
                    state.clear_input()
                    state.clear_error()
                    state.set_language(normalize(language))
                    log.info("language_changed", language=state.language)
                case Ok(Conjugate(verb=verb)):
                    state.clear_input()
                    request = VerbLookup(verb=verb, language=state.language)
                case Ok(Define(word=word)):
                    state.clear_input()
                    request = DefinitionLookup(
                        word=word,
                        from_language=state.language,
                        to_language=BRIDGE_LANGUAGE,
                        kind="definition",
                    )
                case Ok(Translate(word=word)):
                    state.clear_input()
                    request = DefinitionLookup(
                        word=word,
                        from_language=BRIDGE_LANGUAGE,
                        to_language=state.language,
                        kind="translation",
                    )

        if request is not None:
            # Never await the queue while holding the state lock
            await self._lookups.put(request)
            log.debug("lookup_queued", pending=self._lookups.qsize())
