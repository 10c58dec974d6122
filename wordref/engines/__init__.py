from wordref.engines.cache import CacheStore, open_cache_store
from wordref.engines.commands import parse_command, help_rows
from wordref.engines.dispatcher import CommandDispatcher
from wordref.engines.events import KeyCode, KeyPress, Tick, VerbLookup, DefinitionLookup
from wordref.engines.input import InputEventSource, TerminalKeyReader, decode_keys
from wordref.engines.state import AppState, SharedState, StateSnapshot
from wordref.engines.worker import LookupWorker, WorkerStats

__all__ = [
    "CacheStore",
    "open_cache_store",
    "parse_command",
    "help_rows",
    "CommandDispatcher",
    "KeyCode",
    "KeyPress",
    "Tick",
    "VerbLookup",
    "DefinitionLookup",
    "InputEventSource",
    "TerminalKeyReader",
    "decode_keys",
    "AppState",
    "SharedState",
    "StateSnapshot",
    "LookupWorker",
    "WorkerStats",
]
