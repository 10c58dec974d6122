"""Shared Application State

``AppState`` is plain data plus the operations the dispatcher, worker and
renderer perform on it. It is not thread- or task-safe by itself;
``SharedState`` owns the single lock and is the only way other tasks reach it.

Invariants:
- at most one of conjugations/definitions is active; setting one clears the other
- ``current_table_index < table_count()`` whenever tables are active, else 0
- errors clear the active tables
"""
from __future__ import annotations

import asyncio
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator

from wordref.core.config import settings
from wordref.models import TableData, VerbConjugations, WordDefinitions

CONJUGATION_HEADER = ["Pronoun", "Conjugation"]
HELP_HEADER = ["Command", "Description"]


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    """Immutable copy of what one frame needs."""
    running: bool
    language: str
    input: str
    table: TableData | None
    error: str | None
    loading: bool
    progress: float
    page: int
    pages: int


@dataclass(slots=True)
class AppState:
    language: str = field(default_factory=lambda: settings.DEFAULT_LANGUAGE)
    input: str = ""
    running: bool = True
    conjugations: VerbConjugations = field(default_factory=VerbConjugations.empty)
    definitions: WordDefinitions = field(default_factory=WordDefinitions.empty)
    static_table: TableData | None = None  # Help screen
    error: str | None = None
    loading: bool = False
    loading_started_at: float | None = None
    current_table_index: int = 0

    # -- input buffer ---------------------------------------------------

    def put_char(self, char: str) -> None:
        self.input += char

    def pop_char(self) -> None:
        self.input = self.input[:-1]

    def clear_input(self) -> None:
        self.input = ""

    # -- results --------------------------------------------------------

    def set_language(self, language: str) -> None:
        self.language = language

    def set_conjugations(self, conjugations: VerbConjugations) -> None:
        self.conjugations = conjugations
        self.definitions = WordDefinitions.empty()
        self.static_table = None
        self.error = None
        self.current_table_index = 0

    def set_definitions(self, definitions: WordDefinitions) -> None:
        self.definitions = definitions
        self.conjugations = VerbConjugations.empty()
        self.static_table = None
        self.error = None
        self.current_table_index = 0

    def clear_tables(self) -> None:
        self.conjugations = VerbConjugations.empty()
        self.definitions = WordDefinitions.empty()
        self.static_table = None
        self.current_table_index = 0

    def set_error(self, message: str) -> None:
        self.clear_tables()
        self.error = message

    def clear_error(self) -> None:
        self.error = None

    def show_help(self, rows: list[list[str]]) -> None:
        self.clear_tables()
        self.error = None
        self.static_table = TableData(title="Help", header=list(HELP_HEADER), items=rows)

    # -- pagination -----------------------------------------------------

    def table_count(self) -> int:
        return max(len(self.conjugations.conjugation_tables), len(self.definitions.definitions))

    def next(self) -> None:
        count = self.table_count()
        if count == 0:
            return
        self.current_table_index = (self.current_table_index + 1) % count

    def prev(self) -> None:
        count = self.table_count()
        if count == 0:
            return
        self.current_table_index = (self.current_table_index - 1) % count

    # -- loading --------------------------------------------------------

    def start_loading(self, now: float | None = None) -> None:
        self.loading = True
        self.loading_started_at = time.monotonic() if now is None else now

    def finish_loading(self) -> None:
        self.loading = False
        self.loading_started_at = None

    def progress(self, now: float | None = None, expected_seconds: float | None = None) -> float:
        """Cosmetic progress estimate for the current lookup, in [0, 0.95]."""
        if not self.loading or self.loading_started_at is None:
            return 0.0
        now = time.monotonic() if now is None else now
        expected = expected_seconds or settings.EXPECTED_LOOKUP_SECONDS
        return min((now - self.loading_started_at) / expected, 0.95)

    # -- projection -----------------------------------------------------

    def table_data(self) -> TableData | None:
        """The table currently on screen, if any."""
        tables = self.conjugations.conjugation_tables
        if tables:
            table = tables[self.current_table_index % len(tables)]
            return TableData(
                title=f"{self.conjugations.verb} - {table.tense}",
                header=list(CONJUGATION_HEADER),
                items=[list(row) for row in table.conjugations],
            )

        definitions = self.definitions.definitions
        if definitions:
            table = definitions[self.current_table_index % len(definitions)]
            return TableData(
                title=self.definitions.title,
                header=list(table.header),
                items=[list(row) for row in table.definitions],
            )

        return self.static_table

    def snapshot(self, now: float | None = None) -> StateSnapshot:
        pages = self.table_count()
        return StateSnapshot(
            running=self.running,
            language=self.language,
            input=self.input,
            table=self.table_data(),
            error=self.error,
            loading=self.loading,
            progress=self.progress(now),
            page=self.current_table_index + 1 if pages else 0,
            pages=pages,
        )

    def close(self) -> None:
        self.running = False


class SharedState:
    """Single lock around ``AppState``.

    Never hold the lock across network or cache I/O: take what you need,
    release, do the slow work, then reacquire to write back.
    """

    __slots__ = ("_state", "_lock")

    def __init__(self, state: AppState | None = None):
        self._state = state or AppState()
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def locked(self) -> AsyncIterator[AppState]:
        async with self._lock:
            yield self._state

    async def snapshot(self) -> StateSnapshot:
        async with self._lock:
            return self._state.snapshot()
