"""Lookup Cache Store

Cache-aside persistence for fetched pages, in three tables:
- conjugations: (language, verb) -> VerbConjugations JSON
- definitions: (word, to_language, from_language) -> WordDefinitions JSON
- rootwords: (language, word) -> infinitive

Entries are written once after a successful extraction and never updated,
evicted or invalidated. A miss is ``Ok(None)``; ``Err`` is reserved for
storage failures and corrupted entries.

The store is only used from the lookup worker task, so it needs no lock
of its own.
"""
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine

from wordref.core.database import create_engine, create_session_factory, init_schema, session_scope
from wordref.core.errors import AppError, Ok, Result, cache_corrupted, map_db_errors
from wordref.core.logging import cache_logger
from wordref.models import (
    ConjugationRecord,
    DefinitionRecord,
    RootWordRecord,
    VerbConjugations,
    WordDefinitions,
)

log = cache_logger()

M = TypeVar("M", bound=BaseModel)


class CacheStore:
    """Keyed persistence of lookup results."""

    __slots__ = ("_engine", "_sessions", "path")

    def __init__(self, engine: AsyncEngine, path: Path | str):
        self._engine = engine
        self._sessions = create_session_factory(engine)
        self.path = Path(path)

    def _decode(self, model: type[M], blob: str, table: str, key: tuple) -> Result[M, AppError]:
        try:
            return Ok(model.model_validate_json(blob))
        except ValidationError as e:
            log.error("cache_entry_corrupted", table=table, key=list(key), error=str(e))
            return cache_corrupted(table, key, str(self.path), cause=e, origin=f"cache.{table}")

    # ------------------------------------------------------------------
    # Conjugations
    # ------------------------------------------------------------------

    @map_db_errors("cache.conjugations")
    async def get_conjugations(self, language: str, verb: str) -> Result[VerbConjugations | None, AppError]:
        async with session_scope(self._sessions) as session:
            result = await session.execute(
                select(ConjugationRecord.verb_conjugations_json)
                .where(ConjugationRecord.language == language, ConjugationRecord.verb == verb)
                .limit(1)
            )
            blob = result.scalars().first()

        if blob is None:
            return Ok(None)
        return self._decode(VerbConjugations, blob, "conjugations", (language, verb))

    @map_db_errors("cache.conjugations")
    async def put_conjugations(
        self, language: str, verb: str, conjugations: VerbConjugations
    ) -> Result[bool, AppError]:
        """Store a conjugation result. Returns whether a row was written."""
        if conjugations.is_empty():
            log.warning("cache_refused_empty", table="conjugations", language=language, verb=verb)
            return Ok(False)

        async with session_scope(self._sessions) as session:
            existing = await session.execute(
                select(ConjugationRecord.id)
                .where(ConjugationRecord.language == language, ConjugationRecord.verb == verb)
                .limit(1)
            )
            if existing.scalars().first() is not None:
                return Ok(False)

            session.add(ConjugationRecord(
                language=language,
                verb=verb,
                verb_conjugations_json=conjugations.model_dump_json(),
            ))
            await session.commit()

        log.debug("cache_stored", table="conjugations", language=language, verb=verb)
        return Ok(True)

    # ------------------------------------------------------------------
    # Definitions
    # ------------------------------------------------------------------

    @map_db_errors("cache.definitions")
    async def get_definitions(
        self, word: str, to_language: str, from_language: str
    ) -> Result[WordDefinitions | None, AppError]:
        async with session_scope(self._sessions) as session:
            result = await session.execute(
                select(DefinitionRecord.word_definitions_json)
                .where(
                    DefinitionRecord.word == word,
                    DefinitionRecord.to_language == to_language,
                    DefinitionRecord.from_language == from_language,
                )
                .limit(1)
            )
            blob = result.scalars().first()

        if blob is None:
            return Ok(None)
        return self._decode(WordDefinitions, blob, "definitions", (word, to_language, from_language))

    @map_db_errors("cache.definitions")
    async def put_definitions(
        self, word: str, to_language: str, from_language: str, definitions: WordDefinitions
    ) -> Result[bool, AppError]:
        """Store a definitions result. Returns whether a row was written."""
        if definitions.is_empty():
            log.warning("cache_refused_empty", table="definitions", word=word)
            return Ok(False)

        async with session_scope(self._sessions) as session:
            existing = await session.execute(
                select(DefinitionRecord.id)
                .where(
                    DefinitionRecord.word == word,
                    DefinitionRecord.to_language == to_language,
                    DefinitionRecord.from_language == from_language,
                )
                .limit(1)
            )
            if existing.scalars().first() is not None:
                return Ok(False)

            session.add(DefinitionRecord(
                word=word,
                to_language=to_language,
                from_language=from_language,
                word_definitions_json=definitions.model_dump_json(),
            ))
            await session.commit()

        log.debug("cache_stored", table="definitions", word=word, to_language=to_language, from_language=from_language)
        return Ok(True)

    # ------------------------------------------------------------------
    # Root words
    # ------------------------------------------------------------------

    @map_db_errors("cache.rootwords")
    async def get_root_word(self, language: str, word: str) -> Result[str | None, AppError]:
        async with session_scope(self._sessions) as session:
            result = await session.execute(
                select(RootWordRecord.rootword)
                .where(RootWordRecord.language == language, RootWordRecord.word == word)
                .limit(1)
            )
            return Ok(result.scalars().first())

    @map_db_errors("cache.rootwords")
    async def put_root_word(self, language: str, word: str, rootword: str) -> Result[bool, AppError]:
        """Record ``word`` as a surface form of ``rootword``."""
        if not rootword or word == rootword:
            return Ok(False)

        async with session_scope(self._sessions) as session:
            existing = await session.execute(
                select(RootWordRecord.id)
                .where(RootWordRecord.language == language, RootWordRecord.word == word)
                .limit(1)
            )
            if existing.scalars().first() is not None:
                return Ok(False)

            session.add(RootWordRecord(language=language, word=word, rootword=rootword))
            await session.commit()

        log.debug("cache_stored", table="rootwords", language=language, word=word, rootword=rootword)
        return Ok(True)

    # ------------------------------------------------------------------

    @map_db_errors("cache.stats")
    async def stats(self) -> Result[dict[str, int], AppError]:
        """Row counts per table."""
        counts: dict[str, int] = {}
        async with session_scope(self._sessions) as session:
            for name, model in (
                ("conjugations", ConjugationRecord),
                ("definitions", DefinitionRecord),
                ("rootwords", RootWordRecord),
            ):
                result = await session.execute(select(func.count()).select_from(model))
                counts[name] = result.scalar_one()
        return Ok(counts)

    async def close(self) -> None:
        await self._engine.dispose()


@asynccontextmanager
async def open_cache_store(path: Path | str, echo: bool = False) -> AsyncIterator[CacheStore]:
    """Open the cache file, creating the schema if needed, and dispose on exit."""
    engine = create_engine(path, echo=echo)
    store = CacheStore(engine, path)
    try:
        await init_schema(engine)
        log.info("cache_opened", path=str(path))
        yield store
    finally:
        await store.close()
        log.debug("cache_closed", path=str(path))
