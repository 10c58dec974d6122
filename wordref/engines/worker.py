"""Lookup Worker

Single consumer of lookup requests. Each request runs strictly in order:
alias resolution -> cache check -> fetch -> extract -> cache write -> state write.
States: idle -> looking up -> (success | failed) -> idle.

The state lock is taken only to mark loading and to write the outcome
back; all network and cache I/O happens without it.
"""
import asyncio
import time
from dataclasses import dataclass

from wordref.core.errors import AppError, Err, Ok, Result, internal_error
from wordref.core.logging import bind_context, clear_context, generate_correlation_id, lookup_logger
from wordref.models import VerbConjugations, WordDefinitions
from wordref.wordreference import (
    Fetcher,
    conjugation_url,
    definition_url,
    parse_conjugation_page,
    parse_definition_page,
)

from .cache import CacheStore
from .events import DefinitionLookup, LookupRequest, VerbLookup, describe
from .state import SharedState

log = lookup_logger()

LookupResult = Result[VerbConjugations | WordDefinitions, AppError]


@dataclass(slots=True)
class WorkerStats:
    """Counters for one worker's lifetime."""
    lookups: int = 0
    fetches: int = 0
    cache_hits: int = 0
    failures: int = 0

    def to_dict(self) -> dict:
        return {
            "lookups": self.lookups,
            "fetches": self.fetches,
            "cache_hits": self.cache_hits,
            "failures": self.failures,
        }


class LookupWorker:
    """Turns lookup requests into results in the shared state."""

    __slots__ = ("_shared", "_cache", "_fetcher", "_base_url", "stats")

    def __init__(
        self,
        shared: SharedState,
        cache: CacheStore,
        fetcher: Fetcher,
        base_url: str | None = None,
    ):
        self._shared = shared
        self._cache = cache
        self._fetcher = fetcher
        self._base_url = base_url
        self.stats = WorkerStats()

    async def run(self, requests: asyncio.Queue) -> None:
        """Consume requests until cancelled."""
        log.info("worker_started")
        try:
            while True:
                request = await requests.get()
                try:
                    await self.handle(request)
                finally:
                    requests.task_done()
        finally:
            log.info("worker_stopped", **self.stats.to_dict())

    async def handle(self, request: LookupRequest) -> None:
        """Run one lookup and write its outcome into the shared state."""
        bind_context(lookup_id=generate_correlation_id())
        started = time.perf_counter()
        self.stats.lookups += 1
        log.info("lookup_started", **describe(request))

        async with self._shared.locked() as state:
            state.start_loading()

        result: LookupResult | None = None
        try:
            result = await self.lookup(request)
        except Exception as e:
            log.exception("lookup_crashed", error=str(e))
            result = internal_error(
                "Something went wrong during the lookup, see the log for details",
                origin="worker",
                cause=e,
            )
        finally:
            async with self._shared.locked() as state:
                match result:
                    case Ok(VerbConjugations() as conjugations):
                        state.set_conjugations(conjugations)
                    case Ok(WordDefinitions() as definitions):
                        state.set_definitions(definitions)
                    case Err(error):
                        state.set_error(error.message)
                state.finish_loading()

        elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
        match result:
            case Ok(_):
                log.info("lookup_succeeded", elapsed_ms=elapsed_ms)
            case Err(error):
                self.stats.failures += 1
                log_method = log.error if error.code.is_fatal else log.info
                log_method("lookup_failed", elapsed_ms=elapsed_ms, **error.to_dict())
        clear_context()

    async def lookup(self, request: LookupRequest) -> LookupResult:
        match request:
            case VerbLookup():
                return await self.lookup_verb(request)
            case DefinitionLookup():
                return await self.lookup_definitions(request)

    async def _fetch(self, url: Result[str, AppError]) -> Result[str, AppError]:
        match url:
            case Err(_):
                return url
            case Ok(address):
                self.stats.fetches += 1
                return await self._fetcher.fetch(address)

    async def lookup_verb(self, request: VerbLookup) -> Result[VerbConjugations, AppError]:
        language, typed = request.language, request.verb

        match await self._cache.get_root_word(language, typed):
            case Err(error):
                return Err(error)
            case Ok(root):
                verb = root or typed

        match await self._cache.get_conjugations(language, verb):
            case Err(error):
                return Err(error)
            case Ok(VerbConjugations() as cached):
                self.stats.cache_hits += 1
                log.info("cache_hit", table="conjugations", language=language, verb=verb)
                return Ok(cached)

        log.info("cache_miss", table="conjugations", language=language, verb=verb)
        page = await self._fetch(conjugation_url(language, verb, self._base_url))
        conjugations = page.and_then(lambda html: parse_conjugation_page(html, verb, language))
        if conjugations.is_err():
            return conjugations

        fresh = conjugations.unwrap()
        stored = await self._cache.put_conjugations(language, fresh.verb, fresh)
        if stored.is_err():
            return Err(stored.unwrap_err())
        if fresh.verb != typed:
            # The alias only saves a fetch next time; the result stands without it
            match await self._cache.put_root_word(language, typed, fresh.verb):
                case Err(error):
                    log.warning("root_word_not_stored", word=typed, rootword=fresh.verb, **error.to_dict())
        return Ok(fresh)

    async def lookup_definitions(self, request: DefinitionLookup) -> Result[WordDefinitions, AppError]:
        word, src, dst = request.word, request.from_language, request.to_language

        match await self._cache.get_definitions(word, dst, src):
            case Err(error):
                return Err(error)
            case Ok(WordDefinitions() as cached):
                self.stats.cache_hits += 1
                log.info("cache_hit", table="definitions", word=word, from_language=src, to_language=dst)
                return Ok(cached)

        log.info("cache_miss", table="definitions", word=word, from_language=src, to_language=dst)
        page = await self._fetch(definition_url(src, dst, word, self._base_url))
        definitions = page.and_then(lambda html: parse_definition_page(html, word, src, dst))
        if definitions.is_err():
            return definitions

        fresh = definitions.unwrap()
        stored = await self._cache.put_definitions(word, dst, src, fresh)
        if stored.is_err():
            return Err(stored.unwrap_err())
        return Ok(fresh)
