import asyncio

from wordref.core.database import create_engine, create_session_factory, init_schema, session_scope
from wordref.core.errors import AppError, Ok, Result, network_failure, query_failed
from wordref.engines.cache import CacheStore, open_cache_store
from wordref.engines.dispatcher import CommandDispatcher
from wordref.engines.events import DefinitionLookup, KeyCode, KeyPress, VerbLookup
from wordref.engines.state import AppState, SharedState
from wordref.engines.worker import LookupWorker
from wordref.models import ConjugationRecord

BASE_URL = "https://wordref.test"


def _lookups(cache_path, fetcher, *requests):
    """Handle ``requests`` in order; return (snapshot, worker stats, cache counts)."""
    shared = SharedState(AppState(language="french"))

    async def scenario():
        async with open_cache_store(cache_path) as cache:
            worker = LookupWorker(shared, cache, fetcher, base_url=BASE_URL)
            for request in requests:
                await worker.handle(request)
            return await shared.snapshot(), worker.stats, (await cache.stats()).unwrap()

    return asyncio.run(scenario())


def test_conj_end_to_end_then_cache_hit(cache_path, fetcher):
    request = VerbLookup(verb="parler", language="french")

    snapshot, stats, counts = _lookups(cache_path, fetcher, request)
    assert fetcher.calls == [f"{BASE_URL}/conj/frverbs.aspx?v=parler"]
    assert counts["conjugations"] == 1
    assert "parler" in snapshot.table.title
    assert snapshot.error is None
    assert not snapshot.loading
    first_table = snapshot.table

    snapshot, stats, _ = _lookups(cache_path, fetcher, request)
    assert len(fetcher.calls) == 1
    assert stats.cache_hits == 1
    assert snapshot.table == first_table


def test_conj_result_is_cached_under_the_infinitive(cache_path, fetcher):
    async def cached():
        async with open_cache_store(cache_path) as cache:
            return (
                await cache.get_conjugations("french", "parler"),
                await cache.get_root_word("french", "parle"),
            )

    _lookups(cache_path, fetcher, VerbLookup(verb="parle", language="french"))
    conjugations, root = asyncio.run(cached())
    assert conjugations.unwrap().verb == "parler"
    assert root == Ok("parler")

    # The alias resolves straight to the cached infinitive
    _, stats, counts = _lookups(cache_path, fetcher, VerbLookup(verb="parle", language="french"))
    assert len(fetcher.calls) == 1
    assert stats.cache_hits == 1
    assert counts == {"conjugations": 1, "definitions": 0, "rootwords": 1}


def test_queued_identical_lookups_run_sequentially(cache_path, fetcher):
    shared = SharedState(AppState(language="french"))
    request = VerbLookup(verb="parler", language="french")

    async def scenario():
        async with open_cache_store(cache_path) as cache:
            worker = LookupWorker(shared, cache, fetcher, base_url=BASE_URL)
            queue: asyncio.Queue = asyncio.Queue(maxsize=10)
            await queue.put(request)
            await queue.put(request)
            task = asyncio.create_task(worker.run(queue))
            await queue.join()
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
            return worker.stats

    stats = asyncio.run(scenario())
    assert stats.lookups == 2
    assert stats.fetches == 1
    assert stats.cache_hits == 1


def test_definition_lookup(cache_path, fetcher):
    request = DefinitionLookup(word="parler", from_language="french", to_language="english")

    snapshot, stats, counts = _lookups(cache_path, fetcher, request, request)
    assert fetcher.calls == [f"{BASE_URL}/fren/parler"]
    assert counts["definitions"] == 1
    assert snapshot.table.title == "Translate 'parler' to english"
    assert snapshot.table.items == [["parler", "speak vi"], ["parler", "talk vi"]]
    assert snapshot.pages == 2


def test_unknown_verb_sets_error_and_caches_nothing(cache_path, fetcher):
    snapshot, stats, counts = _lookups(cache_path, fetcher, VerbLookup(verb="zzz", language="spanish"))

    assert snapshot.table is None
    assert snapshot.error.startswith("The verb 'zzz' does not exist")
    assert stats.failures == 1
    assert counts == {"conjugations": 0, "definitions": 0, "rootwords": 0}


def test_network_failure_is_reported(cache_path):
    class DownFetcher:
        async def fetch(self, url: str) -> Result[str, AppError]:
            return network_failure(url, origin="test")

    snapshot, stats, _ = _lookups(cache_path, DownFetcher(), VerbLookup(verb="parler", language="french"))
    assert "Could not reach WordReference" in snapshot.error
    assert stats.failures == 1


def test_worker_survives_unexpected_exceptions(cache_path, fetcher):
    class BrokenFetcher:
        async def fetch(self, url: str) -> Result[str, AppError]:
            raise RuntimeError("boom")

    snapshot, stats, _ = _lookups(
        cache_path,
        BrokenFetcher(),
        VerbLookup(verb="parler", language="french"),
    )
    assert snapshot.error
    assert not snapshot.loading
    assert stats.failures == 1


def test_previous_result_replaced_by_error(cache_path, fetcher):
    snapshot, _, _ = _lookups(
        cache_path,
        fetcher,
        VerbLookup(verb="parler", language="french"),
        DefinitionLookup(word="zzz", from_language="italian", to_language="english"),
    )
    assert snapshot.table is None
    assert "(italian)" in snapshot.error
    assert snapshot.pages == 0


def test_corrupted_cache_entry_surfaces_error(cache_path, fetcher):
    async def corrupt():
        engine = create_engine(cache_path)
        await init_schema(engine)
        async with session_scope(create_session_factory(engine)) as session:
            session.add(ConjugationRecord(language="french", verb="parler", verb_conjugations_json="[]"))
            await session.commit()
        await engine.dispose()

    asyncio.run(corrupt())
    snapshot, stats, _ = _lookups(cache_path, fetcher, VerbLookup(verb="parler", language="french"))
    assert "corrupted" in snapshot.error
    assert fetcher.calls == []


def test_state_lock_is_free_and_loading_set_during_fetch(cache_path, conjugation_page):
    shared = SharedState(AppState(language="french"))
    seen = []

    class LockCheckingFetcher:
        async def fetch(self, url: str) -> Result[str, AppError]:
            # Deadlocks (and times out) if the worker held the lock across I/O
            async with asyncio.timeout(0.5):
                async with shared.locked() as state:
                    seen.append(state.loading)
            return Ok(conjugation_page)

    async def scenario():
        async with open_cache_store(cache_path) as cache:
            worker = LookupWorker(shared, cache, LockCheckingFetcher(), base_url=BASE_URL)
            await worker.handle(VerbLookup(verb="parler", language="french"))
        return await shared.snapshot()

    snapshot = asyncio.run(scenario())
    assert seen == [True]
    assert not snapshot.loading
    assert snapshot.error is None


def test_typed_command_end_to_end(cache_path, fetcher):
    shared = SharedState(AppState(language="french"))

    async def submit(dispatcher, line):
        for char in line:
            await dispatcher.handle_event(KeyPress.of_char(char))
        await dispatcher.handle_event(KeyPress(KeyCode.ENTER))

    async def scenario():
        async with open_cache_store(cache_path) as cache:
            lookups: asyncio.Queue = asyncio.Queue(maxsize=10)
            dispatcher = CommandDispatcher(shared, lookups)
            worker = LookupWorker(shared, cache, fetcher, base_url=BASE_URL)

            titles = []
            for _ in range(2):
                await submit(dispatcher, "conj parler")
                await worker.handle(lookups.get_nowait())
                titles.append((await shared.snapshot()).table.title)
            return titles, (await cache.stats()).unwrap(), await cache.get_conjugations("french", "parler")

    titles, counts, cached = asyncio.run(scenario())
    assert len(fetcher.calls) == 1
    assert counts["conjugations"] == 1
    assert cached.unwrap().verb == "parler"
    assert all("parler" in title for title in titles)
    assert titles[0] == titles[1]


def test_failed_alias_write_keeps_the_result(cache_path, fetcher):
    class AliasFailingCache(CacheStore):
        async def put_root_word(self, language, word, rootword):
            return query_failed("disk full", origin="test")

    shared = SharedState(AppState(language="french"))

    async def scenario():
        engine = create_engine(cache_path)
        await init_schema(engine)
        cache = AliasFailingCache(engine, cache_path)
        try:
            worker = LookupWorker(shared, cache, fetcher, base_url=BASE_URL)
            await worker.handle(VerbLookup(verb="parle", language="french"))
            return await shared.snapshot(), worker.stats, await cache.get_conjugations("french", "parler")
        finally:
            await cache.close()

    snapshot, stats, cached = asyncio.run(scenario())
    assert snapshot.error is None
    assert snapshot.table.title.startswith("parler - ")
    assert stats.failures == 0
    assert cached.unwrap().verb == "parler"
