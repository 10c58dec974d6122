"""wordref entry point.

Wires settings, logging, the cache store and the HTTP client together,
starts the input and lookup tasks and runs the render loop until Esc.

Usage:
    python -m wordref
    python -m wordref --language spanish --cache-path ~/.cache/wordref.db
"""
import argparse
import asyncio
from contextlib import AsyncExitStack
from pathlib import Path

from rich.console import Console
from rich.live import Live

from wordref import __version__
from wordref.core.config import Settings, get_settings
from wordref.core.errors import Ok
from wordref.core.logging import configure_logging, input_logger
from wordref.engines.cache import open_cache_store
from wordref.engines.dispatcher import CommandDispatcher
from wordref.engines.input import InputEventSource, KeyReader, TerminalKeyReader
from wordref.engines.state import AppState, SharedState
from wordref.engines.worker import LookupWorker, WorkerStats
from wordref.languages import is_supported, normalize, supported_languages
from wordref.ui import render
from wordref.wordreference import FetchClient

log = input_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordref",
        description="Look up conjugations, definitions and translations on WordReference",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands (type them, then press Enter):
  lang <language>   Switch language (french, italian, spanish, english)
  conj <verb>       Conjugate a verb
  def <word>        Define a word in English
  trans <word>      Translate an English word
  help              Show all commands
        """,
    )
    parser.add_argument("--cache-path", type=Path, help="SQLite cache file (default: $CACHE_PATH)")
    parser.add_argument("--language", help="Starting language (default: $DEFAULT_LANGUAGE)")
    parser.add_argument("--log-level", help="Log level (default: $LOG_LEVEL)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def apply_overrides(config: Settings, args: argparse.Namespace) -> Settings:
    """Return settings with command-line overrides applied."""
    update = {}
    if args.cache_path is not None:
        update["CACHE_PATH"] = args.cache_path.expanduser()
    if args.language is not None:
        update["DEFAULT_LANGUAGE"] = normalize(args.language)
    if args.log_level is not None:
        update["LOG_LEVEL"] = args.log_level.upper()
    return config.model_copy(update=update) if update else config


async def run(config: Settings, reader: KeyReader, console: Console | None = None) -> WorkerStats:
    """Run the interface until the user quits. Returns the worker counters."""
    async with AsyncExitStack() as stack:
        cache = await stack.enter_async_context(open_cache_store(config.CACHE_PATH, echo=config.LOG_SQL))
        fetcher = await stack.enter_async_context(
            FetchClient(user_agent=config.USER_AGENT, timeout=config.REQUEST_TIMEOUT)
        )

        events: asyncio.Queue = asyncio.Queue(maxsize=config.INPUT_QUEUE_SIZE)
        lookups: asyncio.Queue = asyncio.Queue(maxsize=config.LOOKUP_QUEUE_SIZE)
        shared = SharedState(AppState(language=normalize(config.DEFAULT_LANGUAGE)))
        dispatcher = CommandDispatcher(shared, lookups)
        worker = LookupWorker(shared, cache, fetcher, base_url=config.BASE_URL)
        source = InputEventSource(reader, config.tick_rate)

        tasks = [
            asyncio.create_task(source.run(events), name="input"),
            asyncio.create_task(worker.run(lookups), name="worker"),
        ]
        try:
            with Live(render(await shared.snapshot()), console=console, screen=True, auto_refresh=False) as live:
                while True:
                    event = await events.get()
                    await dispatcher.handle_event(event)
                    snapshot = await shared.snapshot()
                    if not snapshot.running:
                        break
                    live.update(render(snapshot), refresh=True)
        finally:
            # In-flight lookups are abandoned, not awaited
            for task in tasks:
                task.cancel()
            results = await asyncio.gather(*tasks, return_exceptions=True)
            for task, result in zip(tasks, results):
                if isinstance(result, Exception):
                    log.error("task_failed", task=task.get_name(), error=str(result), error_type=type(result).__name__)

        match await cache.stats():
            case Ok(counts):
                log.info("cache_summary", **counts)

    return worker.stats


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = apply_overrides(get_settings(), args)
    if not is_supported(config.DEFAULT_LANGUAGE):
        parser.error(
            f"unsupported language '{config.DEFAULT_LANGUAGE}' "
            f"(choose from {', '.join(supported_languages())})"
        )

    configure_logging(
        level=config.LOG_LEVEL,
        json_logs=config.LOG_JSON,
        log_sql=config.LOG_SQL,
        log_file=config.LOG_FILE,
    )
    log.info("startup", version=__version__, language=config.DEFAULT_LANGUAGE, cache_path=str(config.CACHE_PATH))

    with TerminalKeyReader() as reader:
        try:
            stats = asyncio.run(run(config, reader))
        except KeyboardInterrupt:
            log.info("shutdown", reason="interrupted")
            return

    log.info("shutdown", reason="quit", **stats.to_dict())


if __name__ == "__main__":
    main()
