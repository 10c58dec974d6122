"""Database Module

Async SQLite engine and session helpers for the lookup cache. The engine
is created once at startup and handed to the cache store explicitly; it
is never a module global.
"""
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from wordref.core.logging import cache_logger

log = cache_logger()

Base = declarative_base()


def sqlite_url(path: Path | str) -> str:
    return f"sqlite+aiosqlite:///{path}"


def create_engine(path: Path | str, echo: bool = False) -> AsyncEngine:
    """Create the async engine backing the cache file at ``path``."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    return create_async_engine(sqlite_url(path), echo=echo)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_schema(engine: AsyncEngine) -> None:
    """Create cache tables if they do not exist yet."""
    # Import registers the ORM tables on Base.metadata
    import wordref.models.cache  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.debug("schema_ready", url=str(engine.url))


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Context manager for a database session."""
    async with factory() as session:
        try:
            yield session
        finally:
            await session.close()
