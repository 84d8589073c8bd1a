"""
Engine and session factory construction.

Nothing in here runs at import time: the composition root (`bookshelf.main`) builds the
engine from `Settings` and hands the session factory to `create_app()`. Tests build their
own engine against SQLite and pass it through the same functions.
"""
import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from bookshelf.config.settings import Settings
from bookshelf.database.base import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores FOREIGN KEY clauses unless this pragma is set per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(settings: Settings, **engine_kwargs) -> AsyncEngine:
    """
    Create the AsyncEngine for `settings.DATABASE_URL`.

    Extra keyword arguments are forwarded to `create_async_engine` (tests use this to
    pass a StaticPool for in-memory SQLite).
    """
    return build_engine(settings.DATABASE_URL, **engine_kwargs)


def build_engine(url: str, **engine_kwargs) -> AsyncEngine:
    engine_kwargs.setdefault("pool_pre_ping", True)  # Enables connection health checks
    engine = create_async_engine(url, **engine_kwargs)

    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    logger.debug("database.engine.created", extra={"dialect": engine.dialect.name})
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    `async_sessionmaker` returns an async session factory.

    expire_on_commit=False keeps loaded entities usable after the request transaction
    commits (responses are built from them).
    """
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """Create all tables registered on Base.metadata (no-op for existing tables)."""
    # import models so they register themselves with Base.metadata
    from bookshelf import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# Dependency to get DB session
async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency. Yields a session wrapped in one transaction per request.

    The transaction commits when the endpoint returns normally and rolls back when any
    exception escapes it, so a request is all-or-nothing. Repositories only flush.
    Declare it with scope="function" so the commit happens before the response is sent.

    Usage:
        async def endpoint(db: AsyncSession = Depends(get_async_session, scope="function")):
            await db.execute(...)
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        async with session.begin():
            yield session
