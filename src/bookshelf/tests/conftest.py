"""
Core pytest configuration for the entire test suite.

Only the database setup and settings shared by every kind of test live here.
Domain-specific fixtures are in tests/test_fixtures/ and re-exported at the bottom.
"""

# -------------------------------
# Standard library imports
# -------------------------------
import os
import logging
from typing import AsyncGenerator

# -------------------------------
# Environment defaults (IMPORTANT)
# -------------------------------
# Settings has required fields with no defaults. Provide test values before anything
# imports bookshelf.config, without overriding what CI may have exported.
_TEST_ENV = {
    "API_ENVIRONMENT": "test",
    "API_HOST": "127.0.0.1",
    "API_PORT": "8080",
    "DATABASE_HOST": "localhost",
    "DATABASE_PORT": "5432",
    "DATABASE_USER": "bookshelf",
    "DATABASE_PASSWORD": "bookshelf",
    "DATABASE_NAME": "bookshelf_test",
    "LOG_FORMAT": "text",
    "LOG_LEVEL": "DEBUG",
}
for _key, _value in _TEST_ENV.items():
    os.environ.setdefault(_key, _value)

# -------------------------------
# Early logging tuning
# -------------------------------
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from sqlalchemy.pool import StaticPool
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from bookshelf.config.settings import Settings
from bookshelf.database.base import Base
from bookshelf.database.session import build_engine, create_session_factory
from bookshelf import models  # noqa: F401 - registers models with Base.metadata

from bookshelf.core.logging.builder import setup_logging

# In-memory SQLite shared through a single connection (StaticPool), fresh per test.
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """Install the application logging config once, so formatters and filters run in tests too."""
    setup_logging(Settings())
    yield


@pytest.fixture
def settings() -> Settings:
    """
    Settings built from the test environment above. Not cached, so tests may pass
    overrides: settings.model_copy(update={"RATE_LIMIT_REQUESTS": 2}).
    """
    return Settings()


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------

@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine_kwargs = {}
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine_kwargs["poolclass"] = StaticPool

    engine = build_engine(TEST_DATABASE_URL, **engine_kwargs)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(async_engine)


@pytest.fixture
async def db_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    """
    A session inside one open transaction, rolled back after the test.

    Repositories only flush, so nothing a test does is ever committed; the engine is
    thrown away afterwards anyway.
    """
    async with session_factory() as session:
        await session.begin()
        try:
            yield session
        finally:
            await session.rollback()


# Repository and sample-data fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402,F401
    author_repository,
    book_repository,
    sample_author_data,
    sample_book_data,
    create_author,
    create_book,
    created_author,
    created_book,
)

# HTTP fixtures
from .test_fixtures.api_fixtures import (  # noqa: E402,F401
    app,
    client,
    book_service_double,
    author_service_double,
    stub_app,
    stubbed_client,
)
