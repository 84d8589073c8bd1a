"""Fixtures for HTTP tests: the composed app, clients, and service doubles."""

import uuid
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from bookshelf.api.dependencies import get_author_service, get_book_service
from bookshelf.main import create_app


@pytest.fixture
def app(settings, session_factory) -> FastAPI:
    """The full application (all middleware) bound to the per-test SQLite database."""
    return create_app(settings, session_factory)


@pytest.fixture
async def client(app: FastAPI):
    """
    Async client running the app in the test's own event loop, so the app and the
    aiosqlite engine share a loop.
    """
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def book_service_double() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def author_service_double() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def stub_app(settings) -> FastAPI:
    """The full application without a database; pair it with dependency overrides."""
    return create_app(settings, session_factory=MagicMock(name="session_factory"))


@pytest.fixture
def stubbed_client(stub_app: FastAPI, book_service_double, author_service_double):
    """
    TestClient for handler tests: services replaced by AsyncMocks, storage never touched.
    """
    app = stub_app
    app.dependency_overrides[get_book_service] = lambda: book_service_double
    app.dependency_overrides[get_author_service] = lambda: author_service_double
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_author(**overrides) -> SimpleNamespace:
    data = {"id": uuid.uuid4(), "name": "Ursula K. Le Guin"}
    data.update(overrides)
    return SimpleNamespace(**data)


def make_book(**overrides) -> SimpleNamespace:
    author = overrides.pop("author", None) or make_author()
    data = {
        "id": uuid.uuid4(),
        "title": "The Dispossessed",
        "description": "An ambiguous utopia.",
        "author_id": author.id,
        "author": author,
    }
    data.update(overrides)
    return SimpleNamespace(**data)
