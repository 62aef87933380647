"""
Library API: Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the test suite.
How:   Route tests talk to the app through an HTTPX AsyncClient over
       ASGITransport with the stores replaced by ``AsyncMock(spec=...)``
       via ``app.dependency_overrides``. ASGITransport does not run the
       lifespan, so no database is opened for them.
       Store tests run against a throwaway SQLite file (aiosqlite) with
       foreign keys enabled.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── settings:             Settings pointing at a temp SQLite file
    ├── app:                  create_app(settings)
    ├── author_store / book_store / member_store / borrowed_store / database
    │                         AsyncMocks wired into dependency_overrides
    ├── test_client:          HTTPX AsyncClient for endpoint testing
    └── db:                   Real Database with all tables created
"""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from library_api.config import Settings
from library_api.database import Database
from library_api.main import create_app
from library_api.routes import deps
from library_api.stores import AuthorStore, BookStore, BorrowedStore, MemberStore

# Keep a developer's environment out of the tests
for _name in ("DATABASE_URL", "DB_CONN", "PORT", "LOG_LEVEL", "CORS_ORIGINS"):
    os.environ.pop(_name, None)


# ══════════════════════════════════════════════════════════════════════════
# Configuration and Application
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'library.db'}",
        port=8080,
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    application = create_app(settings)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def author_store(app):
    store = AsyncMock(spec=AuthorStore)
    app.dependency_overrides[deps.get_author_store] = lambda: store
    return store


@pytest.fixture
def book_store(app):
    store = AsyncMock(spec=BookStore)
    app.dependency_overrides[deps.get_book_store] = lambda: store
    return store


@pytest.fixture
def member_store(app):
    store = AsyncMock(spec=MemberStore)
    app.dependency_overrides[deps.get_member_store] = lambda: store
    return store


@pytest.fixture
def borrowed_store(app):
    store = AsyncMock(spec=BorrowedStore)
    app.dependency_overrides[deps.get_borrowed_store] = lambda: store
    return store


@pytest.fixture
def database(app):
    mock_db = AsyncMock(spec=Database)
    app.dependency_overrides[deps.get_database] = lambda: mock_db
    return mock_db


@pytest_asyncio.fixture
async def test_client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient routed straight into the FastAPI app.

    Usage:
        async def test_list(test_client, author_store):
            author_store.get.return_value = []
            response = await test_client.get("/authors")
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Real Database (SQLite)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db(settings) -> AsyncGenerator[Database, None]:
    database = Database(settings)
    await database.create_all()
    yield database
    await database.dispose()
