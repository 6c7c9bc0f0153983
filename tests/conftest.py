"""
pytest Fixtures for Catalog Tests

This file contains shared fixtures used across all test files.

DATABASE STRATEGY:
==================
Every test gets its own SQLite database file under pytest's tmp_path, opened
through aiosqlite with a NullPool engine. Nothing is pooled, so the database
can be used both from fixtures (through asyncio.run) and from the app running
inside TestClient on its own event loop.

The app's store dependency (get_store) is overridden to point at the test
database; the module-level engine in catalog.database is never connected.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DEBUG"] = "false"

import asyncio
from collections.abc import Generator
from datetime import date

import pytest
from fastapi.testclient import TestClient

from catalog.database import build_engine, build_sessionmaker, create_tables
from catalog.dependencies import get_store
from catalog.main import app
from catalog.models import Author, Book, BookInstance, Genre
from catalog.services.store import CatalogStore


def run(coro):
    """Run a store coroutine to completion from synchronous test code."""
    return asyncio.run(coro)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
@pytest.fixture(scope="function")
def engine(tmp_path):
    """Fresh database file with all tables created."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    run(create_tables(engine))

    yield engine

    run(engine.dispose())


@pytest.fixture(scope="function")
def store(engine) -> CatalogStore:
    """Catalog store bound to the test database."""
    return CatalogStore.from_sessionmaker(build_sessionmaker(engine))


@pytest.fixture(scope="function")
def client(store: CatalogStore) -> Generator[TestClient, None, None]:
    """
    Test client using the test store.

    Redirects are not followed, so tests can assert on the 303 responses
    of form submissions.
    """
    app.dependency_overrides[get_store] = lambda: store

    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_author(store: CatalogStore) -> Author:
    """An author with no first name and no date of death."""
    return run(store.authors.insert({
        "first_name": None,
        "family_name": "Bova",
        "date_of_birth": date(1932, 11, 8),
        "date_of_death": None,
    }))


@pytest.fixture
def sample_genre(store: CatalogStore) -> Genre:
    return run(store.genres.insert({"name": "Science Fiction"}))


@pytest.fixture
def sample_book(
    store: CatalogStore,
    sample_author: Author,
    sample_genre: Genre,
) -> Book:
    """
    A book referencing sample_author and listing sample_genre.

    This fixture depends on sample_author and sample_genre fixtures.
    """
    return run(store.books.insert({
        "title": "Apes and Angels",
        "summary": "Humankind headed out to the stars.",
        "isbn": "9780765379528",
        "author": sample_author.id,
        "genre": [sample_genre.id],
    }))


@pytest.fixture
def sample_bookinstance(store: CatalogStore, sample_book: Book) -> BookInstance:
    """An available copy of sample_book."""
    return run(store.bookinstances.insert({
        "book": sample_book.id,
        "imprint": "Gollancz, 2015.",
        "status": "Available",
        "due_back": None,
    }))
