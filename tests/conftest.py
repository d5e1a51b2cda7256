"""
pytest Fixtures for Books API Tests

Shared fixtures used across all test files.

For database tests, every test gets its own SQLite in-memory database:
- StaticPool keeps the single connection alive so the in-memory
  database survives between sessions
- The gateways are built on a session factory bound to that engine and
  swapped in through app.dependency_overrides

Tests that assert call counts or simulate failures use MagicMock gateways
instead (see mock_store / mock_reset / mock_client).
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ALLOWED_ORIGINS"] = "*"
os.environ["LOG_LEVEL"] = "WARNING"

from collections.abc import Generator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base
from app.dependencies import get_book_store, get_bulk_reset
from app.main import app
from app.models import Book
from app.services.book_store import SQLAlchemyBookStore
from app.services.bulk_reset import StoredProcedureBulkReset

BOOKS_URL = "/api/v1/books"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
@pytest.fixture
def engine():
    """Fresh in-memory database with the books table."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    """Session for arranging and inspecting data directly."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def book_store(session_factory) -> SQLAlchemyBookStore:
    return SQLAlchemyBookStore(session_factory)


@pytest.fixture
def bulk_reset(session_factory) -> StoredProcedureBulkReset:
    return StoredProcedureBulkReset(session_factory)


# =============================================================================
# CLIENT FIXTURES
# =============================================================================
@pytest.fixture
def client(book_store, bulk_reset) -> Generator[TestClient, None, None]:
    """
    Test client wired to the test database.

    The gateway dependencies are overridden so requests hit the in-memory
    database instead of the configured one.
    """
    app.dependency_overrides[get_book_store] = lambda: book_store
    app.dependency_overrides[get_bulk_reset] = lambda: bulk_reset

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def mock_store() -> MagicMock:
    """Book store double; exists() defaults to True."""
    store = MagicMock(name="book_store")
    store.exists.return_value = True
    return store


@pytest.fixture
def mock_reset() -> MagicMock:
    return MagicMock(name="bulk_reset")


@pytest.fixture
def mock_client(mock_store, mock_reset) -> Generator[TestClient, None, None]:
    """
    Test client with mock gateways.

    raise_server_exceptions=False lets tests see the 500 envelope the
    catch-all handler produces instead of the re-raised exception.
    """
    app.dependency_overrides[get_book_store] = lambda: mock_store
    app.dependency_overrides[get_bulk_reset] = lambda: mock_reset

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_book(db_session: Session) -> Book:
    """Create a sample book for testing."""
    book = Book(title="Dune", author="Frank Herbert", desc="Spice and sandworms")
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def multiple_books(db_session: Session) -> list[Book]:
    """
    Create 15 books: 12 titled "Dune <n>" and 3 others.

    Inserted in order, so ids ascend with the list index.
    """
    books = [
        Book(title=f"Dune {i + 1}", author="Frank Herbert", desc=f"Volume {i + 1}")
        for i in range(12)
    ]
    books += [
        Book(title="Neuromancer", author="William Gibson", desc="Cyberspace"),
        Book(title="Foundation", author="Isaac Asimov", desc=None),
        Book(title="Hyperion", author="Dan Simmons", desc="Pilgrims"),
    ]
    db_session.add_all(books)
    db_session.commit()
    for book in books:
        db_session.refresh(book)
    return books
