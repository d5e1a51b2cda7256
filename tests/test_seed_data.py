"""
Tests for the development seed script.
"""

from unittest.mock import MagicMock

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.services.book_store import SQLAlchemyBookStore
from scripts import seed_data
from scripts.seed_data import BOOKS_DATA, seed_database


def test_seed_fresh_database_skips_clear(monkeypatch):
    """A table created by the script has nothing to clear and no procedure."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    factory = sessionmaker(bind=engine, expire_on_commit=False)
    reset = MagicMock(name="StoredProcedureBulkReset")
    monkeypatch.setattr(seed_data, "StoredProcedureBulkReset", reset)

    seed_database(bind=engine, session_factory=factory)

    reset.assert_not_called()
    assert SQLAlchemyBookStore(factory).count({}) == len(BOOKS_DATA)
    engine.dispose()


def test_seed_existing_table_clears_first(engine, session_factory, multiple_books):
    seed_database(bind=engine, session_factory=session_factory)

    assert SQLAlchemyBookStore(session_factory).count({}) == len(BOOKS_DATA)


def test_seed_keep_existing_rows(engine, session_factory, multiple_books):
    seed_database(clear_existing=False, bind=engine, session_factory=session_factory)

    assert SQLAlchemyBookStore(session_factory).count({}) == 15 + len(BOOKS_DATA)
