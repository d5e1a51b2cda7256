"""
Book Store Gateway

The persistence boundary for books. BookService only talks to the
BookStore protocol; SQLAlchemyBookStore is the production implementation.

The store is built once at startup around a session factory and shared
by all requests. Every call opens its own session and transaction, so
the instance holds no per-request state and is safe for concurrent use.

Filtering
=========
Each filter key becomes a case-insensitive substring match on the column
of the same name. LIKE wildcards in the value are escaped, so "50%"
matches the literal text "50%".
"""

import logging
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any, Protocol

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import GatewayError
from app.models import Book
from app.schemas.book import BookResponse

logger = logging.getLogger(__name__)

FILTER_COLUMNS = {
    "title": Book.title,
    "author": Book.author,
    "desc": Book.desc,
}


class BookStore(Protocol):
    """Operations the book service needs from persistence."""

    def count(self, filters: Mapping[str, str]) -> int: ...

    def find(
        self, filters: Mapping[str, str], skip: int, take: int
    ) -> list[BookResponse]: ...

    def find_by_id(self, book_id: int) -> BookResponse | None: ...

    def exists(self, book_id: int) -> bool: ...

    def create(self, values: dict[str, Any]) -> BookResponse: ...

    def update(self, book_id: int, values: dict[str, Any]) -> BookResponse | None: ...

    def delete(self, book_id: int) -> BookResponse | None: ...


def apply_book_filters(stmt, filters: Mapping[str, str]):
    """
    Add one WHERE clause per filter key.

    Unknown keys are ignored; the query normalizer only ever produces
    title, author and desc.
    """
    for key, value in filters.items():
        column = FILTER_COLUMNS.get(key)
        if column is not None:
            stmt = stmt.where(column.icontains(value, autoescape=True))
    return stmt


class SQLAlchemyBookStore:
    """
    BookStore backed by SQLAlchemy.

    Args:
        session_factory: Callable returning a new Session, usually
            app.database.SessionLocal
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[Session]:
        """
        Session with a transaction that commits on success.

        SQLAlchemy errors, and driver overflows on out-of-range integers,
        are logged and re-raised as GatewayError.
        """
        try:
            with self._session_factory() as session, session.begin():
                yield session
        except (SQLAlchemyError, OverflowError) as exc:
            logger.error(f"Book store {operation} failed: {exc}")
            raise GatewayError(f"book store {operation} failed") from exc

    def count(self, filters: Mapping[str, str]) -> int:
        stmt = apply_book_filters(select(func.count(Book.id)), filters)
        with self._transaction("count") as session:
            return session.execute(stmt).scalar() or 0

    def find(
        self, filters: Mapping[str, str], skip: int, take: int
    ) -> list[BookResponse]:
        """One page of matching books, newest id first."""
        stmt = (
            apply_book_filters(select(Book), filters)
            .order_by(Book.id.desc())
            .offset(skip)
            .limit(take)
        )
        with self._transaction("find") as session:
            books = session.execute(stmt).scalars().all()
            return [BookResponse.model_validate(book) for book in books]

    def find_by_id(self, book_id: int) -> BookResponse | None:
        with self._transaction("find_by_id") as session:
            book = session.get(Book, book_id)
            return BookResponse.model_validate(book) if book else None

    def exists(self, book_id: int) -> bool:
        """Existence check that only selects the id column."""
        stmt = select(Book.id).where(Book.id == book_id)
        with self._transaction("exists") as session:
            return session.execute(stmt).scalar_one_or_none() is not None

    def create(self, values: dict[str, Any]) -> BookResponse:
        with self._transaction("create") as session:
            book = Book(**values)
            session.add(book)
            session.flush()
            # Pull server defaults (timestamps) into the instance
            session.refresh(book)
            return BookResponse.model_validate(book)

    def update(self, book_id: int, values: dict[str, Any]) -> BookResponse | None:
        with self._transaction("update") as session:
            book = session.get(Book, book_id)
            if book is None:
                return None
            for name, value in values.items():
                setattr(book, name, value)
            session.flush()
            session.refresh(book)
            return BookResponse.model_validate(book)

    def delete(self, book_id: int) -> BookResponse | None:
        """Delete a book and return it as it was."""
        with self._transaction("delete") as session:
            book = session.get(Book, book_id)
            if book is None:
                return None
            deleted = BookResponse.model_validate(book)
            session.delete(book)
            return deleted
