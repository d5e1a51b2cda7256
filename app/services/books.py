"""
Book Operations

BookService holds the per-operation logic of the books resource: list,
detail, create, update, delete-one and delete-all. It is independent of
HTTP; the router decides which operation to run and wraps the result in
the response envelope.

Ordering rules every mutating operation follows:
1. Resolve the id (missing or <= 0 is NotFound)
2. Check existence when the book must already exist
3. Validate the payload
4. Only then call the mutating gateway method

Gateway failures (GatewayError) become UpstreamFailure. The original
error is logged here and chained, but never shown to the client.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from app.exceptions import GatewayError, NotFound, UpstreamFailure
from app.schemas.book import BookResponse
from app.schemas.envelope import Meta
from app.services.book_store import BookStore
from app.services.bulk_reset import BulkReset
from app.services.query import ListQuery
from app.services.validation import validate_book_payload

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class BookPage:
    """One page of books plus its pagination metadata."""

    items: list[BookResponse]
    meta: Meta


def build_meta(query: ListQuery, total: int) -> Meta:
    return Meta(
        take=query.take,
        page=query.page,
        total=total,
        total_page=query.total_pages(total),
        filter=dict(query.filter) or None,
    )


class BookService:
    """
    Book operations on top of the two gateways.

    Args:
        store: Book persistence gateway
        bulk_reset: Gateway that clears all books atomically
    """

    def __init__(self, store: BookStore, bulk_reset: BulkReset) -> None:
        self.store = store
        self.bulk_reset = bulk_reset

    def _call(self, operation: str, fn: Callable[..., T], *args: Any) -> T:
        try:
            return fn(*args)
        except GatewayError as exc:
            logger.error(f"{operation} failed: {exc!r} (cause: {exc.__cause__!r})")
            raise UpstreamFailure() from exc

    @staticmethod
    def _require_id(book_id: int | None) -> int:
        if book_id is None or book_id <= 0:
            raise NotFound()
        return book_id

    def list_books(self, query: ListQuery) -> BookPage:
        """
        Count the matches, then fetch one page ordered by id descending.

        An empty page is a normal result, not an error.
        """
        total = self._call("count", self.store.count, query.filter)
        items = self._call(
            "find", self.store.find, query.filter, query.skip, query.take
        )
        return BookPage(items=items, meta=build_meta(query, total))

    def get_book(self, book_id: int | None) -> BookResponse:
        book_id = self._require_id(book_id)
        book = self._call("find_by_id", self.store.find_by_id, book_id)
        if book is None:
            raise NotFound()
        return book

    def create_book(self, payload: Any) -> BookResponse:
        data = validate_book_payload(payload)
        book = self._call("create", self.store.create, data.to_columns())
        logger.info(f"Created book {book.id}")
        return book

    def update_book(self, book_id: int | None, payload: Any) -> BookResponse:
        book_id = self._require_id(book_id)
        if not self._call("exists", self.store.exists, book_id):
            raise NotFound()
        data = validate_book_payload(payload)
        book = self._call("update", self.store.update, book_id, data.to_columns())
        # Deleted between the existence check and the update
        if book is None:
            raise NotFound()
        logger.info(f"Updated book {book_id}")
        return book

    def delete_book(self, book_id: int | None) -> BookResponse:
        book_id = self._require_id(book_id)
        if not self._call("exists", self.store.exists, book_id):
            raise NotFound()
        book = self._call("delete", self.store.delete, book_id)
        if book is None:
            raise NotFound()
        logger.info(f"Deleted book {book_id}")
        return book

    def delete_all_books(self) -> None:
        """Single atomic call; there is no partial success."""
        self._call("bulk reset", self.bulk_reset.reset)
