"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.

WHY Dependency Injection?
=========================
1. Reusability: Write once, use in many routes
2. Testing: Override with app.dependency_overrides in tests
3. Separation of Concerns: Routes focus on dispatch, not wiring

The gateways are built once by the application factory and kept on
app.state; these dependencies hand them to the routes. Tests replace
get_book_store / get_bulk_reset to point at a test database or a mock.
"""

from typing import Annotated

from fastapi import Depends, Request
from starlette.datastructures import QueryParams

from app.services.book_store import BookStore
from app.services.books import BookService
from app.services.bulk_reset import BulkReset


def get_book_store(request: Request) -> BookStore:
    """The process-wide book store gateway."""
    return request.app.state.book_store


def get_bulk_reset(request: Request) -> BulkReset:
    """The process-wide bulk reset gateway."""
    return request.app.state.bulk_reset


def get_book_service(
    store: Annotated[BookStore, Depends(get_book_store)],
    bulk_reset: Annotated[BulkReset, Depends(get_bulk_reset)],
) -> BookService:
    """
    Book service for the current request.

    BookService is stateless, so building one per request is cheap and
    keeps the gateways swappable through dependency overrides.
    """
    return BookService(store, bulk_reset)


def get_query_params(request: Request) -> QueryParams:
    """
    Raw query parameters.

    The books resource dispatches on whether a parameter is present at
    all (id, delete) and keeps the first of repeated values, which
    declared Query() parameters cannot express.
    """
    return request.query_params


# Type aliases for cleaner route signatures
Books = Annotated[BookService, Depends(get_book_service)]
RawQuery = Annotated[QueryParams, Depends(get_query_params)]
