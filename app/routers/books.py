"""
Books Router

The single books resource at /api/{version}/books.

Dispatch is keyed on the HTTP method and on which scope parameters are
present in the query string:

    GET     id present      -> detail
    GET     id absent       -> list (take, page, title, author, desc)
    POST                    -> create
    PUT     id              -> update
    DELETE  delete=all      -> delete every book
    DELETE  delete=<other>  -> 400 unsupported action
    DELETE  id              -> delete one book
    other methods           -> 404 bad route

Handlers raise the errors from app.exceptions; the handlers registered in
app.main turn them into envelopes.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, status
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.dependencies import Books, RawQuery
from app.exceptions import NotFound, UnsupportedAction
from app.schemas import AnyEnvelope, BookResponse, Envelope
from app.services.query import first_value, normalize_list_query, parse_book_id
from app.utils.responses import success_response

logger = logging.getLogger(__name__)

settings = get_settings()

DELETE_ALL = "all"

# Request body for create/update, validated by BookService
BookBody = Annotated[
    Any,
    Body(
        description="Book payload",
        examples=[{"title": "Dune", "author": "Frank Herbert", "desc": "Spice"}],
    ),
]

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        404: {"model": AnyEnvelope, "description": "Book not found"},
        500: {"model": AnyEnvelope, "description": "Internal server error"},
    },
)


@router.get(
    "",
    summary="List books or get one book",
    description=(
        "Without `id`: paginated list filtered by `title`, `author` and "
        "`desc` (case-insensitive substring), `take` (max 20) and `page`. "
        "With `id`: the book with that id."
    ),
    responses={
        200: {"model": Envelope[list[BookResponse]]},
    },
)
def read_books(books: Books, params: RawQuery) -> JSONResponse:
    """
    List books, or fetch one when the id parameter is present.

    Once id is present the request is a detail request, even when id is 0
    or malformed (that is a 404, never a list).
    """
    if "id" in params:
        book = books.get_book(parse_book_id(params))
        return success_response("success get detail book", book)

    query = normalize_list_query(
        params,
        default_take=settings.list_default_take,
        max_take=settings.list_max_take,
    )
    page = books.list_books(query)
    return success_response("success get list of book", page.items, meta=page.meta)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a book",
    responses={
        201: {"model": Envelope[BookResponse]},
        422: {"model": AnyEnvelope, "description": "Validation failed"},
    },
)
def create_book(books: Books, payload: BookBody = None) -> JSONResponse:
    """Validate the payload, then create the book (201 Created)."""
    book = books.create_book(payload)
    return success_response(
        "success create a book", book, status_code=status.HTTP_201_CREATED
    )


@router.put(
    "",
    summary="Update a book",
    description="Replace the editable fields of the book given by `id`.",
    responses={
        200: {"model": Envelope[BookResponse]},
        422: {"model": AnyEnvelope, "description": "Validation failed"},
    },
)
def update_book(books: Books, params: RawQuery, payload: BookBody = None) -> JSONResponse:
    """
    Update a book.

    The id and the book's existence are checked before the payload is
    validated, so an unknown id is always a 404.
    """
    book = books.update_book(parse_book_id(params), payload)
    return success_response("success update a book detail", book)


@router.delete(
    "",
    summary="Delete one book or all books",
    description="`?id=<int>` deletes one book, `?delete=all` deletes every book.",
    responses={
        200: {"model": Envelope[BookResponse]},
        400: {"model": AnyEnvelope, "description": "Unsupported delete action"},
    },
)
def delete_books(books: Books, params: RawQuery) -> JSONResponse:
    """
    Delete one book, or every book with delete=all.

    Any other non-empty delete value is rejected before a gateway is
    touched. An empty delete value is ignored.
    """
    scope = first_value(params, "delete")
    if scope:
        if scope != DELETE_ALL:
            logger.info(f"Rejected delete scope {scope!r}")
            raise UnsupportedAction()
        books.delete_all_books()
        return success_response("success delete all book", None)

    book = books.delete_book(parse_book_id(params))
    return success_response("success delete book", book)


@router.api_route(
    "",
    methods=["PATCH", "HEAD", "OPTIONS"],
    include_in_schema=False,
)
def bad_route() -> None:
    """Methods the resource does not support."""
    raise NotFound("bad route")
