"""
Error Taxonomy

Domain errors raised by the book service and rendered into the response
envelope by the exception handlers registered in app.main.

    BookAPIError
    ├── NotFound           404  missing id, missing book, unknown route
    ├── UnsupportedAction  400  unrecognised delete scope
    ├── ValidationFailed   422  payload violates field rules
    └── UpstreamFailure    500  store or bulk reset call failed

GatewayError is raised by the gateways themselves and never reaches a
client directly: BookService converts it into UpstreamFailure.
"""

from fastapi import status

from app.schemas.envelope import Violation


class BookAPIError(Exception):
    """Base class for errors that map to an envelope response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NotFound(BookAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "book not found"


class UnsupportedAction(BookAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "unsupported delete action"


class ValidationFailed(BookAPIError):
    """Carries every violation found, not just the first."""

    status_code = 422  # Unprocessable Content
    message = "validation failed"

    def __init__(self, errors: list[Violation], message: str | None = None) -> None:
        self.errors = errors
        super().__init__(message)


class UpstreamFailure(BookAPIError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "internal server error"


class GatewayError(Exception):
    """A store or bulk reset call failed. The cause is chained."""
