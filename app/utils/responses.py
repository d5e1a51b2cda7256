"""
Response Envelope Builder

Every outcome of the books resource leaves through one of these helpers,
so the envelope shape is defined in exactly one place.

"meta" and "error" only appear when they carry something; "data" is
always present (null on failures and on delete-all).
"""

from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

from app.exceptions import BookAPIError, ValidationFailed
from app.schemas.envelope import AnyEnvelope, Meta, Violation

OPTIONAL_KEYS = ("meta", "error")


def build_envelope(
    *,
    success: bool,
    message: str,
    data: Any = None,
    meta: Meta | None = None,
    error: list[Violation] | None = None,
) -> dict[str, Any]:
    """Serialize an envelope to JSON-ready data with camelCase keys."""
    envelope = AnyEnvelope(
        status=success,
        message=message,
        data=data,
        meta=meta,
        error=error,
    )
    content = envelope.model_dump(mode="json", by_alias=True)
    for key in OPTIONAL_KEYS:
        if content[key] is None:
            del content[key]
    return content


def success_response(
    message: str,
    data: Any = None,
    *,
    meta: Meta | None = None,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=build_envelope(success=True, message=message, data=data, meta=meta),
    )


def failure_response(
    status_code: int,
    message: str,
    error: list[Violation] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=build_envelope(success=False, message=message, error=error),
    )


def error_response(exc: BookAPIError) -> JSONResponse:
    """Render a domain error; validation failures carry their violations."""
    error = exc.errors if isinstance(exc, ValidationFailed) else None
    return failure_response(exc.status_code, exc.message, error)
