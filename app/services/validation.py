"""
Book Payload Validation

Checks a create/update body against BookPayload and reports every
violation at once. Nothing here touches storage.
"""

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from app.exceptions import ValidationFailed
from app.schemas.book import BookPayload
from app.schemas.envelope import Violation

logger = logging.getLogger(__name__)


def violations_from_errors(
    errors: Sequence[Any],
    skip_prefix: tuple[str, ...] = (),
) -> list[Violation]:
    """
    Convert pydantic/FastAPI error dicts into Violations.

    loc entries are joined with dots after dropping skip_prefix
    (FastAPI prefixes body errors with "body"). An empty loc refers to
    the body as a whole.
    """
    violations = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if skip_prefix and tuple(loc[: len(skip_prefix)]) == skip_prefix:
            loc = loc[len(skip_prefix):]
        violations.append(
            Violation(
                field=".".join(loc) or "body",
                message=error.get("msg", "invalid value"),
            )
        )
    return violations


def validate_book_payload(payload: Any) -> BookPayload:
    """
    Validate a create/update payload.

    Args:
        payload: Decoded JSON body (None when the body was empty)

    Returns:
        The validated BookPayload

    Raises:
        ValidationFailed: With every violation found
    """
    if payload is None:
        raise ValidationFailed([Violation(field="body", message="request body is required")])

    try:
        return BookPayload.model_validate(payload)
    except ValidationError as exc:
        violations = violations_from_errors(exc.errors())
        logger.info(f"Book payload rejected: {[v.field for v in violations]}")
        raise ValidationFailed(violations) from exc
