"""
Bulk Reset Gateway

Clears every book in one atomic call.

On PostgreSQL this calls a server-side procedure (created by the Alembic
migration) that truncates the table and restarts its identity inside a
single transaction. Databases without stored procedures (SQLite in
development and tests) get an equivalent single DELETE statement instead.
Either way the reset is all-or-nothing: if it fails, the table is
untouched.
"""

import logging
from collections.abc import Callable
from typing import Protocol

from sqlalchemy import delete, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import GatewayError
from app.models import Book

logger = logging.getLogger(__name__)


class BulkReset(Protocol):
    """Atomic "clear all books" side channel."""

    def reset(self) -> None: ...


class StoredProcedureBulkReset:
    """
    BulkReset backed by a named stored procedure.

    Args:
        session_factory: Callable returning a new Session
        procedure: Name of the procedure, already validated as a plain
            identifier by Settings
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        procedure: str = "reset_books",
    ) -> None:
        self._session_factory = session_factory
        self.procedure = procedure

    def reset(self) -> None:
        logger.warning(f"Resetting all books via {self.procedure}()")
        try:
            with self._session_factory() as session, session.begin():
                if session.get_bind().dialect.name == "postgresql":
                    session.execute(text(f"CALL {self.procedure}()"))
                else:
                    session.execute(delete(Book))
        except SQLAlchemyError as exc:
            logger.error(f"Bulk reset {self.procedure}() failed: {exc}")
            raise GatewayError("bulk reset failed") from exc
