"""add_reset_books_procedure

Revision ID: 8b4e6d0c5a12
Revises: 3f1a9c2d7e01
Create Date: 2026-10-17 09:30:00.000000

Server-side procedure behind DELETE /api/v1/books?delete=all.
TRUNCATE runs inside the caller's transaction, so the reset either
fully happens or leaves the table untouched. PostgreSQL only.
"""
from typing import Sequence, Union

from alembic import context, op


# revision identifiers, used by Alembic.
revision: str = '8b4e6d0c5a12'
down_revision: Union[str, None] = '3f1a9c2d7e01'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _procedure() -> str:
    return context.config.attributes.get("bulk_reset_procedure", "reset_books")


def upgrade() -> None:
    if op.get_context().dialect.name != 'postgresql':
        return
    op.execute(
        f"""
        CREATE OR REPLACE PROCEDURE {_procedure()}()
        LANGUAGE plpgsql
        AS $$
        BEGIN
            TRUNCATE TABLE books RESTART IDENTITY;
        END;
        $$;
        """
    )


def downgrade() -> None:
    if op.get_context().dialect.name != 'postgresql':
        return
    op.execute(f"DROP PROCEDURE IF EXISTS {_procedure()}()")
