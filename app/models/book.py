"""
Book Model

The only persisted entity of the Books API.

Rows are created, changed and removed exclusively through the book store
gateway (app.services.book_store). The bulk reset gateway clears the whole
table through a stored procedure (see the Alembic migrations).
"""

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Book(Base):
    """
    Book model representing books in the library.

    Table: books

    Fields:
    - title: Book title (required, up to 50 characters)
    - author: Author name (required, up to 50 characters)
    - desc: Short description (optional, up to 255 characters)
    - created_at / updated_at: Managed by the database unless the client
      supplies them on write

    Indexes:
    - Primary key on id (automatic)
    - title, author: Indexes for substring filtering

    Example:
        book = Book(title="Dune", author="Frank Herbert", desc="Desert planet")
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[int] = mapped_column(primary_key=True)

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(50),
        index=True,
        nullable=False,
        comment="Book title"
    )

    author: Mapped[str] = mapped_column(
        String(50),
        index=True,
        nullable=False,
        comment="Author name"
    )

    # "desc" is an SQL keyword; SQLAlchemy quotes it in generated statements
    desc: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Short description"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', author='{self.author}')"
