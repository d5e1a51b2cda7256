"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the Books API.

We're using SYNCHRONOUS SQLAlchemy:
- Simpler to understand and debug
- PostgreSQL with psycopg2 is battle-tested
- FastAPI runs sync route handlers in a threadpool

Session Management Pattern
==========================
The engine and the session factory are created once per process.
The gateways in app.services receive the session factory and open one
short-lived session per call:
1. Gateway call starts → create a new session and begin a transaction
2. Run the statements
3. Commit on success, rollback on failure
4. Close the session
"""

from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.config import get_settings

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# Key parameters:
# - pool_size: Number of connections to keep open permanently
# - max_overflow: How many extra connections can be created during high load
# - pool_pre_ping: Test connection health before using (prevents stale connections)
# - echo: Log all SQL statements (useful for debugging, disable in production)

def _engine_options() -> dict[str, Any]:
    """SQLite engines reject pool sizing arguments."""
    if settings.is_sqlite:
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": True,
    }


engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    **_engine_options(),
)


# =============================================================================
# Session Factory
# =============================================================================
# - autoflush=False: Don't auto-flush before queries (more predictable behavior)
# - expire_on_commit=False: Rows stay readable after the gateway commits,
#   so they can be converted to response schemas once the session is closed

SessionLocal = sessionmaker(
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover models for migrations.
    """
    pass


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables(bind: Engine = engine) -> None:
    """
    Create all database tables.

    WARNING: In production, use Alembic migrations instead!
    This does not create the reset_books() procedure.
    """
    Base.metadata.create_all(bind=bind)


def drop_tables(bind: Engine = engine) -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data! Only use in development and tests.
    """
    Base.metadata.drop_all(bind=bind)
