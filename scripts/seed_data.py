#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample books for development.

USAGE:
    # From the project root with the virtualenv activated
    python scripts/seed_data.py

    # Keep existing rows
    python scripts/seed_data.py --keep

On PostgreSQL, run `alembic upgrade head` first: the clear step calls the
reset_books() procedure, which only the migrations create. When the books
table does not exist yet it is created here and there is nothing to clear.

This script:
1. Connects to the database using app settings
2. Clears existing books through the bulk reset gateway (optional)
3. Creates sample books through the book store gateway
"""

import argparse
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import Engine, inspect
from sqlalchemy.orm import sessionmaker

from app.config import get_settings
from app.database import SessionLocal, create_tables, engine
from app.services.book_store import SQLAlchemyBookStore
from app.services.bulk_reset import StoredProcedureBulkReset
from app.services.validation import validate_book_payload

BOOKS_DATA = [
    {"title": "1984", "author": "George Orwell", "desc": "Life under constant surveillance"},
    {"title": "Animal Farm", "author": "George Orwell", "desc": "An allegory of revolution"},
    {"title": "Pride and Prejudice", "author": "Jane Austen"},
    {"title": "The Old Man and the Sea", "author": "Ernest Hemingway"},
    {"title": "Murder on the Orient Express", "author": "Agatha Christie", "desc": "A murder on a snowbound train"},
    {"title": "Foundation", "author": "Isaac Asimov", "desc": "The fall of the Galactic Empire"},
    {"title": "I Robot", "author": "Isaac Asimov", "desc": "Nine stories about robots"},
    {"title": "The Hobbit", "author": "J R R Tolkien", "desc": "There and back again"},
    {"title": "Dune", "author": "Frank Herbert", "desc": "Spice and sandworms on Arrakis"},
    {"title": "Dune Messiah", "author": "Frank Herbert"},
    {"title": "Children of Dune", "author": "Frank Herbert"},
    {"title": "Neuromancer", "author": "William Gibson", "desc": "The sky above the port"},
]


def seed_database(
    clear_existing: bool = True,
    bind: Engine = engine,
    session_factory: sessionmaker = SessionLocal,
) -> None:
    """
    Seed the database.

    Every sample goes through the same validation as the API, so the
    seed data always satisfies the field rules.

    Args:
        clear_existing: If True, clears existing books before seeding.
        bind: Engine the books table lives on
        session_factory: Session factory for the gateways
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    # A freshly created table is empty, and has no reset procedure yet
    fresh = not inspect(bind).has_table("books")
    create_tables(bind)

    settings = get_settings()
    store = SQLAlchemyBookStore(session_factory)

    if clear_existing and not fresh:
        print("Clearing existing books...")
        StoredProcedureBulkReset(session_factory, settings.bulk_reset_procedure).reset()

    created = []
    for data in BOOKS_DATA:
        payload = validate_book_payload(data)
        created.append(store.create(payload.to_columns()))

    print("=" * 60)
    print("Database seeding completed successfully!")
    print("=" * 60)
    print(f"\nSummary:")
    print(f"  - Books: {len(created)}")
    print(f"\nYou can now access the API at http://localhost:{settings.port}")
    print(f"API documentation at http://localhost:{settings.port}/docs")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the books database")
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Keep existing books instead of clearing them first",
    )
    args = parser.parse_args()
    seed_database(clear_existing=not args.keep)
