"""
Alembic Environment Configuration

The database URL comes from application settings (DATABASE_URL), not
from alembic.ini, so migrations always target the same database as the
API.

COMMANDS:
- alembic upgrade head      # Create the books table and reset procedure
- alembic downgrade -1      # Roll back one revision
- alembic current           # Show current revision
"""

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

from app.config import get_settings
from app.database import Base
from app.models import Book  # noqa: F401 - registers the books table

settings = get_settings()

config = context.config
config.set_main_option("sqlalchemy.url", settings.database_url)

# The reset procedure migration reads the procedure name from here
config.attributes.setdefault("bulk_reset_procedure", settings.bulk_reset_procedure)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """
    Emit SQL without connecting to the database.

    Usage:
        alembic upgrade head --sql > migration.sql
    """
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Connect and apply migrations directly."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
