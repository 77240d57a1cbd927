"""Alembic entry point for the Melba schema.

The database URL comes from the same environment lookup the app uses
(``DATABASE_URL`` and its fallbacks, SQLite when none is set), so
``flask db upgrade`` and a bare ``alembic upgrade head`` hit the same DB.
"""

from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from config import DEFAULT_SQLITE_URI, get_database_uri_from_env
from melba.models import db

alembic_config = context.config
if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

melba_url, _source = get_database_uri_from_env(DEFAULT_SQLITE_URI)
alembic_config.set_main_option("sqlalchemy.url", melba_url)

# Importing melba.models registers every table on this metadata.
melba_metadata = db.Model.metadata


def _emit_sql_script() -> None:
    context.configure(url=melba_url, target_metadata=melba_metadata, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()


def _apply_to_database() -> None:
    engine = engine_from_config(
        alembic_config.get_section(alembic_config.config_ini_section),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with engine.connect() as connection:
        # Batch mode lets ALTER TABLE work on SQLite.
        context.configure(
            connection=connection, target_metadata=melba_metadata, render_as_batch=True
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    _emit_sql_script()
else:
    _apply_to_database()
