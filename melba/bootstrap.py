"""Startup helpers that prepare the database before serving traffic."""

from __future__ import annotations

import logging
from pathlib import Path

from flask import Flask
from flask_migrate import upgrade as migrate_upgrade
from sqlalchemy.exc import SQLAlchemyError

from .models import db

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"


def _migrations_directory(app: Flask) -> Path:
    configured = app.config.get("MIGRATIONS_DIR")
    return Path(configured) if configured else MIGRATIONS_DIR


def _create_tables(app: Flask) -> bool:
    try:
        with app.app_context():
            db.create_all()
    except SQLAlchemyError:
        app.logger.exception("[BOOT] create_all failed")
        return False
    app.logger.info("[BOOT] Tables ensured with create_all")
    return True


def init_db(app: Flask) -> bool:
    """Apply pending migrations; return ``False`` when the fallback was used."""

    migrations_dir = _migrations_directory(app)
    if not (migrations_dir / "env.py").exists():
        app.logger.warning(
            "[BOOT] No migration repository at %s; creating tables directly", migrations_dir
        )
        _create_tables(app)
        return False

    app.logger.info("[BOOT] Running database migrations (upgrade head)...")
    try:
        with app.app_context():
            migrate_upgrade(directory=str(migrations_dir))
    except Exception as exc:
        app.logger.exception("[BOOT] Database migration failed: %s", exc)
        _create_tables(app)
        return False
    app.logger.info("[BOOT] Alembic upgrade head OK")
    return True
