"""Custom Flask CLI commands."""

from __future__ import annotations

import click
from flask import Flask, current_app
from sqlalchemy.exc import SQLAlchemyError

from .models import db
from .utils.auth import hash_password


def register_cli_commands(app: Flask) -> None:
    """Register application specific CLI commands."""

    @app.cli.command("init-db")
    def init_db_command() -> None:
        """Create every table that does not exist yet."""

        try:
            db.create_all()
        except SQLAlchemyError as exc:
            current_app.logger.exception("init-db failed")
            raise click.ClickException(str(exc)) from exc
        click.echo("Database tables created.")

    @app.cli.command("hash-password")
    @click.argument("password")
    def hash_password_command(password: str) -> None:
        """Print a bcrypt hash suitable for ADMIN_PASSWORD_HASH."""

        if len(password) < 8:
            raise click.ClickException("Use a password with at least 8 characters.")
        click.echo(hash_password(password))
