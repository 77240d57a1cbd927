import bcrypt
from sqlalchemy import inspect

from melba.models import db


def test_hash_password_prints_bcrypt_hash(app):
    result = app.test_cli_runner().invoke(args=["hash-password", "long-enough-secret"])

    assert result.exit_code == 0
    hashed = result.output.strip()
    assert bcrypt.checkpw(b"long-enough-secret", hashed.encode())


def test_hash_password_rejects_short_passwords(app):
    result = app.test_cli_runner().invoke(args=["hash-password", "short"])

    assert result.exit_code != 0
    assert "at least 8 characters" in result.output


def test_init_db_creates_tables(app):
    with app.app_context():
        db.drop_all()

    result = app.test_cli_runner().invoke(args=["init-db"])

    assert result.exit_code == 0
    assert "Database tables created." in result.output
    with app.app_context():
        assert "contact_submissions" in inspect(db.engine).get_table_names()
