import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")

import bcrypt
import pytest
from sqlalchemy.pool import StaticPool

from melba import create_app
from melba.errors import NotificationFault
from melba.models import db
from melba.services.email_service import OutboxTransport

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct-horse-battery"
# Low cost factor keeps the login tests fast.
ADMIN_PASSWORD_HASH = bcrypt.hashpw(ADMIN_PASSWORD.encode(), bcrypt.gensalt(rounds=4)).decode()
NOTIFY_EMAIL = "team@melba.test"


class FailingTransport:
    """Mail transport whose every delivery fails."""

    def __init__(self):
        self.attempts = 0

    def send(self, message):
        self.attempts += 1
        raise NotificationFault("SMTP server unreachable")


def build_app(tmp_path, transport=None, **overrides):
    config = {
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "SQLALCHEMY_ENGINE_OPTIONS": {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        },
        "AUTO_CREATE_TABLES": False,
        "RATELIMIT_ENABLED": False,
        "LOG_DIR": str(tmp_path / "logs"),
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        "ADMIN_USERNAME": ADMIN_USERNAME,
        "ADMIN_PASSWORD_HASH": ADMIN_PASSWORD_HASH,
        "MAIL_SERVER": "",
        "MAIL_ASYNC": False,
        "MAIL_DEFAULT_SENDER": "no-reply@melba.test",
        "NOTIFY_EMAIL": NOTIFY_EMAIL,
        "ORGANIZATION_NAME": "Melba Community Center",
    }
    config.update(overrides)
    app = create_app(config, mail_transport=transport)
    with app.app_context():
        db.create_all()
    return app


@pytest.fixture()
def outbox():
    return OutboxTransport()


@pytest.fixture()
def app(tmp_path, outbox):
    app = build_app(tmp_path, outbox)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def admin_client(client):
    response = client.post(
        "/admin/login", data={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 302
    return client


@pytest.fixture()
def upload_dir(app):
    return app.config["UPLOAD_FOLDER"]
