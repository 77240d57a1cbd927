import os
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()


DATABASE_ENV_PRIORITY = (
    "INTERNAL_DATABASE_URL",
    "DATABASE_URL",
    "EXTERNAL_DATABASE_URL",
)


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def normalize_database_uri(uri: Optional[str]) -> Optional[str]:
    if not uri:
        return uri

    if uri.startswith("postgres://"):
        return "postgresql+psycopg2://" + uri[len("postgres://"):]

    if uri.startswith("postgresql://") and not uri.startswith("postgresql+psycopg2://"):
        return "postgresql+psycopg2://" + uri[len("postgresql://"):]

    return uri


def get_database_uri_from_env(default: Optional[str] = None) -> Tuple[Optional[str], Optional[str]]:
    for key in DATABASE_ENV_PRIORITY:
        value = os.getenv(key)
        if value:
            return normalize_database_uri(value), key

    if default is not None:
        return normalize_database_uri(default), "default"

    return None, None


DEFAULT_SQLITE_URI = "sqlite:///melba.db"
RESOLVED_DATABASE_URI, RESOLVED_DATABASE_SOURCE = get_database_uri_from_env(DEFAULT_SQLITE_URI)

PACKAGE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "melba")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev")
    SQLALCHEMY_DATABASE_URI = RESOLVED_DATABASE_URI or DEFAULT_SQLITE_URI
    SQLALCHEMY_DATABASE_URI_SOURCE = RESOLVED_DATABASE_SOURCE
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Stale connections are replaced transparently instead of surfacing as
    # ``OperationalError`` in the middle of a form submission.
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_recycle": int(os.getenv("SQLALCHEMY_POOL_RECYCLE", "280")),
        "pool_size": int(os.getenv("SQLALCHEMY_POOL_SIZE", "5")),
        "max_overflow": int(os.getenv("SQLALCHEMY_MAX_OVERFLOW", "5")),
    }
    AUTO_CREATE_TABLES = _env_flag("AUTO_CREATE_TABLES", True)

    ORGANIZATION_NAME = os.getenv("ORGANIZATION_NAME", "Melba Community Center")

    ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")
    ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH", "")

    MAIL_SERVER = os.getenv("MAIL_SERVER", os.getenv("EMAIL_HOST", ""))
    MAIL_PORT = int(os.getenv("MAIL_PORT", os.getenv("EMAIL_PORT", "587")))
    MAIL_USERNAME = os.getenv("MAIL_USERNAME", os.getenv("EMAIL_USER", ""))
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD", os.getenv("EMAIL_PASSWORD", ""))
    MAIL_USE_TLS = _env_flag("MAIL_USE_TLS", True)
    MAIL_USE_SSL = _env_flag("MAIL_USE_SSL", _env_flag("EMAIL_SECURE", False))
    MAIL_TIMEOUT = float(os.getenv("MAIL_TIMEOUT", "10"))
    MAIL_DEFAULT_SENDER = (
        os.getenv("MAIL_DEFAULT_SENDER")
        or os.getenv("EMAIL_FROM")
        or os.getenv("MAIL_USERNAME")
        or "no-reply@melba.local"
    )
    MAIL_ASYNC = _env_flag("MAIL_ASYNC", True)
    NOTIFY_EMAIL = os.getenv("NOTIFY_EMAIL", os.getenv("CONTACT_EMAIL", ""))

    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER") or os.path.join(PACKAGE_DIR, "static", "uploads")
    MAX_IMAGE_BYTES = int(os.getenv("MAX_IMAGE_BYTES", str(5 * 1024 * 1024)))
    # Leaves headroom for the other multipart fields sent alongside an image.
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(6 * 1024 * 1024)))

    SUBMISSION_RATE_LIMIT = os.getenv("SUBMISSION_RATE_LIMIT", "10 per minute")
    REDIS_URL = os.getenv("REDIS_URL", "")

    LOG_DIR = os.getenv("LOG_DIR", "logs")
