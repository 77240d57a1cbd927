"""Admin session helpers.

The back office has one shared credential: ``ADMIN_USERNAME`` plus a bcrypt
hash (``ADMIN_PASSWORD_HASH``, or a hash of ``ADMIN_PASSWORD`` computed at
startup). Flask-Login keeps the session.
"""

from functools import wraps
import hmac

import bcrypt
from flask import current_app, flash, redirect, request, url_for
from flask_login import UserMixin, current_user

ADMIN_USER_ID = "admin"


class AdminUser(UserMixin):
    id = ADMIN_USER_ID

    def __init__(self, username: str):
        self.username = username

    def get_id(self):
        return ADMIN_USER_ID


def hash_password(plain: str) -> str:
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(plain.encode(), salt).decode()


def check_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode(), hashed.encode())
    except ValueError:
        current_app.logger.error("[AUTH] ADMIN_PASSWORD_HASH is not a valid bcrypt hash")
        return False


def init_admin_credentials(app) -> None:
    """Resolve the admin password hash once at startup."""

    if app.config.get("ADMIN_PASSWORD_HASH"):
        return
    plain = app.config.get("ADMIN_PASSWORD")
    if plain:
        app.config["ADMIN_PASSWORD_HASH"] = hash_password(plain)
    else:
        app.logger.warning(
            "[BOOT] ADMIN_PASSWORD_HASH and ADMIN_PASSWORD are unset; admin login is disabled"
        )


def authenticate(username: str | None, password: str | None) -> bool:
    expected_username = current_app.config.get("ADMIN_USERNAME") or ""
    password_hash = current_app.config.get("ADMIN_PASSWORD_HASH") or ""
    if not username or not password or not password_hash:
        current_app.logger.info("[AUTH] login rejected: missing credentials")
        return False

    username_ok = hmac.compare_digest(username.encode(), expected_username.encode())
    password_ok = check_password(password, password_hash)
    if username_ok and password_ok:
        current_app.logger.info("[AUTH] admin login for %s", username)
        return True
    current_app.logger.warning(
        "[AUTH] failed admin login. username=%s remote=%s", username, request.remote_addr
    )
    return False


def load_admin(user_id):
    if user_id != ADMIN_USER_ID:
        return None
    return AdminUser(current_app.config.get("ADMIN_USERNAME") or ADMIN_USER_ID)


def admin_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            current_app.logger.info(
                "[AUTH] admin_required redirect. endpoint=%s path=%s",
                request.endpoint,
                request.path,
            )
            flash("Please log in to access this page.", "error")
            return redirect(url_for("admin.login", next=request.full_path.rstrip("?")))
        return f(*args, **kwargs)
    return decorated_function


def no_cache(response):
    response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
    response.headers["Pragma"] = "no-cache"
    response.headers["Expires"] = "0"
    return response
