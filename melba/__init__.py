from flask import Flask, g, jsonify, render_template, request
from werkzeug.middleware.proxy_fix import ProxyFix  # Ensure proxy headers are honored for HTTPS redirects
import os
import sys
import warnings
from datetime import datetime
from time import perf_counter
from urllib.parse import urlparse, urlunparse

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool, StaticPool

from config import Config
from .cli import register_cli_commands
from .extensions import compress, limiter, login_manager, migrate
from .models import db
from .routes.admin import bp as admin_bp
from .routes.forms import bp as forms_bp
from .routes.main import bp as main_bp
from .security import init_security
from .services.email_service import init_email
from .utils.auth import init_admin_credentials, load_admin
from .utils.csrf import generate_csrf_token
from .utils.logger import configure_logging


SLOW_REQUEST_THRESHOLD_MS = 300


def _mask_database_uri(uri: str) -> str:
    try:
        parsed = urlparse(uri)
        if parsed.password:
            netloc = parsed.netloc.replace(parsed.password, "***")
            parsed = parsed._replace(netloc=netloc)
        return urlunparse(parsed)
    except ValueError:
        return "<unavailable>"


def _engine_options(app: Flask) -> dict:
    engine_defaults = {
        "pool_size": 5,
        "max_overflow": 5,
        "pool_pre_ping": True,
        "pool_recycle": 280,
    }
    engine_defaults.update(dict(app.config.get("SQLALCHEMY_ENGINE_OPTIONS", {})))

    database_uri = app.config.get("SQLALCHEMY_DATABASE_URI", "") or ""
    if database_uri.startswith("sqlite"):
        # SQLite (especially :memory:) does not accept pool sizing parameters.
        for key in ("pool_size", "max_overflow", "pool_recycle"):
            engine_defaults.pop(key, None)

    poolclass = engine_defaults.get("poolclass")
    if poolclass:
        try:
            is_static_pool = issubclass(poolclass, StaticPool)
            is_queue_pool = issubclass(poolclass, QueuePool)
        except TypeError:
            is_static_pool = False
            is_queue_pool = False

        if is_static_pool:
            # StaticPool does not accept queue sizing parameters.
            for key in ("pool_size", "max_overflow", "pool_recycle"):
                engine_defaults.pop(key, None)
        elif not is_queue_pool:
            engine_defaults.pop("pool_size", None)
            engine_defaults.pop("max_overflow", None)
    return engine_defaults


def _wants_json() -> bool:
    return request.path.startswith("/api/") or request.path.startswith("/admin/api/") or request.is_json


def create_app(config_overrides: dict | None = None, mail_transport=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    log_file = configure_logging(app.config.get("LOG_DIR"))
    app.logger.info("[BOOT] Logging configured. Writing to %s", log_file)

    warnings.filterwarnings("ignore", message="Using the in-memory storage")

    app_env = (
        os.getenv("APP_ENV")
        or app.config.get("APP_ENV")
        or os.getenv("FLASK_ENV")
        or "development"
    ).lower()
    app.config["APP_ENV"] = app_env
    production = app_env == "production" and not app.config.get("TESTING")

    secret_key = app.config.get("SECRET_KEY")
    if app.config.get("TESTING"):
        if not secret_key or secret_key in {"dev", "change-me"}:
            app.config["SECRET_KEY"] = "test-secret-key"
    elif production:
        normalized_secret = secret_key if isinstance(secret_key, str) else str(secret_key or "")
        if len(normalized_secret) < 32 or normalized_secret in {"dev", "change-me"}:
            app.logger.critical(
                "[BOOT] SECRET_KEY missing or too short. Provide a value with at least 32 characters."
            )
            sys.exit(1)
    else:
        if not secret_key or secret_key in {"dev", "change-me", ""}:
            app.config["SECRET_KEY"] = "dev-secret-key"
            app.logger.warning(
                "[BOOT] SECRET_KEY not provided; using development fallback. Do not use in production."
            )

    app.config.setdefault("SESSION_COOKIE_HTTPONLY", True)
    app.config.setdefault("SESSION_COOKIE_SAMESITE", "Lax")
    app.config["SESSION_COOKIE_SECURE"] = production
    app.config.setdefault("COMPRESS_ALGORITHM", ["br", "gzip"])
    app.config.setdefault("RATELIMIT_STORAGE_URI", app.config.get("REDIS_URL") or "memory://")
    app.config["START_TIME"] = datetime.utcnow()

    app.logger.info(
        "[BOOT] SQLALCHEMY_DATABASE_URI=%s",
        _mask_database_uri(app.config.get("SQLALCHEMY_DATABASE_URI") or ""),
    )
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["SQLALCHEMY_ENGINE_OPTIONS"] = _engine_options(app)

    app.jinja_env.globals["csrf_token"] = generate_csrf_token

    @app.context_processor
    def inject_site_defaults():
        return {
            "organization_name": app.config.get("ORGANIZATION_NAME"),
            "current_year": datetime.utcnow().year,
        }

    # Honor X-Forwarded-* from the reverse proxy
    app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)  # type: ignore[attr-defined]

    db.init_app(app)
    migrate.init_app(app, db)
    compress.init_app(app)
    limiter.init_app(app)

    login_manager.init_app(app)
    login_manager.login_view = "admin.login"
    login_manager.session_protection = "strong"
    login_manager.user_loader(load_admin)

    init_admin_credentials(app)
    init_email(app, mail_transport)
    init_security(app, production)

    app.register_blueprint(main_bp)
    app.register_blueprint(forms_bp)
    app.register_blueprint(admin_bp, url_prefix="/admin")
    register_cli_commands(app)

    if app.config.get("AUTO_CREATE_TABLES"):
        with app.app_context():
            try:
                db.create_all()
            except SQLAlchemyError:
                app.logger.exception("[BOOT] Automatic table creation failed")

    @app.before_request
    def start_request_timer():  # pragma: no cover - tiny helper
        g._request_started_at = perf_counter()

    @app.after_request
    def finalize_response(response):  # pragma: no cover - thin instrumentation
        started_at = getattr(g, "_request_started_at", None)
        if started_at is not None:
            elapsed_ms = (perf_counter() - started_at) * 1000
            if elapsed_ms > SLOW_REQUEST_THRESHOLD_MS:
                app.logger.warning(
                    "[SLOW] %s %s took %.1f ms", request.method, request.path, elapsed_ms
                )
        if request.path.startswith("/static/"):
            response.headers.setdefault(
                "Cache-Control", "public, max-age=604800, immutable"
            )
        return response

    @app.errorhandler(404)
    def render_not_found(error):
        if _wants_json():
            return jsonify({"success": False, "message": "Not found."}), 404
        return render_template("errors/404.html", page_title="Page not found"), 404

    @app.errorhandler(429)
    def render_rate_limited(error):
        return (
            jsonify({"success": False, "message": "Too many submissions. Please try again in a minute."}),
            429,
        )

    @app.errorhandler(500)
    def render_internal_error(error):  # pragma: no cover - presentation only
        app.logger.exception("[500] Internal server error")
        if _wants_json():
            return jsonify({"success": False, "message": "Server error. Please try again later."}), 500
        return render_template("errors/500.html", page_title="Something went wrong"), 500

    app.logger.info("[BOOT] %s ready (env=%s)", app.config.get("ORGANIZATION_NAME"), app_env)
    return app
