#!/usr/bin/env python3
"""Deployment entrypoint: apply migrations, then hand over to gunicorn."""

from __future__ import annotations

import logging
import os
import sys

from melba import create_app
from melba.bootstrap import init_db
from melba.utils.logger import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    configure_logging(os.getenv("LOG_DIR", "logs"))
    logger.info("Starting Melba website deployment...")

    try:
        app = create_app()
    except Exception:
        logger.exception("Failed to create Flask application during startup")
        sys.exit(1)

    if not init_db(app):
        logger.warning("[BOOT] Proceeding with startup after migration fallback")

    os.makedirs(app.config["UPLOAD_FOLDER"], exist_ok=True)

    port = os.environ.get("PORT", "5000")
    workers = os.environ.get("WEB_CONCURRENCY", "2")

    cmd = [
        "gunicorn",
        "-w",
        str(workers),
        "-k",
        "gthread",
        "-b",
        f"0.0.0.0:{port}",
        "wsgi:app",
    ]

    logger.info("Starting gunicorn with command: %s", " ".join(cmd))
    os.execvp("gunicorn", cmd)


if __name__ == "__main__":  # pragma: no cover - script entry point
    main()
