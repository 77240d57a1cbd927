"""Process-wide logging setup for the web app, CLI and startup script."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


MESSAGE_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
LOG_FILE_NAME = "melba.log"
ROTATE_AT_BYTES = 5 * 1024 * 1024
KEEP_ROTATED_FILES = 5

_active_log_file: Optional[Path] = None


def _handlers_for(log_file: Path) -> list[logging.Handler]:
    formatter = logging.Formatter(MESSAGE_FORMAT)
    console = logging.StreamHandler()
    rotating = RotatingFileHandler(
        log_file, maxBytes=ROTATE_AT_BYTES, backupCount=KEEP_ROTATED_FILES, encoding="utf-8"
    )
    for handler in (console, rotating):
        handler.setFormatter(formatter)
    return [console, rotating]


def configure_logging(log_dir: Optional[str] = None, level: int = logging.INFO) -> Path:
    """Send root logging to stderr and to ``<log_dir>/melba.log``.

    Calling again with the same directory is a no-op; a new directory
    replaces the handlers installed earlier.
    """

    global _active_log_file

    log_file = Path(log_dir or "logs") / LOG_FILE_NAME
    if _active_log_file == log_file:
        return log_file

    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    for stale in list(root.handlers):
        root.removeHandler(stale)
        stale.close()
    for handler in _handlers_for(log_file):
        root.addHandler(handler)
    root.setLevel(level)

    _active_log_file = log_file
    return log_file
