import logging
from logging.handlers import RotatingFileHandler

from melba.utils.logger import configure_logging


def test_configure_logging_writes_rotating_file(tmp_path):
    log_file = configure_logging(str(tmp_path / "logs"))

    logging.getLogger("melba.test").info("[BOOT] hello")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert log_file == tmp_path / "logs" / "melba.log"
    assert "[BOOT] hello" in log_file.read_text(encoding="utf-8")


def test_configure_logging_is_idempotent_per_directory(tmp_path):
    configure_logging(str(tmp_path / "a"))
    handlers = list(logging.getLogger().handlers)

    configure_logging(str(tmp_path / "a"))
    assert logging.getLogger().handlers == handlers

    configure_logging(str(tmp_path / "b"))
    rotating = [h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]
    assert len(rotating) == 1
    assert rotating[0].baseFilename == str(tmp_path / "b" / "melba.log")
