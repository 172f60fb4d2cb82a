"""
Logging for the cookie decoder.

Every module logs through a child of the ``cookiesifter`` logger
(``get_logger("extractors.browser.safari.cookies.decoder")`` and so on), so
one call to :func:`configure_logging` routes the whole decoder to a rotating
``decode.log`` and, optionally, to stderr. Sizes and level come from the
``logging:`` section of ``config/config.yml`` via :class:`LoggingConfig`.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from logging import Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config import LoggingConfig

LOG_FILE_NAME = "decode.log"
ROOT_LOGGER_NAME = "cookiesifter"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_BYTES_PER_MB = 1024 * 1024


class UtcFormatter(logging.Formatter):
    """Stamps records as ``2025-01-01T00:00:00Z`` regardless of host timezone."""

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        if datefmt:
            return stamp.strftime(datefmt)
        return stamp.strftime("%Y-%m-%dT%H:%M:%SZ")


def _drop_handlers(logger: Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def configure_logging(
    log_dir: Path,
    config: Optional[LoggingConfig] = None,
    *,
    console: bool = True,
) -> Logger:
    """
    Route the ``cookiesifter`` logger tree to ``log_dir/decode.log``.

    Calling this again replaces the previous handlers, so a second decode
    run with a different log directory does not write to both.

    Args:
        log_dir: Directory for the log file (created if missing)
        config: Level, file size and backup count; defaults to LoggingConfig()
        console: Also log to stderr

    Returns:
        The configured ``cookiesifter`` logger
    """
    config = config or LoggingConfig()

    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILE_NAME
    formatter = UtcFormatter(fmt=LOG_FORMAT)

    app_logger = logging.getLogger(ROOT_LOGGER_NAME)
    app_logger.setLevel(config.level.upper())
    _drop_handlers(app_logger)

    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=config.log_max_mb * _BYTES_PER_MB,
        backupCount=config.log_backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    app_logger.addHandler(file_handler)

    if console:
        stderr_handler = logging.StreamHandler()
        stderr_handler.setFormatter(formatter)
        app_logger.addHandler(stderr_handler)

    app_logger.debug("Decoder log at %s (rotate at %d MB, keep %d)",
                     log_path, config.log_max_mb, config.log_backup_count)
    return app_logger


def get_logger(name: Optional[str] = None) -> Logger:
    """Return ``cookiesifter`` or one of its children."""
    base = logging.getLogger(ROOT_LOGGER_NAME)
    return base.getChild(name) if name else base
