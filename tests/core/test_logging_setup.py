"""
Tests for core.logging configuration helpers.
"""
from __future__ import annotations

import logging
import re
from logging.handlers import RotatingFileHandler

import pytest

from core.config import LoggingConfig, load_app_config
from core.logging import LOG_FILE_NAME, ROOT_LOGGER_NAME, configure_logging, get_logger


@pytest.fixture
def restore_app_logger():
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    level = logger.level
    handlers = list(logger.handlers)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)


def _flush(logger: logging.Logger) -> None:
    for handler in logger.handlers:
        handler.flush()


def test_get_logger_is_namespaced():
    assert get_logger().name == ROOT_LOGGER_NAME
    assert get_logger("extractors.browser").name == f"{ROOT_LOGGER_NAME}.extractors.browser"


def test_configure_logging_writes_utc_file(tmp_path, restore_app_logger):
    logger = configure_logging(tmp_path / "logs", LoggingConfig(level="debug"), console=False)

    get_logger("test").info("decoded %d cookies", 3)
    _flush(logger)

    line = (tmp_path / "logs" / LOG_FILE_NAME).read_text(encoding="utf-8").splitlines()[-1]
    assert re.match(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\dZ INFO cookiesifter.test decoded 3 cookies$", line)
    assert logger.level == logging.DEBUG


def test_rotation_settings_come_from_config(tmp_path, restore_app_logger):
    config = LoggingConfig(level="WARNING", log_max_mb=2, log_backup_count=3)
    logger = configure_logging(tmp_path, config, console=False)

    (handler,) = logger.handlers
    assert isinstance(handler, RotatingFileHandler)
    assert handler.maxBytes == 2 * 1024 * 1024
    assert handler.backupCount == 3
    assert logger.level == logging.WARNING


def test_app_config_drives_logging(tmp_path, restore_app_logger):
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "config.yml").write_text("logging:\n  level: ERROR\n")
    app_config = load_app_config(tmp_path)

    logger = configure_logging(app_config.logs_dir, app_config.logging, console=False)
    get_logger("decoder").warning("not written")
    get_logger("decoder").error("written")
    _flush(logger)

    content = (tmp_path / "logs" / LOG_FILE_NAME).read_text(encoding="utf-8")
    assert "written" in content
    assert "not written" not in content


def test_configure_logging_replaces_handlers(tmp_path, restore_app_logger):
    configure_logging(tmp_path / "a", console=True)
    logger = configure_logging(tmp_path / "b", console=False)
    assert len(logger.handlers) == 1
