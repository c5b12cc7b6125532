"""Tests for root logger configuration."""

import logging

import pytest

from noita_api.app.core.config import settings
from noita_api.app.core.logging_config import CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME, setup_logging


@pytest.fixture
def root_logger(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    monkeypatch.setattr(settings, "debug", False)
    monkeypatch.setattr(settings, "log_level", "INFO")
    monkeypatch.setattr(settings, "log_file", "")
    yield root
    for handler in root.handlers:
        handler.close()


def _names(logger):
    return [handler.get_name() for handler in logger.handlers]


def test_repeated_setup_attaches_each_handler_once(root_logger, tmp_path):
    logfile = tmp_path / "logs" / "noita.log"
    setup_logging(logfile=str(logfile))
    setup_logging(logfile=str(logfile))
    assert sorted(_names(root_logger)) == [CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME]
    assert logfile.parent.is_dir()


def test_foreign_handlers_do_not_block_setup(root_logger):
    foreign = logging.NullHandler()
    root_logger.addHandler(foreign)
    setup_logging()
    assert foreign in root_logger.handlers
    assert CONSOLE_HANDLER_NAME in _names(root_logger)


def test_defaults_come_from_settings(root_logger, tmp_path, monkeypatch):
    logfile = tmp_path / "api.log"
    monkeypatch.setattr(settings, "log_file", str(logfile))
    monkeypatch.setattr(settings, "log_level", "warning")
    setup_logging()
    assert FILE_HANDLER_NAME in _names(root_logger)
    assert root_logger.level == logging.WARNING

    logging.getLogger("noita_api.test").warning("written to file")
    for handler in root_logger.handlers:
        handler.flush()
    assert "written to file" in logfile.read_text(encoding="utf-8")


def test_debug_setting_forces_debug_level(root_logger, monkeypatch):
    monkeypatch.setattr(settings, "debug", True)
    setup_logging(level="ERROR")
    assert root_logger.level == logging.DEBUG


def test_unknown_level_falls_back_to_info(root_logger):
    setup_logging(level="chatty")
    assert root_logger.level == logging.INFO
