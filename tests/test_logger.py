"""Tests for core.logger."""

import logging

import pytest

from aster_bot.core.logger import UVICORN_LOGGERS, setup_logging


@pytest.fixture(autouse=True)
def _restore_loggers():
    yield
    for name in ("aster_bot",) + UVICORN_LOGGERS:
        lg = logging.getLogger(name)
        for handler in lg.handlers:
            handler.close()
        lg.handlers = []
        lg.propagate = True
    logging.getLogger("aster_bot").setLevel(logging.NOTSET)


def test_console_and_file(tmp_path):
    log_dir = tmp_path / "logs"
    bot = setup_logging("debug", log_dir, "bot.log")
    assert bot.name == "aster_bot"
    assert bot.level == logging.DEBUG
    assert len(bot.handlers) == 2

    logging.getLogger("aster_bot.live").info("position_opened SUIUSDT")
    for handler in bot.handlers:
        handler.flush()
    text = (log_dir / "bot.log").read_text(encoding="utf-8")
    assert "INFO" in text
    assert "aster_bot.live" in text
    assert "position_opened SUIUSDT" in text


def test_console_only_without_log_file(tmp_path):
    bot = setup_logging("INFO", tmp_path, None)
    assert len(bot.handlers) == 1
    assert list(tmp_path.iterdir()) == []


def test_unknown_level_falls_back_to_info():
    assert setup_logging("chatty").level == logging.INFO


def test_uvicorn_shares_bot_handlers(tmp_path):
    bot = setup_logging("INFO", tmp_path, "bot.log")
    for name in UVICORN_LOGGERS:
        lg = logging.getLogger(name)
        assert lg.handlers == bot.handlers
        assert lg.propagate is False


def test_repeat_setup_replaces_handlers(tmp_path):
    setup_logging("INFO", tmp_path, "bot.log")
    bot = setup_logging("WARNING", tmp_path, "bot.log")
    assert len(bot.handlers) == 2
    assert bot.level == logging.WARNING
