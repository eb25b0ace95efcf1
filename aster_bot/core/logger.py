"""
Bot logging. Trading events, venue errors and the status API's uvicorn logs
all land in one stream: stdout, plus a log file when one is configured.
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
UVICORN_LOGGERS = ("uvicorn.error", "uvicorn.access")


def setup_logging(
    level: str = "INFO",
    log_dir: Optional[Path] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Point the "aster_bot" logger and uvicorn's loggers at the same handlers.

    Safe to call again: handlers are replaced, not stacked. Credentials are
    never passed to the logger.
    """
    bot = logging.getLogger("aster_bot")
    bot.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in bot.handlers:
        handler.close()
    bot.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_dir and log_file:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path / log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        bot.addHandler(handler)

    # the status API runs uvicorn with log_config=None
    for name in UVICORN_LOGGERS:
        lg = logging.getLogger(name)
        lg.handlers = list(bot.handlers)
        lg.propagate = False

    return bot
