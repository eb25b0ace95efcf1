"""Core: config, types, state, logging."""

from aster_bot.core.config import load_config, Config
from aster_bot.core.types import (
    Bar,
    ExchangePosition,
    ExitReason,
    ExitSignal,
    Position,
    Signal,
    SignalSide,
    Trade,
)
from aster_bot.core.state import AccountState
from aster_bot.core.logger import setup_logging

__all__ = [
    "load_config",
    "Config",
    "AccountState",
    "Bar",
    "ExchangePosition",
    "ExitReason",
    "ExitSignal",
    "Position",
    "Signal",
    "SignalSide",
    "Trade",
    "setup_logging",
]
