"""Live trading: position controller and polling loop."""

from aster_bot.live.controller import ControllerState, PositionController
from aster_bot.live.runner import TradingRunner

__all__ = ["ControllerState", "PositionController", "TradingRunner"]
