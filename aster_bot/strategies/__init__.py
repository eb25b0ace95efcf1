"""Strategies: indicator functions, base interface and implementations."""

from aster_bot.strategies.base import BaseStrategy
from aster_bot.strategies.atr_ma_momentum import AtrMaMomentumStrategy

__all__ = ["BaseStrategy", "AtrMaMomentumStrategy"]
