"""
SMA trend filter + ATR trailing stop + volume/momentum trigger.
Long: ATR stop above SMA and a bullish volume spike. Short: ATR stop below SMA
and a bearish volume spike. Stop at the SMA, target at risk x risk_reward_ratio.
"""

from __future__ import annotations
from typing import Optional

import pandas as pd

from aster_bot.core.types import ExitSignal, Position, Signal
from aster_bot.strategies import indicators
from aster_bot.strategies.base import BaseStrategy


class AtrMaMomentumStrategy(BaseStrategy):

    def __init__(
        self,
        ma_period: int = 100,
        atr_period: int = 10,
        atr_multiplier: float = 3.0,
        risk_reward_ratio: float = 1.0,
    ):
        self.ma_period = ma_period
        self.atr_period = atr_period
        self.atr_multiplier = atr_multiplier
        self.risk_reward_ratio = risk_reward_ratio

    @property
    def min_bars(self) -> int:
        return max(self.ma_period, self.atr_period + 1)

    def describe(self, df: pd.DataFrame) -> dict:
        """Current indicator readings, for logs and the check command."""
        atr_stop = indicators.atr_trailing_stop(df, self.atr_period, self.atr_multiplier)
        momentum = indicators.volume_momentum_signal(df)
        return {
            "bars": len(df),
            "close": float(df["close"].iloc[-1]) if len(df) else None,
            "ma": indicators.moving_average(df, self.ma_period),
            "atr": atr_stop["atr"] if atr_stop else None,
            "atr_stop": atr_stop["value"] if atr_stop else None,
            "momentum": momentum.value if momentum else None,
        }

    def get_signal(self, df: pd.DataFrame) -> Optional[Signal]:
        if len(df) < self.min_bars:
            return None
        return indicators.entry_signal(
            df,
            ma_period=self.ma_period,
            atr_period=self.atr_period,
            atr_multiplier=self.atr_multiplier,
            risk_reward_ratio=self.risk_reward_ratio,
        )

    def check_exit(self, position: Position, price: float) -> Optional[ExitSignal]:
        return indicators.exit_signal(position, price)
