"""Abstract strategy: entry signal from a price series, exit check for an open position."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional

import pandas as pd

from aster_bot.core.types import ExitSignal, Position, Signal


class BaseStrategy(ABC):
    """Strategy reads a candle series and may return an entry Signal for the last bar."""

    #: fewest candles get_signal will ever act on
    min_bars: int = 0

    @abstractmethod
    def get_signal(self, df: pd.DataFrame) -> Optional[Signal]:
        """Return an entry Signal for the last bar, or None. Must not mutate df."""
        pass

    @abstractmethod
    def check_exit(self, position: Position, price: float) -> Optional[ExitSignal]:
        """Return an ExitSignal when the open position should be closed at price."""
        pass
