"""Abstract execution interface: account, market data and order placement.

Implementations never raise on venue or transport errors; they log and return
the failure value documented on each method.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from aster_bot.core.types import ExchangePosition, SignalSide


@dataclass
class OrderResult:
    """Result of placing an order."""
    success: bool
    order_id: Optional[str] = None
    avg_price: Optional[float] = None
    quantity: Optional[float] = None
    message: str = ""


class ExecutionClient(ABC):
    """Venue gateway for a single futures account."""

    @abstractmethod
    def get_balance(self) -> float:
        """Available quote-currency balance, 0.0 on failure."""
        pass

    @abstractmethod
    def get_current_price(self, symbol: str) -> Optional[float]:
        """Last trade price, None on failure."""
        pass

    @abstractmethod
    def get_klines(self, symbol: str, interval: str, limit: int = 150) -> pd.DataFrame:
        """OHLCV DataFrame (time, open, high, low, close, volume); empty on failure."""
        pass

    @abstractmethod
    def set_leverage(self, symbol: str, leverage: int) -> Optional[dict]:
        """Venue acknowledgement, None on failure."""
        pass

    @abstractmethod
    def place_market_order(self, symbol: str, side: SignalSide, quantity: float) -> OrderResult:
        pass

    @abstractmethod
    def place_stop_order(
        self,
        symbol: str,
        side: SignalSide,
        quantity: float,
        stop_price: float,
    ) -> OrderResult:
        """STOP_MARKET order triggering at stop_price."""
        pass

    @abstractmethod
    def get_open_position(self, symbol: str) -> Optional[ExchangePosition]:
        """Open position for symbol, None when flat or on failure."""
        pass

    def close_position(self, symbol: str) -> OrderResult:
        """Offset the venue's open position with a market order on the other side."""
        pos = self.get_open_position(symbol)
        if pos is None or pos.quantity <= 0:
            return OrderResult(success=False, message="no position to close")
        return self.place_market_order(symbol, pos.side.opposite, pos.quantity)
