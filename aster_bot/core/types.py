"""
Core data types for candles, signals, positions, and trades.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

import pandas as pd

OHLCV_COLUMNS = ["time", "open", "high", "low", "close", "volume"]


class SignalSide(str, Enum):
    LONG = "BUY"
    SHORT = "SELL"

    @property
    def opposite(self) -> "SignalSide":
        return SignalSide.SHORT if self is SignalSide.LONG else SignalSide.LONG


class ExitReason(str, Enum):
    STOP_LOSS = "STOP_LOSS"
    TAKE_PROFIT = "TAKE_PROFIT"
    MANUAL = "MANUAL"


@dataclass(frozen=True)
class Bar:
    """OHLCV candle."""
    time: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float


def bars_to_frame(bars: list[Bar]) -> pd.DataFrame:
    """Build a price series (ascending by time) from Bar rows."""
    if not bars:
        return pd.DataFrame(columns=OHLCV_COLUMNS)
    df = pd.DataFrame([b.__dict__ for b in bars], columns=OHLCV_COLUMNS)
    return df.sort_values("time", kind="stable").reset_index(drop=True)


@dataclass(frozen=True)
class Signal:
    """Entry recommendation with bracket levels."""
    side: SignalSide
    entry_price: float
    stop_loss: float
    take_profit: float
    timestamp: datetime
    metadata: dict = field(default_factory=dict)


@dataclass(frozen=True)
class ExitSignal:
    """Exit trigger: why and at what price."""
    reason: ExitReason
    price: float


@dataclass
class Position:
    """The single open position held by the controller."""
    side: SignalSide
    entry_price: float
    stop_loss: float
    take_profit: float
    quantity: float
    order_id: Optional[str]
    opened_at: datetime

    def to_dict(self) -> dict:
        return {
            "type": self.side.name,
            "entry_price": self.entry_price,
            "stop_loss": self.stop_loss,
            "take_profit": self.take_profit,
            "quantity": self.quantity,
            "order_id": self.order_id,
            "opened_at": self.opened_at.isoformat(),
        }


@dataclass(frozen=True)
class ExchangePosition:
    """Open position as reported by the venue."""
    symbol: str
    side: SignalSide
    quantity: float
    entry_price: float
    unrealized_pnl: float = 0.0
    leverage: int = 1


@dataclass(frozen=True)
class Trade:
    """Closed trade record. Never modified after creation."""
    side: SignalSide
    entry_price: float
    exit_price: float
    quantity: float
    profit: float
    exit_reason: ExitReason
    closed_at: datetime

    def to_dict(self) -> dict:
        return {
            "type": self.side.name,
            "entry_price": self.entry_price,
            "exit_price": self.exit_price,
            "quantity": self.quantity,
            "profit": self.profit,
            "reason": self.exit_reason.value,
            "closed_at": self.closed_at.isoformat(),
        }
