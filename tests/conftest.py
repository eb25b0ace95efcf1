"""Shared fixtures: candle builders and an in-memory venue."""

from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Optional

import pandas as pd
import pytest

from aster_bot.core.types import OHLCV_COLUMNS, Bar, ExchangePosition, SignalSide, bars_to_frame
from aster_bot.execution.base import ExecutionClient, OrderResult

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_candles(
    closes: list[float],
    volumes: Optional[list[float]] = None,
    highs: Optional[list[float]] = None,
    lows: Optional[list[float]] = None,
) -> pd.DataFrame:
    """5m candles; each bar opens at the previous close unless highs/lows are given."""
    volumes = volumes or [100.0] * len(closes)
    bars = []
    for i, close in enumerate(closes):
        open_ = closes[i - 1] if i > 0 else close
        bars.append(Bar(
            time=T0 + timedelta(minutes=5 * i),
            open=open_,
            high=highs[i] if highs else max(open_, close),
            low=lows[i] if lows else min(open_, close),
            close=close,
            volume=volumes[i],
        ))
    return bars_to_frame(bars)


def trend_closes(step: float, final_move: float = 0.005, flat: int = 100, bars: int = 19) -> list[float]:
    """`flat` bars at 1.0, `bars` bars moving by `step`, then one bar moving final_move (relative)."""
    closes = [1.0] * flat
    closes += [1.0 + step * k for k in range(1, bars + 1)]
    closes.append(closes[-1] * (1 + final_move))
    return closes


def spike_volumes(n: int, spike: float = 200.0) -> list[float]:
    return [100.0] * (n - 1) + [spike]


@pytest.fixture
def uptrend() -> pd.DataFrame:
    """100 flat bars, 20-bar uptrend, last bar +0.5% on a volume spike."""
    closes = trend_closes(0.003)
    return make_candles(closes, spike_volumes(len(closes)))


@pytest.fixture
def downtrend() -> pd.DataFrame:
    """Mirror of uptrend: last bar -0.5% on a volume spike."""
    closes = trend_closes(-0.003, final_move=-0.005)
    return make_candles(closes, spike_volumes(len(closes)))


class FakeClient(ExecutionClient):
    """Venue double that records orders and tracks one venue-side position."""

    def __init__(self, klines: Optional[pd.DataFrame] = None, balance: float = 100.0, price: Optional[float] = None):
        self.klines = klines if klines is not None else pd.DataFrame(columns=OHLCV_COLUMNS)
        self.balance = balance
        self.price = price
        self.leverage: Optional[int] = None
        self.orders: list[tuple] = []
        self.venue_position: Optional[ExchangePosition] = None
        self.fail_market = False
        self.fail_stop = False

    def get_balance(self) -> float:
        return self.balance

    def get_current_price(self, symbol: str) -> Optional[float]:
        return self.price

    def get_klines(self, symbol: str, interval: str, limit: int = 150) -> pd.DataFrame:
        return self.klines

    def set_leverage(self, symbol: str, leverage: int) -> Optional[dict]:
        self.leverage = leverage
        return {"symbol": symbol, "leverage": leverage}

    def place_market_order(self, symbol: str, side: SignalSide, quantity: float) -> OrderResult:
        if self.fail_market:
            return OrderResult(success=False, message="rejected")
        self.orders.append(("MARKET", side, quantity, None))
        if self.venue_position is None:
            self.venue_position = ExchangePosition(symbol, side, quantity, entry_price=0.0)
        else:
            self.venue_position = None
        return OrderResult(success=True, order_id=str(len(self.orders)), quantity=quantity, avg_price=self.price)

    def place_stop_order(self, symbol: str, side: SignalSide, quantity: float, stop_price: float) -> OrderResult:
        if self.fail_stop:
            return OrderResult(success=False, message="stop rejected")
        self.orders.append(("STOP_MARKET", side, quantity, stop_price))
        return OrderResult(success=True, order_id=str(len(self.orders)), quantity=quantity)

    def get_open_position(self, symbol: str) -> Optional[ExchangePosition]:
        return self.venue_position
