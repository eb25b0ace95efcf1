"""
Trade statistics: win rate, profit factor, expectancy, max drawdown.
Computed from closed-trade profits in quote currency.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from aster_bot.core.types import Trade


@dataclass
class TradeStats:
    """Aggregate figures for the trade-history report."""
    total_trades: int
    winning_trades: int
    losing_trades: int
    win_rate_pct: float
    total_profit: float
    profit_factor: float
    expectancy: float
    max_drawdown_pct: float


def win_rate(pnls: List[float]) -> float:
    """Fraction of trades with positive PnL."""
    if not pnls:
        return 0.0
    return sum(1 for p in pnls if p > 0) / len(pnls)


def profit_factor(pnls: List[float]) -> float:
    """Gross profit / gross loss. inf when there are wins and no losses."""
    wins = sum(p for p in pnls if p > 0)
    losses = sum(-p for p in pnls if p < 0)
    if losses <= 0:
        return float("inf") if wins > 0 else 0.0
    return wins / losses


def expectancy(pnls: List[float]) -> float:
    """Average PnL per trade."""
    if not pnls:
        return 0.0
    return sum(pnls) / len(pnls)


def max_drawdown(equity_curve: List[float]) -> float:
    """Max drawdown in percent of the running peak (negative, e.g. -15.0)."""
    if not equity_curve:
        return 0.0
    arr = np.array(equity_curve, dtype=float)
    peak = np.maximum.accumulate(arr)
    dd = (arr - peak) / np.where(peak != 0, peak, 1)
    return float(np.min(dd)) * 100.0


def summarize_trades(trades: Sequence[Trade], starting_balance: float = 0.0) -> TradeStats:
    """
    Summary over closed trades. The equity curve starts at starting_balance
    (balance before the first trade) when it is positive.
    """
    pnls = [t.profit for t in trades]
    wins = [p for p in pnls if p > 0]
    losses = [p for p in pnls if p < 0]
    dd = 0.0
    if pnls and starting_balance > 0:
        curve = [starting_balance] + list(starting_balance + np.cumsum(pnls))
        dd = max_drawdown(curve)
    return TradeStats(
        total_trades=len(pnls),
        winning_trades=len(wins),
        losing_trades=len(losses),
        win_rate_pct=round(win_rate(pnls) * 100.0, 1),
        total_profit=sum(pnls),
        profit_factor=profit_factor(pnls),
        expectancy=expectancy(pnls),
        max_drawdown_pct=dd,
    )
