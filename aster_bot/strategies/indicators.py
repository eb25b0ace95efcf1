"""
Indicator functions over an OHLCV DataFrame (columns: time, open, high, low,
close, volume; ascending by time). All functions are pure: they never modify
the input and return None when the series is too short.
"""

from __future__ import annotations
from typing import Optional

import pandas as pd

from aster_bot.core.types import ExitReason, ExitSignal, Position, Signal, SignalSide


def moving_average(df: pd.DataFrame, period: int) -> Optional[float]:
    """Simple mean of the last `period` closes."""
    if period <= 0 or len(df) < period:
        return None
    return float(df["close"].iloc[-period:].mean())


def true_range(df: pd.DataFrame) -> pd.Series:
    """Per-bar true range. The first bar has no previous close and uses high - low."""
    prev_close = df["close"].shift()
    high_low = df["high"] - df["low"]
    high_close = (df["high"] - prev_close).abs()
    low_close = (df["low"] - prev_close).abs()
    return pd.concat([high_low, high_close, low_close], axis=1).max(axis=1)


def average_true_range(df: pd.DataFrame, period: int) -> Optional[float]:
    """Mean true range over the last `period` bars. Needs period + 1 bars."""
    if period <= 0 or len(df) < period + 1:
        return None
    return float(true_range(df).iloc[-period:].mean())


def atr_trailing_stop(df: pd.DataFrame, atr_period: int = 10, multiplier: float = 3.0) -> Optional[dict]:
    """
    Long-biased trailing reference: last close - ATR * multiplier.
    The same line is read against the moving average for both directions.
    """
    atr = average_true_range(df, atr_period)
    if atr is None:
        return None
    last_close = float(df["close"].iloc[-1])
    return {"value": last_close - atr * multiplier, "atr": atr}


def volume_momentum_signal(
    df: pd.DataFrame,
    lookback: int = 20,
    volume_mult: float = 1.5,
    min_move: float = 0.002,
) -> Optional[SignalSide]:
    """
    BUY/SELL when the last bar's volume spikes above volume_mult x the trailing
    mean (window includes the last bar) and close moved more than min_move
    relative to the previous close.
    """
    if len(df) < max(lookback, 2):
        return None
    current = df.iloc[-1]
    previous = df.iloc[-2]
    avg_volume = float(df["volume"].iloc[-lookback:].mean())
    volume_spike = float(current["volume"]) > avg_volume * volume_mult
    prev_close = float(previous["close"])
    if prev_close <= 0:
        return None
    change = float(current["close"]) - prev_close
    strong_momentum = abs(change) / prev_close > min_move
    if not (volume_spike and strong_momentum):
        return None
    if change > 0:
        return SignalSide.LONG
    if change < 0:
        return SignalSide.SHORT
    return None


def entry_signal(
    df: pd.DataFrame,
    ma_period: int = 100,
    atr_period: int = 10,
    atr_multiplier: float = 3.0,
    risk_reward_ratio: float = 1.0,
) -> Optional[Signal]:
    """
    Trend filter (ATR trailing stop vs moving average) AND momentum trigger.
    Long: atr_stop > ma and momentum BUY. Short: atr_stop < ma and momentum SELL.
    Stop-loss sits at the moving average; take-profit mirrors the risk.
    """
    if len(df) < ma_period:
        return None
    ma = moving_average(df, ma_period)
    atr_stop = atr_trailing_stop(df, atr_period, atr_multiplier)
    momentum = volume_momentum_signal(df)
    if ma is None or atr_stop is None:
        return None

    entry = float(df["close"].iloc[-1])
    metadata = {
        "ma": ma,
        "atr_stop": atr_stop["value"],
        "atr": atr_stop["atr"],
        "momentum": momentum.value if momentum else None,
    }
    bar_time = pd.Timestamp(df["time"].iloc[-1]).to_pydatetime()

    if atr_stop["value"] > ma and momentum is SignalSide.LONG:
        risk = entry - ma
        return Signal(
            side=SignalSide.LONG,
            entry_price=entry,
            stop_loss=ma,
            take_profit=entry + risk * risk_reward_ratio,
            timestamp=bar_time,
            metadata=metadata,
        )
    if atr_stop["value"] < ma and momentum is SignalSide.SHORT:
        risk = ma - entry
        return Signal(
            side=SignalSide.SHORT,
            entry_price=entry,
            stop_loss=ma,
            take_profit=entry - risk * risk_reward_ratio,
            timestamp=bar_time,
            metadata=metadata,
        )
    return None


def exit_signal(position: Position, price: float) -> Optional[ExitSignal]:
    """Stop-loss or take-profit hit for the open position. Stop is checked first."""
    if position.side is SignalSide.LONG:
        if price <= position.stop_loss:
            return ExitSignal(ExitReason.STOP_LOSS, price)
        if price >= position.take_profit:
            return ExitSignal(ExitReason.TAKE_PROFIT, price)
    else:
        if price >= position.stop_loss:
            return ExitSignal(ExitReason.STOP_LOSS, price)
        if price <= position.take_profit:
            return ExitSignal(ExitReason.TAKE_PROFIT, price)
    return None


def unrealized_pnl(position: Position, price: float) -> float:
    """Mark-to-market P&L, not scaled by leverage."""
    if position.side is SignalSide.LONG:
        return (price - position.entry_price) * position.quantity
    return (position.entry_price - price) * position.quantity


def realized_pnl(position: Position, exit_price: float, leverage: float) -> float:
    """Booked P&L on close: raw price P&L scaled by leverage."""
    return unrealized_pnl(position, exit_price) * leverage
