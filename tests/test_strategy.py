"""Unit tests for strategies.atr_ma_momentum."""

import pytest

from aster_bot.core.types import SignalSide
from aster_bot.strategies.atr_ma_momentum import AtrMaMomentumStrategy
from conftest import make_candles


def test_min_bars_follows_slowest_indicator():
    assert AtrMaMomentumStrategy().min_bars == 100
    assert AtrMaMomentumStrategy(ma_period=5, atr_period=10).min_bars == 11


def test_get_signal_long(uptrend):
    sig = AtrMaMomentumStrategy().get_signal(uptrend)
    assert sig.side is SignalSide.LONG


def test_get_signal_short_window_none(uptrend):
    assert AtrMaMomentumStrategy().get_signal(uptrend.iloc[-60:]) is None


def test_describe_reports_readings(uptrend):
    info = AtrMaMomentumStrategy().describe(uptrend)
    assert info["bars"] == len(uptrend)
    assert info["ma"] == pytest.approx(float(uptrend["close"].iloc[-100:].mean()))
    assert info["atr_stop"] == pytest.approx(info["close"] - 3 * info["atr"])
    assert info["momentum"] == "BUY"


def test_describe_short_series():
    info = AtrMaMomentumStrategy().describe(make_candles([1.0, 1.01]))
    assert info["ma"] is None
    assert info["atr"] is None
    assert info["momentum"] is None
