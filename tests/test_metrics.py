"""Unit tests for analytics.metrics."""

from datetime import datetime, timezone

import pytest
from aster_bot.analytics.metrics import (
    max_drawdown,
    win_rate,
    profit_factor,
    expectancy,
    summarize_trades,
)
from aster_bot.core.types import ExitReason, SignalSide, Trade


def _trade(profit: float) -> Trade:
    return Trade(
        side=SignalSide.LONG, entry_price=1.0, exit_price=1.0, quantity=1.0,
        profit=profit, exit_reason=ExitReason.TAKE_PROFIT,
        closed_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def test_win_rate():
    assert win_rate([1, -1, 1, 1]) == 0.75
    assert win_rate([]) == 0.0


def test_profit_factor():
    assert profit_factor([10, -5, 10, -5]) == 2.0
    assert profit_factor([10, 10]) == float("inf")
    assert profit_factor([-5, -5]) == 0.0


def test_expectancy():
    assert expectancy([10, -5, 5]) == pytest.approx(10 / 3)
    assert expectancy([]) == 0.0


def test_max_drawdown():
    # equity 1 -> 1.2 -> 1.0 -> 1.1  =>  peak 1.2, dd (1.0-1.2)/1.2 = -16.67%
    assert max_drawdown([1.0, 1.2, 1.0, 1.1]) == pytest.approx(-16.666, rel=0.01)


def test_summarize_trades():
    stats = summarize_trades([_trade(p) for p in [10.0, -5.0, 15.0, -3.0]], starting_balance=100.0)
    assert stats.total_trades == 4
    assert stats.winning_trades == 2
    assert stats.losing_trades == 2
    assert stats.win_rate_pct == 50.0
    assert stats.total_profit == pytest.approx(17.0)
    assert stats.expectancy == pytest.approx(4.25)
    # 100 -> 110 -> 105: 5 / 110
    assert stats.max_drawdown_pct == pytest.approx(-5 / 110 * 100)


def test_summarize_trades_empty():
    stats = summarize_trades([])
    assert stats.total_trades == 0
    assert stats.win_rate_pct == 0.0
    assert stats.max_drawdown_pct == 0.0


def test_win_rate_rounded_to_one_decimal():
    stats = summarize_trades([_trade(1.0), _trade(-1.0), _trade(-1.0)])
    assert stats.win_rate_pct == 33.3
