"""Analytics: trade statistics (win rate, profit factor, expectancy, drawdown)."""

from aster_bot.analytics.metrics import (
    TradeStats,
    summarize_trades,
    max_drawdown,
    win_rate,
    profit_factor,
    expectancy,
)

__all__ = [
    "TradeStats",
    "summarize_trades",
    "max_drawdown",
    "win_rate",
    "profit_factor",
    "expectancy",
]
