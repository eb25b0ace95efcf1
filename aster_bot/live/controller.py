"""
Single-position lifecycle: FLAT -> IN_POSITION -> FLAT.

Each cycle does exactly one of: exit handling (in position) or entry handling
(flat). Venue failures leave the state untouched; the next cycle re-evaluates
from scratch.
"""

from __future__ import annotations
import logging
import threading
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

import pandas as pd

from aster_bot.core.state import AccountState
from aster_bot.core.types import ExitReason, ExitSignal, Position, Signal, Trade
from aster_bot.execution.base import ExecutionClient
from aster_bot.risk.manager import RiskManager
from aster_bot.strategies import indicators
from aster_bot.strategies.base import BaseStrategy

logger = logging.getLogger("aster_bot.live.controller")

Notifier = Callable[[str], object]


class ControllerState(str, Enum):
    FLAT = "FLAT"
    IN_POSITION = "IN_POSITION"


class PositionController:
    """Owns AccountState; the only writer to it."""

    def __init__(
        self,
        client: ExecutionClient,
        strategy: BaseStrategy,
        risk_manager: RiskManager,
        symbol: str,
        timeframe: str = "5m",
        leverage: int = 10,
        candle_limit: int = 150,
        state: Optional[AccountState] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.client = client
        self.strategy = strategy
        self.risk_manager = risk_manager
        self.symbol = symbol
        self.timeframe = timeframe
        self.leverage = leverage
        self.candle_limit = candle_limit
        self.state = state or AccountState()
        self._notify = notifier
        self._price_data: pd.DataFrame = pd.DataFrame()
        self._close_requested = threading.Event()

    @property
    def status(self) -> ControllerState:
        return ControllerState.IN_POSITION if self.state.in_position else ControllerState.FLAT

    @property
    def price_data(self) -> pd.DataFrame:
        return self._price_data

    def initialize(self) -> None:
        """Set leverage, load the starting balance and the first candle window."""
        logger.info("Symbol: %s | timeframe: %s | leverage: %sx", self.symbol, self.timeframe, self.leverage)
        self.client.set_leverage(self.symbol, self.leverage)
        self.state.set_balance(self.client.get_balance())
        logger.info("Balance: $%.2f", self.state.balance)
        self.update_price_data()

    def update_price_data(self) -> bool:
        """Refresh the candle window. Keeps the previous window if the fetch comes back empty."""
        df = self.client.get_klines(self.symbol, self.timeframe, limit=self.candle_limit)
        if df is None or df.empty:
            logger.warning("No candles received, keeping previous window (%d bars)", len(self._price_data))
            return False
        self._price_data = df
        self.state.mark_market(float(df["close"].iloc[-1]), datetime.now(timezone.utc))
        return True

    def request_close(self) -> None:
        """Ask for a manual close; handled by the next cycle."""
        self._close_requested.set()

    # --- cycle ---------------------------------------------------------------

    def run_cycle(self) -> None:
        self.update_price_data()
        if self._price_data.empty:
            logger.warning("No price data yet, skipping cycle")
            return
        price = float(self._price_data["close"].iloc[-1])

        position = self.state.position
        if position is not None:
            self._manage_position(position, price)
            return
        self._close_requested.clear()

        signal = self.strategy.get_signal(self._price_data)
        if signal is not None:
            logger.info("SIGNAL: %s @ %.4f", signal.side.name, signal.entry_price)
            self.open_position(signal)
        else:
            logger.info("%s: %.4f | no signal", self.symbol, price)

    def _manage_position(self, position: Position, price: float) -> None:
        if self._close_requested.is_set():
            exit_sig = ExitSignal(ExitReason.MANUAL, self.client.get_current_price(self.symbol) or price)
        else:
            exit_sig = self.strategy.check_exit(position, price)
        if exit_sig is not None:
            if self.close_position(exit_sig.reason, exit_sig.price):
                self._close_requested.clear()
            return
        pnl = indicators.unrealized_pnl(position, price)
        self.state.set_unrealized(pnl)
        logger.info("In %s | price: %.4f | P&L: %+.2f", position.side.name, price, pnl)

    # --- transitions ---------------------------------------------------------

    def open_position(self, signal: Signal) -> bool:
        """FLAT -> IN_POSITION. Returns True when a position was opened."""
        if self.state.in_position:
            logger.warning("Entry ignored: a position is already open")
            return False
        balance = self.client.get_balance()
        sizing = self.risk_manager.size_position(balance, signal.entry_price)
        if not sizing.allowed:
            self._emit("sizing_failed", f"Entry aborted: {sizing.reason}",
                       level=logging.WARNING, balance=balance, entry=signal.entry_price)
            return False

        qty = sizing.quantity
        order = self.client.place_market_order(self.symbol, signal.side, qty)
        if not order.success:
            self._emit("order_failed", f"{signal.side.name} entry rejected: {order.message}",
                       level=logging.ERROR, qty=qty)
            return False

        position = Position(
            side=signal.side,
            entry_price=signal.entry_price,
            stop_loss=signal.stop_loss,
            take_profit=signal.take_profit,
            quantity=qty,
            order_id=order.order_id,
            opened_at=datetime.now(timezone.utc),
        )
        self.state.open(position)
        fill = f" fill={order.avg_price:.4f}" if order.avg_price else ""
        self._emit(
            "position_opened",
            f"{signal.side.name} opened {self.symbol} qty={qty} entry={signal.entry_price:.4f}{fill} "
            f"SL={signal.stop_loss:.4f} TP={signal.take_profit:.4f}",
            order_id=order.order_id,
        )

        stop = self.client.place_stop_order(self.symbol, signal.side.opposite, qty, signal.stop_loss)
        if not stop.success:
            self._emit("stop_order_failed", f"Protective stop not placed: {stop.message}",
                       level=logging.ERROR, stop=signal.stop_loss)
        return True

    def close_position(self, reason: ExitReason, exit_price: float) -> bool:
        """IN_POSITION -> FLAT. Returns True when the close was booked."""
        position = self.state.position
        if position is None:
            logger.warning("Close ignored: no open position")
            return False
        order = self.client.close_position(self.symbol)
        if not order.success:
            self._emit("order_failed", f"Close ({reason.value}) failed: {order.message}", level=logging.ERROR)
            return False

        profit = indicators.realized_pnl(position, exit_price, self.leverage)
        trade = Trade(
            side=position.side,
            entry_price=position.entry_price,
            exit_price=exit_price,
            quantity=position.quantity,
            profit=profit,
            exit_reason=reason,
            closed_at=datetime.now(timezone.utc),
        )
        self.state.close(trade)
        self._emit(
            "position_closed",
            f"{position.side.name} closed | {reason.value} | {position.entry_price:.4f} -> {exit_price:.4f} "
            f"| profit {profit:+.2f} | balance {self.state.balance:.2f}",
        )
        return True

    def _emit(self, event: str, text: str, level: int = logging.INFO, **fields) -> None:
        extra = " ".join(f"{k}={v}" for k, v in fields.items())
        logger.log(level, "event=%s %s%s", event, text, f" | {extra}" if extra else "")
        if self._notify is not None:
            self._notify(text)
