"""
Account state owned by the position controller.
All mutations and snapshot reads go through one lock so the status API never
sees a half-applied open/close.
"""

from __future__ import annotations
import threading
from dataclasses import replace
from datetime import datetime
from typing import Optional

from aster_bot.core.types import Position, Trade


class AccountState:
    """Balance, the single open position, and closed-trade history."""

    def __init__(self, balance: float = 0.0):
        self._lock = threading.Lock()
        self._balance = float(balance)
        self._position: Optional[Position] = None
        self._trades: list[Trade] = []
        self._last_update: Optional[datetime] = None
        self._last_price: Optional[float] = None
        self._unrealized_pnl: float = 0.0

    # --- reads -----------------------------------------------------------

    @property
    def balance(self) -> float:
        with self._lock:
            return self._balance

    @property
    def in_position(self) -> bool:
        with self._lock:
            return self._position is not None

    @property
    def position(self) -> Optional[Position]:
        """Copy of the open position, or None."""
        with self._lock:
            return replace(self._position) if self._position else None

    @property
    def trades(self) -> list[Trade]:
        with self._lock:
            return list(self._trades)

    def history_snapshot(self) -> tuple[list[Trade], float]:
        """Closed trades and the balance that includes exactly those trades."""
        with self._lock:
            return list(self._trades), self._balance

    def snapshot(self) -> dict:
        """Consistent view of the account for reporting."""
        with self._lock:
            pos = self._position
            return {
                "balance": self._balance,
                "in_position": pos is not None,
                "current_position": pos.to_dict() if pos else None,
                "total_trades": len(self._trades),
                "last_update": self._last_update.isoformat() if self._last_update else None,
                "last_price": self._last_price,
                "unrealized_pnl": self._unrealized_pnl if pos else 0.0,
            }

    # --- writes (controller only) ----------------------------------------

    def set_balance(self, balance: float) -> None:
        with self._lock:
            self._balance = float(balance)

    def mark_market(self, price: float, as_of: datetime) -> None:
        with self._lock:
            self._last_price = price
            self._last_update = as_of

    def set_unrealized(self, pnl: float) -> None:
        with self._lock:
            self._unrealized_pnl = pnl

    def open(self, position: Position) -> None:
        with self._lock:
            if self._position is not None:
                raise RuntimeError("a position is already open")
            self._position = position
            self._unrealized_pnl = 0.0

    def close(self, trade: Trade) -> None:
        """Record the closed trade, book its profit and go flat in one step."""
        with self._lock:
            if self._position is None:
                raise RuntimeError("no open position to close")
            self._trades.append(trade)
            self._balance += trade.profit
            self._position = None
            self._unrealized_pnl = 0.0
