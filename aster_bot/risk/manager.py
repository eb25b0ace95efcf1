"""
Position sizing: a fixed share of the balance, levered, in whole lot steps.
quantity = floor(balance * pct / 100 * leverage / entry * 10^d) / 10^d
"""

from __future__ import annotations
import logging
from dataclasses import dataclass

from aster_bot.utils.exchange_filters import floor_to_decimals

logger = logging.getLogger("aster_bot.risk")


@dataclass
class RiskResult:
    """Result of sizing: allowed with a quantity, or rejected + reason."""
    allowed: bool
    quantity: float = 0.0
    reason: str = ""


class RiskManager:
    """Sizes entries against available balance and leverage."""

    def __init__(
        self,
        position_size_pct: float,
        leverage: int,
        qty_decimals: int = 1,
    ):
        self.position_size_pct = position_size_pct
        self.leverage = leverage
        self.qty_decimals = qty_decimals

    def notional(self, balance: float) -> float:
        """Levered position value for the given balance."""
        return balance * self.position_size_pct / 100.0 * self.leverage

    def size_position(self, balance: float, entry_price: float) -> RiskResult:
        if entry_price <= 0:
            return RiskResult(allowed=False, reason=f"invalid entry price {entry_price}")
        if balance <= 0:
            return RiskResult(allowed=False, reason=f"no balance available ({balance:.2f})")
        qty = floor_to_decimals(self.notional(balance) / entry_price, self.qty_decimals)
        if qty <= 0:
            logger.debug("Sizing: balance=%.2f entry=%.6f -> qty 0", balance, entry_price)
            return RiskResult(allowed=False, reason="quantity too small")
        return RiskResult(allowed=True, quantity=qty)
