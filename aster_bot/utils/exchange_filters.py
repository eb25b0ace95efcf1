"""Lot size and price rounding helpers for order submission."""

from __future__ import annotations
import math
from typing import Optional


def parse_price_tick(symbol_info: Optional[dict], default: float = 0.0001) -> float:
    """Tick size from a symbol's PRICE_FILTER, or default when absent."""
    if not symbol_info:
        return default
    for f in symbol_info.get("filters", []):
        if f.get("filterType") == "PRICE_FILTER":
            return float(f.get("tickSize", default))
    return default


def floor_to_decimals(qty: float, decimals: int = 1) -> float:
    """Round down to a fixed number of decimals; never rounds up into more exposure."""
    if qty <= 0:
        return 0.0
    factor = 10 ** decimals
    return math.floor(qty * factor) / factor


def round_price(price: float, tick_size: float) -> float:
    """Round price to exchange tick."""
    return round(round(price / tick_size) * tick_size, 8)


def format_decimal(value: float, decimals: int) -> str:
    """Fixed-point string for order parameters (no exponent notation)."""
    return f"{value:.{decimals}f}"
