"""
Aster Dex USDT-M futures execution over python-binance.
Aster serves the Binance futures API shape (/fapi, HMAC-SHA256 signed query,
X-MBX-APIKEY header), so the binance Client is pointed at the Aster host.
"""

from __future__ import annotations
import functools
import logging
import time
from typing import Optional

import pandas as pd
import requests

from binance.client import Client
from binance.exceptions import BinanceAPIException, BinanceRequestException

from aster_bot.core.types import OHLCV_COLUMNS, ExchangePosition, SignalSide
from aster_bot.execution.base import ExecutionClient, OrderResult
from aster_bot.utils.exchange_filters import format_decimal, parse_price_tick, round_price

logger = logging.getLogger("aster_bot.execution.aster")

VENUE_ERRORS = (BinanceAPIException, BinanceRequestException, requests.exceptions.RequestException)


def retry_on_rate_limit(max_retries: int = 3, base_delay: float = 1.0):
    """Decorator: retry on 429 or 418 (rate limit)."""
    def decorator(f):
        @functools.wraps(f)
        def wrapped(*args, **kwargs):
            last_exc = None
            for attempt in range(max_retries):
                try:
                    return f(*args, **kwargs)
                except BinanceAPIException as e:
                    last_exc = e
                    if e.status_code in (429, 418) and attempt < max_retries - 1:
                        delay = base_delay * (2 ** attempt)
                        logger.warning("Rate limited, retry in %.1fs (attempt %d)", delay, attempt + 1)
                        time.sleep(delay)
                    else:
                        raise
            raise last_exc
        return wrapped
    return decorator


def _describe(e: Exception) -> str:
    if isinstance(e, BinanceAPIException):
        return f"[{e.status_code}/{e.code}] {e.message}"
    return str(e)


class AsterFuturesClient(ExecutionClient):
    """Aster Dex perpetual futures client."""

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        base_url: str = "https://fapi.asterdex.com",
        quote_asset: str = "USDT",
        price_decimals: int = 4,
    ):
        self._client = Client(api_key, api_secret, ping=False)
        self._client.FUTURES_URL = f"{base_url.rstrip('/')}/fapi"
        self.quote_asset = quote_asset
        self.price_decimals = price_decimals
        self._price_tick: dict[str, float] = {}
        logger.info("Aster futures endpoint: %s", base_url)

    def sync_time(self) -> None:
        """Align request timestamps with venue time; keep the local clock if it fails."""
        try:
            server_ms = int(self._client.futures_time()["serverTime"])
            self._client.timestamp_offset = server_ms - int(time.time() * 1000)
            logger.debug("Clock offset vs venue: %d ms", self._client.timestamp_offset)
        except VENUE_ERRORS as e:
            logger.warning("Could not fetch server time, using local clock: %s", _describe(e))

    # --- account / market data ----------------------------------------------

    @retry_on_rate_limit(max_retries=2)
    def _balances(self) -> list:
        return self._client.futures_account_balance()

    def get_balance(self) -> float:
        try:
            for b in self._balances():
                if b.get("asset") == self.quote_asset:
                    return float(b.get("availableBalance") or 0.0)
            return 0.0
        except VENUE_ERRORS as e:
            logger.error("Error fetching balance: %s", _describe(e))
            return 0.0

    def get_current_price(self, symbol: str) -> Optional[float]:
        try:
            res = self._client.futures_symbol_ticker(symbol=symbol)
            return float(res["price"])
        except VENUE_ERRORS as e:
            logger.error("Error fetching price: %s", _describe(e))
            return None

    @retry_on_rate_limit(max_retries=3, base_delay=1.0)
    def _klines(self, symbol: str, interval: str, limit: int) -> list:
        return self._client.futures_klines(symbol=symbol, interval=interval, limit=limit)

    def get_klines(self, symbol: str, interval: str, limit: int = 150) -> pd.DataFrame:
        try:
            raw = self._klines(symbol, interval, limit)
        except VENUE_ERRORS as e:
            logger.error("Error fetching klines: %s", _describe(e))
            return pd.DataFrame(columns=OHLCV_COLUMNS)
        df = pd.DataFrame([row[:6] for row in raw], columns=["open_time", "open", "high", "low", "close", "volume"])
        df[["open", "high", "low", "close", "volume"]] = df[["open", "high", "low", "close", "volume"]].astype(float)
        df["time"] = pd.to_datetime(df["open_time"], unit="ms", utc=True)
        return df[OHLCV_COLUMNS]

    def _tick(self, symbol: str) -> float:
        if symbol not in self._price_tick:
            default = 10 ** -self.price_decimals
            try:
                info = self._client.futures_exchange_info()
                sym = next((s for s in info.get("symbols", []) if s.get("symbol") == symbol), None)
                self._price_tick[symbol] = parse_price_tick(sym, default)
            except VENUE_ERRORS as e:
                logger.warning("Exchange info unavailable, tick %.8f: %s", default, _describe(e))
                return default
        return self._price_tick[symbol]

    def set_leverage(self, symbol: str, leverage: int) -> Optional[dict]:
        try:
            res = self._client.futures_change_leverage(symbol=symbol, leverage=leverage)
            logger.info("Leverage set to %sx for %s", leverage, symbol)
            return res
        except VENUE_ERRORS as e:
            logger.warning("Could not set leverage: %s", _describe(e))
            return None

    # --- orders ------------------------------------------------------------

    def place_market_order(self, symbol: str, side: SignalSide, quantity: float) -> OrderResult:
        try:
            res = self._client.futures_create_order(
                symbol=symbol, side=side.value, type="MARKET", quantity=str(quantity)
            )
        except VENUE_ERRORS as e:
            logger.error("Error placing order: %s", _describe(e))
            return OrderResult(success=False, message=_describe(e))
        avg = float(res.get("avgPrice") or 0.0) or None
        logger.info("Order placed: %s %s %s", side.value, quantity, symbol)
        return OrderResult(success=True, order_id=str(res.get("orderId")), avg_price=avg, quantity=quantity)

    def place_stop_order(
        self,
        symbol: str,
        side: SignalSide,
        quantity: float,
        stop_price: float,
    ) -> OrderResult:
        stop = format_decimal(round_price(stop_price, self._tick(symbol)), self.price_decimals)
        try:
            res = self._client.futures_create_order(
                symbol=symbol, side=side.value, type="STOP_MARKET",
                stopPrice=stop, quantity=str(quantity),
            )
        except VENUE_ERRORS as e:
            logger.error("Error placing stop: %s", _describe(e))
            return OrderResult(success=False, message=_describe(e))
        logger.info("Stop loss set at %s", stop)
        return OrderResult(success=True, order_id=str(res.get("orderId")), quantity=quantity)

    @retry_on_rate_limit(max_retries=2)
    def _position_risk(self) -> list:
        return self._client.futures_position_information()

    def get_open_position(self, symbol: str) -> Optional[ExchangePosition]:
        try:
            rows = self._position_risk()
        except VENUE_ERRORS as e:
            logger.error("Error fetching position: %s", _describe(e))
            return None
        for p in rows:
            if p.get("symbol") != symbol:
                continue
            amt = float(p.get("positionAmt", 0.0))
            if amt == 0:
                return None
            return ExchangePosition(
                symbol=symbol,
                side=SignalSide.LONG if amt > 0 else SignalSide.SHORT,
                quantity=abs(amt),
                entry_price=float(p.get("entryPrice", 0)),
                unrealized_pnl=float(p.get("unRealizedProfit", 0)),
                leverage=int(p.get("leverage", 1)),
            )
        return None
