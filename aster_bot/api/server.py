"""
Status API (FastAPI). Read-only views of the account plus stop/close commands.

Endpoints:
  GET  /api/status   balance, open position, trade count
  GET  /api/trades   closed trades and summary figures
  GET  /api/market   live price from the venue
  POST /api/stop     stop the trading loop (takes effect at the next cycle)
  POST /api/close    close the open position at the next cycle
  GET  /health       liveness
"""

from __future__ import annotations
import logging
import math
import threading
import time
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from aster_bot.analytics.metrics import summarize_trades
from aster_bot.execution.base import ExecutionClient
from aster_bot.live.controller import PositionController
from aster_bot.live.runner import TradingRunner

logger = logging.getLogger("aster_bot.api")


def _finite(x: float) -> Optional[float]:
    # JSON has no inf
    return x if math.isfinite(x) else None


def create_app(
    controller: PositionController,
    runner: Optional[TradingRunner] = None,
    client: Optional[ExecutionClient] = None,
    exchange: str = "Aster Dex",
) -> FastAPI:
    app = FastAPI(title="Aster trend bot", version="1.0.0")
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    started = time.monotonic()
    state = controller.state
    symbol = controller.symbol

    @app.get("/api/status")
    def status() -> dict:
        snap = state.snapshot()
        snap["state"] = controller.status.value
        snap["running"] = runner.running if runner else False
        return snap

    @app.get("/api/trades")
    def trades() -> dict:
        history, balance = state.history_snapshot()
        profit = sum(t.profit for t in history)
        stats = summarize_trades(history, starting_balance=balance - profit)
        return {
            "trades": [t.to_dict() for t in history],
            "total_trades": stats.total_trades,
            "winning_trades": stats.winning_trades,
            "win_rate": stats.win_rate_pct,
            "total_profit": stats.total_profit,
            "profit_factor": _finite(stats.profit_factor),
            "expectancy": stats.expectancy,
            "max_drawdown_pct": stats.max_drawdown_pct,
        }

    @app.get("/api/market")
    def market() -> dict:
        venue = client or controller.client
        return {
            "symbol": symbol,
            "price": venue.get_current_price(symbol),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.post("/api/stop")
    def stop() -> dict:
        if runner is not None:
            runner.stop()
        return {"message": "Trading stopped"}

    @app.post("/api/close")
    def close() -> dict:
        if not state.in_position:
            return {"message": "No open position"}
        controller.request_close()
        return {"message": "Close requested"}

    @app.get("/health")
    def health() -> dict:
        return {
            "status": "ok",
            "uptime": round(time.monotonic() - started, 1),
            "exchange": exchange,
            "symbol": symbol,
        }

    return app


def serve_in_background(app: FastAPI, host: str = "0.0.0.0", port: int = 3000) -> threading.Thread:
    """Run uvicorn on a daemon thread; the trading loop keeps the main thread."""
    config = uvicorn.Config(app, host=host, port=port, log_config=None, access_log=False)
    server = uvicorn.Server(config)
    thread = threading.Thread(target=server.run, name="status-api", daemon=True)
    thread.start()
    logger.info("Status API on http://%s:%d", host, port)
    return thread
