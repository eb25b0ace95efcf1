#!/usr/bin/env python3
"""
Aster trend bot CLI: live | check
Usage:
  python main.py live [--config config.yaml]
  python main.py check [--config config.yaml]
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path

# Project root
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from aster_bot.api.server import create_app, serve_in_background
from aster_bot.core.config import Config, load_config
from aster_bot.core.logger import setup_logging
from aster_bot.execution.aster_futures import AsterFuturesClient
from aster_bot.live.controller import PositionController
from aster_bot.live.runner import TradingRunner
from aster_bot.risk.manager import RiskManager
from aster_bot.strategies.atr_ma_momentum import AtrMaMomentumStrategy
from aster_bot.utils.telegram import TelegramNotifier

logger = logging.getLogger("aster_bot")


def _strategy(config: Config) -> AtrMaMomentumStrategy:
    return AtrMaMomentumStrategy(
        ma_period=config.ma_period,
        atr_period=config.atr_period,
        atr_multiplier=config.atr_multiplier,
        risk_reward_ratio=config.risk_reward_ratio,
    )


def _client(config: Config) -> AsterFuturesClient:
    client = AsterFuturesClient(config.api_key, config.api_secret, base_url=config.base_url)
    client.sync_time()
    return client


def _load(config_path: Path | None) -> Config | None:
    config = load_config(config_path, ROOT)
    setup_logging(config.log_level, config.log_dir, config.log_file)
    if not config.has_credentials:
        logger.error("Missing API_KEY or API_SECRET in .env")
        return None
    return config


def run_check(config_path: Path | None) -> int:
    """Fetch candles once and print indicator readings and the current signal. No orders."""
    config = _load(config_path)
    if config is None:
        return 1
    client = _client(config)
    strategy = _strategy(config)
    df = client.get_klines(config.symbol, config.timeframe, limit=config.candle_limit)
    if df.empty:
        logger.error("No candles returned for %s", config.symbol)
        return 1
    print(f"\n--- {config.symbol} {config.timeframe} ---")
    for key, value in strategy.describe(df).items():
        print(f"{key:>10}: {value}")
    signal = strategy.get_signal(df)
    if signal is None:
        print("    signal: none")
    else:
        print(f"    signal: {signal.side.name} entry={signal.entry_price:.4f} "
              f"SL={signal.stop_loss:.4f} TP={signal.take_profit:.4f}")
    print(f"   balance: {client.get_balance():.2f}")
    return 0


def run_live(config_path: Path | None) -> int:
    """Run the trading loop with the status API alongside."""
    config = _load(config_path)
    if config is None:
        return 1
    logger.info("Aster trend bot | %s | leverage %sx", config.symbol, config.leverage)
    client = _client(config)
    notifier = TelegramNotifier(config.telegram_bot_token, config.telegram_chat_id, prefix=config.symbol)
    controller = PositionController(
        client=client,
        strategy=_strategy(config),
        risk_manager=RiskManager(config.position_size_pct, config.leverage),
        symbol=config.symbol,
        timeframe=config.timeframe,
        leverage=config.leverage,
        candle_limit=config.candle_limit,
        notifier=notifier if notifier.enabled else None,
    )
    runner = TradingRunner(controller, interval_s=config.check_interval_s)
    serve_in_background(create_app(controller, runner, client), config.host, config.port)

    controller.initialize()
    notifier(f"Trading bot starting | leverage={config.leverage}x | balance={controller.state.balance:.2f}")
    runner.run()
    notifier("Trading bot stopped.")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Aster trend bot CLI")
    parser.add_argument("mode", choices=["live", "check"], help="Run the bot or print the current signal")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    args = parser.parse_args()
    if args.mode == "check":
        return run_check(args.config)
    return run_live(args.config)


if __name__ == "__main__":
    sys.exit(main())
