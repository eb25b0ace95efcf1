"""
Load configuration from config.yaml and .env. API keys only from env.
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from aster_bot.utils.timeframes import timeframe_minutes

DEFAULT_BASE_URL = "https://fapi.asterdex.com"


def _env_path(project_root: Optional[Path] = None) -> Path:
    root = project_root or Path(__file__).resolve().parents[2]
    return root / ".env"


def load_dotenv_if_exists(project_root: Optional[Path] = None) -> None:
    """Load .env from project root if present."""
    path = _env_path(project_root)
    if path.exists():
        load_dotenv(path)


def load_config(config_path: Optional[Path] = None, project_root: Optional[Path] = None) -> "Config":
    """Load config.yaml and overlay with env. Returns Config."""
    load_dotenv_if_exists(project_root)
    root = project_root or Path(__file__).resolve().parents[2]
    path = config_path or root / "config.yaml"
    data: dict[str, Any] = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    def env(key: str, default: str = "") -> str:
        return os.getenv(key, str(default)).strip()

    def env_int(key: str, default: int = 0) -> int:
        try:
            return int(os.getenv(key, str(default)))
        except ValueError:
            return default

    def env_float(key: str, default: float = 0.0) -> float:
        try:
            return float(os.getenv(key, str(default)))
        except ValueError:
            return default

    api = data.get("api", {})
    strategy = data.get("strategy", {})
    execution = data.get("execution", {})
    server = data.get("server", {})
    telegram = data.get("telegram", {})
    logging_cfg = data.get("logging", {})

    timeframe = env("TIMEFRAME", strategy.get("timeframe", "5m"))
    timeframe_minutes(timeframe)  # raises ValueError on an unsupported timeframe

    return Config(
        # Credentials come from env only
        api_key=env("API_KEY"),
        api_secret=env("API_SECRET"),
        base_url=env("BASE_URL", api.get("base_url", DEFAULT_BASE_URL)).rstrip("/"),
        symbol=env("SYMBOL", strategy.get("symbol", "SUIUSDT")).upper(),
        timeframe=timeframe,
        # Strategy
        ma_period=env_int("MA_PERIOD", strategy.get("ma_period", 100)),
        atr_period=env_int("ATR_PERIOD", strategy.get("atr_period", 10)),
        atr_multiplier=env_float("ATR_MULTIPLIER", strategy.get("atr_multiplier", 3.0)),
        risk_reward_ratio=env_float("RISK_REWARD_RATIO", strategy.get("risk_reward_ratio", 1.0)),
        candle_limit=env_int("CANDLE_LIMIT", strategy.get("candle_limit", 150)),
        # Execution
        position_size_pct=env_float("POSITION_SIZE", execution.get("position_size_pct", 100.0)),
        leverage=env_int("LEVERAGE", execution.get("leverage", 10)),
        check_interval_s=env_float("CHECK_INTERVAL", execution.get("check_interval_s", 30.0)),
        # Status API
        host=env("HOST", server.get("host", "0.0.0.0")),
        port=env_int("PORT", server.get("port", 3000)),
        # Telegram
        telegram_bot_token=env("TELEGRAM_BOT_TOKEN", telegram.get("bot_token", "")),
        telegram_chat_id=env("TELEGRAM_CHAT_ID", telegram.get("chat_id", "")),
        # Logging
        log_level=env("LOG_LEVEL", logging_cfg.get("level", "INFO")),
        log_dir=Path(logging_cfg.get("log_dir", "logs")),
        log_file=logging_cfg.get("log_file", "aster_bot.log"),
    )


class Config:
    """Unified configuration. Immutable after load."""

    __slots__ = (
        "api_key", "api_secret", "base_url", "symbol", "timeframe",
        "ma_period", "atr_period", "atr_multiplier", "risk_reward_ratio", "candle_limit",
        "position_size_pct", "leverage", "check_interval_s",
        "host", "port",
        "telegram_bot_token", "telegram_chat_id",
        "log_level", "log_dir", "log_file",
    )

    def __init__(
        self,
        api_key: str = "",
        api_secret: str = "",
        base_url: str = DEFAULT_BASE_URL,
        symbol: str = "SUIUSDT",
        timeframe: str = "5m",
        ma_period: int = 100,
        atr_period: int = 10,
        atr_multiplier: float = 3.0,
        risk_reward_ratio: float = 1.0,
        candle_limit: int = 150,
        position_size_pct: float = 100.0,
        leverage: int = 10,
        check_interval_s: float = 30.0,
        host: str = "0.0.0.0",
        port: int = 3000,
        telegram_bot_token: str = "",
        telegram_chat_id: str = "",
        log_level: str = "INFO",
        log_dir: Path = None,
        log_file: str = "aster_bot.log",
    ):
        self.api_key = api_key
        self.api_secret = api_secret
        self.base_url = base_url
        self.symbol = symbol
        self.timeframe = timeframe
        self.ma_period = ma_period
        self.atr_period = atr_period
        self.atr_multiplier = atr_multiplier
        self.risk_reward_ratio = risk_reward_ratio
        self.candle_limit = candle_limit
        self.position_size_pct = position_size_pct
        self.leverage = leverage
        self.check_interval_s = check_interval_s
        self.host = host
        self.port = port
        self.telegram_bot_token = telegram_bot_token
        self.telegram_chat_id = telegram_chat_id
        self.log_level = log_level
        self.log_dir = Path(log_dir) if log_dir else Path("logs")
        self.log_file = log_file

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.api_secret)
