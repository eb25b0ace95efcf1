"""Utils: Telegram, timeframes, exchange filters."""

from aster_bot.utils.telegram import TelegramNotifier, send_telegram
from aster_bot.utils.timeframes import timeframe_minutes

__all__ = ["TelegramNotifier", "send_telegram", "timeframe_minutes"]
