"""Telegram notifications for trade events. Never log token or chat_id."""

from __future__ import annotations
import logging

import requests

logger = logging.getLogger("aster_bot.utils.telegram")


def send_telegram(text: str, bot_token: str = "", chat_id: str = "") -> bool:
    """Send message to Telegram. Returns True on success; False when not configured or on error."""
    if not bot_token or not chat_id:
        logger.debug("Telegram not configured, skipping message (len=%d)", len(text))
        return False
    try:
        url = f"https://api.telegram.org/bot{bot_token}/sendMessage"
        r = requests.post(url, json={"chat_id": chat_id, "text": text}, timeout=10)
        if r.status_code != 200:
            logger.warning("Telegram send failed: %s %s", r.status_code, r.text[:200])
            return False
        return True
    except requests.RequestException as e:
        logger.warning("Telegram error: %s", e)
        return False


class TelegramNotifier:
    """Callable notifier bound to one chat, prefixed with the bot's symbol."""

    def __init__(self, bot_token: str, chat_id: str, prefix: str = ""):
        self._bot_token = bot_token
        self._chat_id = chat_id
        self.prefix = prefix

    @property
    def enabled(self) -> bool:
        return bool(self._bot_token and self._chat_id)

    def __call__(self, text: str) -> bool:
        msg = f"[{self.prefix}] {text}" if self.prefix else text
        return send_telegram(msg, self._bot_token, self._chat_id)
