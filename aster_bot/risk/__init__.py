"""Risk: position sizing."""

from aster_bot.risk.manager import RiskManager, RiskResult

__all__ = ["RiskManager", "RiskResult"]
