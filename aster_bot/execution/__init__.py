"""Execution: venue abstraction and Aster Dex futures implementation."""

from aster_bot.execution.base import ExecutionClient, OrderResult
from aster_bot.execution.aster_futures import AsterFuturesClient

__all__ = ["ExecutionClient", "OrderResult", "AsterFuturesClient"]
