"""
Fixed-interval decision loop. One cycle runs to completion (network calls
included) before the next wait starts, so cycles never overlap.
"""

from __future__ import annotations
import logging
import threading
from typing import Optional

from aster_bot.live.controller import PositionController

logger = logging.getLogger("aster_bot.live.runner")


class TradingRunner:
    """Drives PositionController.run_cycle every interval_s seconds until stopped."""

    def __init__(self, controller: PositionController, interval_s: float = 30.0):
        self.controller = controller
        self.interval_s = interval_s
        self._running = threading.Event()
        self._wake = threading.Event()
        self._stopped = threading.Event()
        self.cycles = 0

    @property
    def running(self) -> bool:
        return self._running.is_set()

    def run(self, max_cycles: Optional[int] = None) -> None:
        """Loop until stop(). A stop issued before run() is honoured: no cycle runs."""
        if self._stopped.is_set():
            logger.info("Stop requested before start, not running")
            return
        self._running.set()
        self._wake.clear()
        logger.info("Bot started (interval %.0fs)", self.interval_s)
        try:
            while self._running.is_set() and not self._stopped.is_set():
                try:
                    self.controller.run_cycle()
                except Exception as e:
                    logger.exception("Cycle error: %s", e)
                self.cycles += 1
                if max_cycles is not None and self.cycles >= max_cycles:
                    break
                self._wake.wait(self.interval_s)
        except KeyboardInterrupt:
            logger.info("Shutdown by user")
        finally:
            self._running.clear()
            logger.info("Bot stopped after %d cycles", self.cycles)

    def stop(self) -> None:
        """Clear the running flag; the loop exits before its next cycle. A stopped runner stays stopped."""
        self._stopped.set()
        if self._running.is_set():
            logger.info("Stop requested")
        self._running.clear()
        self._wake.set()
