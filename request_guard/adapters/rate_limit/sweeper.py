"""Background task that runs a callback on a fixed cadence."""

from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class PeriodicSweeper:
    """Run ``callback`` every ``interval`` seconds on a daemon thread.

    The thread waits on an Event rather than sleeping, so ``stop()`` returns
    as soon as the current callback (if any) finishes.
    """

    def __init__(self, callback: Callable[[], object], interval: float, *, name: str = "rate-limit-sweeper") -> None:
        if not interval > 0:
            raise ValueError("interval must be > 0")

        self._callback = callback
        self._interval = interval
        self._stop_event = threading.Event()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def start(self) -> None:
        self._thread.start()
        logger.debug("sweeper.started", extra={"interval_s": self._interval})

    def stop(self, timeout: float | None = 5.0) -> None:
        """Signal the loop to exit and wait for the thread to finish."""
        self._stop_event.set()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout)
        logger.debug("sweeper.stopped")

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                self._callback()
            except Exception:
                logger.exception("rate_limit.sweep_failed")
