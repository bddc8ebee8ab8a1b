"""In-memory fixed-window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit,
  and state is lost on restart.
- Thread-safe: ``check``, ``sweep`` and ``reset`` share one lock.
"""

from __future__ import annotations

import logging
import time
from threading import RLock
from typing import Callable, MutableMapping

from request_guard.adapters.rate_limit.base import (
    AbstractRateLimiter,
    RateLimitEntry,
    RateLimitResult,
)
from request_guard.adapters.rate_limit.sweeper import PeriodicSweeper

logger = logging.getLogger(__name__)


class InMemoryFixedWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter counting requests per identifier in fixed windows.

    A window opens on the first request from an identifier and lasts
    ``window_seconds``. Requests beyond ``max_requests`` inside the window are
    denied without touching the stored count. The first request at or after
    the window end opens a new window.

    Stale entries (window ended more than ``grace_seconds`` ago) are removed by
    ``sweep()``, which a background ``PeriodicSweeper`` calls every
    ``sweep_interval_seconds``. Pass ``sweep_interval_seconds=None`` to drive
    sweeps manually.
    """

    def __init__(
        self,
        *,
        max_requests: int = 10,
        window_seconds: float = 60.0,
        grace_seconds: float = 60.0,
        sweep_interval_seconds: float | None = 300.0,
        clock: Callable[[], float] = time.time,
        entries: MutableMapping[str, RateLimitEntry] | None = None,
    ) -> None:
        """Initialize the limiter and start its sweeper.

        Args:
            max_requests: Default requests allowed per window.
            window_seconds: Default window length in seconds.
            grace_seconds: Extra age past ``window_end`` before an entry is swept.
            sweep_interval_seconds: Sweep cadence; None disables the thread.
            clock: Time source returning UNIX time in seconds.
            entries: Backing registry keyed by identifier (new dict if None).

        Raises:
            ValueError: If any limit or duration is out of range.
        """
        _require_positive_int("max_requests", max_requests)
        _require_positive("window_seconds", window_seconds)
        if not grace_seconds >= 0:
            raise ValueError("grace_seconds must be >= 0")
        if sweep_interval_seconds is not None:
            _require_positive("sweep_interval_seconds", sweep_interval_seconds)

        self._max_requests = max_requests
        self._window_seconds = window_seconds
        self._grace_seconds = grace_seconds
        self._clock = clock
        self._lock = RLock()
        self._entries: MutableMapping[str, RateLimitEntry] = {} if entries is None else entries

        self._sweeper: PeriodicSweeper | None = None
        if sweep_interval_seconds is not None:
            self._sweeper = PeriodicSweeper(self.sweep, sweep_interval_seconds)
            self._sweeper.start()

    def __enter__(self) -> "InMemoryFixedWindowRateLimiter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def max_requests(self) -> int:
        return self._max_requests

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    def check(
        self,
        identifier: str,
        max_requests: int | None = None,
        window_seconds: float | None = None,
    ) -> RateLimitResult:
        """Admit or deny one request for ``identifier``.

        Args:
            identifier: Non-empty caller key.
            max_requests: Per-call override of the request budget.
            window_seconds: Per-call override of the window length.

        Returns:
            RateLimitResult with the decision, remaining budget and the
            seconds left until the window resets.

        Raises:
            ValueError: If identifier is empty or an override is non-positive.
        """
        if not identifier:
            raise ValueError("identifier must be a non-empty string")
        limit = self._max_requests if max_requests is None else max_requests
        window = self._window_seconds if window_seconds is None else window_seconds
        _require_positive_int("max_requests", limit)
        _require_positive("window_seconds", window)

        with self._lock:
            now = self._clock()
            entry = self._entries.get(identifier)

            if entry is None or now >= entry.window_end:
                self._entries[identifier] = RateLimitEntry(count=1, window_end=now + window)
                return RateLimitResult(allowed=True, limit=limit, remaining=limit - 1, reset_in=window)

            reset_in = entry.window_end - now
            if entry.count >= limit:
                return RateLimitResult(allowed=False, limit=limit, remaining=0, reset_in=reset_in)

            entry.count += 1
            return RateLimitResult(
                allowed=True,
                limit=limit,
                remaining=limit - entry.count,
                reset_in=reset_in,
            )

    def sweep(self) -> int:
        """Remove entries whose window ended more than the grace period ago.

        Returns:
            Number of evicted entries.
        """
        with self._lock:
            now = self._clock()
            stale = [
                key
                for key, entry in self._entries.items()
                if now > entry.window_end + self._grace_seconds
            ]
            for key in stale:
                del self._entries[key]
            remaining = len(self._entries)

        if stale:
            logger.info(
                "rate_limit.sweep",
                extra={"evicted": len(stale), "tracked": remaining},
            )
        return len(stale)

    def reset(self, identifier: str | None = None) -> None:
        """Forget one identifier, or every identifier when None."""
        with self._lock:
            if identifier is None:
                self._entries.clear()
            else:
                self._entries.pop(identifier, None)

    def close(self) -> None:
        """Stop the background sweeper, if one is running."""
        if self._sweeper is not None:
            self._sweeper.stop()
            self._sweeper = None


def _require_positive(name: str, value: float) -> None:
    if not value > 0:
        raise ValueError(f"{name} must be > 0")


def _require_positive_int(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be an integer >= 1")
