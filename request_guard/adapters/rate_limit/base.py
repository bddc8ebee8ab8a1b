"""Rate limiter interfaces and value types.

The API depends on this abstraction (not the concrete implementation) so the
registry can later move to a shared store with minimal changes.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class RateLimitEntry:
    """Per-identifier counter for the current fixed window.

    Attributes:
        count: Requests admitted in the current window (always >= 1).
        window_end: UNIX time (seconds) when the window resets.
    """

    count: int
    window_end: float


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a single admission check.

    Attributes:
        allowed: Whether the request may proceed.
        limit: Max requests per window applied to this check.
        remaining: Requests left in the current window (0 when denied).
        reset_in: Seconds until the current window resets.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_in: float

    @property
    def retry_after_seconds(self) -> int | None:
        """Whole seconds a denied client should wait, ``None`` if allowed."""
        if self.allowed:
            return None
        return max(0, math.ceil(self.reset_in))


class AbstractRateLimiter(ABC):
    """Interface for rate limiters."""

    @abstractmethod
    def check(
        self,
        identifier: str,
        max_requests: int | None = None,
        window_seconds: float | None = None,
    ) -> RateLimitResult:
        """Admit or deny one request for ``identifier``.

        Args:
            identifier: Opaque caller key (e.g. client IP, user id).
            max_requests: Requests allowed per window; limiter default if None.
            window_seconds: Window length; limiter default if None.

        Returns:
            RateLimitResult describing the decision.
        """
        raise NotImplementedError

    @abstractmethod
    def sweep(self) -> int:
        """Evict stale tracking state and return how many entries were removed."""
        raise NotImplementedError

    def close(self) -> None:
        """Release background resources. No-op by default."""
