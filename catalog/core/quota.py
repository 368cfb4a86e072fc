"""Request quota gate for the Poly API.

Every outbound request (page listings, asset files and resource files) is
metered through one shared counter. When the counter reaches the configured
ceiling the gate pauses the whole crawl for a cooldown interval, resets the
counter, and then runs the call that triggered it.

Features:
- Works with any zero-argument callable (the unit of work)
- Results and exceptions of the unit pass through unchanged
- Owned by a crawl session rather than a module-level singleton
"""
from __future__ import annotations

import logging
import time
from typing import Callable, TypeVar

from .config import get_crawl_config

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_REQUESTS = 3000
DEFAULT_COOLDOWN_S = 60.0


class QuotaGate:
    """Counts gated calls and forces a cooldown once the ceiling is reached.

    Attributes:
        max_requests: Number of calls permitted before a cooldown
        cooldown_s: Length of the cooldown pause in seconds
    """

    def __init__(self, max_requests: int = DEFAULT_MAX_REQUESTS, cooldown_s: float = DEFAULT_COOLDOWN_S):
        self.max_requests = max(1, int(max_requests))
        self.cooldown_s = max(0.0, float(cooldown_s))
        self._count = 0

    @classmethod
    def from_config(cls) -> "QuotaGate":
        """Create a gate from the crawl section of the configuration."""
        crawl = get_crawl_config()
        return cls(
            max_requests=int(crawl.get("max_requests", DEFAULT_MAX_REQUESTS)),
            cooldown_s=float(crawl.get("cooldown_ms", DEFAULT_COOLDOWN_S * 1000)) / 1000.0,
        )

    @property
    def requests_count(self) -> int:
        """Calls counted since the last cooldown."""
        return self._count

    def reset(self) -> None:
        """Reset the request counter to zero."""
        self._count = 0

    def gate(self, unit_of_work: Callable[[], T]) -> T:
        """Run a unit of work, pausing first if the request quota is used up.

        Args:
            unit_of_work: Zero-argument callable performing the request(s)

        Returns:
            Whatever unit_of_work returns (its exceptions propagate)
        """
        self._count += 1
        if self._count >= self.max_requests:
            logger.info(
                "Max requests reached (%d), waiting %.0f seconds...",
                self._count, self.cooldown_s
            )
            self._count = 0
            time.sleep(self.cooldown_s)
            logger.info("Continuing...")
        return unit_of_work()


__all__ = [
    "QuotaGate",
    "DEFAULT_MAX_REQUESTS",
    "DEFAULT_COOLDOWN_S",
]
