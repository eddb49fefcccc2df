"""Rate limiting for concurrent metadata lookups."""

from __future__ import annotations

import logging
import random
import threading
import time

from ..config import (
    RATE_LIMIT_JITTER_RANGE,
    RATE_LIMIT_MAX_CONCURRENT,
    RATE_LIMIT_THROTTLE_SECONDS,
)

__all__ = ["RateLimiter"]

LOGGER = logging.getLogger(__name__)


class RateLimiter:
    """Soft concurrency cap with optional throttle and jitter to smooth bursts.

    Interpolation fans out one lookup per segment midpoint, so the cap is what
    keeps a long route from flooding the metadata service.
    """

    def __init__(
        self,
        max_concurrent: int = RATE_LIMIT_MAX_CONCURRENT,
        jitter_range: tuple[float, float] = RATE_LIMIT_JITTER_RANGE,
        throttle_seconds: float = RATE_LIMIT_THROTTLE_SECONDS,
    ) -> None:
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be >= 1")
        self._lock = threading.Lock()
        self._cond = threading.Condition(self._lock)
        self._max_allowed = max_concurrent
        self._in_flight = 0
        self._throttle_until: float = 0.0
        self._jitter_range = jitter_range
        self._throttle_seconds = throttle_seconds

    def before_request(self) -> None:
        with self._cond:
            while self._in_flight >= self._max_allowed:
                self._cond.wait()
            self._in_flight += 1
            wait_for = max(0.0, self._throttle_until - time.time())
        if wait_for > 0:
            time.sleep(wait_for)
        lo, hi = self._jitter_range
        if hi > 0:
            # Random jitter smooths bursts; not used for security-sensitive logic.
            time.sleep(random.uniform(lo, hi))  # nosec B311

    def after_response(self, status_code: int | None, *, over_quota: bool = False) -> None:
        """Release a slot, throttling when the service signalled a quota problem."""

        if status_code == 429 or over_quota:
            LOGGER.warning(
                "Lookup quota exceeded (status=%s). Throttling %ss.",
                status_code,
                self._throttle_seconds,
            )
            with self._cond:
                self._throttle_until = time.time() + self._throttle_seconds
        with self._cond:
            self._in_flight = max(0, self._in_flight - 1)
            if self._in_flight < self._max_allowed:
                self._cond.notify()

