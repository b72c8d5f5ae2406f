"""Client-side rate limiting for outbound HTTP calls.

Sliding window limiter: at most ``max_requests`` requests are started in any
``per_seconds`` window. A caller that would exceed the limit blocks until the
oldest request in the window expires.

Usage:
    limiter = RateLimitHandler(max_requests=10, per_seconds=1)
    limiter.wait()  # blocks only when the window is full
    response = session.get(url)
"""

import threading
import time
from collections import deque
from typing import Callable, Deque

from infrastructure.logging import get_module_logger

logger = get_module_logger()


class RateLimitHandler:
    """Thread-safe sliding window rate limiter.

    Args:
        max_requests: Requests allowed per window
        per_seconds: Window length in seconds
        clock: Monotonic time source in seconds
        sleep: Blocking sleep function, in seconds
    """

    def __init__(
        self,
        max_requests: int,
        per_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if per_seconds <= 0:
            raise ValueError("per_seconds must be positive")

        self.max_requests = max_requests
        self.per_seconds = per_seconds
        self._clock = clock
        self._sleep = sleep
        self._timestamps: Deque[float] = deque()

        # Held while sleeping so waiters are served in turn
        self._lock = threading.Lock()

    def wait(self) -> float:
        """Block until a request may be sent, then record it.

        Returns:
            Seconds spent waiting (0.0 when the window had room).
        """
        with self._lock:
            now = self._clock()
            self._prune(now)

            waited = 0.0
            if len(self._timestamps) >= self.max_requests:
                waited = max(0.0, self._timestamps[0] + self.per_seconds - now)
                if waited > 0:
                    logger.debug(
                        "rate_limit_waiting",
                        wait_seconds=round(waited, 3),
                        max_requests=self.max_requests,
                        per_seconds=self.per_seconds,
                    )
                    self._sleep(waited)
                now = self._clock()
                self._prune(now)

            self._timestamps.append(now)
            return waited

    def get_remaining_requests(self) -> int:
        """Requests that can start now without waiting."""
        with self._lock:
            self._prune(self._clock())
            return max(0, self.max_requests - len(self._timestamps))

    def can_request(self) -> bool:
        return self.get_remaining_requests() > 0

    def get_wait_time(self) -> float:
        """Seconds until the next request may start (0.0 if one may start now)."""
        with self._lock:
            now = self._clock()
            self._prune(now)
            if len(self._timestamps) < self.max_requests:
                return 0.0
            return max(0.0, self._timestamps[0] + self.per_seconds - now)

    def reset(self) -> None:
        """Forget every recorded request."""
        with self._lock:
            self._timestamps.clear()

    def _prune(self, now: float) -> None:
        window_start = now - self.per_seconds
        while self._timestamps and self._timestamps[0] <= window_start:
            self._timestamps.popleft()
