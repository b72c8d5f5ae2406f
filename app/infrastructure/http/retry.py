"""Retry policy for outbound HTTP calls.

Classifies HTTP status codes as transient or permanent and computes the
backoff delay between attempts.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from infrastructure.configuration import HttpSettings

RATE_LIMITED_STATUS = 429


def parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Read a Retry-After header given in delta-seconds.

    Returns:
        Seconds to wait, or None when the header is missing, negative or
        not an integer (HTTP-date values are not supported).
    """
    if not value:
        return None
    try:
        seconds = int(value)
    except (ValueError, TypeError):
        return None
    return seconds if seconds >= 0 else None


@dataclass(frozen=True)
class RetryStrategy:
    """Retry policy with optional exponential backoff.

    Attributes:
        max_attempts: Ceiling on the number of attempts, including the first one
        exponential_backoff: Double the delay after each failed attempt
        base_delay_ms: Constant delay, or first delay when backing off
        max_delay_ms: Upper bound for the computed delay

    Example:
        strategy = RetryStrategy(max_attempts=3)

        # Delays: attempt 1 -> 1000ms, attempt 2 -> 2000ms, attempt 3 -> 4000ms
        if strategy.should_retry(response.status_code):
            time.sleep(strategy.get_delay(attempt) / 1000)
    """

    max_attempts: int = 3
    exponential_backoff: bool = True
    base_delay_ms: int = 1000
    max_delay_ms: int = 60000

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay_ms < 0:
            raise ValueError("base_delay_ms must not be negative")
        if self.max_delay_ms < self.base_delay_ms:
            raise ValueError("max_delay_ms must be >= base_delay_ms")

    @classmethod
    def from_settings(cls, settings: "HttpSettings") -> "RetryStrategy":
        """Build a strategy from the HTTP settings section.

        Args:
            settings: HttpSettings instance.

        Returns:
            RetryStrategy configured from the environment.
        """
        return cls(
            max_attempts=settings.retry_max_attempts,
            exponential_backoff=settings.retry_exponential_backoff,
            base_delay_ms=settings.retry_base_delay_ms,
            max_delay_ms=settings.retry_max_delay_ms,
        )

    def get_max_attempts(self) -> int:
        """Return the configured attempt ceiling."""
        return self.max_attempts

    def should_retry(self, status_code: int) -> bool:
        """Check whether an HTTP status is transient.

        Rate limiting (429) and every server error (5xx) are retryable;
        all other statuses, including other 4xx codes, are not.

        Args:
            status_code: HTTP status code of the response.

        Returns:
            True if the request should be attempted again.
        """
        return status_code == RATE_LIMITED_STATUS or 500 <= status_code < 600

    def get_delay(self, attempt: int, retry_after: Optional[int] = None) -> int:
        """Compute the delay before the next attempt.

        Args:
            attempt: Number of the attempt that just failed (1-indexed).
            retry_after: Seconds the server asked us to wait (Retry-After).
                Used as a lower bound, itself capped at max_delay_ms.

        Returns:
            Delay in milliseconds.

        Raises:
            ValueError: If attempt is lower than 1.
        """
        if attempt < 1:
            raise ValueError("attempt must be at least 1")

        if not self.exponential_backoff:
            delay = self.base_delay_ms
        else:
            # Beyond this exponent the cap always applies; skip huge integers
            exponent = min(attempt - 1, 62)
            delay = min(self.base_delay_ms * (2**exponent), self.max_delay_ms)

        if retry_after is not None:
            delay = max(delay, min(retry_after * 1000, self.max_delay_ms))
        return delay
