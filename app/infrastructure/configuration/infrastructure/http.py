"""HTTP client, retry policy and rate limit infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class HttpSettings(InfrastructureSettings):
    """Outbound HTTP configuration shared by network-backed channels.

    Environment Variables:
        HTTP_TIMEOUT_SECONDS: Request timeout for provider calls (default: 30)
        HTTP_USER_AGENT: User-Agent header sent with every request
        HTTP_RETRY_MAX_ATTEMPTS: Maximum attempts per request (default: 3)
        HTTP_RETRY_EXPONENTIAL_BACKOFF: Enable exponential backoff (default: True)
        HTTP_RETRY_BASE_DELAY_MS: Base backoff delay in milliseconds (default: 1000)
        HTTP_RETRY_MAX_DELAY_MS: Backoff cap in milliseconds (default: 60000)
        HTTP_RATE_LIMIT_MAX_REQUESTS: Requests allowed per window, 0 disables
            client-side rate limiting (default: 0)
        HTTP_RATE_LIMIT_PER_SECONDS: Rate limit window in seconds (default: 1)

    Exponential Backoff:
        Delay calculation: min(base_delay * 2 ^ (attempt - 1), max_delay)

        Example with defaults (base=1000ms, max=60000ms):
            Attempt 1: 1000ms
            Attempt 2: 2000ms
            Attempt 3: 4000ms
            Attempt 7+: capped at 60000ms

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        strategy = RetryStrategy.from_settings(settings.http)
        ```
    """

    timeout_seconds: int = Field(
        default=30,
        alias="HTTP_TIMEOUT_SECONDS",
        description="Timeout for outbound provider requests (seconds)",
    )
    user_agent: str = Field(
        default="eventrelay/1.0",
        alias="HTTP_USER_AGENT",
        description="User-Agent header for outbound requests",
    )
    retry_max_attempts: int = Field(
        default=3,
        alias="HTTP_RETRY_MAX_ATTEMPTS",
        description="Maximum attempts per request, including the first one",
    )
    retry_exponential_backoff: bool = Field(
        default=True,
        alias="HTTP_RETRY_EXPONENTIAL_BACKOFF",
        description="Double the delay after each failed attempt",
    )
    retry_base_delay_ms: int = Field(
        default=1000,
        alias="HTTP_RETRY_BASE_DELAY_MS",
        description="Base delay between attempts (milliseconds)",
    )
    retry_max_delay_ms: int = Field(
        default=60000,
        alias="HTTP_RETRY_MAX_DELAY_MS",
        description="Upper bound for the backoff delay (milliseconds)",
    )
    rate_limit_max_requests: int = Field(
        default=0,
        alias="HTTP_RATE_LIMIT_MAX_REQUESTS",
        description="Requests allowed per window; 0 disables rate limiting",
    )
    rate_limit_per_seconds: float = Field(
        default=1.0,
        alias="HTTP_RATE_LIMIT_PER_SECONDS",
        description="Rate limit window length (seconds)",
    )
