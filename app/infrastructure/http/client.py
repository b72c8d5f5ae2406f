"""HTTP client for provider calls made by notification channels.

Wraps a requests session with:
- Pluggable authentication (AuthStrategy headers merged per attempt)
- Optional client-side rate limiting (sliding window)
- Retry with backoff for transient statuses and network errors,
  honouring Retry-After on 429 responses
- Structured logging of every attempt

Usage:
    from infrastructure.http import HttpClient, BearerAuth, RetryStrategy

    client = HttpClient(timeout=30).with_auth(BearerAuth(key)).with_retry(
        RetryStrategy(max_attempts=3)
    )
    response = client.post_json("https://fcm.googleapis.com/fcm/send", payload)
    if client.is_success(response):
        data = response_json(response)
"""

import copy
import time
from typing import Any, Callable, Dict, Optional, Union

import requests

from infrastructure.exceptions import ProtocolError, TransportError
from infrastructure.http.auth import AuthStrategy
from infrastructure.http.rate_limit import RateLimitHandler
from infrastructure.http.retry import (
    RATE_LIMITED_STATUS,
    RetryStrategy,
    parse_retry_after,
)
from infrastructure.logging import get_module_logger

logger = get_module_logger()

DEFAULT_TIMEOUT = 30
DEFAULT_USER_AGENT = "eventrelay/1.0"
MIN_TIMEOUT = 1
MAX_TIMEOUT = 300


def response_json(response: requests.Response) -> Any:
    """Parse a response body as JSON.

    Args:
        response: Response returned by HttpClient.

    Returns:
        Decoded JSON value.

    Raises:
        ProtocolError: If the body is not valid JSON.
    """
    try:
        return response.json()
    except ValueError as e:
        raise ProtocolError(
            f"Invalid JSON response (HTTP {response.status_code}): {e}"
        ) from e


class HttpClient:
    """Blocking HTTP client with auth, rate limiting and retry.

    Builder methods (with_auth, with_retry, with_rate_limit, with_timeout,
    with_headers) return configured copies sharing the same connection pool
    and rate limiter, so a base client can be specialised per provider.

    Attributes:
        timeout: Request timeout in seconds
        auth: Optional AuthStrategy applied to every request
        retry: Optional RetryStrategy; without one each request is attempted once
        rate_limit: Optional RateLimitHandler consulted once per request
    """

    def __init__(
        self,
        timeout: int = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.timeout = _clamp_timeout(timeout)
        self.auth: Optional[AuthStrategy] = None
        self.retry: Optional[RetryStrategy] = None
        self.rate_limit: Optional[RateLimitHandler] = None
        self._session = session or requests.Session()
        self._default_headers: Dict[str, str] = {
            "User-Agent": user_agent,
            "Accept": "application/json",
        }
        self._sleep = sleep

    # Builder methods

    def with_auth(self, auth: AuthStrategy) -> "HttpClient":
        clone = copy.copy(self)
        clone.auth = auth
        return clone

    def with_retry(self, retry: RetryStrategy) -> "HttpClient":
        clone = copy.copy(self)
        clone.retry = retry
        return clone

    def with_rate_limit(
        self,
        max_requests: int,
        per_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> "HttpClient":
        clone = copy.copy(self)
        clone.rate_limit = RateLimitHandler(
            max_requests, per_seconds, clock=clock, sleep=self._sleep
        )
        return clone

    def with_timeout(self, seconds: int) -> "HttpClient":
        clone = copy.copy(self)
        clone.timeout = _clamp_timeout(seconds)
        return clone

    def with_headers(self, headers: Dict[str, str]) -> "HttpClient":
        clone = copy.copy(self)
        clone._default_headers = {**self._default_headers, **headers}
        return clone

    # HTTP methods

    def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        """Send a GET request."""
        return self._request("GET", url, params=params, headers=headers)

    def post(
        self,
        url: str,
        data: Optional[Union[Dict[str, Any], str]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        """Send a POST request with a form-encoded (dict) or raw (str) body."""
        return self._request("POST", url, data=data, headers=headers)

    def post_json(
        self,
        url: str,
        json_data: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        """Send a POST request with a JSON body."""
        return self._request("POST", url, json_data=json_data, headers=headers)

    def put(
        self,
        url: str,
        json_data: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        """Send a PUT request with a JSON body."""
        return self._request("PUT", url, json_data=json_data, headers=headers)

    def patch(
        self,
        url: str,
        json_data: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        """Send a PATCH request with a JSON body."""
        return self._request("PATCH", url, json_data=json_data, headers=headers)

    def delete(
        self, url: str, headers: Optional[Dict[str, str]] = None
    ) -> requests.Response:
        """Send a DELETE request."""
        return self._request("DELETE", url, headers=headers)

    @staticmethod
    def is_success(response: requests.Response) -> bool:
        """Check for a 2xx status."""
        return 200 <= response.status_code < 300

    def close(self) -> None:
        """Close the HTTP session and release connections."""
        self._session.close()

    def _request(
        self,
        method: str,
        url: str,
        data: Optional[Union[Dict[str, Any], str]] = None,
        json_data: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        """Send a request, retrying transient failures.

        Returns:
            The last response received. Non-retryable error statuses and
            retryable statuses on the final attempt are returned, not raised.

        Raises:
            TransportError: If the endpoint could not be reached on the
                final attempt.
            AuthenticationError, TransportError, ProtocolError: Propagated
                from the auth strategy while building headers.
        """
        max_attempts = self.retry.get_max_attempts() if self.retry else 1
        log = logger.bind(method=method, url=url)

        if self.rate_limit is not None:
            waited = self.rate_limit.wait()
            if waited:
                log.info("http_rate_limited", wait_seconds=round(waited, 3))
        attempt = 0

        while True:
            attempt += 1
            request_headers = self._build_headers(
                json_body=json_data is not None, extra=headers
            )

            try:
                response = self._session.request(
                    method=method,
                    url=url,
                    data=data,
                    json=json_data,
                    params=params,
                    headers=request_headers,
                    timeout=self.timeout,
                )
            except requests.RequestException as e:
                if self.retry is None or attempt >= max_attempts:
                    log.error(
                        "http_request_failed",
                        attempt=attempt,
                        max_attempts=max_attempts,
                        error=str(e),
                    )
                    raise TransportError(f"HTTP {method} {url} failed: {e}") from e

                delay_ms = self.retry.get_delay(attempt)
                log.warning(
                    "http_request_error_retrying",
                    attempt=attempt,
                    max_attempts=max_attempts,
                    delay_ms=delay_ms,
                    error=str(e),
                )
                self._sleep(delay_ms / 1000)
                continue

            if (
                self.retry is not None
                and attempt < max_attempts
                and self.retry.should_retry(response.status_code)
            ):
                retry_after = None
                if response.status_code == RATE_LIMITED_STATUS:
                    retry_after = parse_retry_after(
                        response.headers.get("Retry-After")
                    )
                delay_ms = self.retry.get_delay(attempt, retry_after=retry_after)
                log.warning(
                    "http_status_retrying",
                    status_code=response.status_code,
                    attempt=attempt,
                    max_attempts=max_attempts,
                    delay_ms=delay_ms,
                )
                self._sleep(delay_ms / 1000)
                continue

            log.debug(
                "http_request_completed",
                status_code=response.status_code,
                attempt=attempt,
            )
            return response

    def _build_headers(
        self, json_body: bool, extra: Optional[Dict[str, str]] = None
    ) -> Dict[str, str]:
        headers = dict(self._default_headers)
        if json_body:
            headers["Content-Type"] = "application/json"
        if extra:
            headers.update(extra)
        if self.auth is not None:
            headers.update(self.auth.get_headers())
        return headers


def _clamp_timeout(seconds: int) -> int:
    return min(max(MIN_TIMEOUT, seconds), MAX_TIMEOUT)
