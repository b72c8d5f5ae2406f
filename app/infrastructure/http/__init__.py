"""Outbound HTTP support for network-backed notification channels.

Exports the AuthStrategy family, the RetryStrategy policy, the
RateLimitHandler and the HttpClient that composes them.
"""

from infrastructure.http.auth import (
    ApiKeyAuth,
    AuthCredential,
    AuthStrategy,
    BasicAuth,
    BearerAuth,
    TokenExchangeAuth,
)
from infrastructure.http.client import HttpClient, response_json
from infrastructure.http.rate_limit import RateLimitHandler
from infrastructure.http.retry import RetryStrategy

__all__ = [
    "ApiKeyAuth",
    "AuthCredential",
    "AuthStrategy",
    "BasicAuth",
    "BearerAuth",
    "TokenExchangeAuth",
    "HttpClient",
    "response_json",
    "RateLimitHandler",
    "RetryStrategy",
]
