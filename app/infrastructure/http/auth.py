"""Authentication strategies for outbound HTTP requests.

Each strategy produces the headers to merge into a request. Stateless
strategies (Bearer, Basic, ApiKey) build them from their constructor
arguments; TokenExchangeAuth performs an OAuth2 client-credentials grant and
caches the resulting access token until shortly before it expires.

Usage:
    from infrastructure.http.auth import BearerAuth, TokenExchangeAuth

    auth = TokenExchangeAuth(
        client_id="client",
        client_secret="secret",
        token_url="https://auth.example.com/oauth/token",
        scopes=["notifications.send"],
    )
    response = requests.post(url, json=payload, headers=auth.get_headers())
"""

import base64
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence

import requests

from infrastructure.exceptions import (
    AuthenticationError,
    ProtocolError,
    TransportError,
)
from infrastructure.logging import get_module_logger

logger = get_module_logger()

# Safety margin before expiry after which a cached token is refetched
EXPIRY_MARGIN_SECONDS = 60
DEFAULT_EXPIRES_IN = 3600


class AuthStrategy(ABC):
    """Produces authentication headers for an outgoing request."""

    @abstractmethod
    def get_headers(self) -> Dict[str, str]:
        """Return the headers to merge into the request.

        Returns:
            Mapping of header name to header value
        """
        pass


class BearerAuth(AuthStrategy):
    """Bearer token authentication."""

    def __init__(self, token: str):
        self._token = token

    def get_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._token}"}


class BasicAuth(AuthStrategy):
    """HTTP Basic authentication."""

    def __init__(self, username: str, password: str):
        self._username = username
        self._password = password

    def get_headers(self) -> Dict[str, str]:
        credentials = f"{self._username}:{self._password}".encode("utf-8")
        encoded = base64.b64encode(credentials).decode("ascii")
        return {"Authorization": f"Basic {encoded}"}


class ApiKeyAuth(AuthStrategy):
    """API key sent in a custom header.

    Args:
        api_key: The key value.
        header_name: Header carrying the key (default: X-API-Key).
        prefix: Optional scheme prepended to the key (e.g. "Basic" for
            providers that expect the key in the Authorization header).
    """

    def __init__(
        self,
        api_key: str,
        header_name: str = "X-API-Key",
        prefix: Optional[str] = None,
    ):
        self._api_key = api_key
        self._header_name = header_name
        self._prefix = prefix

    def get_headers(self) -> Dict[str, str]:
        value = f"{self._prefix} {self._api_key}" if self._prefix else self._api_key
        return {self._header_name: value}


@dataclass(frozen=True)
class AuthCredential:
    """Access token obtained from a token endpoint.

    Attributes:
        access_token: Token presented as a Bearer credential
        expires_at: Expiry as epoch seconds
    """

    access_token: str
    expires_at: float

    def is_valid(self, now: float, margin_seconds: int = EXPIRY_MARGIN_SECONDS) -> bool:
        """Check the token is still usable at ``now`` given the safety margin."""
        return now < self.expires_at - margin_seconds


class TokenExchangeAuth(AuthStrategy):
    """OAuth2 client-credentials authentication with lazy token refresh.

    The credential is fetched on first use and refetched once it is within
    EXPIRY_MARGIN_SECONDS of expiring. Fetches are serialized by a lock so
    concurrent callers sharing one instance trigger a single token request.

    Args:
        client_id: OAuth2 client identifier.
        client_secret: OAuth2 client secret.
        token_url: Token endpoint URL.
        scopes: Scopes requested; sent space-joined when not empty.
        timeout: Token request timeout in seconds.
        session: Optional requests session (defaults to a private one).
        clock: Time source returning epoch seconds.

    Raises (from get_headers / refresh_token):
        TransportError: The token endpoint could not be reached.
        ProtocolError: The response body is not valid JSON.
        AuthenticationError: The provider returned an error or no token.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        token_url: str,
        scopes: Sequence[str] = (),
        timeout: int = 30,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._client_id = client_id
        self._client_secret = client_secret
        self._token_url = token_url
        self._scopes = list(scopes)
        self._timeout = timeout
        self._session = session or requests.Session()
        self._clock = clock
        self._credential: Optional[AuthCredential] = None
        self._lock = threading.Lock()
        self._log = logger.bind(client_id=client_id, endpoint=token_url)

    @property
    def access_token(self) -> Optional[str]:
        """Current access token, or None if none has been obtained yet."""
        credential = self._credential
        return credential.access_token if credential else None

    def is_token_valid(self) -> bool:
        """Check whether the cached credential can still be presented."""
        credential = self._credential
        return credential is not None and credential.is_valid(self._clock())

    def get_headers(self) -> Dict[str, str]:
        credential = self._ensure_valid_credential()
        return {"Authorization": f"Bearer {credential.access_token}"}

    def invalidate(self) -> None:
        """Drop the cached credential; the next call fetches a new one."""
        with self._lock:
            self._credential = None

    def refresh_token(self) -> None:
        """Force invalidation and an immediate refetch of the credential."""
        with self._lock:
            self._credential = None
            self._credential = self._fetch_credential()

    def _ensure_valid_credential(self) -> AuthCredential:
        credential = self._credential
        if credential is not None and credential.is_valid(self._clock()):
            return credential

        with self._lock:
            # Another thread may have refreshed while we waited
            credential = self._credential
            if credential is not None and credential.is_valid(self._clock()):
                return credential
            self._credential = self._fetch_credential()
            return self._credential

    def _fetch_credential(self) -> AuthCredential:
        data = {
            "grant_type": "client_credentials",
            "client_id": self._client_id,
            "client_secret": self._client_secret,
        }
        if self._scopes:
            data["scope"] = " ".join(self._scopes)

        self._log.debug("token_exchange_requested", scopes=self._scopes)

        try:
            response = self._session.post(
                self._token_url,
                data=data,
                headers={
                    "Content-Type": "application/x-www-form-urlencoded",
                    "Accept": "application/json",
                },
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            self._log.error("token_exchange_transport_failed", error=str(e))
            raise TransportError(f"OAuth2 token request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            self._log.error(
                "token_exchange_invalid_response", status_code=response.status_code
            )
            raise ProtocolError(f"Invalid OAuth2 response: {e}") from e

        if not isinstance(payload, dict):
            raise ProtocolError("Invalid OAuth2 response: expected a JSON object")

        if payload.get("error"):
            message = payload.get("error_description") or payload["error"]
            self._log.error(
                "token_exchange_rejected",
                provider_error=payload["error"],
                status_code=response.status_code,
            )
            raise AuthenticationError(
                f"OAuth2 error: {message}", provider_error=payload["error"]
            )

        access_token = payload.get("access_token")
        if not access_token:
            self._log.error("token_exchange_missing_token")
            raise AuthenticationError("OAuth2 response missing access_token")

        expires_in = payload.get("expires_in", DEFAULT_EXPIRES_IN)
        try:
            expires_in = float(expires_in)
        except (TypeError, ValueError) as e:
            raise ProtocolError(f"Invalid OAuth2 expires_in: {expires_in!r}") from e

        self._log.info("token_exchange_succeeded", expires_in=expires_in)
        return AuthCredential(
            access_token=access_token,
            expires_at=self._clock() + expires_in,
        )
