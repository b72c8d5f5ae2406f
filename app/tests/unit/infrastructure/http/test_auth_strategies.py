"""Unit tests for HTTP authentication strategies."""

import base64
import threading
import time

import pytest
import requests

from infrastructure.exceptions import (
    AuthenticationError,
    ProtocolError,
    TransportError,
)
from infrastructure.http.auth import (
    ApiKeyAuth,
    AuthCredential,
    BasicAuth,
    BearerAuth,
    TokenExchangeAuth,
)

pytestmark = pytest.mark.unit


class TestStaticStrategies:
    """Test stateless header strategies."""

    def test_bearer(self):
        assert BearerAuth("abc").get_headers() == {"Authorization": "Bearer abc"}

    def test_basic(self):
        expected = base64.b64encode(b"user:pa:ss").decode("ascii")

        headers = BasicAuth("user", "pa:ss").get_headers()

        assert headers == {"Authorization": f"Basic {expected}"}

    def test_api_key_default_header(self):
        assert ApiKeyAuth("k-1").get_headers() == {"X-API-Key": "k-1"}

    def test_api_key_custom_header_and_prefix(self):
        auth = ApiKeyAuth("k-1", header_name="Authorization", prefix="Basic")

        assert auth.get_headers() == {"Authorization": "Basic k-1"}


class TestAuthCredential:
    """Test expiry margin handling."""

    def test_valid_before_margin(self):
        credential = AuthCredential("t", expires_at=1000.0)

        assert credential.is_valid(now=939.0)

    def test_invalid_within_margin(self):
        credential = AuthCredential("t", expires_at=1000.0)

        assert not credential.is_valid(now=940.0)
        assert not credential.is_valid(now=2000.0)


class TestTokenExchangeAuth:
    """Test the OAuth2 client-credentials strategy."""

    def _auth(self, session, clock, scopes=()):
        return TokenExchangeAuth(
            client_id="client",
            client_secret="secret",
            token_url="https://auth.example.com/token",
            scopes=scopes,
            session=session,
            clock=clock,
        )

    def test_get_headers_fetches_token_once(self, token_session, clock):
        auth = self._auth(token_session, clock)

        first = auth.get_headers()
        second = auth.get_headers()

        assert first == second == {"Authorization": "Bearer tok-1"}
        assert token_session.post.call_count == 1

    def test_refetches_after_expiry_margin(self, token_session, clock, response_factory):
        auth = self._auth(token_session, clock)
        auth.get_headers()

        clock.advance(3600 - 61)
        auth.get_headers()
        assert token_session.post.call_count == 1

        token_session.post.return_value = response_factory(
            200, {"access_token": "tok-2", "expires_in": 3600}
        )
        clock.advance(1)
        headers = auth.get_headers()

        assert token_session.post.call_count == 2
        assert headers == {"Authorization": "Bearer tok-2"}

    def test_request_format(self, token_session, clock):
        auth = self._auth(token_session, clock, scopes=["read", "write"])

        auth.get_headers()

        args, kwargs = token_session.post.call_args
        assert args[0] == "https://auth.example.com/token"
        assert kwargs["data"] == {
            "grant_type": "client_credentials",
            "client_id": "client",
            "client_secret": "secret",
            "scope": "read write",
        }
        assert kwargs["headers"]["Content-Type"] == "application/x-www-form-urlencoded"
        assert kwargs["headers"]["Accept"] == "application/json"
        assert kwargs["timeout"] == 30

    def test_scope_omitted_without_scopes(self, token_session, clock):
        self._auth(token_session, clock).get_headers()

        assert "scope" not in token_session.post.call_args.kwargs["data"]

    def test_expires_in_defaults_to_one_hour(self, clock, token_session, response_factory):
        token_session.post.return_value = response_factory(200, {"access_token": "t"})
        auth = self._auth(token_session, clock)

        auth.get_headers()
        clock.advance(3600 - 61)

        assert auth.is_token_valid()
        clock.advance(1)
        assert not auth.is_token_valid()

    def test_provider_error(self, token_session, clock, response_factory):
        token_session.post.return_value = response_factory(
            400, {"error": "invalid_client", "error_description": "Bad secret"}
        )

        with pytest.raises(AuthenticationError, match="Bad secret") as exc_info:
            self._auth(token_session, clock).get_headers()

        assert exc_info.value.provider_error == "invalid_client"

    def test_provider_error_without_description(
        self, token_session, clock, response_factory
    ):
        token_session.post.return_value = response_factory(
            401, {"error": "unauthorized_client"}
        )

        with pytest.raises(AuthenticationError, match="unauthorized_client"):
            self._auth(token_session, clock).get_headers()

    def test_missing_access_token(self, token_session, clock, response_factory):
        token_session.post.return_value = response_factory(200, {"expires_in": 10})

        with pytest.raises(AuthenticationError, match="access_token"):
            self._auth(token_session, clock).get_headers()

    def test_unparseable_body(self, token_session, clock, response_factory):
        token_session.post.return_value = response_factory(200, None)

        with pytest.raises(ProtocolError):
            self._auth(token_session, clock).get_headers()

    def test_non_object_body(self, token_session, clock, response_factory):
        token_session.post.return_value = response_factory(200, ["tok"])

        with pytest.raises(ProtocolError):
            self._auth(token_session, clock).get_headers()

    def test_network_failure_wraps_cause(self, token_session, clock):
        cause = requests.ConnectionError("refused")
        token_session.post.side_effect = cause

        with pytest.raises(TransportError) as exc_info:
            self._auth(token_session, clock).get_headers()

        assert exc_info.value.__cause__ is cause

    def test_failed_fetch_is_not_cached(self, token_session, clock, response_factory):
        good = token_session.post.return_value
        token_session.post.side_effect = [requests.Timeout("slow"), good]
        auth = self._auth(token_session, clock)

        with pytest.raises(TransportError):
            auth.get_headers()

        assert auth.get_headers() == {"Authorization": "Bearer tok-1"}

    def test_refresh_token_forces_refetch(self, token_session, clock):
        auth = self._auth(token_session, clock)
        auth.get_headers()

        auth.refresh_token()

        assert token_session.post.call_count == 2
        assert auth.access_token == "tok-1"

    def test_invalidate(self, token_session, clock):
        auth = self._auth(token_session, clock)
        auth.get_headers()

        auth.invalidate()

        assert auth.access_token is None
        assert not auth.is_token_valid()
        auth.get_headers()
        assert token_session.post.call_count == 2

    def test_concurrent_callers_share_one_fetch(self, token_session, clock):
        original = token_session.post.return_value

        def slow_post(*args, **kwargs):
            time.sleep(0.05)
            return original

        token_session.post.side_effect = slow_post
        auth = self._auth(token_session, clock)
        results = []

        threads = [
            threading.Thread(target=lambda: results.append(auth.get_headers()))
            for _ in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert token_session.post.call_count == 1
        assert len(results) == 8
