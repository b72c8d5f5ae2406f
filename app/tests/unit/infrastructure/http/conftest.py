"""Fixtures for HTTP infrastructure tests."""

from unittest.mock import MagicMock

import pytest
import requests


class FakeClock:
    """Controllable epoch-seconds clock."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def token_session(response_factory):
    """Session whose post() returns a valid token response."""
    session = MagicMock(spec=requests.Session)
    session.post.return_value = response_factory(
        200, {"access_token": "tok-1", "expires_in": 3600, "token_type": "Bearer"}
    )
    return session
