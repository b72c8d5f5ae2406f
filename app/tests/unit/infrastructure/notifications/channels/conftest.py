"""Fixtures for notification channel tests."""

from unittest.mock import MagicMock, patch

import pytest

from infrastructure.http import HttpClient


@pytest.fixture
def http_client(mock_session):
    """HttpClient backed by the mock session."""
    return HttpClient(session=mock_session, sleep=MagicMock())


@pytest.fixture
def mock_smtp():
    """Patch smtplib.SMTP in the email channel module.

    Yields the mocked SMTP class; the connected server is
    ``mock_smtp.return_value``.
    """
    with patch("infrastructure.notifications.channels.email.smtplib.SMTP") as smtp:
        yield smtp


@pytest.fixture
def smtp_server(mock_smtp):
    return mock_smtp.return_value
