"""Shared fixtures for the test suite."""

from unittest.mock import MagicMock

import pytest
import requests

from infrastructure.notifications.models import Notification
from infrastructure.services import providers


PIPELINE_ENV_VARS = (
    "ENVIRONMENT",
    "LOG_LEVEL",
    "SMTP_HOST",
    "SMTP_FROM",
    "SMTP_USER",
    "SMTP_PASSWORD",
    "SMTP_PORT",
    "SMTP_USE_TLS",
    "SMS_PROVIDER",
    "TWILIO_ACCOUNT_SID",
    "TWILIO_AUTH_TOKEN",
    "TWILIO_FROM",
    "VONAGE_API_KEY",
    "VONAGE_API_SECRET",
    "VONAGE_FROM",
    "OVH_APPLICATION_KEY",
    "OVH_APPLICATION_SECRET",
    "OVH_CONSUMER_KEY",
    "OVH_SERVICE_NAME",
    "OVH_SENDER",
    "PUSH_PROVIDER",
    "FIREBASE_SERVER_KEY",
    "ONESIGNAL_APP_ID",
    "ONESIGNAL_API_KEY",
    "HTTP_TIMEOUT_SECONDS",
    "HTTP_USER_AGENT",
    "HTTP_RETRY_MAX_ATTEMPTS",
    "HTTP_RETRY_EXPONENTIAL_BACKOFF",
    "HTTP_RETRY_BASE_DELAY_MS",
    "HTTP_RETRY_MAX_DELAY_MS",
    "HTTP_RATE_LIMIT_MAX_REQUESTS",
    "HTTP_RATE_LIMIT_PER_SECONDS",
    "EVENT_HISTORY_SIZE",
    "EVENT_HOOK_PREFIX",
    "EVENT_NAME_PREFIX",
    "EVENT_HOOK_FORWARDING_ENABLED",
    "NOTIFICATION_MAX_WORKERS",
    "NOTIFICATION_DEFAULT_CHANNELS",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run with no pipeline environment variables and no .env file."""
    for name in PIPELINE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def reset_providers():
    """Clear cached provider singletons before and after the test."""

    def _clear():
        for provider in (
            providers.get_settings,
            providers.get_retry_strategy,
            providers.get_http_client,
            providers.get_event_dispatcher,
            providers.get_notification_service,
        ):
            provider.cache_clear()

    _clear()
    yield
    _clear()


@pytest.fixture
def notification_factory():
    """Factory for creating Notification instances.

    Example:
        notification = notification_factory(recipients=["+15551234567"], channels=["sms"])
    """

    def _factory(
        recipients=None,
        subject: str = "Order shipped",
        content: str = "Order 42 is on its way",
        data=None,
        channels=None,
    ) -> Notification:
        return Notification(
            recipients=recipients or ["user@example.com"],
            subject=subject,
            content=content,
            data=data or {},
            channels=channels or ["email"],
        )

    return _factory


@pytest.fixture
def response_factory():
    """Factory for MagicMock responses shaped like requests.Response."""

    def _factory(status_code: int = 200, json_data=None, headers=None):
        response = MagicMock(spec=requests.Response)
        response.status_code = status_code
        response.headers = headers or {}
        if isinstance(json_data, Exception):
            response.json.side_effect = json_data
        elif json_data is None:
            response.json.side_effect = ValueError("No JSON body")
        else:
            response.json.return_value = json_data
        return response

    return _factory


@pytest.fixture
def mock_session(response_factory):
    """MagicMock requests.Session whose request() returns a 200 response."""
    session = MagicMock(spec=requests.Session)
    session.request.return_value = response_factory(200, {})
    return session
