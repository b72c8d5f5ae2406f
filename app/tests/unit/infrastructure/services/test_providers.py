"""Unit tests for service providers."""

from unittest.mock import MagicMock, patch

import pytest

from infrastructure.events import EntityCreatedEvent, EventDispatcher
from infrastructure.exceptions import ValidationError
from infrastructure.http import HttpClient, RetryStrategy
from infrastructure.notifications import (
    EmailChannel,
    NotificationService,
    PushChannel,
    SMSChannel,
)
from infrastructure.services import providers

pytestmark = pytest.mark.unit


@pytest.fixture
def env(clean_env, reset_providers):
    return clean_env


class TestSingletons:
    """Providers are cached per process."""

    @pytest.mark.parametrize(
        "provider",
        [
            providers.get_settings,
            providers.get_retry_strategy,
            providers.get_http_client,
            providers.get_event_dispatcher,
            providers.get_notification_service,
        ],
    )
    def test_returns_same_instance(self, env, provider):
        assert provider() is provider()


class TestRetryAndHttp:
    """Test HTTP related providers."""

    def test_retry_strategy_from_env(self, env):
        env.setenv("HTTP_RETRY_MAX_ATTEMPTS", "4")
        env.setenv("HTTP_RETRY_BASE_DELAY_MS", "200")

        strategy = providers.get_retry_strategy()

        assert isinstance(strategy, RetryStrategy)
        assert strategy.max_attempts == 4
        assert strategy.get_delay(2) == 400

    def test_http_client_from_env(self, env):
        env.setenv("HTTP_TIMEOUT_SECONDS", "12")

        client = providers.get_http_client()

        assert isinstance(client, HttpClient)
        assert client.timeout == 12

    def test_http_client_without_rate_limit_by_default(self, env):
        assert providers.get_http_client().rate_limit is None

    def test_http_client_rate_limit_from_env(self, env):
        env.setenv("HTTP_RATE_LIMIT_MAX_REQUESTS", "20")
        env.setenv("HTTP_RATE_LIMIT_PER_SECONDS", "2")

        limiter = providers.get_http_client().rate_limit

        assert limiter.max_requests == 20
        assert limiter.per_seconds == 2.0


class TestSettings:
    """Test the settings provider."""

    def test_settings_configure_logging(self, env):
        env.setenv("LOG_LEVEL", "DEBUG")
        env.setenv("ENVIRONMENT", "production")

        with patch.object(providers, "configure_logging") as configure:
            settings = providers.get_settings()

        configure.assert_called_once_with(
            log_level="DEBUG", is_production=True, environment="production"
        )
        assert settings.is_production


class TestEventDispatcher:
    """Test dispatcher wiring."""

    def test_infrastructure_subscribers_registered(self, env):
        dispatcher = providers.get_event_dispatcher()

        assert isinstance(dispatcher, EventDispatcher)
        assert dispatcher.has_listeners("entity.created")
        assert "*" in dispatcher.get_registered_patterns()

    def test_history_size_from_env(self, env):
        env.setenv("EVENT_HISTORY_SIZE", "1")
        dispatcher = providers.get_event_dispatcher()

        dispatcher.dispatch(EntityCreatedEvent(entity_type="order", entity_id=1))
        dispatcher.dispatch(EntityCreatedEvent(entity_type="order", entity_id=2))

        assert len(dispatcher.get_event_history()) == 1

    def test_events_forwarded_to_plugin_hook(self, env):
        plugin_manager = MagicMock()
        with patch.object(
            providers, "get_event_plugin_manager", return_value=plugin_manager
        ):
            dispatcher = providers.get_event_dispatcher()

        dispatcher.dispatch(EntityCreatedEvent(entity_type="order", entity_id=7))

        call = plugin_manager.hook.forward_domain_event.call_args
        assert call.kwargs["hook_name"] == "actionEventRelayEntityCreated"
        assert call.kwargs["payload"]["event_name"] == "eventrelay.entity.created"

    def test_forwarding_disabled(self, env):
        env.setenv("EVENT_HOOK_FORWARDING_ENABLED", "false")
        plugin_manager = MagicMock()
        with patch.object(
            providers, "get_event_plugin_manager", return_value=plugin_manager
        ):
            dispatcher = providers.get_event_dispatcher()

        dispatcher.dispatch(EntityCreatedEvent(entity_type="order", entity_id=7))

        plugin_manager.hook.forward_domain_event.assert_not_called()


class TestNotificationService:
    """Test notification service wiring."""

    def test_channels_registered(self, env):
        service = providers.get_notification_service()

        assert isinstance(service, NotificationService)
        assert service.list_channels() == ["email", "sms", "push"]
        assert isinstance(service.get_channel("email"), EmailChannel)
        assert isinstance(service.get_channel("sms"), SMSChannel)
        assert isinstance(service.get_channel("push"), PushChannel)

    def test_unconfigured_channels_report_failures(self, env, notification_factory):
        service = providers.get_notification_service()

        report = service.send(
            notification_factory(
                recipients=["a@example.com", "+15551234567"],
                channels=["email", "sms"],
            )
        )

        assert report.errors == [
            "email: email channel not configured",
            "sms: sms channel not configured",
        ]

    def test_channels_built_from_env(self, env):
        env.setenv("SMTP_HOST", "smtp.example.com")
        env.setenv("SMTP_FROM", "noreply@example.com")
        env.setenv("SMS_PROVIDER", "vonage")
        env.setenv("VONAGE_API_KEY", "key")
        env.setenv("VONAGE_API_SECRET", "secret")
        env.setenv("NOTIFICATION_MAX_WORKERS", "3")
        env.setenv("NOTIFICATION_DEFAULT_CHANNELS", '["sms"]')

        service = providers.get_notification_service()

        assert service.get_channel("email").is_configured()
        sms = service.get_channel("sms")
        assert sms.provider == "vonage"
        assert sms.is_configured()
        assert service.max_workers == 3
        assert service.default_channels == ["sms"]

    def test_unsupported_provider_raises(self, env):
        env.setenv("PUSH_PROVIDER", "apns")

        with pytest.raises(ValidationError):
            providers.get_notification_service()
