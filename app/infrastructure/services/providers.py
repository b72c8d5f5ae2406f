"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
Configuration is read once here and injected into dispatchers, channels and
HTTP clients; nothing below the providers looks settings up on its own.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from infrastructure.events import EventDispatcher
from infrastructure.events.bootstrap import register_infrastructure_handlers
from infrastructure.http import HttpClient, RetryStrategy
from infrastructure.logging import configure_logging
from infrastructure.notifications import (
    EmailChannel,
    NotificationService,
    PushChannel,
    SMSChannel,
)
from infrastructure.services.plugins import get_event_plugin_manager


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process.
    Loading settings (re)configures logging from LOG_LEVEL and ENVIRONMENT.

    Usage:
        from infrastructure.services import get_settings
        settings = get_settings()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    settings = Settings()
    configure_logging(
        log_level=settings.LOG_LEVEL,
        is_production=settings.is_production,
        environment=settings.ENVIRONMENT,
    )
    return settings


@lru_cache
def get_retry_strategy() -> RetryStrategy:
    """Get the retry policy shared by provider HTTP calls."""
    return RetryStrategy.from_settings(get_settings().http)


@lru_cache
def get_http_client() -> HttpClient:
    """
    Get application-scoped HTTP client singleton.

    Channels derive configured copies with with_auth()/with_retry(); all of
    them share this client's connection pool and rate limiter.

    Returns:
        HttpClient: Client configured with timeout, User-Agent and, when
        HTTP_RATE_LIMIT_MAX_REQUESTS is set, a rate limit from settings.
    """
    settings = get_settings()
    client = HttpClient(
        timeout=settings.http.timeout_seconds,
        user_agent=settings.http.user_agent,
    )
    if settings.http.rate_limit_max_requests > 0:
        client = client.with_rate_limit(
            settings.http.rate_limit_max_requests,
            settings.http.rate_limit_per_seconds,
        )
    return client


@lru_cache
def get_event_dispatcher() -> EventDispatcher:
    """
    Get application-scoped event dispatcher singleton.

    The dispatcher comes with the infrastructure subscribers registered:
    structured event logging and, when enabled, forwarding to plugins through
    the ``forward_domain_event`` hook.

    Returns:
        EventDispatcher: Cached dispatcher instance.

    Usage:
        dispatcher = get_event_dispatcher()
        dispatcher.add_listener("entity.*", on_entity_event)
        dispatcher.dispatch(EntityCreatedEvent(entity_type="product", entity_id=1))
    """
    settings = get_settings()
    dispatcher = EventDispatcher(history_size=settings.events.history_size)
    register_infrastructure_handlers(
        dispatcher,
        settings.events,
        plugin_manager=get_event_plugin_manager(),
    )
    return dispatcher


@lru_cache
def get_notification_service() -> NotificationService:
    """
    Get application-scoped notification service singleton.

    Registers the email, sms and push channels built from settings. A channel
    whose credentials are missing is still registered; sending through it
    records a configuration failure in the DeliveryReport.

    Returns:
        NotificationService: Cached service with all channels registered.

    Raises:
        ValidationError: If SMS_PROVIDER or PUSH_PROVIDER is not supported.
    """
    settings = get_settings()
    http_client = get_http_client()
    retry = get_retry_strategy()

    service = NotificationService(
        max_workers=settings.notifications.max_workers,
        default_channels=settings.notifications.default_channels,
    )
    service.register_channel(
        "email",
        EmailChannel(
            host=settings.smtp.SMTP_HOST,
            sender=settings.smtp.SMTP_FROM,
            port=settings.smtp.SMTP_PORT,
            username=settings.smtp.SMTP_USER,
            password=settings.smtp.SMTP_PASSWORD,
            use_tls=settings.smtp.SMTP_USE_TLS,
            timeout=settings.http.timeout_seconds,
        ),
    )
    service.register_channel(
        "sms",
        SMSChannel(
            provider=settings.sms.SMS_PROVIDER,
            config=settings.sms.provider_config(),
            http_client=http_client,
            retry=retry,
        ),
    )
    service.register_channel(
        "push",
        PushChannel(
            provider=settings.push.PUSH_PROVIDER,
            config=settings.push.provider_config(),
            http_client=http_client,
            retry=retry,
        ),
    )
    return service
