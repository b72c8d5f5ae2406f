"""Exceptions for the event and notification pipeline.

Every error raised by channels, auth strategies and the HTTP client derives
from NotificationPipelineError so callers can handle the whole taxonomy in a
single except clause.
"""

from typing import Optional


class NotificationPipelineError(Exception):
    """Base exception for all pipeline errors.

    Example:
        try:
            channel.send(notification)
        except NotificationPipelineError as e:
            logger.error("channel_failed", error=str(e))
    """

    pass


class ConfigurationError(NotificationPipelineError):
    """Raised when a channel or auth strategy is missing required settings.

    Example:
        >>> SMSChannel(provider="twilio").send(notification)
        Traceback (most recent call last):
        ...
        ConfigurationError: sms channel not configured
    """

    pass


class ValidationError(NotificationPipelineError):
    """Raised for malformed recipients or unsupported provider names.

    Example:
        >>> PushChannel(provider="apns")
        Traceback (most recent call last):
        ...
        ValidationError: Unsupported push provider: apns. Supported: firebase, onesignal
    """

    pass


class TransportError(NotificationPipelineError):
    """Raised when an external endpoint cannot be reached.

    The underlying network exception is chained as ``__cause__``.
    """

    pass


class ProtocolError(NotificationPipelineError):
    """Raised when an external endpoint returns an unparseable body."""

    pass


class AuthenticationError(NotificationPipelineError):
    """Raised when a provider rejects credentials or omits a token.

    Attributes:
        provider_error: Error code reported by the provider, if any.
    """

    def __init__(self, message: str, provider_error: Optional[str] = None):
        super().__init__(message)
        self.provider_error = provider_error


class ListenerError(NotificationPipelineError):
    """Wraps an unexpected error raised inside a dispatched listener.

    Never propagates out of EventDispatcher.dispatch(); it is logged and
    handed to the dispatcher's error handler.

    Attributes:
        event_name: Name of the event being dispatched.
        listener_name: Qualified name of the failing listener.
        original: The exception raised by the listener.
    """

    def __init__(self, event_name: str, listener_name: str, original: Exception):
        super().__init__(
            f"Listener {listener_name} failed for event {event_name}: {original}"
        )
        self.event_name = event_name
        self.listener_name = listener_name
        self.original = original
