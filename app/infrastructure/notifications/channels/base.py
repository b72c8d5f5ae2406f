"""Notification channel abstract base class.

All channel implementations (Email, SMS, Push) must implement this interface.
"""

from abc import ABC, abstractmethod

from infrastructure.exceptions import ConfigurationError
from infrastructure.notifications.models import Notification


class NotificationChannel(ABC):
    """Abstract base class for notification channels.

    Each channel handles delivery through one transport:
    - EmailChannel: SMTP
    - SMSChannel: Twilio / Vonage / OVH
    - PushChannel: Firebase / OneSignal

    Contract:
    - ``send()`` returns how many recipients were actually reached. 0 means
      the channel is configured but had no eligible recipients or the
      provider accepted none.
    - ``send()`` raises ConfigurationError when ``is_configured()`` is
      False, and may raise other pipeline errors on hard transport failure.
      NotificationService records any raised error as that channel's failure.

    Example Implementation:
        class WebhookChannel(NotificationChannel):

            @property
            def channel_name(self) -> str:
                return "webhook"

            def is_configured(self) -> bool:
                return bool(self._url)

            def send(self, notification: Notification) -> int:
                self.ensure_configured()
                response = self._client.post_json(self._url, {...})
                return len(notification.recipients) if response.ok else 0
    """

    @property
    @abstractmethod
    def channel_name(self) -> str:
        """Channel identifier (email, sms, push)."""
        pass

    @abstractmethod
    def send(self, notification: Notification) -> int:
        """Deliver a notification to the recipients this channel can reach.

        Args:
            notification: Notification to send

        Returns:
            Number of recipients reached

        Raises:
            ConfigurationError: If the channel is not configured
        """
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """Check that every required secret/setting is present."""
        pass

    def ensure_configured(self) -> None:
        """Raise ConfigurationError unless the channel is configured."""
        if not self.is_configured():
            raise ConfigurationError(f"{self.channel_name} channel not configured")
