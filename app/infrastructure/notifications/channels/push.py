"""Push notification channel implementation (Firebase, OneSignal)."""

from typing import Any, Dict, List, Optional

from infrastructure.exceptions import ValidationError
from infrastructure.http import ApiKeyAuth, BearerAuth, HttpClient, RetryStrategy
from infrastructure.logging import get_module_logger
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.models import Notification
from infrastructure.operations import classify_http_response

logger = get_module_logger()

SUPPORTED_PROVIDERS = ("firebase", "onesignal")

REQUIRED_SETTINGS = {
    "firebase": ("server_key",),
    "onesignal": ("app_id", "api_key"),
}

FIREBASE_URL = "https://fcm.googleapis.com/fcm/send"
ONESIGNAL_URL = "https://onesignal.com/api/v1/notifications"


def _reached(data: Optional[Dict[str, Any]], field: str) -> int:
    value = (data or {}).get(field)
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(value, 0)


class PushChannel(NotificationChannel):
    """Push notification channel.

    Every recipient is treated as an opaque device token and all of them go
    out in one batched request. The reached count is read from the provider
    response: ``success`` for Firebase, ``recipients`` for OneSignal. A
    missing field or a non-2xx response counts as 0 reached.

    Args:
        provider: ``firebase`` or ``onesignal``
        config: ``server_key`` (firebase) or ``app_id`` and ``api_key``
            (onesignal)
        http_client: HttpClient to send requests with
        retry: Retry policy for provider requests

    Raises:
        ValidationError: If the provider is not supported.
    """

    def __init__(
        self,
        provider: str = "firebase",
        config: Optional[Dict[str, Any]] = None,
        http_client: Optional[HttpClient] = None,
        retry: Optional[RetryStrategy] = None,
    ) -> None:
        if provider not in SUPPORTED_PROVIDERS:
            raise ValidationError(
                f"Unsupported push provider: {provider}. "
                f"Supported: {', '.join(SUPPORTED_PROVIDERS)}"
            )
        self.provider = provider
        self.config: Dict[str, Any] = dict(config or {})
        client = http_client or HttpClient()
        self._client = client.with_retry(retry) if retry else client

    @property
    def channel_name(self) -> str:
        return "push"

    def is_configured(self) -> bool:
        return all(self.config.get(key) for key in REQUIRED_SETTINGS[self.provider])

    def send(self, notification: Notification) -> int:
        """Send one batched push request for all recipient tokens.

        Returns:
            Number of devices the provider reports as reached.

        Raises:
            ConfigurationError: If provider credentials are missing.
            TransportError: If the provider cannot be reached.
        """
        self.ensure_configured()

        tokens = list(notification.recipients)
        if not tokens:
            return 0

        if self.provider == "firebase":
            reached = self._send_via_firebase(tokens, notification)
        else:
            reached = self._send_via_onesignal(tokens, notification)

        logger.info(
            "push_notification_sent",
            provider=self.provider,
            reached=reached,
            device_count=len(tokens),
        )
        return reached

    def _send_via_firebase(self, tokens: List[str], notification: Notification) -> int:
        payload = {
            "registration_ids": tokens,
            "notification": {
                "title": notification.subject,
                "body": notification.content,
            },
            "data": notification.data,
        }
        client = self._client.with_auth(BearerAuth(self.config["server_key"]))
        response = client.post_json(FIREBASE_URL, payload)

        result = classify_http_response(response, "firebase")
        if not result.is_success:
            logger.warning("push_request_failed", provider="firebase", error=result.message)
            return 0
        return _reached(result.data, "success")

    def _send_via_onesignal(
        self, tokens: List[str], notification: Notification
    ) -> int:
        payload = {
            "app_id": self.config["app_id"],
            "include_player_ids": tokens,
            "headings": {"en": notification.subject},
            "contents": {"en": notification.content},
            "data": notification.data,
        }
        client = self._client.with_auth(
            ApiKeyAuth(self.config["api_key"], header_name="Authorization", prefix="Basic")
        )
        response = client.post_json(ONESIGNAL_URL, payload)

        result = classify_http_response(response, "onesignal")
        if not result.is_success:
            logger.warning(
                "push_request_failed", provider="onesignal", error=result.message
            )
            return 0
        return _reached(result.data, "recipients")
