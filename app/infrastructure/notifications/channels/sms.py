"""SMS channel implementation (Twilio, Vonage, OVH)."""

import hashlib
import json
import re
import time
from typing import Any, Callable, Dict, List, Optional

from infrastructure.exceptions import NotificationPipelineError, ValidationError
from infrastructure.http import BasicAuth, HttpClient, RetryStrategy
from infrastructure.logging import get_module_logger
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.models import Notification
from infrastructure.operations import OperationResult, classify_http_response

logger = get_module_logger()

SUPPORTED_PROVIDERS = ("twilio", "vonage", "ovh")

REQUIRED_SETTINGS = {
    "twilio": ("account_sid", "auth_token", "from"),
    "vonage": ("api_key", "api_secret"),
    "ovh": ("application_key", "application_secret", "consumer_key", "service_name"),
}

PHONE_PATTERN = re.compile(r"^\+[1-9]\d{6,14}$")

TWILIO_URL = "https://api.twilio.com/2010-04-01/Accounts/{account_sid}/Messages.json"
VONAGE_URL = "https://rest.nexmo.com/sms/json"
OVH_URL = "https://eu.api.ovh.com/1.0/sms/{service_name}/jobs"

DEFAULT_SENDER = "EVENTRELAY"


def is_phone_number(value: str) -> bool:
    """Check for an international E.164 number such as +33612345678."""
    return bool(PHONE_PATTERN.match(value))


def ovh_signature(
    application_secret: str,
    consumer_key: str,
    method: str,
    url: str,
    body: str,
    timestamp: int,
) -> str:
    """Compute the ``X-Ovh-Signature`` header value.

    ``"$1$" + sha1(secret+consumer_key+method+url+body+timestamp)`` joined
    with ``+``.
    """
    raw = "+".join(
        [application_secret, consumer_key, method, url, body, str(timestamp)]
    )
    return "$1$" + hashlib.sha1(raw.encode("utf-8")).hexdigest()


class SMSChannel(NotificationChannel):
    """SMS notification channel.

    Sends one SMS per recipient matching ``^\\+[1-9]\\d{6,14}$``; other
    recipients are skipped. A provider failure for one recipient is logged
    and does not stop the others. If every eligible recipient fails with a
    transport or authentication error, the last error is raised so the
    service records the channel as failed.

    Args:
        provider: One of ``twilio``, ``vonage``, ``ovh``
        config: Provider settings (see REQUIRED_SETTINGS)
        http_client: HttpClient to send requests with
        retry: Retry policy for provider requests
        clock: Returns epoch seconds; used for OVH request timestamps

    Raises:
        ValidationError: If the provider is not supported.
    """

    def __init__(
        self,
        provider: str = "twilio",
        config: Optional[Dict[str, Any]] = None,
        http_client: Optional[HttpClient] = None,
        retry: Optional[RetryStrategy] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if provider not in SUPPORTED_PROVIDERS:
            raise ValidationError(
                f"Unsupported SMS provider: {provider}. "
                f"Supported: {', '.join(SUPPORTED_PROVIDERS)}"
            )
        self.provider = provider
        self.config: Dict[str, Any] = dict(config or {})
        client = http_client or HttpClient()
        self._client = client.with_retry(retry) if retry else client
        self._clock = clock

    @property
    def channel_name(self) -> str:
        return "sms"

    def is_configured(self) -> bool:
        return all(self.config.get(key) for key in REQUIRED_SETTINGS[self.provider])

    def filter_recipients(self, recipients: List[str]) -> List[str]:
        return [r for r in recipients if is_phone_number(r)]

    def send(self, notification: Notification) -> int:
        """Send the notification content to every phone number recipient.

        Returns:
            Number of recipients the provider accepted.

        Raises:
            ConfigurationError: If provider settings are missing.
            NotificationPipelineError: If every eligible recipient failed
                with an error.
        """
        self.ensure_configured()

        recipients = self.filter_recipients(notification.recipients)
        log = logger.bind(provider=self.provider)
        sent = 0
        errors: List[NotificationPipelineError] = []

        for recipient in recipients:
            try:
                result = self._send_sms(recipient, notification.content)
            except NotificationPipelineError as e:
                log.warning("sms_send_error", recipient=recipient, error=str(e))
                errors.append(e)
                continue

            if result.is_success:
                sent += 1
            else:
                log.warning(
                    "sms_send_rejected",
                    recipient=recipient,
                    error=result.message,
                    error_code=result.error_code,
                    retry_after=result.retry_after,
                )

        if recipients and len(errors) == len(recipients):
            raise errors[-1]

        log.info("sms_notification_sent", sent=sent, eligible=len(recipients))
        return sent

    def _send_sms(self, to: str, message: str) -> OperationResult:
        if self.provider == "twilio":
            return self._send_via_twilio(to, message)
        if self.provider == "vonage":
            return self._send_via_vonage(to, message)
        return self._send_via_ovh(to, message)

    def _send_via_twilio(self, to: str, message: str) -> OperationResult:
        url = TWILIO_URL.format(account_sid=self.config["account_sid"])
        client = self._client.with_auth(
            BasicAuth(self.config["account_sid"], self.config["auth_token"])
        )
        response = client.post(
            url, data={"To": to, "From": self.config["from"], "Body": message}
        )
        return classify_http_response(response, "twilio")

    def _send_via_vonage(self, to: str, message: str) -> OperationResult:
        response = self._client.post_json(
            VONAGE_URL,
            {
                "api_key": self.config["api_key"],
                "api_secret": self.config["api_secret"],
                "to": to.lstrip("+"),
                "from": self.config.get("from") or DEFAULT_SENDER,
                "text": message,
            },
        )
        result = classify_http_response(response, "vonage")
        if not result.is_success:
            return result

        messages = (result.data or {}).get("messages") or []
        status = messages[0].get("status") if messages else None
        if status != "0":
            error_text = messages[0].get("error-text") if messages else None
            return OperationResult.permanent_error(
                f"vonage rejected message: {error_text or status}",
                error_code=f"VONAGE_{status}",
            )
        return result

    def _send_via_ovh(self, to: str, message: str) -> OperationResult:
        url = OVH_URL.format(service_name=self.config["service_name"])
        payload: Dict[str, Any] = {
            "message": message,
            "receivers": [to],
            "noStopClause": True,
            "priority": "high",
        }
        if self.config.get("sender"):
            payload["sender"] = self.config["sender"]
        else:
            payload["senderForResponse"] = True
        body = json.dumps(payload)
        timestamp = int(self._clock())

        response = self._client.post(
            url,
            data=body,
            headers={
                "Content-Type": "application/json",
                "X-Ovh-Application": self.config["application_key"],
                "X-Ovh-Consumer": self.config["consumer_key"],
                "X-Ovh-Timestamp": str(timestamp),
                "X-Ovh-Signature": ovh_signature(
                    self.config["application_secret"],
                    self.config["consumer_key"],
                    "POST",
                    url,
                    body,
                    timestamp,
                ),
            },
        )
        result = classify_http_response(response, "ovh")
        if result.is_success and not (result.data or {}).get("validReceivers"):
            return OperationResult.permanent_error(
                "ovh reported no valid receivers", error_code="OVH_INVALID_RECEIVER"
            )
        return result
