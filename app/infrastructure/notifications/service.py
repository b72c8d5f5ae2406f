"""Notification service.

Fans a single Notification out across its declared channels and aggregates
the outcome into a DeliveryReport.
"""

import contextvars
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Sequence

from infrastructure.logging import bind_log_context, get_module_logger
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.models import (
    DEFAULT_CHANNELS,
    DeliveryReport,
    Notification,
    TemplateNotification,
)

logger = get_module_logger()


class NotificationService:
    """Multi-channel notification service.

    ``send()`` never raises for delivery problems: an unregistered channel
    name or an exception raised by a channel becomes a failure entry in the
    returned report, and the remaining channels are still attempted.

    With ``max_workers > 1`` channels run concurrently on a thread pool.
    Results are still collected by the calling thread, in declaration
    order, so reports are identical to sequential delivery.

    Usage:
        service = NotificationService()
        service.register_channel("email", EmailChannel(host=..., sender=...))
        service.register_channel("sms", SMSChannel("twilio", config={...}))

        report = service.send(
            Notification(
                recipients=["a@example.com", "+15551234567"],
                subject="Order shipped",
                content="Order 42 is on its way",
                channels=["email", "sms"],
            )
        )
        if not report.is_success:
            logger.warning("notification_partially_failed", errors=report.errors)
    """

    def __init__(
        self,
        channels: Optional[Dict[str, NotificationChannel]] = None,
        max_workers: int = 1,
        default_channels: Sequence[str] = DEFAULT_CHANNELS,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self._channels: Dict[str, NotificationChannel] = dict(channels or {})
        self.max_workers = max_workers
        self.default_channels = list(default_channels)

    def register_channel(self, name: str, channel: NotificationChannel) -> None:
        """Register a channel, replacing any previous binding for ``name``."""
        if name in self._channels:
            logger.info("notification_channel_replaced", channel=name)
        self._channels[name] = channel

    def has_channel(self, name: str) -> bool:
        return name in self._channels

    def get_channel(self, name: str) -> Optional[NotificationChannel]:
        return self._channels.get(name)

    def list_channels(self) -> List[str]:
        return list(self._channels)

    def send(self, notification: Notification) -> DeliveryReport:
        """Deliver a notification through each of its channels.

        Args:
            notification: Notification to send.

        Returns:
            A fresh DeliveryReport: recipients reached summed over channels,
            one failure per unregistered or failing channel.
        """
        report = DeliveryReport()
        channel_names = notification.channels

        with bind_log_context(channels=channel_names):
            if self.max_workers > 1 and len(channel_names) > 1:
                outcomes = self._send_parallel(notification, channel_names)
            else:
                outcomes = [
                    self._send_to_channel(name, notification) for name in channel_names
                ]

            for outcome in outcomes:
                report.merge(outcome)

            logger.info(
                "notification_delivered",
                success_count=report.success_count,
                failed_count=report.failed_count,
            )
        return report

    def send_template(
        self,
        template_name: str,
        recipients: Sequence[str],
        data: Optional[Dict[str, Any]] = None,
        channels: Optional[Sequence[str]] = None,
    ) -> DeliveryReport:
        """Build a TemplateNotification and send it.

        Args:
            template_name: Template registered on the rendering channels.
            recipients: Recipient identifiers.
            data: Template variables.
            channels: Channel names to attempt. Defaults to the service's
                ``default_channels`` (email only unless configured).

        Returns:
            DeliveryReport for the send.
        """
        notification = TemplateNotification(
            template_name=template_name,
            recipients=list(recipients),
            data=data or {},
            channels=list(channels) if channels is not None else self.default_channels,
        )
        return self.send(notification)

    def _send_parallel(
        self, notification: Notification, channel_names: List[str]
    ) -> List[DeliveryReport]:
        workers = min(self.max_workers, len(channel_names))
        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="notification-channel"
        ) as executor:
            futures: List[Future] = [
                executor.submit(
                    contextvars.copy_context().run,
                    self._send_to_channel,
                    name,
                    notification,
                )
                for name in channel_names
            ]
            return [future.result() for future in futures]

    def _send_to_channel(self, name: str, notification: Notification) -> DeliveryReport:
        """Attempt one channel; never raises."""
        outcome = DeliveryReport()
        channel = self._channels.get(name)
        if channel is None:
            logger.warning("notification_channel_not_registered", channel=name)
            outcome.record_failure(f"Channel '{name}' not registered")
            return outcome

        try:
            reached = channel.send(notification)
        except Exception as e:
            logger.error("notification_channel_failed", channel=name, error=str(e))
            outcome.record_failure(f"{name}: {e}")
            return outcome

        reached = max(int(reached or 0), 0)
        logger.info("notification_channel_sent", channel=name, reached=reached)
        outcome.record_success(reached)
        return outcome
