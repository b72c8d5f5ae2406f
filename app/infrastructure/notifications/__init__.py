"""Multi-channel notification delivery.

Usage:
    from infrastructure.notifications import Notification, NotificationService

    report = service.send(Notification.to("user@example.com", "Hi", "Hello"))
    report.success_count, report.failed_count, report.errors
"""

from infrastructure.notifications.channels import (
    EmailChannel,
    NotificationChannel,
    PushChannel,
    SMSChannel,
)
from infrastructure.notifications.models import (
    DeliveryReport,
    Notification,
    TemplateNotification,
)
from infrastructure.notifications.service import NotificationService

__all__ = [
    "DeliveryReport",
    "Notification",
    "TemplateNotification",
    "NotificationService",
    "NotificationChannel",
    "EmailChannel",
    "PushChannel",
    "SMSChannel",
]
