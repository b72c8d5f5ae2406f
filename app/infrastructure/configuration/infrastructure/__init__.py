"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.events import (
    EventSettings,
    NotificationSettings,
)
from infrastructure.configuration.infrastructure.http import HttpSettings

__all__ = [
    "EventSettings",
    "HttpSettings",
    "NotificationSettings",
]
