"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the event and
notification pipeline using Pydantic BaseSettings with domain-based
organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    HttpSettings, EventSettings, NotificationSettings: Infrastructure sections
    SmtpSettings, SmsSettings, PushSettings: Integration sections

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    retry_attempts = settings.http.retry_max_attempts
    sms_provider = settings.sms.SMS_PROVIDER
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.infrastructure import (
    EventSettings,
    HttpSettings,
    NotificationSettings,
)
from infrastructure.configuration.integrations import (
    PushSettings,
    SmsSettings,
    SmtpSettings,
)

__all__ = [
    "Settings",
    "EventSettings",
    "HttpSettings",
    "NotificationSettings",
    "PushSettings",
    "SmsSettings",
    "SmtpSettings",
]
