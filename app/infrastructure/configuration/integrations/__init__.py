"""Integration settings __init__ - exports all integration settings."""

from infrastructure.configuration.integrations.push import PushSettings
from infrastructure.configuration.integrations.sms import SmsSettings
from infrastructure.configuration.integrations.smtp import SmtpSettings

__all__ = [
    "PushSettings",
    "SmsSettings",
    "SmtpSettings",
]
