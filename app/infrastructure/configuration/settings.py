"""Application configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Integration settings
from infrastructure.configuration.integrations import (
    PushSettings,
    SmsSettings,
    SmtpSettings,
)

# Infrastructure settings
from infrastructure.configuration.infrastructure import (
    EventSettings,
    HttpSettings,
    NotificationSettings,
)


class Settings(BaseSettings):
    """Application configuration settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration object.
    Settings are organized by concern:

    - **Integrations**: Delivery provider configurations (SMTP, SMS, push)
    - **Infrastructure**: Core system configurations (http, events, notifications)

    Environment Variables:
        ENVIRONMENT: Deployment environment name (default: development)
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        # Access integration settings
        smtp_host = settings.smtp.SMTP_HOST
        sms_provider = settings.sms.SMS_PROVIDER

        # Access infrastructure settings
        max_attempts = settings.http.retry_max_attempts
        history_size = settings.events.history_size

        # Check environment
        if settings.is_production:
            # Production-specific logic...
        ```
    """

    # Application-level settings
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Integration settings
    smtp: SmtpSettings
    sms: SmsSettings
    push: PushSettings

    # Infrastructure settings
    http: HttpSettings
    events: EventSettings
    notifications: NotificationSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if ENVIRONMENT is "production", False otherwise.
        """
        return self.ENVIRONMENT.lower() == "production"

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            # Integrations
            "smtp": SmtpSettings,
            "sms": SmsSettings,
            "push": PushSettings,
            # Infrastructure
            "http": HttpSettings,
            "events": EventSettings,
            "notifications": NotificationSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
