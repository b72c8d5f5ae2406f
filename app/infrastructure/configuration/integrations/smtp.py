"""SMTP email integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class SmtpSettings(IntegrationSettings):
    """SMTP server configuration for the email channel.

    Environment Variables:
        SMTP_HOST: SMTP server hostname (required for email delivery)
        SMTP_PORT: SMTP server port (default: 587)
        SMTP_USER: Login user (optional)
        SMTP_PASSWORD: Login password (optional)
        SMTP_FROM: Sender address (required for email delivery)
        SMTP_USE_TLS: Upgrade the connection with STARTTLS (default: True)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        host = settings.smtp.SMTP_HOST
        ```
    """

    SMTP_HOST: str | None = Field(default=None, alias="SMTP_HOST")
    SMTP_PORT: int = Field(default=587, alias="SMTP_PORT")
    SMTP_USER: str | None = Field(default=None, alias="SMTP_USER")
    SMTP_PASSWORD: str | None = Field(default=None, alias="SMTP_PASSWORD")
    SMTP_FROM: str | None = Field(default=None, alias="SMTP_FROM")
    SMTP_USE_TLS: bool = Field(default=True, alias="SMTP_USE_TLS")
