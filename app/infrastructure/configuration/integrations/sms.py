"""SMS provider integration settings."""

from typing import Any, Dict

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class SmsSettings(IntegrationSettings):
    """SMS provider configuration (Twilio, Vonage or OVH).

    Environment Variables:
        SMS_PROVIDER: Provider name - 'twilio', 'vonage' or 'ovh' (default: twilio)
        TWILIO_ACCOUNT_SID / TWILIO_AUTH_TOKEN / TWILIO_FROM
        VONAGE_API_KEY / VONAGE_API_SECRET / VONAGE_FROM
        OVH_APPLICATION_KEY / OVH_APPLICATION_SECRET / OVH_CONSUMER_KEY /
        OVH_SERVICE_NAME / OVH_SENDER

    Example:
        ```python
        settings = get_settings()
        channel = SMSChannel(
            provider=settings.sms.SMS_PROVIDER,
            config=settings.sms.provider_config(),
        )
        ```
    """

    SMS_PROVIDER: str = Field(default="twilio", alias="SMS_PROVIDER")

    TWILIO_ACCOUNT_SID: str | None = Field(default=None, alias="TWILIO_ACCOUNT_SID")
    TWILIO_AUTH_TOKEN: str | None = Field(default=None, alias="TWILIO_AUTH_TOKEN")
    TWILIO_FROM: str | None = Field(default=None, alias="TWILIO_FROM")

    VONAGE_API_KEY: str | None = Field(default=None, alias="VONAGE_API_KEY")
    VONAGE_API_SECRET: str | None = Field(default=None, alias="VONAGE_API_SECRET")
    VONAGE_FROM: str | None = Field(default=None, alias="VONAGE_FROM")

    OVH_APPLICATION_KEY: str | None = Field(default=None, alias="OVH_APPLICATION_KEY")
    OVH_APPLICATION_SECRET: str | None = Field(
        default=None, alias="OVH_APPLICATION_SECRET"
    )
    OVH_CONSUMER_KEY: str | None = Field(default=None, alias="OVH_CONSUMER_KEY")
    OVH_SERVICE_NAME: str | None = Field(default=None, alias="OVH_SERVICE_NAME")
    OVH_SENDER: str | None = Field(default=None, alias="OVH_SENDER")

    def provider_config(self) -> Dict[str, Any]:
        """Build the channel config mapping for the selected provider.

        Returns:
            Dict of provider-specific settings, with unset values omitted.
        """
        by_provider = {
            "twilio": {
                "account_sid": self.TWILIO_ACCOUNT_SID,
                "auth_token": self.TWILIO_AUTH_TOKEN,
                "from": self.TWILIO_FROM,
            },
            "vonage": {
                "api_key": self.VONAGE_API_KEY,
                "api_secret": self.VONAGE_API_SECRET,
                "from": self.VONAGE_FROM,
            },
            "ovh": {
                "application_key": self.OVH_APPLICATION_KEY,
                "application_secret": self.OVH_APPLICATION_SECRET,
                "consumer_key": self.OVH_CONSUMER_KEY,
                "service_name": self.OVH_SERVICE_NAME,
                "sender": self.OVH_SENDER,
            },
        }
        config = by_provider.get(self.SMS_PROVIDER, {})
        return {key: value for key, value in config.items() if value is not None}
