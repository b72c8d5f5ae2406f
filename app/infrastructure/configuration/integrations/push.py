"""Push notification provider integration settings."""

from typing import Any, Dict

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class PushSettings(IntegrationSettings):
    """Push provider configuration (Firebase or OneSignal).

    Environment Variables:
        PUSH_PROVIDER: Provider name - 'firebase' or 'onesignal' (default: firebase)
        FIREBASE_SERVER_KEY: FCM legacy server key
        ONESIGNAL_APP_ID: OneSignal application ID
        ONESIGNAL_API_KEY: OneSignal REST API key
    """

    PUSH_PROVIDER: str = Field(default="firebase", alias="PUSH_PROVIDER")
    FIREBASE_SERVER_KEY: str | None = Field(default=None, alias="FIREBASE_SERVER_KEY")
    ONESIGNAL_APP_ID: str | None = Field(default=None, alias="ONESIGNAL_APP_ID")
    ONESIGNAL_API_KEY: str | None = Field(default=None, alias="ONESIGNAL_API_KEY")

    def provider_config(self) -> Dict[str, Any]:
        """Build the channel config mapping for the selected provider."""
        if self.PUSH_PROVIDER == "onesignal":
            config = {"app_id": self.ONESIGNAL_APP_ID, "api_key": self.ONESIGNAL_API_KEY}
        else:
            config = {"server_key": self.FIREBASE_SERVER_KEY}
        return {key: value for key, value in config.items() if value is not None}
