"""Event dispatcher and notification service infrastructure settings."""

from typing import List

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class EventSettings(InfrastructureSettings):
    """Domain event dispatcher configuration.

    Environment Variables:
        EVENT_HISTORY_SIZE: Number of dispatched events kept for diagnostics
            (default: 100, 0 disables the history buffer)
        EVENT_HOOK_FORWARDING_ENABLED: Forward every event to host hooks
        EVENT_HOOK_PREFIX: Prefix used to derive the hook name
    """

    history_size: int = Field(
        default=100,
        alias="EVENT_HISTORY_SIZE",
        description="Capacity of the dispatch history buffer",
    )
    hook_forwarding_enabled: bool = Field(
        default=True,
        alias="EVENT_HOOK_FORWARDING_ENABLED",
        description="Forward dispatched events to the host hook mechanism",
    )
    hook_prefix: str = Field(
        default="actionEventRelay",
        alias="EVENT_HOOK_PREFIX",
        description="Prefix prepended to the event short name to build hook names",
    )
    event_name_prefix: str = Field(
        default="eventrelay",
        alias="EVENT_NAME_PREFIX",
        description="Module prefix prepended to forwarded event names",
    )


class NotificationSettings(InfrastructureSettings):
    """Notification fan-out configuration.

    Environment Variables:
        NOTIFICATION_DEFAULT_CHANNELS: Channels used by send_template by default
        NOTIFICATION_MAX_WORKERS: Worker threads for channel fan-out
            (default: 1, sequential delivery)
    """

    default_channels: List[str] = Field(
        default_factory=lambda: ["email"],
        alias="NOTIFICATION_DEFAULT_CHANNELS",
    )
    max_workers: int = Field(
        default=1,
        alias="NOTIFICATION_MAX_WORKERS",
        description="Number of channels delivered concurrently",
    )
