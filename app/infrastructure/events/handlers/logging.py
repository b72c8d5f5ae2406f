"""Logging handler for event system.

Writes every dispatched event to structured logs.
"""

import structlog

from infrastructure.events.models import DomainEvent
from infrastructure.events.subscribers import EventSubscriber, Subscriptions

logger = structlog.get_logger()

LOGGING_PRIORITY = -1000


class LoggingHandler(EventSubscriber):
    """Logs each event after every other listener has run."""

    def __init__(self):
        """Initialize logging handler with base logger."""
        self.log = logger.bind(component="logging_handler")

    def get_subscribed_events(self) -> Subscriptions:
        return {"*": ("handle", LOGGING_PRIORITY)}

    def handle(self, event: DomainEvent) -> None:
        """Handle event by logging with structured fields.

        Args:
            event: The event to log.
        """
        log = self.log.bind(
            event_name=event.event_name,
            event_id=str(event.event_id),
        )
        try:
            log.info(
                "event_occurred",
                payload=event.to_dict(),
                occurred_at=event.occurred_at.isoformat(),
            )
        except Exception as e:
            log.error("failed_to_log_event", error=str(e))
