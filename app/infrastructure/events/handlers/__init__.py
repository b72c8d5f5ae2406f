"""Event handlers for infrastructure event system."""

from infrastructure.events.handlers.hooks import (
    HookForwardingSubscriber,
    pluggy_executor,
)
from infrastructure.events.handlers.logging import LoggingHandler

__all__ = ["HookForwardingSubscriber", "LoggingHandler", "pluggy_executor"]
