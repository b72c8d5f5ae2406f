"""Bootstrap and register infrastructure event subscribers at startup.

Registers the system-level subscribers that should be active for every
event: structured logging and host hook forwarding.
"""

from typing import Optional

import pluggy

from infrastructure.configuration import EventSettings
from infrastructure.events.dispatcher import EventDispatcher
from infrastructure.events.handlers import (
    HookForwardingSubscriber,
    LoggingHandler,
    pluggy_executor,
)
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def register_infrastructure_handlers(
    dispatcher: EventDispatcher,
    settings: EventSettings,
    plugin_manager: Optional[pluggy.PluginManager] = None,
) -> Optional[HookForwardingSubscriber]:
    """Register all infrastructure subscribers on a dispatcher.

    Should be called once per dispatcher, before any events are dispatched.

    Args:
        dispatcher: Dispatcher to register subscribers on.
        settings: Event settings controlling hook forwarding.
        plugin_manager: Plugin manager receiving forwarded events. Without
            one, forwarding is registered as a no-op.

    Returns:
        The hook forwarding subscriber, or None when forwarding is disabled.
    """
    dispatcher.add_subscriber(LoggingHandler())
    handlers = ["logging"]

    forwarder = None
    if settings.hook_forwarding_enabled:
        forwarder = HookForwardingSubscriber(
            executor=pluggy_executor(plugin_manager) if plugin_manager else None,
            hook_prefix=settings.hook_prefix,
            event_name_prefix=settings.event_name_prefix,
        )
        dispatcher.add_subscriber(forwarder)
        handlers.append("hook_forwarding")

    logger.info("infrastructure_handlers_registered", handlers=handlers)
    return forwarder
