"""Hook forwarding handler.

Forwards every dispatched domain event to a host hook mechanism under a
derived name (``hook_prefix + event.short_name``), e.g. ``OrderShippedEvent``
becomes ``actionEventRelayOrderShipped``. Forwarding is best-effort and can
never fail the dispatch that triggered it.
"""

from typing import Any, Callable, Dict, Optional

import pluggy

from infrastructure.events.models import DomainEvent
from infrastructure.events.subscribers import EventSubscriber, Subscriptions
from infrastructure.logging import get_module_logger

logger = get_module_logger()

HookExecutor = Callable[[str, Dict[str, Any]], Any]

FORWARDING_PRIORITY = -100


def pluggy_executor(pm: pluggy.PluginManager) -> HookExecutor:
    """Build a hook executor calling ``forward_domain_event`` on a plugin manager."""

    def execute(hook_name: str, payload: Dict[str, Any]) -> Any:
        return pm.hook.forward_domain_event(hook_name=hook_name, payload=payload)

    return execute


class HookForwardingSubscriber(EventSubscriber):
    """Subscriber that republishes events to host hooks.

    Args:
        executor: Callable ``(hook_name, payload)``. None makes forwarding a
            no-op.
        hook_prefix: Prefix for derived hook names.
        event_name_prefix: Prefix for the ``event_name`` payload entry.
        enabled: Whether forwarding is active; can be toggled at runtime.
    """

    def __init__(
        self,
        executor: Optional[HookExecutor] = None,
        hook_prefix: str = "actionEventRelay",
        event_name_prefix: str = "eventrelay",
        enabled: bool = True,
    ) -> None:
        self.executor = executor
        self.hook_prefix = hook_prefix
        self.event_name_prefix = event_name_prefix
        self.enabled = enabled

    def get_subscribed_events(self) -> Subscriptions:
        return {"*": ("forward", FORWARDING_PRIORITY)}

    def hook_name_for(self, event: DomainEvent) -> str:
        return f"{self.hook_prefix}{event.short_name}"

    def build_payload(self, event: DomainEvent) -> Dict[str, Any]:
        event_name = event.event_name
        if self.event_name_prefix:
            event_name = f"{self.event_name_prefix}.{event_name}"
        return {
            "event": event,
            "event_name": event_name,
            "event_data": event.to_dict(),
        }

    def forward(self, event: DomainEvent) -> None:
        if not self.enabled or self.executor is None:
            return

        hook_name = self.hook_name_for(event)
        try:
            self.executor(hook_name, self.build_payload(event))
        except Exception as e:
            logger.warning(
                "event_hook_forwarding_failed",
                hook_name=hook_name,
                error=str(e),
            )
            return

        logger.debug("event_hook_forwarded", hook_name=hook_name)
