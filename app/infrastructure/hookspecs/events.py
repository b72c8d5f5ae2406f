"""Hook specifications for forwarding domain events to host plugins."""

from typing import Any, Dict

import pluggy

hookspec = pluggy.HookspecMarker("eventrelay")


@hookspec
def forward_domain_event(hook_name: str, payload: Dict[str, Any]) -> Any:
    """Receive a dispatched domain event.

    Called once per dispatched event by HookForwardingSubscriber. Plugins
    usually filter on ``hook_name`` (e.g. ``"actionEventRelayOrderShipped"``).

    Args:
        hook_name: Hook prefix followed by the event's short name.
        payload: ``{"event": DomainEvent, "event_name": str, "event_data": dict}``
    """
