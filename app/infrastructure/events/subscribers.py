"""Subscriber interface for bulk listener registration."""

from abc import ABC, abstractmethod
from typing import Dict, List, Tuple, Union

SubscriptionEntry = Union[str, Tuple[str, int]]
Subscriptions = Dict[str, Union[SubscriptionEntry, List[SubscriptionEntry]]]


class EventSubscriber(ABC):
    """An object that declares which events its methods listen to.

    ``get_subscribed_events()`` maps an event name or wildcard pattern to a
    method name, a ``(method_name, priority)`` tuple, or a list of either:

        class OrderNotificationSubscriber(EventSubscriber):
            def get_subscribed_events(self):
                return {
                    "order.created": "on_order_created",
                    "order.*": ("on_any_order_event", -10),
                    "order.shipped": [("notify_customer", 10), "update_stats"],
                }
    """

    @abstractmethod
    def get_subscribed_events(self) -> Subscriptions:
        pass
