"""Infrastructure event system - in-process domain event dispatcher.

The event system decouples producers of facts from reactive consumers.
Listeners are registered by exact name or wildcard pattern with a priority
and invoked synchronously on the dispatching thread.

Usage:

    from infrastructure.events import EventDispatcher, EntityCreatedEvent

    dispatcher = EventDispatcher()

    def handle_created(event: EntityCreatedEvent) -> None:
        ...

    dispatcher.add_listener("entity.*", handle_created, priority=10)
    dispatcher.dispatch(
        EntityCreatedEvent(entity_type="product", entity_id=42, data={"name": "Mug"})
    )
"""

from infrastructure.events.dispatcher import (
    EventDispatcher,
    ListenerRegistration,
)
from infrastructure.events.handlers import (
    HookForwardingSubscriber,
    LoggingHandler,
    pluggy_executor,
)
from infrastructure.events.models import (
    DomainEvent,
    EntityCreatedEvent,
    EntityDeletedEvent,
    EntityUpdatedEvent,
    EventHistoryEntry,
    FieldValueDeletedEvent,
    FieldValueSavedEvent,
    GroupCreatedEvent,
    GroupDeletedEvent,
    GroupUpdatedEvent,
)
from infrastructure.events.subscribers import EventSubscriber

__all__ = [
    "DomainEvent",
    "EntityCreatedEvent",
    "EntityDeletedEvent",
    "EntityUpdatedEvent",
    "EventHistoryEntry",
    "FieldValueDeletedEvent",
    "FieldValueSavedEvent",
    "GroupCreatedEvent",
    "GroupDeletedEvent",
    "GroupUpdatedEvent",
    "EventDispatcher",
    "ListenerRegistration",
    "EventSubscriber",
    "HookForwardingSubscriber",
    "LoggingHandler",
    "pluggy_executor",
]
