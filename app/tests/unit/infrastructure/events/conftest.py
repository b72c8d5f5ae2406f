"""Fixtures for infrastructure event system tests."""

from typing import ClassVar
from unittest.mock import MagicMock

import pytest

from infrastructure.events.dispatcher import EventDispatcher
from infrastructure.events.models import DomainEvent


class OrderShippedEvent(DomainEvent):
    event_name: ClassVar[str] = "order.shipped"

    order_id: int
    carrier: str = "ups"


class OrderCreatedEvent(DomainEvent):
    event_name: ClassVar[str] = "order.created"

    order_id: int


class OrdersCreatedEvent(DomainEvent):
    event_name: ClassVar[str] = "orders.created"


class OrderEvent(DomainEvent):
    event_name: ClassVar[str] = "order"


@pytest.fixture
def dispatcher():
    """Fresh dispatcher with no listeners."""
    return EventDispatcher()


@pytest.fixture
def event_factory():
    """Factory for creating order events by name."""
    classes = {
        "order.shipped": OrderShippedEvent,
        "order.created": OrderCreatedEvent,
    }

    def _factory(event_name: str = "order.shipped", order_id: int = 42):
        if event_name in classes:
            return classes[event_name](order_id=order_id)
        if event_name == "orders.created":
            return OrdersCreatedEvent()
        return OrderEvent()

    return _factory


@pytest.fixture
def mock_listener():
    """Mock listener callable."""
    return MagicMock(name="listener")
