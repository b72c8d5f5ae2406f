"""Fixtures for notification tests."""

from unittest.mock import MagicMock

import pytest

from infrastructure.notifications.channels.base import NotificationChannel


@pytest.fixture
def channel_factory():
    """Factory for mock channels returning a fixed count or raising."""

    def _factory(name: str = "email", reached: int = 1, error: Exception = None):
        channel = MagicMock(spec=NotificationChannel)
        channel.channel_name = name
        channel.is_configured.return_value = True
        if error is not None:
            channel.send.side_effect = error
        else:
            channel.send.return_value = reached
        return channel

    return _factory
