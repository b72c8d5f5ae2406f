"""Unit tests for infrastructure subscriber bootstrap."""

from unittest.mock import MagicMock

import pytest

from infrastructure.configuration import EventSettings
from infrastructure.events.bootstrap import register_infrastructure_handlers
from infrastructure.events.handlers import HookForwardingSubscriber

pytestmark = pytest.mark.unit


class TestRegisterInfrastructureHandlers:
    """Test registration of system-level subscribers."""

    def test_registers_logging_and_forwarding(self, dispatcher, event_factory):
        pm = MagicMock()
        settings = EventSettings(
            EVENT_HOOK_FORWARDING_ENABLED=True, EVENT_HOOK_PREFIX="actionShop"
        )

        forwarder = register_infrastructure_handlers(dispatcher, settings, pm)
        dispatcher.dispatch(event_factory("order.shipped"))

        assert isinstance(forwarder, HookForwardingSubscriber)
        assert len(dispatcher.get_listeners_for_event("order.shipped")) == 2
        pm.hook.forward_domain_event.assert_called_once()
        kwargs = pm.hook.forward_domain_event.call_args.kwargs
        assert kwargs["hook_name"] == "actionShopOrderShipped"

    def test_forwarding_disabled(self, dispatcher):
        settings = EventSettings(EVENT_HOOK_FORWARDING_ENABLED=False)

        forwarder = register_infrastructure_handlers(dispatcher, settings)

        assert forwarder is None
        assert len(dispatcher.get_listeners_for_event("anything")) == 1

    def test_without_plugin_manager_forwarding_is_noop(self, dispatcher, event_factory):
        settings = EventSettings(EVENT_HOOK_FORWARDING_ENABLED=True)

        forwarder = register_infrastructure_handlers(dispatcher, settings)
        event = event_factory()

        assert forwarder.executor is None
        assert dispatcher.dispatch(event) is event
