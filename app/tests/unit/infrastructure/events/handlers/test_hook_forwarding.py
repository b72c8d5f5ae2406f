"""Unit tests for hook forwarding to host plugins."""

from unittest.mock import MagicMock, patch

import pluggy
import pytest

from infrastructure.events.handlers.hooks import (
    HookForwardingSubscriber,
    pluggy_executor,
)
from infrastructure.hookspecs import events as event_hookspecs

pytestmark = pytest.mark.unit

hookimpl = pluggy.HookimplMarker("eventrelay")


class RecordingPlugin:
    def __init__(self):
        self.received = []

    @hookimpl
    def forward_domain_event(self, hook_name, payload):
        self.received.append((hook_name, payload))
        return hook_name


class TestHookForwardingSubscriber:
    """Test the forwarding subscriber."""

    def test_forwards_with_derived_hook_name_and_payload(self, event_factory):
        executor = MagicMock()
        forwarder = HookForwardingSubscriber(executor=executor)
        event = event_factory("order.shipped", order_id=3)

        forwarder.forward(event)

        executor.assert_called_once()
        hook_name, payload = executor.call_args.args
        assert hook_name == "actionEventRelayOrderShipped"
        assert payload["event"] is event
        assert payload["event_name"] == "eventrelay.order.shipped"
        assert payload["event_data"] == event.to_dict()

    def test_custom_prefixes(self, event_factory):
        executor = MagicMock()
        forwarder = HookForwardingSubscriber(
            executor=executor, hook_prefix="onShop", event_name_prefix=""
        )

        forwarder.forward(event_factory("order.created"))

        hook_name, payload = executor.call_args.args
        assert hook_name == "onShopOrderCreated"
        assert payload["event_name"] == "order.created"

    def test_disabled_does_not_forward(self, event_factory):
        executor = MagicMock()
        forwarder = HookForwardingSubscriber(executor=executor, enabled=False)

        forwarder.forward(event_factory())

        executor.assert_not_called()

    def test_missing_executor_is_noop(self, event_factory):
        HookForwardingSubscriber(executor=None).forward(event_factory())

    @patch("infrastructure.events.handlers.hooks.logger")
    def test_executor_errors_are_logged_and_swallowed(self, mock_logger, event_factory):
        forwarder = HookForwardingSubscriber(
            executor=MagicMock(side_effect=RuntimeError("host down"))
        )

        forwarder.forward(event_factory())

        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.args[0] == "event_hook_forwarding_failed"

    def test_forwarding_failure_never_breaks_dispatch(self, dispatcher, event_factory):
        after = MagicMock()
        dispatcher.add_subscriber(
            HookForwardingSubscriber(executor=MagicMock(side_effect=OSError()))
        )
        dispatcher.add_listener("order.shipped", after, priority=-500)
        event = event_factory("order.shipped")

        assert dispatcher.dispatch(event) is event
        after.assert_called_once_with(event)

    def test_subscribes_to_every_event(self, dispatcher, event_factory):
        executor = MagicMock()
        dispatcher.add_subscriber(HookForwardingSubscriber(executor=executor))

        dispatcher.dispatch(event_factory("order.created"))
        dispatcher.dispatch(event_factory("orders.created"))

        assert [c.args[0] for c in executor.call_args_list] == [
            "actionEventRelayOrderCreated",
            "actionEventRelayOrdersCreated",
        ]


class TestPluggyExecutor:
    """Test forwarding through a pluggy plugin manager."""

    def test_calls_forward_domain_event_hook(self, event_factory):
        pm = pluggy.PluginManager("eventrelay")
        pm.add_hookspecs(event_hookspecs)
        plugin = RecordingPlugin()
        pm.register(plugin)
        forwarder = HookForwardingSubscriber(executor=pluggy_executor(pm))

        forwarder.forward(event_factory("order.shipped"))

        assert len(plugin.received) == 1
        hook_name, payload = plugin.received[0]
        assert hook_name == "actionEventRelayOrderShipped"
        assert payload["event_data"]["order_id"] == 42

    def test_executor_returns_hook_results(self, event_factory):
        pm = pluggy.PluginManager("eventrelay")
        pm.add_hookspecs(event_hookspecs)
        pm.register(RecordingPlugin())

        results = pluggy_executor(pm)("actionEventRelayX", {})

        assert results == ["actionEventRelayX"]
