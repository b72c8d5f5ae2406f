"""Plugin managers and utilities."""

import pluggy

from infrastructure.services.plugins.events import (
    discover_event_plugins,
    get_event_plugin_manager,
)

# Singleton hookimpl marker for entire application
hookimpl = pluggy.HookimplMarker("eventrelay")

__all__ = [
    "hookimpl",
    "get_event_plugin_manager",
    "discover_event_plugins",
]
