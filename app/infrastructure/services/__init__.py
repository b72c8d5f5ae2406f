"""
Dependency injection services.

Provides cached provider functions for application-scoped infrastructure
services and the event plugin manager.
"""

from infrastructure.services.plugins import (
    discover_event_plugins,
    get_event_plugin_manager,
    hookimpl,
)
from infrastructure.services.providers import (
    get_event_dispatcher,
    get_http_client,
    get_notification_service,
    get_retry_strategy,
    get_settings,
)

__all__ = [
    "get_settings",
    "get_retry_strategy",
    "get_http_client",
    "get_event_dispatcher",
    "get_notification_service",
    "get_event_plugin_manager",
    "discover_event_plugins",
    "hookimpl",
]
