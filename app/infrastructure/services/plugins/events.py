"""Domain event forwarding plugin manager."""

from functools import lru_cache
from typing import Iterable

import pluggy
import structlog

from infrastructure.hookspecs import events as event_hookspecs
from infrastructure.services.plugins.base import auto_discover_plugins

logger = structlog.get_logger()

PROJECT_NAME = "eventrelay"


@lru_cache(maxsize=1)
def get_event_plugin_manager() -> pluggy.PluginManager:
    """Get the event forwarding plugin manager singleton.

    Returns:
        PluginManager configured with the ``forward_domain_event`` hook spec.
    """
    pm = pluggy.PluginManager(PROJECT_NAME)
    pm.add_hookspecs(event_hookspecs)

    logger.info("event_plugin_manager_created")
    return pm


def discover_event_plugins(
    pm: pluggy.PluginManager, base_paths: Iterable[str] = ()
) -> int:
    """Register event plugins from entry points and local packages.

    Installed distributions advertise plugins under the ``eventrelay``
    entry point group; local packages under ``base_paths`` are imported and
    registered if they define ``@hookimpl`` functions.

    Args:
        pm: Plugin manager to register plugins with.
        base_paths: Directories to scan for plugin packages.

    Returns:
        Total number of registered plugins.
    """
    loaded = pm.load_setuptools_entrypoints(PROJECT_NAME)
    logger.debug("event_entrypoint_plugins_loaded", count=loaded)

    auto_discover_plugins(pm, base_paths=list(base_paths))

    plugin_count = len(pm.get_plugins())
    logger.info("event_plugins_discovered", plugin_count=plugin_count)
    return plugin_count
