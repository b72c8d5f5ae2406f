"""Local plugin package discovery."""

import importlib
import pkgutil
from pathlib import Path
from typing import List

import pluggy
import structlog

logger = structlog.get_logger()


def auto_discover_plugins(pm: pluggy.PluginManager, base_paths: List[str]) -> List[str]:
    """Import plugin packages under each base path and register them.

    Each sub-package of a base directory is imported as
    ``<base_path>.<package>`` and handed to the plugin manager. Packages
    that fail to import are logged and skipped; already registered modules
    are left alone.

    Args:
        pm: Plugin manager to register plugins with.
        base_paths: Importable directories to scan (e.g., ["plugins"]).

    Returns:
        Module names registered by this call.

    Example:
        >>> pm = get_event_plugin_manager()
        >>> auto_discover_plugins(pm, base_paths=["plugins"])
        ['plugins.webhooks']
    """
    registered: List[str] = []
    for base_path in base_paths:
        path = Path(base_path)
        if not path.is_dir():
            logger.warning("plugin_base_path_not_found", path=str(path))
            continue

        for pkg_info in pkgutil.iter_modules([str(path)]):
            if not pkg_info.ispkg:
                continue
            module_name = f"{path.name}.{pkg_info.name}"
            try:
                module = importlib.import_module(module_name)
            except Exception as e:
                logger.error(
                    "plugin_import_failed",
                    module=module_name,
                    error=str(e),
                    exc_info=True,
                )
                continue

            if pm.is_registered(module):
                continue
            pm.register(module, name=module_name)
            registered.append(module_name)
            logger.debug("plugin_registered", module=module_name)

    return registered
