"""Structured logging infrastructure.

This package provides centralized logging configuration and utilities
built on structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_logger(): Get a logger instance with a specific name
    - get_module_logger(): Get a logger for the calling module
    - bind_log_context(): Context manager for dispatch/delivery-scoped logging
    - get_correlation_id(): Get current correlation ID from context
    - set_correlation_id(): Set correlation ID in context
    - clear_log_context(): Clear all scoped context

Processors:
    - add_app_info(): Add app name/version
    - mask_sensitive_data(): Redact tokens, secrets and auth headers
    - truncate_large_values(): Limit string lengths
    - add_environment_info(): Add environment name

Example:
    from infrastructure.logging import get_module_logger, bind_log_context

    logger = get_module_logger()

    with bind_log_context(event_name="order.shipped"):
        logger.info("dispatching_event")
"""

from infrastructure.logging.setup import (
    configure_logging,
    get_logger,
    get_module_logger,
)

from infrastructure.logging.context import (
    bind_log_context,
    get_correlation_id,
    set_correlation_id,
    clear_log_context,
)

from infrastructure.logging.formatters import (
    add_app_info,
    mask_sensitive_data,
    truncate_large_values,
    add_environment_info,
    SENSITIVE_PATTERNS,
)

__all__ = [
    # Setup
    "configure_logging",
    "get_logger",
    "get_module_logger",
    # Context
    "bind_log_context",
    "get_correlation_id",
    "set_correlation_id",
    "clear_log_context",
    # Processors
    "add_app_info",
    "mask_sensitive_data",
    "truncate_large_values",
    "add_environment_info",
    "SENSITIVE_PATTERNS",
]
