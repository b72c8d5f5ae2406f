"""Context binding for structured logging.

This module provides utilities for binding dispatch- and delivery-scoped
context to logs, so every entry written while an event is dispatched or a
notification is delivered carries the same correlation ID.

Usage:
    from infrastructure.logging import bind_log_context

    with bind_log_context(event_name="order.shipped", event_id="..."):
        # All logs within this block will include the context
        logger.info("listener_invoked")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_log_context(
    correlation_id: Optional[str] = None,
    event_name: Optional[str] = None,
    event_id: Optional[str] = None,
    channel: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind scoped context to all logs within the context manager.

    An existing correlation ID bound by an outer block is reused so that a
    notification sent from inside a listener shares the dispatch correlation.

    Args:
        correlation_id: Correlation identifier. Inherited or auto-generated
            if not provided.
        event_name: Name of the event being dispatched.
        event_id: Identifier of the event being dispatched.
        channel: Notification channel being delivered to.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The correlation ID bound for the duration of the block.
    """
    inherited = get_correlation_id()
    context: dict[str, Any] = {}

    if correlation_id is not None or inherited is None:
        context["correlation_id"] = correlation_id or str(uuid.uuid4())

    if event_name is not None:
        context["event_name"] = event_name

    if event_id is not None:
        context["event_id"] = event_id

    if channel is not None:
        context["channel"] = channel

    context.update(extra_context)

    tokens = structlog.contextvars.bind_contextvars(**context)
    try:
        yield context.get("correlation_id", inherited)
    finally:
        structlog.contextvars.reset_contextvars(**tokens)


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context.

    Returns:
        The correlation ID if set, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID in the current logging context.

    Args:
        correlation_id: The correlation ID to set.
    """
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_log_context() -> None:
    """Clear all scoped context from the logging context."""
    structlog.contextvars.clear_contextvars()
