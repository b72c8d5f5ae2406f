"""Event dispatcher for the in-process domain event system.

Listeners are registered against an exact event name or a wildcard pattern
(``"order.*"``, or ``"*"`` for everything) with an integer priority. Dispatch
is synchronous on the calling thread: matching listeners run by priority
descending, ties broken by registration order, and a failing listener never
prevents the remaining ones from running.
"""

import itertools
import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple

from infrastructure.events.models import DomainEvent, EventHistoryEntry
from infrastructure.events.subscribers import EventSubscriber
from infrastructure.exceptions import ListenerError
from infrastructure.logging import bind_log_context, get_module_logger

logger = get_module_logger()

Listener = Callable[[DomainEvent], Any]
ErrorHandler = Callable[[ListenerError], None]

DEFAULT_HISTORY_SIZE = 100
WILDCARD = "*"


@dataclass(frozen=True)
class ListenerRegistration:
    """A callback bound to an event name pattern.

    Attributes:
        pattern: Exact event name, or a prefix ending in ``*``.
        callback: Callable invoked with the dispatched event.
        priority: Higher values run first.
        sequence: Dispatcher-wide registration counter, used as tie-break.
    """

    pattern: str
    callback: Listener
    priority: int = 0
    sequence: int = 0

    @property
    def is_wildcard(self) -> bool:
        return self.pattern.endswith(WILDCARD)

    def matches(self, event_name: str) -> bool:
        if self.is_wildcard:
            return event_name.startswith(self.pattern[: -len(WILDCARD)])
        return event_name == self.pattern


def _callable_name(callback: Callable) -> str:
    return getattr(callback, "__qualname__", None) or getattr(
        callback, "__name__", repr(callback)
    )


class EventDispatcher:
    """Priority and wildcard aware event dispatcher.

    Usage:
        dispatcher = EventDispatcher()
        dispatcher.add_listener("order.*", audit_order, priority=10)
        dispatcher.add_listener("order.shipped", notify_customer)
        dispatcher.add_subscriber(LoggingHandler())

        dispatcher.dispatch(OrderShippedEvent(order_id=42, carrier="ups"))

    Registry mutation, listener lookup and history writes are guarded by a
    re-entrant lock, so listeners may register other listeners or dispatch
    nested events. Sorted listener views are cached per event name and
    invalidated on every registration change.

    Args:
        history_size: Capacity of the dispatch history buffer. 0 disables it.
        error_handler: Optional callable receiving a ListenerError for every
            listener failure.
    """

    def __init__(
        self,
        history_size: int = DEFAULT_HISTORY_SIZE,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        if history_size < 0:
            raise ValueError("history_size must be >= 0")
        self._listeners: Dict[str, List[ListenerRegistration]] = {}
        self._sorted: Dict[str, Tuple[ListenerRegistration, ...]] = {}
        self._sequence = itertools.count()
        self._lock = threading.RLock()
        self._history: Deque[EventHistoryEntry] = deque(maxlen=history_size)
        self.error_handler = error_handler

    # Registration

    def add_listener(
        self, pattern: str, callback: Listener, priority: int = 0
    ) -> ListenerRegistration:
        """Register a callback for an event name or wildcard pattern.

        The same callback may be registered more than once; each registration
        is invoked on dispatch.

        Args:
            pattern: Exact event name, or a prefix ending in ``*``.
            callback: Callable taking the dispatched event.
            priority: Higher values run first. Defaults to 0.

        Returns:
            The created ListenerRegistration.
        """
        if not pattern:
            raise ValueError("pattern must be a non-empty string")
        if not callable(callback):
            raise TypeError(f"Listener for {pattern!r} is not callable")

        with self._lock:
            registration = ListenerRegistration(
                pattern=pattern,
                callback=callback,
                priority=priority,
                sequence=next(self._sequence),
            )
            self._listeners.setdefault(pattern, []).append(registration)
            self._sorted.clear()

        logger.debug(
            "event_listener_registered",
            pattern=pattern,
            listener=_callable_name(callback),
            priority=priority,
        )
        return registration

    def add_subscriber(self, subscriber: EventSubscriber) -> List[ListenerRegistration]:
        """Register every listener a subscriber declares.

        Args:
            subscriber: Object exposing ``get_subscribed_events()``.

        Returns:
            The registrations created, in declaration order.

        Raises:
            ValueError: If a declared method does not exist on the subscriber
                or a declaration is malformed.
        """
        resolved = list(self._resolve_subscriber(subscriber))
        return [
            self.add_listener(pattern, callback, priority)
            for pattern, callback, priority in resolved
        ]

    def remove_subscriber(self, subscriber: EventSubscriber) -> int:
        """Remove the listeners a subscriber declares.

        Returns:
            Number of registrations removed.
        """
        removed = 0
        for pattern, callback, _ in self._resolve_subscriber(subscriber):
            if self.remove_listener(pattern, callback):
                removed += 1
        return removed

    def remove_listener(self, pattern: str, callback: Listener) -> bool:
        """Remove the first registration of ``callback`` under ``pattern``.

        Returns:
            True if a registration was removed.
        """
        with self._lock:
            registrations = self._listeners.get(pattern)
            if not registrations:
                return False
            for index, registration in enumerate(registrations):
                if registration.callback == callback:
                    del registrations[index]
                    if not registrations:
                        del self._listeners[pattern]
                    self._sorted.clear()
                    return True
        return False

    def clear_listeners(self) -> None:
        with self._lock:
            self._listeners.clear()
            self._sorted.clear()
        logger.debug("event_listeners_cleared")

    # Dispatch

    def dispatch(self, event: DomainEvent) -> DomainEvent:
        """Invoke every listener matching the event's name.

        Listener exceptions are wrapped in ListenerError, logged and passed to
        the error handler; they never propagate.

        Args:
            event: The event to dispatch.

        Returns:
            The same event instance.
        """
        event_name = event.event_name
        registrations = self._get_sorted_registrations(event_name)

        with self._lock:
            self._history.append(
                EventHistoryEntry(event_name, datetime.now(timezone.utc))
            )

        with bind_log_context(event_name=event_name, event_id=str(event.event_id)):
            logger.debug("dispatching_event", listener_count=len(registrations))
            for registration in registrations:
                self._invoke(registration, event)

        return event

    def _invoke(self, registration: ListenerRegistration, event: DomainEvent) -> None:
        try:
            registration.callback(event)
        except Exception as e:
            error = ListenerError(
                event.event_name, _callable_name(registration.callback), e
            )
            logger.error(
                "event_listener_failed",
                listener=error.listener_name,
                pattern=registration.pattern,
                error=str(e),
                exc_info=True,
            )
            if self.error_handler is None:
                return
            try:
                self.error_handler(error)
            except Exception as handler_error:
                logger.error(
                    "event_error_handler_failed",
                    listener=error.listener_name,
                    error=str(handler_error),
                )

    # Inspection

    def has_listeners(self, event_name: str) -> bool:
        """Check whether dispatching ``event_name`` would invoke anything."""
        return bool(self._get_sorted_registrations(event_name))

    def get_listeners_for_event(self, event_name: str) -> List[Listener]:
        """Callbacks that would run for ``event_name``, in dispatch order."""
        return [r.callback for r in self._get_sorted_registrations(event_name)]

    def get_registered_patterns(self) -> List[str]:
        with self._lock:
            return list(self._listeners)

    def get_event_history(self) -> List[EventHistoryEntry]:
        """Most recent dispatches, oldest first."""
        with self._lock:
            return list(self._history)

    def clear_history(self) -> None:
        with self._lock:
            self._history.clear()

    def _get_sorted_registrations(
        self, event_name: str
    ) -> Tuple[ListenerRegistration, ...]:
        with self._lock:
            cached = self._sorted.get(event_name)
            if cached is not None:
                return cached

            matched = list(self._listeners.get(event_name, ()))
            for pattern, registrations in self._listeners.items():
                if pattern != event_name and pattern.endswith(WILDCARD):
                    matched.extend(r for r in registrations if r.matches(event_name))

            ordered = tuple(sorted(matched, key=lambda r: (-r.priority, r.sequence)))
            self._sorted[event_name] = ordered
            return ordered

    @staticmethod
    def _resolve_subscriber(subscriber: EventSubscriber):
        """Yield ``(pattern, bound_method, priority)`` for each declaration."""
        for pattern, spec in subscriber.get_subscribed_events().items():
            entries = spec if isinstance(spec, list) else [spec]
            for entry in entries:
                if isinstance(entry, str):
                    method_name, priority = entry, 0
                elif isinstance(entry, tuple) and len(entry) == 2:
                    method_name, priority = entry
                else:
                    raise ValueError(
                        f"Invalid subscription for {pattern!r} on "
                        f"{type(subscriber).__name__}: {entry!r}"
                    )
                method = getattr(subscriber, method_name, None)
                if method is None or not callable(method):
                    raise ValueError(
                        f"{type(subscriber).__name__} has no method {method_name!r}"
                    )
                yield pattern, method, priority
