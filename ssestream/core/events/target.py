"""
EventTarget - listener registry and primary handler slots.

Responsibilities:
- Register/unregister listeners per event type
- Hold one primary handler per recognized kind plus one for custom types
- Deliver one event at a time with cancellation support

Dispatch order:
    primary handler -> (stop if cancelled) -> every listener in registration order
"""

import logging
from typing import Any

from ssestream.core.events.base import Callback, Event, EventKind

logger = logging.getLogger(__name__)


class EventTarget:
    """
    Listener registry and synchronous dispatcher.

    Listeners are de-duplicated by identity and called in registration
    order. Unlike most event models, cancelling an event from a listener
    does not stop the remaining listeners; it only makes dispatch_event()
    return False.

    Usage:
        target = EventTarget()
        target.on_message = lambda e: print(e.data)
        target.add_event_listener("update", handle_update)
        target.dispatch_event(MessageEvent(type="update", data="x"))
    """

    def __init__(self, debug: bool = False):
        """
        Initialize EventTarget.

        Args:
            debug: Log every dispatched event
        """
        self.debug = debug
        self._listeners: dict[str, list[Callback]] = {}
        self._handlers: dict[EventKind, Callback | None] = dict.fromkeys(EventKind)
        self._custom_handler: Callback | None = None

    def add_event_listener(self, type: str, callback: Callback) -> None:
        """
        Register a listener for an event type.

        Args:
            type: Event type
            callback: Callable receiving the event; ignored if already registered
        """
        listeners = self._listeners.setdefault(type, [])
        if not any(registered is callback for registered in listeners):
            listeners.append(callback)

    def remove_event_listener(self, type: str, callback: Callback) -> None:
        """
        Unregister a listener. Unknown types or callbacks are ignored.

        Args:
            type: Event type
            callback: Previously registered callable
        """
        listeners = self._listeners.get(type)
        if listeners is None:
            return

        remaining = [registered for registered in listeners if registered is not callback]
        if remaining:
            self._listeners[type] = remaining
        else:
            del self._listeners[type]

    def dispatch_event(self, event: Event | None) -> bool:
        """
        Deliver an event to its primary handler and listeners.

        Args:
            event: Event to deliver; None is accepted and ignored

        Returns:
            False if any handler or listener cancelled the event, True otherwise
        """
        if event is None:
            return True

        if self.debug:
            logger.debug(f"Dispatching {event!r}")

        event.source = self

        handler = self.get_handler(event.type)
        if handler is not None:
            self._invoke(handler, event)
            if event.default_prevented:
                return False

        for listener in list(self._listeners.get(event.type, ())):
            self._invoke(listener, event)

        return not event.default_prevented

    def get_handler(self, type: str) -> Callback | None:
        """Get the primary handler slot for an event type."""
        kind = EventKind.lookup(type)
        if kind is None:
            return self._custom_handler
        return self._handlers[kind]

    def set_handler(self, type: str | EventKind, handler: Callback | None) -> None:
        """Fill (or clear with None) the primary handler slot for an event type."""
        kind = type if isinstance(type, EventKind) else EventKind.lookup(type)
        if kind is None:
            self._custom_handler = handler
        else:
            self._handlers[kind] = handler

    def get_listener_count(self, type: str) -> int:
        """Get number of registered listeners for an event type."""
        return len(self._listeners.get(type, ()))

    @property
    def listener_types(self) -> list[str]:
        """Event types that currently have at least one listener."""
        return list(self._listeners)

    def _invoke(self, callback: Callback, event: Event) -> None:
        try:
            callback(event)
        except Exception:
            logger.exception(f"Handler {callback!r} failed for '{event.type}' event")

    @property
    def on_open(self) -> Callback | None:
        return self._handlers[EventKind.OPEN]

    @on_open.setter
    def on_open(self, handler: Callback | None) -> None:
        self._handlers[EventKind.OPEN] = handler

    @property
    def on_message(self) -> Callback | None:
        return self._handlers[EventKind.MESSAGE]

    @on_message.setter
    def on_message(self, handler: Callback | None) -> None:
        self._handlers[EventKind.MESSAGE] = handler

    @property
    def on_load(self) -> Callback | None:
        return self._handlers[EventKind.LOAD]

    @on_load.setter
    def on_load(self, handler: Callback | None) -> None:
        self._handlers[EventKind.LOAD] = handler

    @property
    def on_error(self) -> Callback | None:
        return self._handlers[EventKind.ERROR]

    @on_error.setter
    def on_error(self, handler: Callback | None) -> None:
        self._handlers[EventKind.ERROR] = handler

    @property
    def on_abort(self) -> Callback | None:
        return self._handlers[EventKind.ABORT]

    @on_abort.setter
    def on_abort(self, handler: Callback | None) -> None:
        self._handlers[EventKind.ABORT] = handler

    @property
    def on_readystatechange(self) -> Callback | None:
        return self._handlers[EventKind.READYSTATECHANGE]

    @on_readystatechange.setter
    def on_readystatechange(self, handler: Callback | None) -> None:
        self._handlers[EventKind.READYSTATECHANGE] = handler

    @property
    def on_custom(self) -> Callback | None:
        """Primary handler for server-defined event types."""
        return self._custom_handler

    @on_custom.setter
    def on_custom(self, handler: Callback | None) -> None:
        self._custom_handler = handler

    # EventTarget-style spellings
    def addEventListener(self, type: str, callback: Callback) -> None:  # noqa: N802
        self.add_event_listener(type, callback)

    def removeEventListener(self, type: str, callback: Callback) -> None:  # noqa: N802
        self.remove_event_listener(type, callback)

    def dispatchEvent(self, event: Event | None) -> bool:  # noqa: N802
        return self.dispatch_event(event)

    def get_stats(self) -> dict[str, Any]:
        """Get registry statistics for debugging."""
        return {
            "total_event_types": len(self._listeners),
            "total_listeners": sum(len(listeners) for listeners in self._listeners.values()),
            "listeners_by_type": {
                event_type: len(listeners) for event_type, listeners in self._listeners.items()
            },
            "handlers": sorted(
                kind.value for kind, handler in self._handlers.items() if handler is not None
            ),
        }


__all__ = ["EventTarget"]
