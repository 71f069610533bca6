"""
Event records delivered to handlers and listeners.

Core Concepts:
- Event: base record with a type, the dispatching source and a cancellation flag
- MessageEvent: a record parsed from the stream (id, data, retry)
- ErrorEvent: transport failure carrying the last response text
- ReadyStateEvent: lifecycle change carrying the new state
- EventKind: the recognized event types, each owning a primary handler slot

A fresh record is built for every dispatch and never reused.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ssestream.core.state import ReadyState


class EventKind(str, Enum):
    """Event types with a dedicated primary handler slot."""

    OPEN = "open"
    MESSAGE = "message"
    LOAD = "load"
    ERROR = "error"
    ABORT = "abort"
    READYSTATECHANGE = "readystatechange"

    @classmethod
    def lookup(cls, event_type: str) -> "EventKind | None":
        """Resolve a type string to its kind, or None for custom types."""
        try:
            return cls(event_type)
        except ValueError:
            return None


@dataclass(kw_only=True)
class Event:
    """
    Base event record.

    Attributes:
        type: Event type used for routing
        source: Dispatching connection, stamped by the dispatcher
        default_prevented: Set by a handler to cancel the event
    """

    type: str
    source: Any = None
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass(kw_only=True)
class MessageEvent(Event):
    """A record parsed from the stream."""

    type: str = EventKind.MESSAGE.value
    id: str | None = None
    data: str = ""
    # Parsed but never scheduled; reconnecting is left to the caller.
    retry: str | None = None


@dataclass(kw_only=True)
class ErrorEvent(Event):
    """Transport failure or non-success response."""

    type: str = EventKind.ERROR.value
    data: str | None = None


@dataclass(kw_only=True)
class ReadyStateEvent(Event):
    """Lifecycle transition."""

    type: str = EventKind.READYSTATECHANGE.value
    ready_state: ReadyState


Callback = Callable[[Event], Any]


__all__ = [
    "Callback",
    "ErrorEvent",
    "Event",
    "EventKind",
    "MessageEvent",
    "ReadyStateEvent",
]
