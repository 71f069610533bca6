"""
Event System - records and dispatch for ssestream.

Core Components:
- Event and its shapes (MessageEvent, ErrorEvent, ReadyStateEvent)
- EventKind: recognized types with a primary handler slot
- EventTarget: listener registry and dispatcher

Quick Start:
    from ssestream.core.events import EventTarget, MessageEvent

    target = EventTarget()
    target.add_event_listener("update", lambda e: print(e.data))
    target.dispatch_event(MessageEvent(type="update", data="Hello!"))
"""

from .base import Callback, ErrorEvent, Event, EventKind, MessageEvent, ReadyStateEvent
from .target import EventTarget

__all__ = [
    "Callback",
    "ErrorEvent",
    "Event",
    "EventKind",
    "EventTarget",
    "MessageEvent",
    "ReadyStateEvent",
]
