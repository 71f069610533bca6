"""
ssestream - a flexible EventSource replacement.

Main Features:
- Custom HTTP methods, headers, request bodies and credentials
- Incremental record assembly over arbitrarily fragmented responses
- EventTarget-style listeners plus primary handler slots
- Pluggable transports (threaded httpx, asyncio httpx)

Quick Start:
    >>> from ssestream import SSE
    >>> sse = SSE("https://example.com/events", headers={"Authorization": "Bearer ..."})
    >>> sse.on_message = lambda event: print(event.data)
    >>> sse.add_event_listener("update", lambda event: print(event.id, event.data))

Architecture:
    Transport -> SSE (state machine) -> ChunkAssembler -> parse_event_chunk -> EventTarget
"""

__version__ = "0.1.0"

from ssestream.core.assembler import ChunkAssembler
from ssestream.core.config import SSEOptions, SSESettings
from ssestream.core.events import (
    ErrorEvent,
    Event,
    EventKind,
    EventTarget,
    MessageEvent,
    ReadyStateEvent,
)
from ssestream.core.exceptions import ConfigurationError, SSEError, TransportError
from ssestream.core.parser import parse_event_chunk
from ssestream.core.source import SSE
from ssestream.core.state import ReadyState
from ssestream.transport import AsyncHttpxTransport, BaseTransport, HttpxTransport

__all__ = [
    "SSE",
    "AsyncHttpxTransport",
    "BaseTransport",
    "ChunkAssembler",
    "ConfigurationError",
    "ErrorEvent",
    "Event",
    "EventKind",
    "EventTarget",
    "HttpxTransport",
    "MessageEvent",
    "ReadyState",
    "ReadyStateEvent",
    "SSEError",
    "SSEOptions",
    "SSESettings",
    "TransportError",
    "__version__",
    "parse_event_chunk",
]
