"""Core module for ssestream - parsing, dispatch and connection lifecycle."""

from ssestream.core.assembler import ChunkAssembler
from ssestream.core.config import SSEOptions, SSESettings
from ssestream.core.exceptions import ConfigurationError, SSEError, TransportError
from ssestream.core.parser import parse_event_chunk
from ssestream.core.source import SSE
from ssestream.core.state import ReadyState

__all__ = [
    "SSE",
    "ChunkAssembler",
    "ConfigurationError",
    "ReadyState",
    "SSEError",
    "SSEOptions",
    "SSESettings",
    "TransportError",
    "parse_event_chunk",
]
