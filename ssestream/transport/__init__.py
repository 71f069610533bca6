"""Transports for ssestream."""

from ssestream.transport.async_httpx_transport import AsyncHttpxTransport
from ssestream.transport.base import BaseTransport, TransportListener, encode_payload
from ssestream.transport.factory import TransportFactory, register_transport
from ssestream.transport.httpx_transport import HttpxTransport

__all__ = [
    "AsyncHttpxTransport",
    "BaseTransport",
    "HttpxTransport",
    "TransportFactory",
    "TransportListener",
    "encode_payload",
    "register_transport",
]
