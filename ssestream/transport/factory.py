"""
Transport Factory - creation of transports by registered name.

Architecture:
- Transport Registry: easy to add new transports
- Factory Pattern: create transports by name from SSESettings.transport
"""

from __future__ import annotations

from collections.abc import Callable
import logging
from typing import TYPE_CHECKING, Any

from ssestream.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from ssestream.core.config import SSESettings
    from ssestream.transport.base import BaseTransport, TransportListener

logger = logging.getLogger(__name__)

TransportBuilder = Callable[..., "BaseTransport"]

TRANSPORT_REGISTRY: dict[str, TransportBuilder] = {}
_bundled_loaded = False


def register_transport(name: str, transport_class: TransportBuilder) -> None:
    """
    Register a new transport.

    Args:
        name: Transport name (httpx, httpx-async)
        transport_class: Callable taking (listener, settings, **kwargs)
    """
    TRANSPORT_REGISTRY[name.lower()] = transport_class
    logger.debug(f"Registered transport: {name}")


def _lazy_load_transports() -> None:
    """Import the bundled transports on first use without replacing custom ones."""
    global _bundled_loaded
    if _bundled_loaded:
        return
    _bundled_loaded = True

    from ssestream.transport.async_httpx_transport import AsyncHttpxTransport
    from ssestream.transport.httpx_transport import HttpxTransport

    TRANSPORT_REGISTRY.setdefault(HttpxTransport.name, HttpxTransport)
    TRANSPORT_REGISTRY.setdefault(AsyncHttpxTransport.name, AsyncHttpxTransport)


class TransportFactory:
    """Factory for creating transports."""

    @staticmethod
    def create(
        name: str,
        listener: TransportListener,
        settings: SSESettings | None = None,
        **kwargs: Any,
    ) -> BaseTransport:
        """
        Create a transport by name.

        Args:
            name: Registered transport name
            listener: Receiver of transport notifications
            settings: Transport settings
            **kwargs: Transport-specific arguments (client, cookies, auth)

        Returns:
            BaseTransport instance

        Raises:
            ConfigurationError: If the transport name is unknown
        """
        _lazy_load_transports()

        transport_name = name.lower()
        if transport_name not in TRANSPORT_REGISTRY:
            available = ", ".join(TRANSPORT_REGISTRY.keys())
            raise ConfigurationError(
                f"Unknown transport: {transport_name}. Available transports: {available}"
            )

        return TRANSPORT_REGISTRY[transport_name](listener, settings, **kwargs)

    @staticmethod
    def create_from_settings(
        listener: TransportListener, settings: SSESettings, **kwargs: Any
    ) -> BaseTransport:
        """Create the transport named by settings.transport."""
        return TransportFactory.create(settings.transport, listener, settings, **kwargs)


__all__ = [
    "TRANSPORT_REGISTRY",
    "TransportFactory",
    "register_transport",
]
