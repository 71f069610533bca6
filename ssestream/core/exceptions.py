"""Custom exceptions for ssestream."""


class SSEError(Exception):
    """Base exception for all ssestream errors."""


class ConfigurationError(SSEError):
    """Raised when connection options or settings are invalid."""


class TransportError(SSEError):
    """Raised when a transport is driven out of order."""

    def __init__(self, message: str, transport: str | None = None) -> None:
        super().__init__(message)
        self.transport = transport
