"""Abstract transport contract consumed by the connection state machine."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Protocol

from ssestream.core.config import SSESettings
from ssestream.core.exceptions import TransportError

DEFAULT_HEADERS = {
    "Accept": "text/event-stream",
    "Cache-Control": "no-cache",
}


class TransportListener(Protocol):
    """Notifications a transport delivers back to its owner, one at a time."""

    def on_progress(self, text: str, status: int) -> None:
        """Cumulative response text so far and the response status."""

    def on_load(self, text: str) -> None:
        """Response body fully received."""

    def on_ready_state_change(self, done: bool) -> None:
        """Request state changed; done=True once nothing more will arrive."""

    def on_error(self, text: str | None) -> None:
        """Network failure; text is whatever was received before it."""

    def on_abort(self) -> None:
        """Request was aborted."""


def encode_payload(payload: Any) -> dict[str, Any]:
    """
    Translate a request body into httpx request keyword arguments.

    Args:
        payload: str, bytes-like, form mapping, or empty

    Returns:
        {"content": ...}, {"data": ...} or {} for an empty body
    """
    if not payload:
        return {}
    if isinstance(payload, str):
        return {"content": payload.encode("utf-8")}
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return {"content": bytes(payload)}
    if isinstance(payload, Mapping):
        return {"data": dict(payload)}
    raise TransportError(f"Cannot encode payload of type {type(payload).__name__}")


class BaseTransport(ABC):
    """
    Base class for transports.

    Mirrors the request half of XMLHttpRequest: open(), set_header(),
    set_with_credentials(), send(), abort(). Subclasses report what they
    receive through the listener.
    """

    name = "base"

    def __init__(self, listener: TransportListener, settings: SSESettings | None = None) -> None:
        """
        Initialize transport.

        Args:
            listener: Receiver of progress/load/error/abort notifications
            settings: Timeouts, TLS and retry settings
        """
        self.listener = listener
        self.settings = settings or SSESettings()
        self.method: str | None = None
        self.url: str | None = None
        self.headers: dict[str, str] = dict(DEFAULT_HEADERS)
        if self.settings.user_agent:
            self.headers["User-Agent"] = self.settings.user_agent
        self.with_credentials = False
        self.response_text = ""
        self._aborted = False

    def open(self, method: str, url: str) -> None:
        self.method = method.upper()
        self.url = url

    def set_header(self, name: str, value: str) -> None:
        self.headers[name] = value

    def set_with_credentials(self, with_credentials: bool) -> None:
        self.with_credentials = with_credentials

    @property
    def aborted(self) -> bool:
        return self._aborted

    def _require_open(self) -> tuple[str, str]:
        if self.method is None or self.url is None:
            raise TransportError("send() called before open()", transport=self.name)
        return self.method, self.url

    @abstractmethod
    def send(self, payload: Any = None) -> None:
        """Issue the request; notifications follow asynchronously."""

    @abstractmethod
    def abort(self) -> None:
        """Stop the request; listeners receive on_abort()."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.method} {self.url})"


__all__ = [
    "DEFAULT_HEADERS",
    "BaseTransport",
    "TransportListener",
    "encode_payload",
]
