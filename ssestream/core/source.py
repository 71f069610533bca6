"""SSE - EventSource replacement with custom methods, headers, bodies and credentials."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from http import HTTPStatus
import logging
from typing import TYPE_CHECKING, Any, Self

from ssestream.core.assembler import ChunkAssembler
from ssestream.core.config import SSEOptions, SSESettings
from ssestream.core.events.base import ErrorEvent, Event, EventKind, ReadyStateEvent
from ssestream.core.events.target import EventTarget
from ssestream.core.parser import parse_event_chunk
from ssestream.core.state import ReadyState
from ssestream.transport.factory import TransportFactory

if TYPE_CHECKING:
    from ssestream.transport.base import BaseTransport

logger = logging.getLogger(__name__)

TransportChoice = str | Callable[..., "BaseTransport"] | None


class _Attempt:
    """Forwards one transport's notifications while it is the live attempt."""

    def __init__(self, owner: SSE) -> None:
        self.owner = owner
        self.transport: BaseTransport | None = None

    @property
    def live(self) -> bool:
        return self.owner._attempt is self

    def on_progress(self, text: str, status: int) -> None:
        if self.live:
            self.owner._on_stream_progress(text, status)

    def on_load(self, text: str) -> None:
        if self.live:
            self.owner._on_stream_loaded(text)

    def on_ready_state_change(self, done: bool) -> None:
        if self.live:
            self.owner._check_stream_closed(done)

    def on_error(self, text: str | None) -> None:
        if self.live:
            self.owner._on_stream_failure(text)

    def on_abort(self) -> None:
        if self.live:
            self.owner._on_stream_abort()


class SSE(EventTarget):
    """
    Server-sent events client.

    Handles:
    - Connection lifecycle (ready state + readystatechange events)
    - Record assembly across arbitrary transport fragments
    - Dispatch to primary handlers and listeners

    Parsing and dispatch run synchronously inside transport notifications;
    the object never blocks or awaits.

    Example:
        >>> sse = SSE("https://example.com/events", method="POST", payload='{"q": 1}')
        >>> sse.on_message = lambda event: print(event.data)
        >>> sse.add_event_listener("update", handle_update)
        >>> sse.close()
    """

    INITIALIZING = ReadyState.INITIALIZING
    CONNECTING = ReadyState.CONNECTING
    OPEN = ReadyState.OPEN
    CLOSED = ReadyState.CLOSED

    def __init__(
        self,
        url: str,
        options: SSEOptions | Mapping[str, Any] | None = None,
        *,
        transport: TransportChoice = None,
        settings: SSESettings | None = None,
        transport_kwargs: dict[str, Any] | None = None,
        **option_overrides: Any,
    ):
        """
        Initialize SSE connection.

        Args:
            url: Stream address
            options: SSEOptions or a mapping of option values
            transport: Registered transport name, or a callable taking
                (listener, settings, **transport_kwargs); defaults to settings.transport
            settings: Transport settings (env prefix SSE_)
            transport_kwargs: Extra arguments for the transport (client, cookies, auth)
            **option_overrides: Individual SSEOptions fields

        Raises:
            ConfigurationError: If options are invalid
        """
        self.options = SSEOptions.build(options, **option_overrides)
        super().__init__(debug=self.options.debug)

        self.url = url
        self.headers = dict(self.options.headers)
        self.payload = self.options.payload
        self.method: str = self.options.method or "GET"
        self.with_credentials = self.options.with_credentials
        self.settings = settings or SSESettings()
        self.transport: BaseTransport | None = None

        self._transport_choice = transport
        self._transport_kwargs = transport_kwargs or {}
        self._assembler = ChunkAssembler()
        self._attempt: _Attempt | None = None
        self._ready_state = ReadyState.INITIALIZING

        if self.options.start:
            self.stream()

    @property
    def ready_state(self) -> ReadyState:
        """Current lifecycle state."""
        return self._ready_state

    @property
    def readyState(self) -> ReadyState:  # noqa: N802
        return self._ready_state

    @property
    def buffer(self) -> ChunkAssembler:
        """Stream buffer of the current attempt."""
        return self._assembler

    def stream(self) -> None:
        """
        Start a connection attempt. Does nothing while an attempt is live.

        Raises:
            ConfigurationError: If the transport cannot be resolved
            TransportError: If the transport cannot issue the request
        """
        if self._attempt is not None:
            return

        self._assembler.reset()
        self._set_ready_state(ReadyState.CONNECTING)

        attempt = _Attempt(self)
        self._attempt = attempt
        try:
            transport = self._create_transport(attempt)
            attempt.transport = transport
            self.transport = transport

            logger.info(f"Streaming {self.method} {self.url} via {transport.name}")
            transport.open(self.method, self.url)
            for name, value in self.headers.items():
                transport.set_header(name, value)
            transport.set_with_credentials(self.with_credentials)
            transport.send(self.payload)
        except Exception as e:
            if self._attempt is attempt:
                logger.error(f"Could not start stream {self.url}: {e}")
                self._attempt = None
                self._set_ready_state(ReadyState.CLOSED)
            raise

    def close(self) -> None:
        """Abort the current attempt. Safe to call at any time."""
        if self._ready_state == ReadyState.CLOSED or self._attempt is None:
            return

        attempt, self._attempt = self._attempt, None
        if attempt.transport is not None:
            attempt.transport.abort()
        logger.info(f"Closed stream {self.url}")
        self._set_ready_state(ReadyState.CLOSED)

    def _create_transport(self, attempt: _Attempt) -> BaseTransport:
        choice = self._transport_choice
        if choice is None:
            return TransportFactory.create_from_settings(
                attempt, self.settings, **self._transport_kwargs
            )
        if isinstance(choice, str):
            return TransportFactory.create(choice, attempt, self.settings, **self._transport_kwargs)
        return choice(attempt, self.settings, **self._transport_kwargs)

    def _set_ready_state(self, state: ReadyState) -> None:
        self._ready_state = state
        if self.debug:
            logger.debug(f"{self.url}: ready state -> {state.name}")
        self.dispatch_event(ReadyStateEvent(ready_state=state))

    def _on_stream_failure(self, text: str | None) -> None:
        self.dispatch_event(ErrorEvent(data=text))
        self.close()

    def _on_stream_abort(self) -> None:
        self.dispatch_event(Event(type=EventKind.ABORT.value))
        self.close()

    def _on_stream_progress(self, text: str, status: int) -> None:
        if status != HTTPStatus.OK:
            logger.warning(f"Stream {self.url} answered with status {status}")
            self._on_stream_failure(text)
            return

        attempt = self._attempt
        if self._ready_state == ReadyState.CONNECTING:
            self.dispatch_event(Event(type=EventKind.OPEN.value))
            if self._attempt is not attempt:
                return
            self._set_ready_state(ReadyState.OPEN)

        self._dispatch_records(self._assembler.feed(text), attempt)

    def _on_stream_loaded(self, text: str) -> None:
        attempt = self._attempt
        self._on_stream_progress(text, HTTPStatus.OK)
        if self._attempt is not attempt:
            return

        self._dispatch_records(self._assembler.flush(), attempt)
        if self._attempt is attempt:
            self.dispatch_event(Event(type=EventKind.LOAD.value))

    def _check_stream_closed(self, done: bool) -> None:
        if done and self._ready_state != ReadyState.CLOSED:
            self._attempt = None
            self._set_ready_state(ReadyState.CLOSED)

    def _dispatch_records(self, records: list[str], attempt: _Attempt | None) -> None:
        for record in records:
            # a handler may have closed or restarted the stream
            if self._attempt is not attempt:
                return
            if self.debug:
                logger.debug(f"Received chunk: {record!r}")
            self.dispatch_event(parse_event_chunk(record))

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"SSE({self.method} {self.url}, ready_state={self._ready_state.name})"


__all__ = ["SSE", "TransportChoice"]
