"""Shared fixtures: a scriptable in-memory transport."""

from typing import Any

import pytest

from ssestream.core.config import SSESettings
from ssestream.transport.base import BaseTransport, TransportListener


class FakeTransport(BaseTransport):
    """Records requests and lets a test push notifications by hand."""

    name = "fake"
    created: list["FakeTransport"] = []

    def __init__(self, listener: TransportListener, settings: SSESettings | None = None, **kwargs: Any):
        super().__init__(listener, settings)
        self.kwargs = kwargs
        self.sent: list[Any] = []
        self.abort_calls = 0
        FakeTransport.created.append(self)

    def send(self, payload: Any = None) -> None:
        self._require_open()
        self.sent.append(payload)

    def abort(self) -> None:
        self.abort_calls += 1
        self._aborted = True

    def progress(self, text: str, status: int = 200) -> None:
        self.listener.on_progress(text, status)

    def load(self, text: str) -> None:
        self.listener.on_load(text)
        self.listener.on_ready_state_change(True)

    def fail(self, text: str | None = None) -> None:
        self.listener.on_error(text)
        self.listener.on_ready_state_change(True)

    def cancel(self) -> None:
        self.listener.on_abort()


@pytest.fixture(autouse=True)
def _reset_fake_transports():
    FakeTransport.created.clear()
    yield
    FakeTransport.created.clear()


@pytest.fixture
def recorder():
    """Collect (type, event) pairs from listeners."""

    class Recorder:
        def __init__(self) -> None:
            self.events: list[Any] = []

        def __call__(self, event: Any) -> None:
            self.events.append(event)

        @property
        def types(self) -> list[str]:
            return [event.type for event in self.events]

        def of_type(self, type: str) -> list[Any]:
            return [event for event in self.events if event.type == type]

    return Recorder()
