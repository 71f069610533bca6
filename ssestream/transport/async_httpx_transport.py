"""Asyncio httpx transport."""

import asyncio
import logging
from typing import Any

import httpx
from tenacity import AsyncRetrying

from ssestream.core.config import SSESettings
from ssestream.core.exceptions import TransportError
from ssestream.transport.base import TransportListener
from ssestream.transport.httpx_transport import REQUEST_ERRORS, HttpxTransportBase

logger = logging.getLogger(__name__)


class AsyncHttpxTransport(HttpxTransportBase):
    """
    Streams the response with httpx.AsyncClient in a task on the running loop.

    send() must be called from inside a running event loop. Cancelling the
    task from outside is reported as an abort.

    Example:
        >>> sse = SSE(url, transport=AsyncHttpxTransport)
        >>> await sse.transport.wait()
    """

    name = "httpx-async"

    def __init__(self, listener: TransportListener, settings: SSESettings | None = None, **kwargs: Any):
        super().__init__(listener, settings, **kwargs)
        self._task: asyncio.Task[None] | None = None

    def send(self, payload: Any = None) -> None:
        self._require_open()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise TransportError(
                "AsyncHttpxTransport.send() requires a running event loop", transport=self.name
            ) from e
        self._task = loop.create_task(self._run(payload))

    def abort(self) -> None:
        if self._aborted:
            return
        self._aborted = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def wait(self) -> None:
        """Wait until the request is done, however it ends."""
        if self._task is not None:
            await asyncio.wait({self._task})

    async def _connect(self, client: httpx.AsyncClient, request: httpx.Request) -> httpx.Response:
        retrying = AsyncRetrying(**self._retry_policy())
        return await retrying(client.send, request, stream=True, **self._send_kwargs())

    async def _run(self, payload: Any) -> None:
        client = self._client or httpx.AsyncClient(**self._client_kwargs())
        try:
            request = self._build_request(client, payload)
            logger.info(f"Opening stream: {request.method} {request.url}")
            response = await self._connect(client, request)
            try:
                await self._read(response)
            finally:
                await response.aclose()
        except asyncio.CancelledError:
            self._aborted = True
            self.listener.on_abort()
            raise
        except REQUEST_ERRORS as e:
            logger.warning(f"Stream {self.url} failed: {e}")
            self.listener.on_error(self.response_text or None)
        else:
            if self._aborted:
                self.listener.on_abort()
            else:
                self.listener.on_load(self.response_text)
        finally:
            if client is not self._client:
                await client.aclose()
            self.listener.on_ready_state_change(True)

    async def _read(self, response: httpx.Response) -> None:
        reported = False
        async for piece in response.aiter_text():
            if self._aborted:
                break
            if not piece:
                continue
            self.response_text += piece
            reported = True
            self.listener.on_progress(self.response_text, response.status_code)
        if not reported and not self._aborted:
            self.listener.on_progress(self.response_text, response.status_code)


__all__ = ["AsyncHttpxTransport"]
