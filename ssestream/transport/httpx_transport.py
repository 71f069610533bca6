"""Threaded httpx transport."""

import logging
import threading
from typing import Any

import httpx
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ssestream.core.config import SSESettings
from ssestream.transport.base import BaseTransport, TransportListener, encode_payload

logger = logging.getLogger(__name__)

# InvalidURL and CookieConflict are raised while building the request and do
# not derive from httpx.HTTPError
REQUEST_ERRORS = (httpx.HTTPError, httpx.StreamError, httpx.InvalidURL, httpx.CookieConflict)


class HttpxTransportBase(BaseTransport):
    """Request building shared by the sync and async httpx transports."""

    def __init__(
        self,
        listener: TransportListener,
        settings: SSESettings | None = None,
        *,
        client: Any = None,
        cookies: dict[str, str] | None = None,
        auth: Any = None,
    ) -> None:
        """
        Initialize httpx transport.

        Args:
            listener: Receiver of notifications
            settings: Timeouts, TLS and retry settings
            client: Pre-built httpx client to use instead of creating one per request.
                Its own cookies and auth are also withheld while credentials are off.
            cookies: Cookies sent only when credentials are enabled
            auth: httpx auth sent only when credentials are enabled
        """
        super().__init__(listener, settings)
        self._client = client
        self.cookies = cookies
        self.auth = auth

    def _client_kwargs(self) -> dict[str, Any]:
        return {
            "timeout": httpx.Timeout(
                self.settings.read_timeout, connect=self.settings.connect_timeout
            ),
            "verify": self.settings.verify,
            "follow_redirects": self.settings.follow_redirects,
        }

    def _build_request(self, client: httpx.Client | httpx.AsyncClient, payload: Any) -> httpx.Request:
        method, url = self._require_open()
        request = client.build_request(method, url, headers=self.headers, **encode_payload(payload))
        if self.with_credentials:
            if self.cookies:
                httpx.Cookies(self.cookies).set_cookie_header(request)
        elif not any(name.lower() == "cookie" for name in self.headers):
            # drop the client's cookie jar; an explicit Cookie header stays
            request.headers.pop("Cookie", None)
        return request

    def _send_kwargs(self) -> dict[str, Any]:
        if not self.with_credentials:
            # None overrides the client's default auth
            return {"auth": None}
        if self.auth is not None:
            return {"auth": self.auth}
        return {}

    def _retry_policy(self) -> dict[str, Any]:
        return {
            "stop": stop_after_attempt(self.settings.max_connect_retries + 1),
            "wait": wait_exponential(multiplier=1, min=1, max=10),
            "retry": retry_if_exception_type(httpx.ConnectError),
            "before_sleep": before_sleep_log(logger, logging.WARNING),
            "reraise": True,
        }


class HttpxTransport(HttpxTransportBase):
    """
    Streams the response with httpx.Client on a daemon worker thread.

    Notifications are delivered from the worker thread, one at a time.

    Example:
        >>> sse = SSE("https://example.com/events", transport=HttpxTransport)
        >>> sse.transport.join(timeout=5)
    """

    name = "httpx"

    def __init__(self, listener: TransportListener, settings: SSESettings | None = None, **kwargs: Any):
        super().__init__(listener, settings, **kwargs)
        self._thread: threading.Thread | None = None
        self._response: httpx.Response | None = None

    def send(self, payload: Any = None) -> None:
        self._require_open()
        self._thread = threading.Thread(
            target=self._run, args=(payload,), name=f"ssestream-{self.url}", daemon=True
        )
        self._thread.start()

    def abort(self) -> None:
        if self._aborted:
            return
        self._aborted = True
        if self._response is not None:
            self._response.close()

    def join(self, timeout: float | None = None) -> bool:
        """
        Wait for the worker thread to finish.

        Returns:
            True if the request is done
        """
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _connect(self, client: httpx.Client, request: httpx.Request) -> httpx.Response:
        retrying = Retrying(**self._retry_policy())
        return retrying(client.send, request, stream=True, **self._send_kwargs())

    def _run(self, payload: Any) -> None:
        client = self._client or httpx.Client(**self._client_kwargs())
        try:
            request = self._build_request(client, payload)
            logger.info(f"Opening stream: {request.method} {request.url}")
            self._response = self._connect(client, request)
            try:
                self._read(self._response)
            finally:
                self._response.close()
        except REQUEST_ERRORS as e:
            if self._aborted:
                self.listener.on_abort()
            else:
                logger.warning(f"Stream {self.url} failed: {e}")
                self.listener.on_error(self.response_text or None)
        else:
            if self._aborted:
                self.listener.on_abort()
            else:
                self.listener.on_load(self.response_text)
        finally:
            if client is not self._client:
                client.close()
            self.listener.on_ready_state_change(True)

    def _read(self, response: httpx.Response) -> None:
        if self._aborted:
            return
        reported = False
        for piece in response.iter_text():
            if self._aborted:
                break
            if not piece:
                continue
            self.response_text += piece
            reported = True
            self.listener.on_progress(self.response_text, response.status_code)
        if not reported and not self._aborted:
            self.listener.on_progress(self.response_text, response.status_code)


__all__ = ["REQUEST_ERRORS", "HttpxTransport", "HttpxTransportBase"]
