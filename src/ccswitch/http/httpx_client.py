# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging
import socket
import threading
import time
from contextlib import suppress
from typing import Any

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import ErrorCategory, ProbeTimeout, categorize_exception
from .client import HttpClient
from .headers import merge_headers
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

_CONNECT_COMPLETE_EVENT = "connection.connect_tcp.complete"


class _DeadlineWatchdog:
    """
    Wall-clock limit for one request.

    httpx timeouts restart on every read, so a server that trickles bytes never
    trips them. The watchdog learns the request's socket from the httpcore
    trace hook and shuts it down once the deadline passes, which unblocks any
    pending read in the worker thread.
    """

    def __init__(self, timeout: float):
        self.deadline = time.monotonic() + timeout
        self._expired = threading.Event()
        self._lock = threading.Lock()
        self._sockets: list[socket.socket] = []
        self._timer = threading.Timer(timeout, self._expire)
        self._timer.daemon = True

    @property
    def expired(self) -> bool:
        return self._expired.is_set() or time.monotonic() > self.deadline

    def __enter__(self) -> "_DeadlineWatchdog":
        self._timer.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._timer.cancel()

    def trace(self, event_name: str, info: dict[str, Any]) -> None:
        if event_name != _CONNECT_COMPLETE_EVENT:
            return
        stream = info.get("return_value")
        sock = stream.get_extra_info("socket") if stream is not None else None
        if sock is None:
            return
        with self._lock:
            self._sockets.append(sock)
        if self._expired.is_set():
            _shutdown(sock)

    def _expire(self) -> None:
        with self._lock:
            self._expired.set()
            sockets = list(self._sockets)
        for sock in sockets:
            _shutdown(sock)


def _shutdown(sock: socket.socket) -> None:
    with suppress(OSError):
        sock.shutdown(socket.SHUT_RDWR)


class HttpxClient(HttpClient):
    """
    Synchronous httpx client wrapper.

    One instance is shared by all worker threads (httpx.Client is thread-safe).
    Response bodies are drained to release the connection and then discarded.
    Every request opens its own connection (`Connection: close`) so the
    deadline watchdog always owns the socket it may have to shut down.
    """

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=httpx.Timeout(self.settings.timeout),
            verify=self.settings.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = merge_headers(
            {"User-Agent": self.settings.user_agent},
            request.headers or {},
            {"Connection": "close"},
        )
        timeout = request.timeout if request.timeout is not None else self.settings.timeout

        with _DeadlineWatchdog(timeout) as watchdog:
            try:
                with self._client.stream(
                    request.method,
                    request.url,
                    headers=headers,
                    content=request.body,
                    timeout=httpx.Timeout(timeout),
                    follow_redirects=request.allow_redirects,
                    extensions={"trace": watchdog.trace},
                ) as resp:
                    drained = 0
                    for chunk in resp.iter_bytes():
                        drained += len(chunk)
                        if watchdog.expired:
                            raise ProbeTimeout("timeout while reading response body")
                if watchdog.expired:
                    raise ProbeTimeout("timeout before the response completed")

                return HttpResponse(
                    ok=True,
                    status_code=resp.status_code,
                    headers=dict(resp.headers),
                    url=str(resp.url),
                    meta={"body_bytes_drained": drained},
                )
            except Exception as exc:  # noqa: BLE001
                category = ErrorCategory.TIMEOUT if watchdog.expired else categorize_exception(exc)
                logger.debug("Transport failure for %s %s: %s (%s)", request.method, request.url, exc, category.value)
                response = HttpResponse.from_exception(exc, category=category)
                if category == ErrorCategory.TIMEOUT:
                    response.error_message = "timeout"
                response.url = request.url
                return response

    def close(self) -> None:
        self._client.close()
