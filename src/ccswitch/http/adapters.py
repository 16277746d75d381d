# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations (deterministic transports for tests and dry runs)."""

from __future__ import annotations

import threading
from collections.abc import Callable
from urllib.parse import urlsplit

from ..errors import ErrorCategory
from .client import HttpClient
from .models import HttpRequest, HttpResponse

ResponseFactory = Callable[[HttpRequest], HttpResponse]


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient.

    Responses are keyed by `(method, url)` first and then by `url`; a key may map to a
    static HttpResponse or to a callable that builds one from the request. Unmatched
    requests fail like an unreachable host.
    """

    def __init__(self, responses: dict[object, HttpResponse | ResponseFactory] | None = None):
        self._responses = dict(responses or {})
        self._lock = threading.Lock()
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse | ResponseFactory, *, method: str | None = None) -> None:
        key: object = (method.upper(), url) if method else url
        self._responses[key] = response

    def request(self, request: HttpRequest) -> HttpResponse:
        with self._lock:
            self.requests.append(request)
        entry = self._responses.get((request.method.upper(), request.url), self._responses.get(request.url))
        if entry is None:
            return HttpResponse(
                ok=False,
                error_message=f"No stubbed response configured for {request.method} {request.url}",
                error_type="ConnectError",
                error_category=ErrorCategory.NETWORK_ERROR,
                url=request.url,
            )
        if callable(entry):
            return entry(request)
        return entry

    def requested_paths(self) -> list[str]:
        with self._lock:
            return [urlsplit(req.url).path for req in self.requests]

    def close(self) -> None:
        self.closed = True


def status_response(status_code: int) -> HttpResponse:
    """Shorthand for a transport-successful response carrying `status_code`."""
    return HttpResponse(ok=True, status_code=status_code)


def network_error_response(message: str = "connection refused", *, timed_out: bool = False) -> HttpResponse:
    """Shorthand for a transport failure (no status line received)."""
    category = ErrorCategory.TIMEOUT if timed_out else ErrorCategory.NETWORK_ERROR
    return HttpResponse(
        ok=False,
        error_message="timeout" if timed_out else message,
        error_type="ReadTimeout" if timed_out else "ConnectError",
        error_category=category,
    )


__all__ = ["StubHttpClient", "network_error_response", "status_response"]
