# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used by health probes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import ErrorCategory

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    timeout: float | None = None
    allow_redirects: bool = False


@dataclass
class HttpResponse:
    """
    Normalized transport result.

    `ok` reports transport success only (a status line was received); HTTP-level
    classification is left to the caller. The response body is never retained.
    """

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    error_category: ErrorCategory = ErrorCategory.NONE
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def timed_out(self) -> bool:
        return self.error_category == ErrorCategory.TIMEOUT

    @classmethod
    def from_exception(cls, exc: BaseException, *, category: ErrorCategory) -> HttpResponse:
        message = str(exc) or type(exc).__name__
        return cls(ok=False, error_message=message, error_type=type(exc).__name__, error_category=category)
