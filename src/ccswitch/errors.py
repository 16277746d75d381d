# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    MALFORMED_TARGET = "MALFORMED_TARGET"
    TIMEOUT = "TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"
    SERVER_FAULT = "SERVER_FAULT"
    NONE = "NONE"


class ConfigSourceError(Exception):
    """Raised when the API configuration file cannot be read or parsed."""


class ProbeTimeout(httpx.TimeoutException):
    """Wall-clock probe deadline elapsed (httpx timeouts only bound single operations)."""


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.

    Anything that is not a timeout is a transport-level failure: the request never
    produced a status line, so the server is considered unreachable.
    """
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, httpx.InvalidURL):
        return ErrorCategory.MALFORMED_TARGET

    return ErrorCategory.NETWORK_ERROR


def categorize_status(status_code: int | None) -> ErrorCategory:
    """Classify a received status code; only 5xx counts as a fault."""
    if status_code is not None and status_code >= 500:
        return ErrorCategory.SERVER_FAULT
    return ErrorCategory.NONE


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.MALFORMED_TARGET: "Base URL is not a valid http(s) URL",
        ErrorCategory.TIMEOUT: "Server did not answer before the probe timeout",
        ErrorCategory.NETWORK_ERROR: "Server unreachable (DNS, TLS or connection failure)",
        ErrorCategory.SERVER_FAULT: "Server reported an internal error",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Probe failed due to network error")


__all__ = [
    "ConfigSourceError",
    "ErrorCategory",
    "ProbeTimeout",
    "categorize_exception",
    "categorize_status",
    "error_category_to_reason",
]
