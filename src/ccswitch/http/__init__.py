# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient, network_error_response, status_response
from .client import HttpClient, create_default_http_client
from .headers import header_value, merge_headers
from .httpx_client import HttpxClient
from .models import Headers, HttpRequest, HttpResponse
from .url import is_valid_base_url, join_url

__all__ = [
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "StubHttpClient",
    "create_default_http_client",
    "header_value",
    "is_valid_base_url",
    "join_url",
    "merge_headers",
    "network_error_response",
    "status_response",
]
