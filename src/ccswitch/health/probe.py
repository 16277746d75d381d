# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Single-request probe against one candidate path of one backend."""

from __future__ import annotations

import logging
import time

from ..config import HttpSettings, load_http_settings
from ..errors import ErrorCategory, categorize_exception, categorize_status
from ..http.client import HttpClient
from ..http.headers import merge_headers
from ..http.models import HttpRequest, HttpResponse
from ..http.url import is_valid_base_url, join_url
from ..models import ProbeOutcome, ProbeSpec

logger = logging.getLogger(__name__)

VERSION_HEADER = "anthropic-version"


def build_probe_headers(auth_token: str, spec: ProbeSpec, *, anthropic_version: str) -> dict[str, str]:
    """Assemble request headers; `spec.extra_headers` win on conflict."""
    base = {
        "Accept": "application/json",
        # Empty tokens are passed through unchanged.
        "Authorization": f"Bearer {auth_token or ''}",
    }
    version = {VERSION_HEADER: anthropic_version} if spec.send_version_header else None
    content_type = spec.body_content_type()
    body_headers = {"Content-Type": content_type} if content_type else None
    return merge_headers(base, version, body_headers, spec.extra_headers)


def build_probe_request(
    base_url: str,
    auth_token: str,
    spec: ProbeSpec,
    *,
    settings: HttpSettings,
) -> HttpRequest:
    return HttpRequest(
        url=join_url(base_url, spec.path),
        method=(spec.method or "GET").upper(),
        headers=build_probe_headers(auth_token, spec, anthropic_version=settings.anthropic_version),
        body=spec.body,
        timeout=settings.timeout,
        allow_redirects=settings.allow_redirects,
    )


def _outcome_from_response(spec: ProbeSpec, response: HttpResponse, latency_ms: float) -> ProbeOutcome:
    if response.status_code is not None:
        return ProbeOutcome(
            spec=spec,
            status_code=response.status_code,
            latency_ms=latency_ms,
            error_category=categorize_status(response.status_code),
        )
    category = response.error_category
    if category == ErrorCategory.NONE:
        category = ErrorCategory.NETWORK_ERROR
    return ProbeOutcome(
        spec=spec,
        latency_ms=latency_ms,
        error=response.error_message or response.error_type or "request failed",
        error_type=response.error_type,
        error_category=category,
        timed_out=category == ErrorCategory.TIMEOUT,
    )


def probe(
    client: HttpClient,
    base_url: str,
    auth_token: str,
    spec: ProbeSpec,
    *,
    settings: HttpSettings | None = None,
) -> ProbeOutcome:
    """
    Fire one ProbeSpec at one backend and classify the result.

    Never raises: malformed targets, transport failures and timeouts are returned as
    outcomes. Exactly one request is issued (no retries).
    """
    settings = settings or load_http_settings()
    if not is_valid_base_url(base_url):
        logger.debug("Skipping %s: malformed base URL %r", spec.path, base_url)
        return ProbeOutcome(
            spec=spec,
            error=f"Invalid base URL: {base_url!r}",
            error_type="MalformedTarget",
            error_category=ErrorCategory.MALFORMED_TARGET,
        )

    request = build_probe_request(base_url, auth_token, spec, settings=settings)
    start = time.perf_counter()
    try:
        response = client.request(request)
    except Exception as exc:  # noqa: BLE001
        # HttpClient implementations should not raise, but adapters may.
        response = HttpResponse.from_exception(exc, category=categorize_exception(exc))
    latency_ms = (time.perf_counter() - start) * 1000.0

    outcome = _outcome_from_response(spec, response, latency_ms)
    logger.debug(
        "%s %s -> status=%s error=%s (%.0fms)",
        request.method,
        request.url,
        outcome.status_code,
        outcome.error_category.value,
        latency_ms,
    )
    return outcome


__all__ = ["VERSION_HEADER", "build_probe_headers", "build_probe_request", "probe"]
