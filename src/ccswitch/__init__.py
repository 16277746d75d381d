# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
ccswitch package entrypoint.

ccswitch keeps named API endpoint configurations and checks their reachability.
The health engine fires a cascade of candidate requests at each backend, since
self-hosted gateways expose different API surfaces, and reduces the evidence to one
verdict per target. HTTP behavior is abstracted behind an injectable client
interface, and domain objects are modeled with typed dataclasses.
"""

from .config import HealthSettings, HttpSettings, load_health_settings, load_http_settings
from .errors import ConfigSourceError, ErrorCategory
from .health import DEFAULT_CATALOG, CascadeEvaluator, HealthCheckRunner, diagnose, probe
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .models import BackendTarget, HealthVerdict, ProbeOutcome, ProbeSpec, VerdictStatus
from .runtime import HealthChecker
from .sources import load_targets, mask_token
from .version import __version__

__all__ = [
    "BackendTarget",
    "CascadeEvaluator",
    "ConfigSourceError",
    "DEFAULT_CATALOG",
    "ErrorCategory",
    "HealthCheckRunner",
    "HealthChecker",
    "HealthSettings",
    "HealthVerdict",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "ProbeOutcome",
    "ProbeSpec",
    "StubHttpClient",
    "VerdictStatus",
    "create_default_http_client",
    "diagnose",
    "load_health_settings",
    "load_http_settings",
    "load_targets",
    "mask_token",
    "probe",
    "setup_logging",
    "__version__",
]
