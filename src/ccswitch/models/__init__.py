# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for ccswitch."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .probe import ProbeOutcome, ProbeSpec
from .target import BackendTarget
from .verdict import ALL_ENDPOINTS_FAILED, HealthVerdict, VerdictStatus

__all__ = [
    "ALL_ENDPOINTS_FAILED",
    "BackendTarget",
    "Headers",
    "HealthVerdict",
    "HttpRequest",
    "HttpResponse",
    "ProbeOutcome",
    "ProbeSpec",
    "VerdictStatus",
]
