# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Human-readable hints for verdicts ("wrong credentials", "wrong path", "server down")."""

from __future__ import annotations

from ..errors import ErrorCategory, error_category_to_reason
from ..models import HealthVerdict

_CREDENTIAL_STATUSES = frozenset({401, 403})
_PATH_STATUSES = frozenset({404, 405})


def diagnose(verdict: HealthVerdict) -> str:
    """Return a short diagnosis for a verdict; empty for successful 2xx verdicts."""
    if verdict.cancelled:
        return "Health check cancelled before completion"

    status = verdict.status_code
    if status is not None:
        if 200 <= status < 300:
            return ""
        if status in _CREDENTIAL_STATUSES:
            return f"Server reachable but rejected the credentials (HTTP {status})"
        if status in _PATH_STATUSES:
            return f"Server reachable but no known API path answered (HTTP {status})"
        if status == 429:
            return "Server reachable but rate limited the probe (HTTP 429)"
        if status >= 500:
            return f"{error_category_to_reason(ErrorCategory.SERVER_FAULT)} (HTTP {status})"
        return f"Server reachable but rejected the request (HTTP {status})"

    if verdict.chosen_outcome is None:
        return "No probes were attempted"
    reason = error_category_to_reason(verdict.error_category)
    return reason or "Probe failed"


__all__ = ["diagnose"]
