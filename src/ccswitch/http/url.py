# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers shared across probes."""

from __future__ import annotations

from urllib.parse import urlsplit

SUPPORTED_SCHEMES = frozenset({"http", "https"})


def is_valid_base_url(base_url: str | None) -> bool:
    """Return True when `base_url` parses with an http(s) scheme and a host."""
    raw = str(base_url or "").strip()
    if not raw:
        return False
    try:
        parts = urlsplit(raw)
        # Accessing .port validates the port range and raises ValueError otherwise.
        parts.port  # noqa: B018
    except ValueError:
        return False
    return parts.scheme.lower() in SUPPORTED_SCHEMES and bool(parts.hostname)


def join_url(base_url: str, path: str) -> str:
    """
    Join a probe path onto a base URL with exactly one separating slash.

    Example:
      https://host/api/ + /v1/models -> https://host/api/v1/models
      https://host      + /          -> https://host/
    """
    base = str(base_url or "").strip().rstrip("/")
    return f"{base}/{str(path or '').lstrip('/')}"


__all__ = ["SUPPORTED_SCHEMES", "is_valid_base_url", "join_url"]
