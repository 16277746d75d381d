# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header helpers.

HTTP header field names are case-insensitive (RFC 9110). Probe headers are assembled
from several layers (defaults, version header, content type, per-probe overrides), so
merging has to treat `authorization` and `Authorization` as the same field.
"""

from __future__ import annotations

from collections.abc import Mapping


def header_value(headers: Mapping[str, str] | None, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    if not headers or not name:
        return default
    lower = name.lower()
    for key, value in headers.items():
        if key is not None and str(key).lower() == lower:
            return default if value is None else str(value)
    return default


def merge_headers(*layers: Mapping[str, str] | None) -> dict[str, str]:
    """
    Merge header mappings left to right; later layers win on case-insensitive conflicts.

    The casing of the winning layer is kept so requests read naturally on the wire.
    """
    merged: dict[str, str] = {}
    names: dict[str, str] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            if key is None:
                continue
            name = str(key).strip()
            if not name:
                continue
            lower = name.lower()
            previous = names.get(lower)
            if previous is not None:
                merged.pop(previous, None)
            names[lower] = name
            merged[name] = "" if value is None else str(value)
    return merged


__all__ = ["header_value", "merge_headers"]
