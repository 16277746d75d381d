# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe spec/outcome models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..errors import ErrorCategory

DEFAULT_BODY_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class ProbeSpec:
    """A single candidate request shape in the cascade catalog."""

    path: str
    method: str = "GET"
    description: str = ""
    extra_headers: Mapping[str, str] = field(default_factory=dict, hash=False)
    body: bytes | None = None
    send_version_header: bool = True
    content_type: str | None = None

    def __post_init__(self) -> None:
        # Catalog entries are shared across threads and evaluations; keep their headers read-only.
        object.__setattr__(self, "extra_headers", MappingProxyType(dict(self.extra_headers)))

    @property
    def label(self) -> str:
        return f"{self.path} ({self.description})" if self.description else self.path

    def body_content_type(self) -> str | None:
        if self.body is None:
            return None
        return self.content_type or DEFAULT_BODY_CONTENT_TYPE


@dataclass(frozen=True)
class ProbeOutcome:
    """Recorded result of firing one ProbeSpec at one BackendTarget."""

    spec: ProbeSpec
    status_code: int | None = None
    latency_ms: float | None = None
    error: str | None = None
    error_type: str | None = None
    error_category: ErrorCategory = ErrorCategory.NONE
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        """Reachable: the server answered with a status below 500 (2xx and 4xx alike)."""
        return self.status_code is not None and self.status_code < 500

    @property
    def is_success(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.spec.path,
            "method": self.spec.method,
            "description": self.spec.description,
            "ok": self.ok,
            "status_code": self.status_code,
            "latency_ms": self.latency_ms,
            "error": self.error,
            "error_type": self.error_type,
            "error_category": self.error_category.value,
            "timed_out": self.timed_out,
        }
