# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Health verdict model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import ErrorCategory
from .probe import ProbeOutcome, ProbeSpec
from .target import BackendTarget

ALL_ENDPOINTS_FAILED = "All endpoints failed"


class VerdictStatus(str, Enum):
    HEALTHY = "HEALTHY"
    UNHEALTHY = "UNHEALTHY"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class HealthVerdict:
    """
    Final determination for one target plus the evidence behind it.

    `chosen_outcome` is the single representative outcome (the first 2xx, or the best
    ranked outcome when none succeeded). It is None only when nothing was probed.
    """

    target: BackendTarget
    status: VerdictStatus
    chosen_outcome: ProbeOutcome | None = None
    tried_specs: tuple[ProbeSpec, ...] = ()
    outcomes: tuple[ProbeOutcome, ...] = field(default=(), repr=False)

    @property
    def healthy(self) -> bool:
        return self.status == VerdictStatus.HEALTHY

    @property
    def cancelled(self) -> bool:
        return self.status == VerdictStatus.CANCELLED

    @property
    def status_code(self) -> int | None:
        return self.chosen_outcome.status_code if self.chosen_outcome else None

    @property
    def latency_ms(self) -> float | None:
        return self.chosen_outcome.latency_ms if self.chosen_outcome else None

    @property
    def error(self) -> str | None:
        return self.chosen_outcome.error if self.chosen_outcome else None

    @property
    def error_category(self) -> ErrorCategory:
        if self.chosen_outcome is None:
            return ErrorCategory.NONE
        return self.chosen_outcome.error_category

    @property
    def endpoint_label(self) -> str:
        if self.chosen_outcome is None:
            return ALL_ENDPOINTS_FAILED
        return self.chosen_outcome.spec.label

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.target.name,
            "base_url": self.target.base_url,
            "token_present": self.target.token_present,
            "status": self.status.value,
            "healthy": self.healthy,
            "status_code": self.status_code,
            "latency_ms": self.latency_ms,
            "error": self.error,
            "error_category": self.error_category.value,
            "endpoint": self.endpoint_label,
            "tried": [outcome.to_dict() for outcome in self.outcomes],
        }
