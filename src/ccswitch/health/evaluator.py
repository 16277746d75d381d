# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Cascade evaluator: run the probe catalog for one target and emit a verdict."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from ..config import HttpSettings, load_http_settings
from ..http.client import HttpClient, create_default_http_client
from ..models import BackendTarget, HealthVerdict, ProbeOutcome, ProbeSpec, VerdictStatus
from .catalog import build_catalog
from .probe import probe
from .selection import is_success, select_best

logger = logging.getLogger(__name__)


class CascadeEvaluator:
    """
    Tries each catalog entry in order against a target until one answers 2xx.

    The cascade for a single target is strictly sequential; concurrency across targets
    is the runner's concern. The same evaluator may be shared by several threads.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        catalog: Iterable[ProbeSpec] | None = None,
        settings: HttpSettings | None = None,
    ):
        self.settings = settings or load_http_settings()
        self.http_client = http_client or create_default_http_client(self.settings)
        self.catalog = build_catalog(catalog)

    def evaluate(self, target: BackendTarget, *, cancel_event: threading.Event | None = None) -> HealthVerdict:
        outcomes: list[ProbeOutcome] = []

        for spec in self.catalog:
            if cancel_event is not None and cancel_event.is_set():
                return self._cancelled(target, outcomes)

            outcome = probe(self.http_client, target.base_url, target.auth_token, spec, settings=self.settings)
            outcomes.append(outcome)

            if is_success(outcome):
                return self._verdict(target, outcome, outcomes)

            # A probe interrupted by cancellation carries no usable evidence.
            if cancel_event is not None and cancel_event.is_set():
                return self._cancelled(target, outcomes)

        return self._verdict(target, select_best(outcomes), outcomes)

    def _verdict(
        self,
        target: BackendTarget,
        chosen: ProbeOutcome | None,
        outcomes: list[ProbeOutcome],
    ) -> HealthVerdict:
        healthy = chosen is not None and chosen.ok
        verdict = HealthVerdict(
            target=target,
            status=VerdictStatus.HEALTHY if healthy else VerdictStatus.UNHEALTHY,
            chosen_outcome=chosen,
            tried_specs=tuple(outcome.spec for outcome in outcomes),
            outcomes=tuple(outcomes),
        )
        logger.info(
            "%s: %s via %s (status=%s, attempts=%d)",
            target.name,
            verdict.status.value,
            verdict.endpoint_label,
            verdict.status_code,
            len(outcomes),
        )
        return verdict

    @staticmethod
    def _cancelled(target: BackendTarget, outcomes: list[ProbeOutcome]) -> HealthVerdict:
        logger.warning("%s: health check cancelled after %d probe(s)", target.name, len(outcomes))
        return cancelled_verdict(target, outcomes)


def cancelled_verdict(target: BackendTarget, outcomes: Iterable[ProbeOutcome] = ()) -> HealthVerdict:
    """Verdict for a target whose cascade did not complete; never reported as unhealthy."""
    collected = tuple(outcomes)
    return HealthVerdict(
        target=target,
        status=VerdictStatus.CANCELLED,
        chosen_outcome=None,
        tried_specs=tuple(outcome.spec for outcome in collected),
        outcomes=collected,
    )


__all__ = ["CascadeEvaluator", "cancelled_verdict"]
