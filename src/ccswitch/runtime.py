# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level facade for endpoint health checks."""

from __future__ import annotations

from collections.abc import Iterable
from contextlib import suppress

from .config import HealthSettings, HttpSettings, load_health_settings, load_http_settings
from .health.evaluator import CascadeEvaluator
from .health.runner import HealthCheckRunner
from .http.client import HttpClient, create_default_http_client
from .models import BackendTarget, HealthVerdict, ProbeSpec


class HealthChecker:
    """
    Convenience wrapper that wires a shared HTTP client into the evaluator and runner.

    The client is owned by the checker unless one is injected; closing it aborts any
    in-flight probes, which is how cancellation reaches the network layer.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        http_settings: HttpSettings | None = None,
        health_settings: HealthSettings | None = None,
        catalog: Iterable[ProbeSpec] | None = None,
    ):
        self.http_settings = http_settings or load_http_settings()
        self.health_settings = health_settings or load_health_settings()
        self.http_client = http_client or create_default_http_client(self.http_settings)
        self.evaluator = CascadeEvaluator(self.http_client, catalog=catalog, settings=self.http_settings)
        self.runner = HealthCheckRunner(
            self.evaluator,
            max_workers=self.health_settings.max_workers,
            on_cancel=self.close,
        )

    def check(self, target: BackendTarget) -> HealthVerdict:
        return self.evaluator.evaluate(target)

    def check_all(self, targets: Iterable[BackendTarget]) -> list[HealthVerdict]:
        return self.runner.run(targets)

    def cancel(self) -> None:
        self.runner.cancel()

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> HealthChecker:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


__all__ = ["HealthChecker"]
