# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Concurrent health checks across many targets."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor

from ..models import BackendTarget, HealthVerdict, VerdictStatus
from .evaluator import CascadeEvaluator, cancelled_verdict

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


class HealthCheckRunner:
    """
    Evaluate targets in parallel through a bounded worker pool.

    Targets are independent, so each one runs its cascade on its own worker while the
    cascade itself stays sequential. Verdicts come back in input order. A user
    interrupt (or `cancel()`) stops new probes, invokes `on_cancel` (used to close the
    shared HTTP client so in-flight requests abort) and reports every target whose
    cascade did not complete as CANCELLED.
    """

    def __init__(
        self,
        evaluator: CascadeEvaluator,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
        on_cancel: Callable[[], None] | None = None,
    ):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.evaluator = evaluator
        self.max_workers = max_workers
        self.on_cancel = on_cancel
        self._cancel_event = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def cancel(self) -> None:
        if self._cancel_event.is_set():
            return
        self._cancel_event.set()
        logger.warning("Cancelling health checks")
        if self.on_cancel is not None:
            self.on_cancel()

    def run(self, targets: Iterable[BackendTarget]) -> list[HealthVerdict]:
        target_list = _validate_targets(targets)
        # A runner may be reused after an interrupted run.
        self._cancel_event.clear()
        if not target_list:
            return []

        workers = min(self.max_workers, len(target_list))
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ccswitch-health")
        futures: list[Future[HealthVerdict]] = []
        try:
            for target in target_list:
                futures.append(executor.submit(self.evaluator.evaluate, target, cancel_event=self._cancel_event))
            for future in futures:
                # Blocking here keeps the main thread responsive to KeyboardInterrupt.
                future.exception()
        except KeyboardInterrupt:
            self.cancel()
        finally:
            executor.shutdown(wait=True, cancel_futures=self.cancelled)

        return [self._collect(target, futures[i] if i < len(futures) else None) for i, target in enumerate(target_list)]

    def _collect(self, target: BackendTarget, future: Future[HealthVerdict] | None) -> HealthVerdict:
        if future is None or future.cancelled():
            return cancelled_verdict(target)
        exc = future.exception()
        if exc is not None:
            logger.error("%s: evaluation failed: %s", target.name, exc, exc_info=exc)
            return HealthVerdict(target=target, status=VerdictStatus.UNHEALTHY)
        return future.result()


def _validate_targets(targets: Iterable[BackendTarget]) -> list[BackendTarget]:
    if targets is None or isinstance(targets, (str, bytes)):
        raise TypeError("targets must be an iterable of BackendTarget")
    target_list = list(targets)
    for target in target_list:
        if not isinstance(target, BackendTarget):
            raise TypeError(f"targets must contain BackendTarget records, got {type(target).__name__}")
    return target_list


__all__ = ["DEFAULT_MAX_WORKERS", "HealthCheckRunner"]
