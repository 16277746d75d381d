# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Endpoint health probing: probe, cascade evaluation and concurrent runs."""

from .catalog import DEFAULT_CATALOG, build_catalog
from .diagnosis import diagnose
from .evaluator import CascadeEvaluator, cancelled_verdict
from .probe import build_probe_headers, build_probe_request, probe
from .runner import HealthCheckRunner
from .selection import is_success, rank_key, select_best

__all__ = [
    "CascadeEvaluator",
    "DEFAULT_CATALOG",
    "HealthCheckRunner",
    "build_catalog",
    "build_probe_headers",
    "build_probe_request",
    "cancelled_verdict",
    "diagnose",
    "is_success",
    "probe",
    "rank_key",
    "select_best",
]
