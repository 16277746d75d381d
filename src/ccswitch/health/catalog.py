# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Default probe catalog.

The backend's API shape is not known ahead of time: self-hosted gateways expose
different compatible surfaces. The catalog lists candidate request shapes in the
order they are tried; order matters for early exit and for tie-breaks.
"""

from __future__ import annotations

import json
from collections.abc import Iterable

from ..models import ProbeSpec

CHAT_PROBE_MODEL = "claude-3-sonnet-20240229"


def build_chat_probe_body(model: str = CHAT_PROBE_MODEL) -> bytes:
    """Minimal 1-token chat completion request."""
    payload = {
        "model": model,
        "messages": [{"role": "user", "content": "test"}],
        "max_tokens": 1,
    }
    return json.dumps(payload).encode("utf-8")


MODELS_PROBE = ProbeSpec(path="/v1/models", description="Claude Models API")
CHAT_COMPLETIONS_PROBE = ProbeSpec(
    path="/v1/chat/completions",
    method="POST",
    description="OpenAI Compatible API",
    body=build_chat_probe_body(),
    content_type="application/json",
)
MODELS_NO_VERSION_PROBE = ProbeSpec(path="/v1/models", description="No Anthropic Version", send_version_header=False)
ROOT_PROBE = ProbeSpec(path="/", description="Root Path")
HEALTH_PROBE = ProbeSpec(path="/health", description="Health Check")
ALT_MODELS_PROBE = ProbeSpec(path="/api/v1/models", description="Alternative API Path")

DEFAULT_CATALOG: tuple[ProbeSpec, ...] = (
    MODELS_PROBE,
    CHAT_COMPLETIONS_PROBE,
    MODELS_NO_VERSION_PROBE,
    ROOT_PROBE,
    HEALTH_PROBE,
    ALT_MODELS_PROBE,
)


def build_catalog(specs: Iterable[ProbeSpec] | None = None) -> tuple[ProbeSpec, ...]:
    """Freeze a caller-supplied catalog, falling back to DEFAULT_CATALOG."""
    if specs is None:
        return DEFAULT_CATALOG
    catalog = tuple(specs)
    for spec in catalog:
        if not isinstance(spec, ProbeSpec):
            raise TypeError(f"catalog entries must be ProbeSpec, got {type(spec).__name__}")
    return catalog


__all__ = [
    "ALT_MODELS_PROBE",
    "CHAT_COMPLETIONS_PROBE",
    "CHAT_PROBE_MODEL",
    "DEFAULT_CATALOG",
    "HEALTH_PROBE",
    "MODELS_NO_VERSION_PROBE",
    "MODELS_PROBE",
    "ROOT_PROBE",
    "build_catalog",
    "build_chat_probe_body",
]
