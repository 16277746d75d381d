# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for ccswitch."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "CCSWITCH_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

# httpx/httpcore log every request at INFO/DEBUG; only surface them when debugging probes.
_NOISY_LOGGERS = ("httpx", "httpcore")


def resolve_log_level(level: str | None = None, *, verbose: bool = False) -> int:
    """Return the numeric level from an explicit name, --verbose, or the environment."""
    if verbose:
        return logging.DEBUG
    name = (level or os.getenv(LOG_LEVEL_ENV) or "WARNING").strip().upper()
    resolved = getattr(logging, name, None)
    return resolved if isinstance(resolved, int) else logging.WARNING


def setup_logging(level: str | None = None, *, verbose: bool = False) -> None:
    """Configure standard logging for CLI/library use."""
    effective_level = resolve_log_level(level, verbose=verbose)
    logging.basicConfig(level=effective_level, format=LOG_FORMAT)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(effective_level if effective_level <= logging.DEBUG else logging.WARNING)


__all__ = ["resolve_log_level", "setup_logging"]
