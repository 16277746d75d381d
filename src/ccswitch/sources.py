# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Read-only access to the stored API configurations (`apiConfigs.json`).

Entries come in two shapes; both are accepted:

  {"name": "...", "config": {"env": {"ANTHROPIC_BASE_URL": "...", "ANTHROPIC_AUTH_TOKEN": "..."}}}
  {"name": "...", "ANTHROPIC_BASE_URL": "...", "ANTHROPIC_AUTH_TOKEN": "..."}
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from .errors import ConfigSourceError
from .models import BackendTarget

logger = logging.getLogger(__name__)

BASE_URL_KEY = "ANTHROPIC_BASE_URL"
AUTH_TOKEN_KEY = "ANTHROPIC_AUTH_TOKEN"
UNKNOWN_NAME = "unknown"
MASK_PREFIX_LEN = 7


def read_api_configs(path: Path | str) -> list[dict[str, Any]]:
    """Return the raw config entries; a missing file yields an empty list."""
    config_path = Path(path).expanduser()
    if not config_path.exists():
        logger.warning("API config file not found: %s", config_path)
        return []
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigSourceError(f"Failed to read API config file {config_path}: {exc}") from exc
    if not isinstance(data, list):
        raise ConfigSourceError(f"API config file {config_path} must contain a JSON array")
    return [entry for entry in data if isinstance(entry, dict)]


def _entry_env(entry: Mapping[str, Any]) -> Mapping[str, Any]:
    config = entry.get("config")
    if isinstance(config, Mapping):
        env = config.get("env")
        if isinstance(env, Mapping) and (BASE_URL_KEY in env or AUTH_TOKEN_KEY in env):
            return env
    return entry


def target_from_entry(entry: Mapping[str, Any]) -> BackendTarget:
    env = _entry_env(entry)
    return BackendTarget(
        name=str(entry.get("name") or UNKNOWN_NAME),
        base_url=str(env.get(BASE_URL_KEY) or "").strip(),
        auth_token=str(env.get(AUTH_TOKEN_KEY) or ""),
    )


def targets_from_entries(entries: Iterable[Mapping[str, Any]]) -> list[BackendTarget]:
    return [target_from_entry(entry) for entry in entries]


def dedupe_by_base_url(targets: Iterable[BackendTarget]) -> list[BackendTarget]:
    """Keep the first target per base URL and drop targets without one."""
    seen: set[str] = set()
    unique: list[BackendTarget] = []
    for target in targets:
        if not target.base_url or target.base_url in seen:
            continue
        seen.add(target.base_url)
        unique.append(target)
    return unique


def load_targets(path: Path | str, *, dedupe: bool = True) -> list[BackendTarget]:
    """Read targets from the config file; entries without a base URL are always skipped."""
    targets = targets_from_entries(read_api_configs(path))
    if dedupe:
        return dedupe_by_base_url(targets)
    return [target for target in targets if target.base_url]


def mask_token(token: str | None) -> str:
    """Show the first seven characters of a credential followed by `****`."""
    if not token:
        return "N/A"
    if len(token) < MASK_PREFIX_LEN:
        return "****"
    return f"{token[:MASK_PREFIX_LEN]}****"


__all__ = [
    "dedupe_by_base_url",
    "load_targets",
    "mask_token",
    "read_api_configs",
    "target_from_entry",
    "targets_from_entries",
]
