# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for ccswitch."""

import os
from dataclasses import dataclass
from pathlib import Path

from .version import __version__

DEFAULT_USER_AGENT = f"ccswitch/{__version__} (endpoint health check)"
DEFAULT_ANTHROPIC_VERSION = "2023-06-01"
DEFAULT_PROBE_TIMEOUT = 30.0
DEFAULT_API_CONFIGS_PATH = Path.home() / ".claude" / "apiConfigs.json"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _path_env(name: str, default: Path) -> Path:
    value = os.getenv(name)
    if not value or not value.strip():
        return default
    return Path(value.strip()).expanduser()


@dataclass
class HttpSettings:
    """Transport defaults for health probes."""

    timeout: float = DEFAULT_PROBE_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = False
    verify_ssl: bool = True
    anthropic_version: str = DEFAULT_ANTHROPIC_VERSION

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("CCSWITCH_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            user_agent=os.getenv("CCSWITCH_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("CCSWITCH_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("CCSWITCH_HTTP_VERIFY_SSL", cls.verify_ssl),
            anthropic_version=os.getenv("CCSWITCH_ANTHROPIC_VERSION", cls.anthropic_version),
        )


@dataclass
class HealthSettings:
    """Defaults for the `health` workflow (worker pool size and config location)."""

    max_workers: int = 4
    config_path: Path = DEFAULT_API_CONFIGS_PATH

    @classmethod
    def from_env(cls) -> "HealthSettings":
        max_workers = _int_env("CCSWITCH_MAX_WORKERS", cls.max_workers)
        if max_workers <= 0:
            max_workers = cls.max_workers
        return cls(
            max_workers=max_workers,
            config_path=_path_env("CCSWITCH_API_CONFIGS", cls.config_path),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def load_health_settings() -> HealthSettings:
    """Load health-check settings from environment with sensible defaults."""
    return HealthSettings.from_env()


__all__ = [
    "DEFAULT_ANTHROPIC_VERSION",
    "DEFAULT_API_CONFIGS_PATH",
    "DEFAULT_PROBE_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "HealthSettings",
    "HttpSettings",
    "load_health_settings",
    "load_http_settings",
]
