# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""ccswitch CLI."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..config import HealthSettings, HttpSettings, load_health_settings, load_http_settings
from ..errors import ConfigSourceError
from ..health.diagnosis import diagnose
from ..log import setup_logging
from ..models import HealthVerdict
from ..runtime import HealthChecker
from ..sources import load_targets, mask_token

NAME_WIDTH = 18
URL_WIDTH = 30
TOKEN_WIDTH = 12
STATUS_WIDTH = 22
LATENCY_WIDTH = 10

EXIT_OK = 0
EXIT_UNHEALTHY = 1
EXIT_CONFIG_ERROR = 2
EXIT_CANCELLED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ccswitch", description="Switch between stored API endpoint configurations")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    health = subparsers.add_parser("health", help="Check availability and latency of every configured endpoint")
    health.add_argument("--config", help="Path to apiConfigs.json (default: ~/.claude/apiConfigs.json)")
    health.add_argument("--json", action="store_true", help="Output JSON instead of a table")
    health.add_argument("--workers", type=int, help="Number of targets checked concurrently")
    health.add_argument("--timeout", type=float, help="Per-probe timeout in seconds (default: 30)")
    health.add_argument(
        "--all",
        action="store_true",
        help="Check every entry, including entries sharing a base URL",
    )
    health.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for self-signed gateways)",
    )
    return parser


def _fit(value: str, width: int) -> str:
    if len(value) > width:
        return value[: width - 3] + "..."
    return value.ljust(width)


def format_status(verdict: HealthVerdict) -> str:
    if verdict.cancelled:
        return "Cancelled"
    status_code = verdict.status_code if verdict.status_code is not None else "N/A"
    health = "Healthy" if verdict.healthy else "Unhealthy"
    return f"{health} (status: {status_code})"


def format_latency(verdict: HealthVerdict) -> str:
    if verdict.latency_ms is None:
        return "N/A"
    return f"{round(verdict.latency_ms)}ms"


def render_header() -> list[str]:
    header = (
        f"| {'Name'.ljust(NAME_WIDTH)} | {'Base URL'.ljust(URL_WIDTH)} | "
        f"{'Token'.ljust(TOKEN_WIDTH)} | {'Status'.ljust(STATUS_WIDTH)} | Latency |"
    )
    rule = (
        f"|{'-' * (NAME_WIDTH + 2)}|{'-' * (URL_WIDTH + 2)}|{'-' * (TOKEN_WIDTH + 2)}"
        f"|{'-' * (STATUS_WIDTH + 2)}|{'-' * LATENCY_WIDTH}|"
    )
    return [header, rule]


def render_row(verdict: HealthVerdict) -> list[str]:
    target = verdict.target
    lines = [
        f"| {_fit(target.name, NAME_WIDTH)} | {_fit(target.base_url, URL_WIDTH)} | "
        f"{mask_token(target.auth_token).ljust(TOKEN_WIDTH)} | {format_status(verdict).ljust(STATUS_WIDTH)} | "
        f"{format_latency(verdict)} |"
    ]
    if not verdict.healthy and not verdict.cancelled:
        if verdict.error:
            lines.append(f"  Error: {verdict.error}")
        hint = diagnose(verdict)
        if hint:
            lines.append(f"  Hint: {hint} [{verdict.endpoint_label}]")
    return lines


def _print_table(verdicts: Sequence[HealthVerdict]) -> None:
    for line in render_header():
        print(line)
    for verdict in verdicts:
        for line in render_row(verdict):
            print(line)


def _print_json(verdicts: Sequence[HealthVerdict]) -> None:
    payload: list[dict[str, Any]] = [verdict.to_dict() for verdict in verdicts]
    json.dump(payload, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def exit_code_for(verdicts: Sequence[HealthVerdict]) -> int:
    if any(verdict.cancelled for verdict in verdicts):
        return EXIT_CANCELLED
    if all(verdict.healthy for verdict in verdicts):
        return EXIT_OK
    return EXIT_UNHEALTHY


def _settings_from_args(args: argparse.Namespace) -> tuple[HttpSettings, HealthSettings]:
    http_settings = load_http_settings()
    health_settings = load_health_settings()
    if args.ignore_ssl_errors:
        http_settings.verify_ssl = False
    if args.timeout is not None and args.timeout > 0:
        http_settings.timeout = args.timeout
    if args.workers is not None and args.workers > 0:
        health_settings.max_workers = args.workers
    if args.config:
        health_settings.config_path = Path(args.config).expanduser()
    return http_settings, health_settings


def run_health(args: argparse.Namespace) -> int:
    http_settings, health_settings = _settings_from_args(args)
    try:
        targets = load_targets(health_settings.config_path, dedupe=not args.all)
    except ConfigSourceError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if not targets:
        print("No API configurations found", file=sys.stderr)
        return EXIT_OK

    if not args.json:
        print(f"Checking {len(targets)} endpoint(s)...\n")

    with HealthChecker(http_settings=http_settings, health_settings=health_settings) as checker:
        verdicts = checker.check_all(targets)

    if args.json:
        _print_json(verdicts)
    else:
        _print_table(verdicts)
    return exit_code_for(verdicts)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)

    if args.command == "health":
        return run_health(args)
    parser.error(f"unknown command: {args.command}")
    return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
