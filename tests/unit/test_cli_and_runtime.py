# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

from ccswitch.cli import main as cli
from ccswitch.config import HealthSettings, HttpSettings
from ccswitch.errors import ErrorCategory
from ccswitch.health.catalog import MODELS_PROBE
from ccswitch.http.adapters import StubHttpClient, status_response
from ccswitch.models import BackendTarget, HealthVerdict, ProbeOutcome, VerdictStatus
from ccswitch.runtime import HealthChecker


def _verdict(name="prod", status=VerdictStatus.HEALTHY, code=200, latency=42.4, error=None, category=ErrorCategory.NONE):
    outcome = ProbeOutcome(spec=MODELS_PROBE, status_code=code, latency_ms=latency, error=error, error_category=category)
    target = BackendTarget(name=name, base_url="https://api.example.com", auth_token="sk-ant-secret")
    return HealthVerdict(target=target, status=status, chosen_outcome=outcome, tried_specs=(MODELS_PROBE,), outcomes=(outcome,))


def test_build_parser_health_options():
    args = cli.build_parser().parse_args(["health", "--json", "--workers", "2", "--timeout", "5", "--all"])
    assert args.command == "health"
    assert args.json is True
    assert args.workers == 2
    assert args.timeout == 5.0
    assert args.all is True


def test_render_rows():
    header, rule = cli.render_header()
    assert header.startswith("| Name")
    assert "Latency" in header
    assert rule.startswith("|---")

    healthy = cli.render_row(_verdict())
    assert len(healthy) == 1
    assert "Healthy (status: 200)" in healthy[0]
    assert "sk-ant-****" in healthy[0]
    assert "secret" not in healthy[0]
    assert healthy[0].rstrip().endswith("42ms |")

    down = cli.render_row(
        _verdict(status=VerdictStatus.UNHEALTHY, code=None, latency=None, error="timeout", category=ErrorCategory.TIMEOUT)
    )
    assert "Unhealthy (status: N/A)" in down[0]
    assert "N/A |" in down[0]
    assert down[1] == "  Error: timeout"
    assert "Hint:" in down[2]


def test_long_values_are_truncated():
    verdict = _verdict(name="a-very-long-configuration-name")
    row = cli.render_row(verdict)[0]
    assert "a-very-long-con..." in row


def test_exit_codes():
    assert cli.exit_code_for([_verdict()]) == cli.EXIT_OK
    assert cli.exit_code_for([_verdict(), _verdict(status=VerdictStatus.UNHEALTHY, code=503)]) == cli.EXIT_UNHEALTHY
    assert cli.exit_code_for([_verdict(status=VerdictStatus.CANCELLED)]) == cli.EXIT_CANCELLED


def test_health_command_end_to_end(tmp_path, monkeypatch, capsys):
    config_file = tmp_path / "apiConfigs.json"
    config_file.write_text(
        json.dumps([{"name": "prod", "config": {"env": {"ANTHROPIC_BASE_URL": "https://api.example.com", "ANTHROPIC_AUTH_TOKEN": "sk-ant-1234"}}}]),
        encoding="utf-8",
    )
    stub = StubHttpClient({"https://api.example.com/v1/models": status_response(200)})
    monkeypatch.setattr("ccswitch.runtime.create_default_http_client", lambda settings: stub)

    code = cli.main(["health", "--config", str(config_file), "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert code == cli.EXIT_OK
    assert payload[0]["name"] == "prod"
    assert payload[0]["status"] == "HEALTHY"
    assert stub.closed is True

    code = cli.main(["health", "--config", str(config_file)])
    out = capsys.readouterr().out
    assert code == cli.EXIT_OK
    assert "Healthy (status: 200)" in out


def test_health_command_all_skips_entries_without_base_url(tmp_path, monkeypatch, capsys):
    config_file = tmp_path / "apiConfigs.json"
    config_file.write_text(
        json.dumps(
            [
                {"name": "prod", "config": {"env": {"ANTHROPIC_BASE_URL": "https://api.example.com", "ANTHROPIC_AUTH_TOKEN": "sk-ant-1234"}}},
                {"name": "draft", "config": {"env": {"ANTHROPIC_AUTH_TOKEN": "sk-ant-5678"}}},
                {"name": "prod-copy", "ANTHROPIC_BASE_URL": "https://api.example.com"},
            ]
        ),
        encoding="utf-8",
    )
    stub = StubHttpClient({"https://api.example.com/v1/models": status_response(200)})
    monkeypatch.setattr("ccswitch.runtime.create_default_http_client", lambda settings: stub)

    code = cli.main(["health", "--config", str(config_file), "--json", "--all"])
    payload = json.loads(capsys.readouterr().out)
    assert code == cli.EXIT_OK
    assert [entry["name"] for entry in payload] == ["prod", "prod-copy"]
    assert all(entry["status"] == "HEALTHY" for entry in payload)


def test_health_command_config_errors(tmp_path, capsys):
    bad = tmp_path / "apiConfigs.json"
    bad.write_text("[", encoding="utf-8")
    assert cli.main(["health", "--config", str(bad)]) == cli.EXIT_CONFIG_ERROR
    assert "Error:" in capsys.readouterr().err

    assert cli.main(["health", "--config", str(tmp_path / "missing.json")]) == cli.EXIT_OK
    assert "No API configurations found" in capsys.readouterr().err


def test_health_checker_facade():
    stub = StubHttpClient({"https://a.example/v1/models": status_response(200)})
    targets = [BackendTarget("a", "https://a.example"), BackendTarget("b", "https://b.example")]
    with HealthChecker(stub, http_settings=HttpSettings(), health_settings=HealthSettings(max_workers=2), catalog=[MODELS_PROBE]) as checker:
        assert checker.check(targets[0]).healthy is True
        verdicts = checker.check_all(targets)
    assert [v.healthy for v in verdicts] == [True, False]
    assert stub.closed is True
