"""Tests for the caribic CLI."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from caribic.cli import cli
from caribic.cli.check import HealthCheck, check_project_root, check_tool, run_health_checks
from caribic.config import ProjectConfig
from tests.fakes import STARTUP_WITH_MITHRIL, TEARDOWN_CALLS, RecordingServices


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"project_root": str(tmp_path)}))
    return path


def invoke(runner: CliRunner, config_file: Path, services: RecordingServices, *args: str):
    return runner.invoke(
        cli,
        ["--config", str(config_file), *args],
        obj={"services_factory": lambda config: services},
    )


class TestStartCommand:
    """Tests for 'caribic start'."""

    def test_start_success(self, runner: CliRunner, config_file: Path) -> None:
        services = RecordingServices()

        result = invoke(runner, config_file, services, "start")

        assert result.exit_code == 0
        assert "Bridge started successfully" in result.output
        assert services.names == STARTUP_WITH_MITHRIL

    def test_start_failure_exits_1(self, runner: CliRunner, config_file: Path) -> None:
        services = RecordingServices(fail_on={"start_gateway"})

        result = invoke(runner, config_file, services, "start")

        assert result.exit_code == 1
        assert "Failed to start gateway" in result.output
        assert services.names[-5:] == TEARDOWN_CALLS
        assert "Bridge started successfully" not in result.output

    def test_quiet_start_prints_no_progress(self, runner: CliRunner, config_file: Path) -> None:
        services = RecordingServices()

        result = runner.invoke(
            cli,
            ["--verbose", "0", "--config", str(config_file), "start"],
            obj={"services_factory": lambda config: services},
        )

        assert result.exit_code == 0
        assert "✅" not in result.output

    def test_creates_missing_config(self, runner: CliRunner, tmp_path: Path) -> None:
        config_file = tmp_path / "app" / "config.json"
        services = RecordingServices()

        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = invoke(runner, config_file, services, "start")

        assert result.exit_code == 0
        assert config_file.exists()


class TestStopCommand:
    """Tests for 'caribic stop'."""

    def test_stop(self, runner: CliRunner, config_file: Path) -> None:
        services = RecordingServices()

        result = invoke(runner, config_file, services, "stop")

        assert result.exit_code == 0
        assert services.names == TEARDOWN_CALLS
        assert "Bridge stopped successfully" in result.output

    def test_stop_with_failing_service(self, runner: CliRunner, config_file: Path) -> None:
        services = RecordingServices(fail_on={"stop_sidechain"})

        result = invoke(runner, config_file, services, "stop")

        assert result.exit_code == 0
        assert services.names == TEARDOWN_CALLS


class TestConfigErrors:
    """Configuration problems exit with status 2."""

    def test_invalid_config(self, runner: CliRunner, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- not\n- a mapping\n")
        services = RecordingServices()

        result = invoke(runner, config_file, services, "start")

        assert result.exit_code == 2
        assert "Configuration error" in result.output
        assert services.calls == []

    def test_scalar_section_with_env_override(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text("mithril: true\n")
        monkeypatch.setenv("CARIBIC_MITHRIL_ENABLED", "false")
        services = RecordingServices()

        result = invoke(runner, config_file, services, "start")

        assert result.exit_code == 2
        assert "'mithril' must be a mapping" in result.output
        assert "  - Check the configuration file passed with --config" in result.output
        assert services.calls == []


class TestCheckCommand:
    """Tests for 'caribic check'."""

    def test_check_all_pass(self, runner: CliRunner, config_file: Path) -> None:
        with patch(
            "caribic.cli.commands.get_health_checks",
            return_value=[HealthCheck("test", lambda: (True, "ok"), required=True)],
        ):
            result = runner.invoke(cli, ["--config", str(config_file), "check"])

        assert result.exit_code == 0
        assert "All checks passed" in result.output

    def test_check_required_fails(self, runner: CliRunner, config_file: Path) -> None:
        with patch(
            "caribic.cli.commands.get_health_checks",
            return_value=[HealthCheck("hermes", lambda: (False, "not found"), required=True)],
        ):
            result = runner.invoke(cli, ["--config", str(config_file), "check"])

        assert result.exit_code == 1

    def test_check_optional_fails(self, runner: CliRunner, config_file: Path) -> None:
        with patch(
            "caribic.cli.commands.get_health_checks",
            return_value=[
                HealthCheck("docker", lambda: (True, "ok"), required=True),
                HealthCheck("aiken", lambda: (False, "not found"), required=False),
            ],
        ):
            result = runner.invoke(cli, ["--config", str(config_file), "check"])

        assert result.exit_code == 0
        assert "optional" in result.output


class TestDemoCommand:
    """Tests for 'caribic demo'."""

    def test_demo_running(self, runner: CliRunner, config_file: Path) -> None:
        status = {"sync_info": {"latest_block_height": "123"}}
        with patch("caribic.cli.commands.rpc_status", return_value=status):
            result = runner.invoke(cli, ["--config", str(config_file), "demo"])

        assert result.exit_code == 0
        assert "123" in result.output

    def test_demo_not_running(self, runner: CliRunner, config_file: Path) -> None:
        with patch("caribic.cli.commands.rpc_status", return_value=None):
            result = runner.invoke(cli, ["--config", str(config_file), "demo"])

        assert result.exit_code == 1
        assert "not running" in result.output


class TestHealthChecks:
    """Tests for individual prerequisite checks."""

    def test_health_check_catches_exceptions(self) -> None:
        def boom() -> tuple[bool, str]:
            raise RuntimeError("boom")

        assert HealthCheck("x", boom).run() == (False, "boom")

    @patch("shutil.which", return_value=None)
    def test_check_tool_missing(self, mock_which) -> None:
        success, message = check_tool("hermes", hint="install it")

        assert success is False
        assert message == "hermes not found in PATH (install it)"

    @patch("shutil.which", return_value="/usr/bin/git")
    @patch("subprocess.run")
    def test_check_tool_version(self, mock_run, mock_which) -> None:
        mock_run.return_value.returncode = 0
        mock_run.return_value.stdout = "git version 2.43.0\n"
        mock_run.return_value.stderr = ""

        assert check_tool("git") == (True, "git version 2.43.0")

    def test_project_root_layout(self, tmp_path: Path) -> None:
        config = ProjectConfig(project_root=tmp_path)
        assert check_project_root(config)[0] is False

        for name in ("chains/cardano", "cosmos", "relayer", "cardano/gateway"):
            (tmp_path / name).mkdir(parents=True)

        assert check_project_root(config) == (True, str(tmp_path))

    def test_run_health_checks_counts(self) -> None:
        checks = [
            HealthCheck("a", lambda: (True, "ok")),
            HealthCheck("b", lambda: (False, "missing")),
            HealthCheck("c", lambda: (False, "missing"), required=False),
        ]

        assert run_health_checks(checks) == (1, 1, 1)
