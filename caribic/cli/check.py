"""Prerequisite checks for the bridge testbed."""

from __future__ import annotations

import shutil
import subprocess
from typing import Callable, Tuple

from rich.console import Console
from rich.table import Table

from caribic.config import ProjectConfig
from caribic.orchestration.topology import DEFAULT_TOPOLOGY, ServiceTopology

console = Console()


class HealthCheck:
    """A single prerequisite check with name, check function, and required flag."""

    def __init__(
        self,
        name: str,
        check_fn: Callable[[], Tuple[bool, str]],
        required: bool = True,
    ) -> None:
        """Initialize a health check.

        Args:
            name: Display name for the check.
            check_fn: Function that returns (success, message) tuple.
            required: Whether the bridge cannot start without it.
        """
        self.name = name
        self.check_fn = check_fn
        self.required = required

    def run(self) -> Tuple[bool, str]:
        """Run the check and return (success, message)."""
        try:
            return self.check_fn()
        except Exception as e:
            return False, str(e)


def check_tool(executable: str, *version_args: str, hint: str = "") -> Tuple[bool, str]:
    """Check that an executable is on PATH and report its version line."""
    if not shutil.which(executable):
        message = f"{executable} not found in PATH"
        return False, f"{message} ({hint})" if hint else message

    args = version_args or ("--version",)
    try:
        result = subprocess.run(
            [executable, *args],
            capture_output=True,
            text=True,
            timeout=10,
        )
    except subprocess.TimeoutExpired:
        return True, f"{executable} available"

    # some tools print their version to stderr
    output = (result.stdout.strip() or result.stderr.strip()).splitlines()
    if result.returncode != 0:
        return False, f"{executable} found but '{' '.join(args)}' failed"
    return True, output[0] if output else f"{executable} available"


def check_docker() -> Tuple[bool, str]:
    """Check if Docker is installed and daemon is running."""
    success, version = check_tool("docker")
    if not success:
        return success, version

    ping = subprocess.run(
        ["docker", "info"],
        capture_output=True,
        timeout=10,
    )
    if ping.returncode == 0:
        return True, version
    return False, "Docker installed but daemon not running"


def check_docker_compose() -> Tuple[bool, str]:
    """Check if Docker Compose is available (v2 or v1)."""
    try:
        result = subprocess.run(
            ["docker", "compose", "version"],
            capture_output=True,
            text=True,
            timeout=10,
        )
        if result.returncode == 0:
            return True, result.stdout.strip()
    except (subprocess.TimeoutExpired, FileNotFoundError):
        pass

    if shutil.which("docker-compose"):
        return check_tool("docker-compose")

    return False, "Docker Compose not found"


def check_project_root(config: ProjectConfig, topology: ServiceTopology = DEFAULT_TOPOLOGY) -> Tuple[bool, str]:
    """Check that the configured project root looks like the bridge repository."""
    root = config.project_root
    if not root.is_dir():
        return False, f"{root} does not exist"

    expected = [topology.cardano_dir, topology.sidechain_dir, topology.relayer_dir, topology.gateway_dir]
    missing = [name for name in expected if not (root / name).is_dir()]
    if missing:
        return False, f"{root} is missing {', '.join(missing)}"
    return True, str(root)


def get_health_checks(config: ProjectConfig) -> list[HealthCheck]:
    """Return the checks to run, required ones first."""
    return [
        HealthCheck("Project Root", lambda: check_project_root(config), required=True),
        HealthCheck("Docker", check_docker, required=True),
        HealthCheck("Docker Compose", check_docker_compose, required=True),
        HealthCheck("Git", lambda: check_tool("git"), required=True),
        HealthCheck("Make", lambda: check_tool("make"), required=True),
        HealthCheck(
            "Hermes",
            lambda: check_tool(config.hermes.binary, hint="https://hermes.informal.systems"),
            required=True,
        ),
        HealthCheck("Go", lambda: check_tool("go", "version"), required=False),
        HealthCheck("Deno", lambda: check_tool("deno"), required=False),
        HealthCheck("Aiken", lambda: check_tool("aiken"), required=False),
    ]


def run_health_checks(checks: list[HealthCheck]) -> Tuple[int, int, int]:
    """Run checks and display a table.

    Returns:
        Tuple of (passed, failed_required, failed_optional) counts.
    """
    table = Table(show_header=False, box=None)
    table.add_column("Status", width=3)
    table.add_column("Check", width=16)
    table.add_column("Result")

    passed = 0
    failed_required = 0
    failed_optional = 0

    for check in checks:
        success, message = check.run()
        if success:
            table.add_row("[green]OK[/green]", check.name, f"[green]{message}[/green]")
            passed += 1
        elif check.required:
            table.add_row("[red]!![/red]", check.name, f"[red]{message}[/red]")
            failed_required += 1
        else:
            table.add_row("[yellow]--[/yellow]", check.name, f"[yellow]{message}[/yellow]")
            failed_optional += 1

    console.print(table)
    console.print()

    return passed, failed_required, failed_optional
