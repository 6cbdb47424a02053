"""Docker compose backend used by the service launchers."""

from __future__ import annotations

import json
import logging
import subprocess
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from caribic.errors import DockerComposeError, DockerNotFoundError

logger = logging.getLogger(__name__)

COMPOSE_FILE_NAMES = (
    "docker-compose.yaml",
    "docker-compose.yml",
    "compose.yaml",
    "compose.yml",
)


class ServiceHealthStatus(Enum):
    """Service health status."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    STARTING = "starting"
    RUNNING = "running"
    STOPPED = "stopped"
    UNKNOWN = "unknown"


@dataclass
class ServiceStatus:
    """Status of one compose service, as reported by ``ps``."""

    name: str
    state: str
    health: ServiceHealthStatus

    @property
    def is_healthy(self) -> bool:
        """Healthy, or running without a healthcheck."""
        return self.health in (ServiceHealthStatus.HEALTHY, ServiceHealthStatus.RUNNING)

    @classmethod
    def from_ps_entry(cls, entry: dict[str, str]) -> ServiceStatus:
        state = (entry.get("State") or "").lower()
        health = (entry.get("Health") or "").lower()
        if health:
            try:
                status = ServiceHealthStatus(health)
            except ValueError:
                status = ServiceHealthStatus.UNKNOWN
        elif state == "running":
            status = ServiceHealthStatus.RUNNING
        elif state in ("exited", "dead", "removing"):
            status = ServiceHealthStatus.STOPPED
        else:
            status = ServiceHealthStatus.UNKNOWN
        return cls(name=entry.get("Service") or entry.get("Name", ""), state=state, health=status)


def find_compose_file(project_dir: Path) -> Path | None:
    """Find the compose file of a service directory, if it has one."""
    for name in COMPOSE_FILE_NAMES:
        candidate = project_dir / name
        if candidate.exists():
            return candidate
    return None


def detect_compose_command() -> list[str]:
    """Detect whether to use 'docker compose' or 'docker-compose'.

    Raises:
        DockerNotFoundError: If Docker is not installed or not running.
    """
    try:
        result = subprocess.run(
            ["docker", "--version"],
            capture_output=True,
            text=True,
            timeout=10,
        )
        if result.returncode != 0:
            raise DockerNotFoundError(
                "Docker is not installed or not running",
                command=["docker", "--version"],
                stderr=result.stderr,
            )
    except FileNotFoundError as e:
        raise DockerNotFoundError(
            "Docker command not found. Please install Docker.",
            command=["docker", "--version"],
            cause=e,
        ) from e
    except subprocess.TimeoutExpired as e:
        raise DockerNotFoundError(
            "Docker command timed out. Docker may not be running.",
            command=["docker", "--version"],
            cause=e,
        ) from e

    # docker compose (v2) is preferred
    try:
        result = subprocess.run(
            ["docker", "compose", "version"],
            capture_output=True,
            text=True,
            timeout=10,
        )
        if result.returncode == 0:
            return ["docker", "compose"]
    except (FileNotFoundError, subprocess.TimeoutExpired):
        pass

    try:
        result = subprocess.run(
            ["docker-compose", "--version"],
            capture_output=True,
            text=True,
            timeout=10,
        )
        if result.returncode == 0:
            return ["docker-compose"]
    except (FileNotFoundError, subprocess.TimeoutExpired):
        pass

    logger.warning("Docker Compose not found, using 'docker compose' anyway")
    return ["docker", "compose"]


class ComposeProject:
    """One docker compose project rooted at a service directory.

    The compose command is detected on first use, so constructing a
    project never touches Docker.
    """

    def __init__(self, project_dir: str | Path, profiles: list[str] | None = None) -> None:
        self.project_dir = Path(project_dir)
        self.profiles = profiles or []
        self._compose_cmd: list[str] | None = None

    @property
    def compose_file(self) -> Path | None:
        return find_compose_file(self.project_dir)

    @property
    def exists(self) -> bool:
        """Whether the directory holds a compose file."""
        compose_file = self.compose_file
        return compose_file is not None and compose_file.exists()

    def _build_command(self, *args: str, profiles: list[str] | None = None) -> list[str]:
        if self._compose_cmd is None:
            self._compose_cmd = detect_compose_command()
        cmd = self._compose_cmd.copy()
        compose_file = self.compose_file
        if compose_file is not None:
            cmd.extend(["-f", str(compose_file)])
        for profile in profiles if profiles is not None else self.profiles:
            cmd.extend(["--profile", profile])
        cmd.extend(args)
        return cmd

    def _run_command(
        self,
        *args: str,
        check: bool = True,
        timeout: float | None = None,
        profiles: list[str] | None = None,
    ) -> subprocess.CompletedProcess[str]:
        """Run a docker compose command in the project directory.

        Raises:
            DockerComposeError: If the command fails and check=True, or
                times out.
        """
        cmd = self._build_command(*args, profiles=profiles)
        logger.debug(f"Running docker command: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                cwd=str(self.project_dir),
                capture_output=True,
                text=True,
                check=False,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise DockerComposeError(
                f"Docker compose command timed out: {' '.join(args)}",
                command=cmd,
                cause=e,
            ) from e

        if check and result.returncode != 0:
            raise DockerComposeError(
                f"Docker compose command failed: {' '.join(args)}",
                command=cmd,
                returncode=result.returncode,
                stderr=result.stderr,
            )

        return result

    def up(self, *services: str, profiles: list[str] | None = None, timeout: float | None = None) -> None:
        """Start services in the background."""
        self._run_command("up", "-d", *services, profiles=profiles, timeout=timeout)

    def down(self) -> None:
        """Tear down the project.

        A directory without a compose file was never started, so there is
        nothing to stop.
        """
        if not self.exists:
            logger.debug(f"No compose file in {self.project_dir}, nothing to stop")
            return
        self._run_command("down", "--remove-orphans")

    def run(self, service: str, *args: str, profiles: list[str] | None = None, timeout: float | None = None) -> str:
        """Run a one-off container and return its stdout."""
        result = self._run_command("run", "--rm", service, *args, profiles=profiles, timeout=timeout)
        return result.stdout

    def exec(self, service: str, *args: str, timeout: float | None = None) -> str:
        """Run a command inside a running service and return its stdout."""
        result = self._run_command("exec", "-T", service, *args, timeout=timeout)
        return result.stdout

    def status(self) -> list[ServiceStatus]:
        """Current status of the project's services."""
        result = self._run_command("ps", "--format", "json", check=False)
        if result.returncode != 0:
            return []
        try:
            return parse_ps_output(result.stdout)
        except json.JSONDecodeError:
            logger.debug(f"Unparseable ps output in {self.project_dir}: {result.stdout!r}")
            return []

    def wait_healthy(self, timeout: float = 60.0, poll_interval: float = 2.0) -> bool:
        """Wait for every service to be healthy (or running without a healthcheck)."""
        start_time = time.monotonic()

        while time.monotonic() - start_time < timeout:
            services = self.status()
            if services and all(service.is_healthy for service in services):
                return True
            time.sleep(poll_interval)

        return False


def parse_ps_output(ps_output: str) -> list[ServiceStatus]:
    """Parse ``docker compose ps --format json``.

    Compose v2 prints one JSON object per line; older releases print a
    single JSON array.
    """
    text = ps_output.strip()
    if not text:
        return []

    entries: list[dict[str, str]] = []
    if text.startswith("["):
        entries = json.loads(text)
    else:
        for line in text.splitlines():
            if line.strip():
                entries.append(json.loads(line))

    return [ServiceStatus.from_ps_entry(entry) for entry in entries]
