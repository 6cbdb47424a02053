"""Infrastructure helpers: docker compose projects and shell commands."""

from caribic.infra.docker import (
    ComposeProject,
    ServiceHealthStatus,
    ServiceStatus,
    detect_compose_command,
    find_compose_file,
    parse_ps_output,
)
from caribic.infra.shell import run_command

__all__ = [
    "ComposeProject",
    "ServiceHealthStatus",
    "ServiceStatus",
    "detect_compose_command",
    "find_compose_file",
    "parse_ps_output",
    "run_command",
]
