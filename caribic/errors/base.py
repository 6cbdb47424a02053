"""Exception hierarchy for caribic.

Every caribic error carries:
- error_code: an ErrorCode used for categorization and logs
- cause: the underlying exception, when there is one
- suggestions: actionable steps shown to the operator

Startup failures are grouped by the stage that raised them, not by the
kind of failure. Each stage has its own subclass of StartupError so the
orchestrator can attribute a failure without inspecting messages:

    try:
        services.start_sidechain(path)
    except CaribicError as e:
        print(f"[{e.error_code.value}] {e.message}")
        for suggestion in e.suggestions:
            print(f"  - {suggestion}")
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for caribic.

    Error codes are organized by range:
    - E0xx: Configuration errors
    - E1xx: External tool errors (docker, shell commands)
    - E2xx: Startup stage errors
    - E3xx: Readiness/wait errors
    - E9xx: Unknown/internal errors
    """

    # Configuration errors (E0xx)
    INVALID_CONFIG = "E001"
    CONFIG_NOT_FOUND = "E002"

    # External tool errors (E1xx)
    COMMAND_FAILED = "E101"
    COMMAND_TIMEOUT = "E102"
    DOCKER_NOT_FOUND = "E103"
    DOCKER_COMPOSE_FAILED = "E104"

    # Startup stage errors (E2xx)
    PREPARATION_FAILED = "E201"
    NETWORK_START_FAILED = "E202"
    MITHRIL_START_FAILED = "E203"
    GATEWAY_START_FAILED = "E204"
    SIDECHAIN_START_FAILED = "E205"
    RELAYER_START_FAILED = "E206"
    APPCHAIN_START_FAILED = "E207"
    RELAY_CONFIG_FAILED = "E208"
    GENESIS_WAIT_FAILED = "E209"

    # Readiness errors (E3xx)
    WAIT_TIMEOUT = "E301"
    SERVICE_UNREACHABLE = "E302"

    UNKNOWN = "E999"


class CaribicError(Exception):
    """Base exception for all caribic errors.

    Attributes:
        error_code: Unique ErrorCode for this error type
        message: Human-readable error description
        cause: The underlying exception (if any)
        suggestions: List of actionable steps to resolve the issue
    """

    error_code: ErrorCode = ErrorCode.UNKNOWN
    default_message: str = "An unexpected error occurred"
    default_suggestions: list[str] = []

    def __init__(
        self,
        message: str | None = None,
        error_code: ErrorCode | None = None,
        cause: Exception | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.error_code = error_code or self.error_code
        self.cause = cause
        self._suggestions = suggestions
        super().__init__(self.message)

    @property
    def suggestions(self) -> list[str]:
        """Get actionable suggestions for resolving this error."""
        if self._suggestions is not None:
            return self._suggestions
        return self.default_suggestions.copy()

    def __str__(self) -> str:
        return self.message


class ConfigError(CaribicError):
    """The configuration file is missing or invalid."""

    error_code = ErrorCode.INVALID_CONFIG
    default_message = "Invalid configuration"
    default_suggestions = [
        "Check the configuration file passed with --config",
        "Delete the file to have caribic write a fresh default configuration",
    ]


class ConfigLoadError(ConfigError):
    """The configuration file could not be read or parsed."""

    default_message = "Failed to load configuration"

    def __init__(self, message: str | None = None, path: str | None = None, **kwargs: Any) -> None:
        self.path = path
        super().__init__(message=message, **kwargs)


class CommandError(CaribicError):
    """An external command exited with a non-zero status."""

    error_code = ErrorCode.COMMAND_FAILED
    default_message = "External command failed"

    def __init__(
        self,
        message: str | None = None,
        command: list[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
        **kwargs: Any,
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message=message, **kwargs)

    def __str__(self) -> str:
        detail = self.stderr.strip().splitlines()[-1] if self.stderr.strip() else ""
        if detail:
            return f"{self.message}: {detail}"
        return self.message


class DockerError(CommandError):
    """Base exception for Docker operations."""

    error_code = ErrorCode.DOCKER_COMPOSE_FAILED
    default_message = "Docker operation failed"


class DockerNotFoundError(DockerError):
    """Raised when Docker is not installed or not running."""

    error_code = ErrorCode.DOCKER_NOT_FOUND
    default_message = "Docker is not installed or not running"
    default_suggestions = [
        "Install Docker: https://docs.docker.com/get-docker/",
        "Start the Docker daemon and retry",
        "Run 'caribic check' to verify prerequisites",
    ]


class DockerComposeError(DockerError):
    """Raised when a docker compose command fails."""

    default_message = "Docker compose command failed"


class ServiceUnreachableError(CaribicError):
    """A service endpoint did not answer."""

    error_code = ErrorCode.SERVICE_UNREACHABLE
    default_message = "Service is not reachable"


class StartupError(CaribicError):
    """Base class for failures of a startup stage."""


class PreparationError(StartupError):
    error_code = ErrorCode.PREPARATION_FAILED
    default_message = "Failed to prepare Osmosis appchain"


class NetworkStartError(StartupError):
    error_code = ErrorCode.NETWORK_START_FAILED
    default_message = "Failed to start local Cardano network"
    default_suggestions = [
        "Check that ports used by the Cardano node are free",
        "Inspect the node logs with 'docker compose logs' in chains/cardano",
    ]


class MithrilStartError(StartupError):
    error_code = ErrorCode.MITHRIL_START_FAILED
    default_message = "Failed to start Mithril"
    default_suggestions = [
        "Disable Mithril with 'mithril.enabled: false' if it is not needed",
    ]


class GatewayStartError(StartupError):
    error_code = ErrorCode.GATEWAY_START_FAILED
    default_message = "Failed to start gateway"


class SidechainStartError(StartupError):
    error_code = ErrorCode.SIDECHAIN_START_FAILED
    default_message = "Failed to start Cosmos sidechain"


class RelayerStartError(StartupError):
    error_code = ErrorCode.RELAYER_START_FAILED
    default_message = "Failed to start relayer"


class AppchainStartError(StartupError):
    error_code = ErrorCode.APPCHAIN_START_FAILED
    default_message = "Failed to start Osmosis"


class RelayConfigError(StartupError):
    error_code = ErrorCode.RELAY_CONFIG_FAILED
    default_message = "Failed to configure Hermes"
    default_suggestions = [
        "Run 'caribic check' to verify that hermes is installed",
        "Make sure both the Cosmos sidechain and Osmosis RPC endpoints answer",
    ]


class GenesisWaitError(StartupError):
    error_code = ErrorCode.GENESIS_WAIT_FAILED
    default_message = "Mithril failed to read the immutable cardano node files"


class WaitTimeoutError(GenesisWaitError):
    """Raised when a wait/poll operation times out.

    Carries the condition being waited for so the failure message says
    what never happened, not just that time ran out.
    """

    error_code = ErrorCode.WAIT_TIMEOUT
    default_message = "Wait operation timed out"
    default_suggestions = [
        "Increase mithril.genesis_timeout_seconds in the configuration",
        "Check that the Cardano node is producing blocks",
    ]

    def __init__(
        self,
        message: str | None = None,
        condition_description: str | None = None,
        timeout_seconds: float | None = None,
        elapsed_seconds: float | None = None,
        poll_attempts: int = 0,
        last_value: Any = None,
        expected_value: Any = None,
        **kwargs: Any,
    ) -> None:
        self.condition_description = condition_description
        self.timeout_seconds = timeout_seconds
        self.elapsed_seconds = elapsed_seconds
        self.poll_attempts = poll_attempts
        self.last_value = last_value
        self.expected_value = expected_value

        if message is None:
            message = self._build_message()

        super().__init__(message=message, **kwargs)

    def _build_message(self) -> str:
        parts = ["Timeout"]

        if self.elapsed_seconds is not None:
            parts.append(f"after {self.elapsed_seconds:.1f}s")

        if self.condition_description:
            parts.append(f"waiting for: {self.condition_description}")

        if self.poll_attempts > 0:
            parts.append(f"({self.poll_attempts} attempts)")

        if self.last_value is not None and self.expected_value is not None:
            parts.append(f"[last={self.last_value!r}, expected={self.expected_value!r}]")
        elif self.last_value is not None:
            parts.append(f"[last value: {self.last_value!r}]")

        return " ".join(parts)
