"""Error types raised by caribic."""

from caribic.errors.base import (
    AppchainStartError,
    CaribicError,
    CommandError,
    ConfigError,
    ConfigLoadError,
    DockerComposeError,
    DockerError,
    DockerNotFoundError,
    ErrorCode,
    GatewayStartError,
    GenesisWaitError,
    MithrilStartError,
    NetworkStartError,
    PreparationError,
    RelayConfigError,
    RelayerStartError,
    ServiceUnreachableError,
    SidechainStartError,
    StartupError,
    WaitTimeoutError,
)

__all__ = [
    "CaribicError",
    "ErrorCode",
    # Configuration
    "ConfigError",
    "ConfigLoadError",
    # Tooling
    "CommandError",
    "DockerError",
    "DockerNotFoundError",
    "DockerComposeError",
    "ServiceUnreachableError",
    # Startup stages
    "StartupError",
    "PreparationError",
    "NetworkStartError",
    "MithrilStartError",
    "GatewayStartError",
    "SidechainStartError",
    "RelayerStartError",
    "AppchainStartError",
    "RelayConfigError",
    "GenesisWaitError",
    "WaitTimeoutError",
]
