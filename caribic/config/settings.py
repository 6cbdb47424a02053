"""Configuration settings and loading."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import click
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from caribic.errors import ConfigLoadError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


class CardanoConfig(BaseModel):
    """Local Cardano network settings."""

    model_config = ConfigDict(frozen=True)

    testnet_magic: int = 42
    node_container: str = "cardano-node"
    ready_timeout_seconds: float = 300.0


class MithrilConfig(BaseModel):
    """Mithril aggregator/signer settings."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    aggregator_url: str = "http://localhost:8080/aggregator"
    genesis_timeout_seconds: float = 1200.0
    poll_interval_seconds: float = 10.0

    @field_validator("genesis_timeout_seconds", "poll_interval_seconds")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be greater than zero")
        return v


class CosmosConfig(BaseModel):
    """Cosmos sidechain settings."""

    model_config = ConfigDict(frozen=True)

    rpc_url: str = "http://localhost:26657"
    chain_id: str = "sidechain"
    ready_timeout_seconds: float = 300.0


class OsmosisConfig(BaseModel):
    """Osmosis appchain settings."""

    model_config = ConfigDict(frozen=True)

    repository_url: str = "https://github.com/osmosis-labs/osmosis.git"
    rpc_url: str = "http://localhost:26658"
    chain_id: str = "localosmosis"
    ready_timeout_seconds: float = 300.0


class HermesConfig(BaseModel):
    """Hermes relay tooling settings."""

    model_config = ConfigDict(frozen=True)

    binary: str = "hermes"
    port: str = "transfer"


class ProjectConfig(BaseSettings):
    """Root configuration for one caribic run.

    Loaded once and never mutated; the orchestrator only reads it.
    """

    model_config = SettingsConfigDict(
        env_prefix="CARIBIC_",
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
    )

    project_root: Path = Field(default_factory=Path.cwd)
    cardano: CardanoConfig = Field(default_factory=CardanoConfig)
    mithril: MithrilConfig = Field(default_factory=MithrilConfig)
    cosmos: CosmosConfig = Field(default_factory=CosmosConfig)
    osmosis: OsmosisConfig = Field(default_factory=OsmosisConfig)
    hermes: HermesConfig = Field(default_factory=HermesConfig)

    @field_validator("project_root", mode="before")
    @classmethod
    def expand_project_root(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Path(os.path.expandvars(v)).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v


def default_config_path() -> Path:
    """Platform-specific location of the configuration file."""
    return Path(click.get_app_dir("caribic")) / CONFIG_FILE_NAME


def load_config(config_path: str | Path | None = None) -> ProjectConfig:
    """Load configuration from file and environment.

    Priority: env overrides > config file > defaults. The file may be
    JSON or YAML.

    Raises:
        ConfigLoadError: If the file is missing, unreadable or invalid.
    """
    config_data: dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigLoadError(
                f"Configuration file not found: {config_path}",
                path=str(config_path),
            )
        try:
            with open(config_path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigLoadError(
                f"Failed to read configuration file {config_path}: {e}",
                path=str(config_path),
                cause=e,
            ) from e
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigLoadError(
                f"Configuration file {config_path} must contain a mapping",
                path=str(config_path),
            )
        config_data = loaded

    _apply_env_overrides(config_data)

    try:
        return ProjectConfig(**config_data)
    except ValidationError as e:
        raise ConfigLoadError(
            f"Invalid configuration: {e.error_count()} error(s)\n{e}",
            path=str(config_path) if config_path else None,
            cause=e,
        ) from e


def _apply_env_overrides(config_data: dict[str, Any]) -> None:
    """Apply the environment overrides that must win over file values."""
    project_root = os.environ.get("CARIBIC_PROJECT_ROOT")
    if project_root is not None:
        config_data["project_root"] = project_root

    mithril_enabled = os.environ.get("CARIBIC_MITHRIL_ENABLED")
    if mithril_enabled is not None:
        section = config_data.get("mithril") or {}
        if not isinstance(section, dict):
            raise ConfigLoadError(
                f"Configuration section 'mithril' must be a mapping, got {type(section).__name__}"
            )
        mithril = dict(section)
        mithril["enabled"] = mithril_enabled.lower() in ("true", "1", "yes")
        config_data["mithril"] = mithril


def create_default_config(config_path: str | Path, project_root: str | Path | None = None) -> Path:
    """Write a starter configuration file and return its path."""
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = ProjectConfig(project_root=Path(project_root or Path.cwd())).model_dump(mode="json")
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")

    logger.warning(f"Created default configuration at {config_path}")
    return config_path
