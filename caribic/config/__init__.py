"""Configuration management for caribic."""

from caribic.config.settings import (
    CardanoConfig,
    CosmosConfig,
    HermesConfig,
    MithrilConfig,
    OsmosisConfig,
    ProjectConfig,
    create_default_config,
    default_config_path,
    load_config,
)

__all__ = [
    "ProjectConfig",
    "CardanoConfig",
    "MithrilConfig",
    "CosmosConfig",
    "OsmosisConfig",
    "HermesConfig",
    "load_config",
    "create_default_config",
    "default_config_path",
]
