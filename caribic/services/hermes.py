"""Hermes relay tooling: keys and the IBC channel between Cosmos and Osmosis."""

from __future__ import annotations

import logging
from pathlib import Path

from caribic.config import CosmosConfig, HermesConfig, OsmosisConfig
from caribic.errors import RelayConfigError
from caribic.infra import run_command

logger = logging.getLogger(__name__)

HERMES_CONFIG_FILE = "configuration/hermes/config.toml"


class Hermes:
    """Configures Hermes from the files shipped next to the Osmosis checkout.

    Expected layout, relative to the Osmosis checkout's parent directory::

        configuration/hermes/config.toml
        configuration/hermes/<chain-id>.mnemonic   (optional, one per chain)
    """

    def __init__(self, config: HermesConfig, cosmos: CosmosConfig, osmosis: OsmosisConfig) -> None:
        self.config = config
        self.chain_ids = (cosmos.chain_id, osmosis.chain_id)

    def _hermes(self, config_file: Path, *args: str) -> str:
        result = run_command(self.config.binary, "--config", str(config_file), *args, timeout=600)
        return result.stdout

    def configure(self, osmosis_dir: Path) -> None:
        config_file = osmosis_dir.parent / HERMES_CONFIG_FILE
        if not config_file.exists():
            raise RelayConfigError(f"Hermes configuration not found: {config_file}")

        for chain_id in self.chain_ids:
            mnemonic = config_file.parent / f"{chain_id}.mnemonic"
            if mnemonic.exists():
                logger.info(f"Adding Hermes key for {chain_id}")
                self._hermes(
                    config_file,
                    "keys", "add",
                    "--overwrite",
                    "--chain", chain_id,
                    "--mnemonic-file", str(mnemonic),
                )

        a_chain, b_chain = self.chain_ids
        logger.info(f"Creating IBC channel {a_chain} <-> {b_chain}")
        self._hermes(
            config_file,
            "create", "channel",
            "--a-chain", a_chain,
            "--b-chain", b_chain,
            "--a-port", self.config.port,
            "--b-port", self.config.port,
            "--new-client-connection",
            "--yes",
        )
