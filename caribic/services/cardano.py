"""Local Cardano devnet."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from caribic.config import CardanoConfig
from caribic.errors import CaribicError, NetworkStartError
from caribic.infra import ComposeProject

logger = logging.getLogger(__name__)

IMMUTABLE_DB_SUBDIR = "devnet/db/immutable"


class CardanoNetwork:
    """The Cardano node and its companion services, run with docker compose.

    Args:
        config: Cardano settings.
        network_dir: Directory holding the devnet compose project.
    """

    def __init__(self, config: CardanoConfig, network_dir: Path) -> None:
        self.config = config
        self.network_dir = network_dir

    @property
    def project(self) -> ComposeProject:
        return ComposeProject(self.network_dir)

    @property
    def immutable_dir(self) -> Path:
        return self.network_dir / IMMUTABLE_DB_SUBDIR

    def start(self) -> None:
        """Start the devnet and block until every service reports healthy."""
        project = self.project
        if not project.exists:
            raise NetworkStartError(f"No compose file for the Cardano network in {self.network_dir}")

        project.up()
        if not project.wait_healthy(timeout=self.config.ready_timeout_seconds):
            raise NetworkStartError(
                f"Cardano network services not healthy after {self.config.ready_timeout_seconds:.0f}s"
            )

        epoch = self.query_tip_epoch()
        logger.info(f"Cardano node reachable, current epoch {epoch}")

    def query_tip_epoch(self) -> int:
        """Current epoch according to ``cardano-cli query tip``."""
        output = self.project.exec(
            self.config.node_container,
            "cardano-cli",
            "query",
            "tip",
            "--testnet-magic",
            str(self.config.testnet_magic),
            timeout=30,
        )
        return parse_tip_epoch(output)

    def stop(self) -> None:
        self.project.down()


def parse_tip_epoch(output: str) -> int:
    """Extract the epoch from ``cardano-cli query tip`` JSON output."""
    try:
        tip = json.loads(output)
        epoch = int(tip["epoch"])
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise CaribicError(f"Unexpected cardano-cli tip output: {output.strip()!r}", cause=e) from e
    if epoch < 0:
        raise CaribicError(f"Negative epoch in cardano-cli tip output: {epoch}")
    return epoch
