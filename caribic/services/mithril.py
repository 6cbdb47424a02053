"""Mithril aggregator and signers."""

from __future__ import annotations

import logging
from pathlib import Path

from caribic.config import MithrilConfig
from caribic.infra import ComposeProject

logger = logging.getLogger(__name__)

MITHRIL_PROFILE = "mithril"
GENESIS_PROFILE = "mithril-genesis"
GENESIS_SERVICE = "mithril-aggregator-genesis"


class Mithril:
    """Runs the Mithril compose project.

    Startup brings up the aggregator and signers; genesis certification is
    a one-off container run once the ledger has immutable files.
    """

    def __init__(self, config: MithrilConfig) -> None:
        self.config = config

    def project(self, mithril_dir: Path) -> ComposeProject:
        return ComposeProject(mithril_dir, profiles=[MITHRIL_PROFILE])

    def start(self, mithril_dir: Path) -> None:
        logger.info(f"Starting Mithril in {mithril_dir}")
        self.project(mithril_dir).up()

    def certify_genesis(self, mithril_dir: Path) -> None:
        """Run the genesis certification, then restart the aggregator on top of it."""
        project = self.project(mithril_dir)
        logger.info("Running Mithril genesis certification")
        project.run(GENESIS_SERVICE, profiles=[GENESIS_PROFILE])
        project.up()
        logger.info(f"Mithril aggregator serving at {self.config.aggregator_url}")

    def stop(self, mithril_dir: Path) -> None:
        logger.info(f"Stopping Mithril in {mithril_dir}")
        self.project(mithril_dir).down()
