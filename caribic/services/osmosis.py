"""Osmosis appchain, run from a local checkout with its localnet make targets."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from caribic.config import OsmosisConfig
from caribic.infra import run_command
from caribic.services.rpc import wait_for_rpc

logger = logging.getLogger(__name__)

# Sibling of the checkout: files copied over the cloned repository.
CONFIGURATION_DIR = "configuration"


class Osmosis:
    def __init__(self, config: OsmosisConfig) -> None:
        self.config = config

    def prepare(self, osmosis_dir: Path) -> None:
        """Make sure a checkout exists and carries the local overrides.

        Cloning only happens when the directory is missing; an existing
        checkout is reused as is.
        """
        if not osmosis_dir.exists():
            logger.info(f"Cloning {self.config.repository_url} into {osmosis_dir}")
            osmosis_dir.parent.mkdir(parents=True, exist_ok=True)
            run_command("git", "clone", self.config.repository_url, str(osmosis_dir), timeout=600)
        else:
            logger.debug(f"Reusing Osmosis checkout at {osmosis_dir}")

        overrides = osmosis_dir.parent / CONFIGURATION_DIR
        if overrides.is_dir():
            logger.debug(f"Copying {overrides} over {osmosis_dir}")
            shutil.copytree(overrides, osmosis_dir, dirs_exist_ok=True)

    def start(self, osmosis_dir: Path) -> None:
        run_command("make", "localnet-init", cwd=osmosis_dir, timeout=600)
        run_command("make", "localnet-startd", cwd=osmosis_dir, timeout=600)
        wait_for_rpc(self.config.rpc_url, timeout=self.config.ready_timeout_seconds)

    def stop(self, osmosis_dir: Path) -> None:
        if not (osmosis_dir / "Makefile").exists():
            logger.debug(f"No Osmosis checkout at {osmosis_dir}, nothing to stop")
            return
        run_command("make", "localnet-stop", cwd=osmosis_dir, timeout=300)
