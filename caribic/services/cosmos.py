"""Cosmos sidechain."""

from __future__ import annotations

from pathlib import Path

from caribic.config import CosmosConfig
from caribic.services.base import ComposeService
from caribic.services.rpc import wait_for_rpc


class CosmosSidechain(ComposeService):
    """Compose project plus a wait for the first block on its RPC."""

    def __init__(self, config: CosmosConfig) -> None:
        super().__init__("Cosmos sidechain")
        self.config = config

    def start(self, path: Path):
        project = super().start(path)
        wait_for_rpc(self.config.rpc_url, timeout=self.config.ready_timeout_seconds)
        return project
