"""Default launchers: the bridge testbed on the local machine."""

from __future__ import annotations

import logging
from pathlib import Path

from caribic.config import ProjectConfig
from caribic.orchestration.readiness import ReadinessWaiter
from caribic.orchestration.topology import DEFAULT_TOPOLOGY, ServiceTopology
from caribic.ports import BridgeServicesPort
from caribic.services.base import ComposeService
from caribic.services.cardano import CardanoNetwork
from caribic.services.cosmos import CosmosSidechain
from caribic.services.hermes import Hermes
from caribic.services.mithril import Mithril
from caribic.services.osmosis import Osmosis

logger = logging.getLogger(__name__)


class LocalBridgeServices(BridgeServicesPort):
    """Wires each service launcher to the project configuration."""

    def __init__(self, config: ProjectConfig, topology: ServiceTopology = DEFAULT_TOPOLOGY) -> None:
        self.config = config
        self.topology = topology
        self.mithril = Mithril(config.mithril)
        self.gateway = ComposeService("gateway")
        self.sidechain = CosmosSidechain(config.cosmos)
        self.relayer = ComposeService("relayer")
        self.osmosis = Osmosis(config.osmosis)
        self.hermes = Hermes(config.hermes, config.cosmos, config.osmosis)

    def cardano(self, project_root: Path) -> CardanoNetwork:
        return CardanoNetwork(self.config.cardano, project_root / self.topology.cardano_dir)

    def prepare(self, path: Path) -> None:
        self.osmosis.prepare(path)

    def start_network(self, path: Path) -> None:
        self.cardano(path).start()

    def start_mithril(self, path: Path) -> int:
        self.mithril.start(self.topology.mithril_path(path))
        return self.cardano(path).query_tip_epoch()

    def start_gateway(self, path: Path) -> None:
        self.gateway.start(path)

    def start_sidechain(self, path: Path) -> None:
        self.sidechain.start(path)

    def start_relayer(self, path: Path) -> None:
        self.relayer.start(path)

    def start_appchain(self, path: Path) -> None:
        self.osmosis.start(path)

    def configure_relay_tooling(self, path: Path) -> None:
        self.hermes.configure(path)

    def wait_and_certify_genesis(self, path: Path, epoch: int) -> None:
        cardano = self.cardano(path)
        waiter = ReadinessWaiter(
            epoch_probe=cardano.query_tip_epoch,
            immutable_dir=cardano.immutable_dir,
            timeout=self.config.mithril.genesis_timeout_seconds,
            poll_interval=self.config.mithril.poll_interval_seconds,
        )
        waiter.wait_for_epoch(epoch)
        self.mithril.certify_genesis(self.topology.mithril_path(path))

    def stop_network(self, path: Path) -> None:
        self.cardano(path).stop()

    def stop_sidechain(self, path: Path) -> None:
        self.sidechain.stop(path)

    def stop_relayer(self, path: Path) -> None:
        self.relayer.stop(path)

    def stop_appchain(self, path: Path) -> None:
        self.osmosis.stop(path)

    def stop_mithril(self, path: Path) -> None:
        self.mithril.stop(path)
