"""Fixed layout of the bridge testbed.

Which directories the services live in under the project root, and the
order they are stopped in.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

# Not the reverse of the startup order: the Cardano network goes first and
# the gateway is never stopped.
TEARDOWN_ORDER: tuple[str, ...] = ("network", "sidechain", "relayer", "appchain", "mithril")


@dataclass(frozen=True)
class ServiceTopology:
    """Service directories relative to the project root."""

    cardano_dir: str = "chains/cardano"
    mithril_dir: str = "chains/mithrils"
    gateway_dir: str = "cardano/gateway"
    sidechain_dir: str = "cosmos"
    relayer_dir: str = "relayer"
    appchain_dir: str = "chains/osmosis/osmosis"

    def network_path(self, project_root: Path) -> Path:
        """The Cardano launcher works from the project root itself."""
        return project_root

    def mithril_path(self, project_root: Path) -> Path:
        return project_root / self.mithril_dir

    def gateway_path(self, project_root: Path) -> Path:
        return project_root / self.gateway_dir

    def sidechain_path(self, project_root: Path) -> Path:
        return project_root / self.sidechain_dir

    def relayer_path(self, project_root: Path) -> Path:
        return project_root / self.relayer_dir

    def appchain_path(self, project_root: Path) -> Path:
        return project_root / self.appchain_dir

    def teardown_targets(self, project_root: Path) -> list[tuple[str, Path]]:
        """(service name, path) pairs in teardown order."""
        paths = {
            "network": self.network_path(project_root),
            "sidechain": self.sidechain_path(project_root),
            "relayer": self.relayer_path(project_root),
            "appchain": self.appchain_path(project_root),
            "mithril": self.mithril_path(project_root),
        }
        return [(name, paths[name]) for name in TEARDOWN_ORDER]


DEFAULT_TOPOLOGY = ServiceTopology()
