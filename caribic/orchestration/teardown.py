"""Best-effort teardown of the bridge testbed."""

from __future__ import annotations

import logging
from pathlib import Path

from caribic.orchestration.models import TeardownReport
from caribic.orchestration.topology import DEFAULT_TOPOLOGY, ServiceTopology
from caribic.ports import BridgeServicesPort

logger = logging.getLogger(__name__)


class Teardown:
    """Stops every known service, whether or not it was started.

    Only the project root is needed: paths are derived from the topology,
    so a teardown after a failed start and a teardown requested from a
    fresh process behave the same.
    """

    def __init__(self, services: BridgeServicesPort, topology: ServiceTopology = DEFAULT_TOPOLOGY) -> None:
        self.services = services
        self.topology = topology

    def _stop_operation(self, name: str):
        return {
            "network": self.services.stop_network,
            "sidechain": self.services.stop_sidechain,
            "relayer": self.services.stop_relayer,
            "appchain": self.services.stop_appchain,
            "mithril": self.services.stop_mithril,
        }[name]

    def run(self, project_root: Path) -> TeardownReport:
        """Call every stop operation once, in teardown order.

        A failing stop is logged and recorded; the remaining services are
        still stopped. Never raises.
        """
        report = TeardownReport()

        for name, path in self.topology.teardown_targets(project_root):
            report.attempted.append(name)
            logger.info(f"Stopping {name} ({path})")
            try:
                self._stop_operation(name)(path)
            except Exception as e:
                logger.warning(f"Failed to stop {name}: {e}")
                report.failures[name] = str(e)

        return report
