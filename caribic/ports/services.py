from abc import ABC, abstractmethod
from pathlib import Path


class BridgeServicesPort(ABC):
    """Launchers for every service of the bridge testbed.

    A start method signals failure by raising; its return value (when
    there is one) is the handle the orchestrator needs later. Stop
    methods must be safe to call on a service that was never started
    or is already stopped.
    """

    @abstractmethod
    def prepare(self, path: Path) -> None:
        """Prepare the Osmosis appchain working directory."""
        ...

    @abstractmethod
    def start_network(self, path: Path) -> None:
        """Start the local Cardano network and wait until it is reachable."""
        ...

    @abstractmethod
    def start_mithril(self, path: Path) -> int:
        """Start Mithril and return the Cardano epoch observed at startup."""
        ...

    @abstractmethod
    def start_gateway(self, path: Path) -> None:
        """Start the gateway."""
        ...

    @abstractmethod
    def start_sidechain(self, path: Path) -> None:
        """Start the Cosmos sidechain."""
        ...

    @abstractmethod
    def start_relayer(self, path: Path) -> None:
        """Start the relayer."""
        ...

    @abstractmethod
    def start_appchain(self, path: Path) -> None:
        """Start the Osmosis appchain."""
        ...

    @abstractmethod
    def configure_relay_tooling(self, path: Path) -> None:
        """Configure Hermes and build IBC channels between Osmosis and Cosmos."""
        ...

    @abstractmethod
    def wait_and_certify_genesis(self, path: Path, epoch: int) -> None:
        """Wait for immutable files at or after ``epoch``, then run Mithril genesis."""
        ...

    @abstractmethod
    def stop_network(self, path: Path) -> None:
        ...

    @abstractmethod
    def stop_sidechain(self, path: Path) -> None:
        ...

    @abstractmethod
    def stop_relayer(self, path: Path) -> None:
        ...

    @abstractmethod
    def stop_appchain(self, path: Path) -> None:
        ...

    @abstractmethod
    def stop_mithril(self, path: Path) -> None:
        ...
