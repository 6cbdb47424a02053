"""Startup orchestration.

Startup is a single linear pipeline: a list of steps walked in order, where
the first failure stops the walk. No step runs concurrently with another
and nothing is retried.

Example:
    >>> orchestrator = Orchestrator(services)
    >>> outcome = orchestrator.start(config)
    >>> if not outcome.ok:
    ...     print(outcome.stage, outcome.cause)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from caribic.config import ProjectConfig
from caribic.errors import (
    AppchainStartError,
    GatewayStartError,
    GenesisWaitError,
    MithrilStartError,
    NetworkStartError,
    PreparationError,
    RelayConfigError,
    RelayerStartError,
    SidechainStartError,
    StartupError,
)
from caribic.observability import log_status
from caribic.orchestration.models import (
    FailedAt,
    OrchestrationOutcome,
    Stage,
    StartupContext,
    Success,
)
from caribic.orchestration.topology import DEFAULT_TOPOLOGY, ServiceTopology
from caribic.ports import BridgeServicesPort

logger = logging.getLogger(__name__)

Notifier = Callable[[str], None]


@dataclass(frozen=True)
class StartupStep:
    """One entry of the startup pipeline.

    Attributes:
        stage: Which stage this step is.
        failure_message: Prefix of the message reported on failure.
        success_message: Progress message emitted on success.
        error_type: StartupError subclass a foreign exception is wrapped in.
        action: The call to the collaborator.
    """

    stage: Stage
    failure_message: str
    success_message: str
    error_type: type[StartupError]
    action: Callable[[StartupContext], None]

    def attribute(self, error: Exception) -> StartupError:
        """The error this step reports for ``error``."""
        if isinstance(error, self.error_type):
            return error
        wrapped = self.error_type(f"{self.failure_message}: {error}", cause=error)
        # never raised: chain so tracebacks still reach the launcher frame
        wrapped.__cause__ = error
        return wrapped


class MithrilBranch(ABC):
    """Whether the run includes Mithril, decided once per run."""

    enabled: bool

    @abstractmethod
    def start_steps(self, services: BridgeServicesPort, topology: ServiceTopology) -> list[StartupStep]:
        """Steps that run right after the Cardano network is up."""

    @abstractmethod
    def genesis_steps(self, services: BridgeServicesPort, topology: ServiceTopology) -> list[StartupStep]:
        """Steps that run after the relay tooling is configured."""


class MithrilEnabled(MithrilBranch):
    enabled = True

    def start_steps(self, services: BridgeServicesPort, topology: ServiceTopology) -> list[StartupStep]:
        def start_mithril(context: StartupContext) -> None:
            context.cardano_current_epoch = services.start_mithril(context.project_root)
            logger.debug(f"Cardano epoch at Mithril startup: {context.cardano_current_epoch}")

        return [
            StartupStep(
                stage=Stage.START_MITHRIL,
                failure_message="Failed to start Mithril",
                success_message="✅ Mithril up and running",
                error_type=MithrilStartError,
                action=start_mithril,
            )
        ]

    def genesis_steps(self, services: BridgeServicesPort, topology: ServiceTopology) -> list[StartupStep]:
        return [
            StartupStep(
                stage=Stage.CERTIFY_GENESIS,
                failure_message="Mithril failed to read the immutable cardano node files",
                success_message=(
                    "✅ Immutable Cardano node files have been created, "
                    "and Mithril is working as expected"
                ),
                error_type=GenesisWaitError,
                action=lambda ctx: services.wait_and_certify_genesis(
                    ctx.project_root, ctx.cardano_current_epoch
                ),
            )
        ]


class MithrilDisabled(MithrilBranch):
    enabled = False

    def start_steps(self, services: BridgeServicesPort, topology: ServiceTopology) -> list[StartupStep]:
        return []

    def genesis_steps(self, services: BridgeServicesPort, topology: ServiceTopology) -> list[StartupStep]:
        return []


def mithril_branch(config: ProjectConfig) -> MithrilBranch:
    """Select the Mithril branch for a run."""
    if config.mithril.enabled:
        return MithrilEnabled()
    return MithrilDisabled()


def build_startup_sequence(
    services: BridgeServicesPort,
    branch: MithrilBranch,
    topology: ServiceTopology = DEFAULT_TOPOLOGY,
) -> list[StartupStep]:
    """Build the ordered list of startup steps."""
    return [
        StartupStep(
            stage=Stage.PREPARE_APPCHAIN,
            failure_message="Failed to prepare Osmosis appchain",
            success_message="✅ Osmosis appchain prepared",
            error_type=PreparationError,
            action=lambda ctx: services.prepare(topology.appchain_path(ctx.project_root)),
        ),
        StartupStep(
            stage=Stage.START_NETWORK,
            failure_message="Failed to start local Cardano network",
            success_message="✅ Local Cardano network has been started and prepared",
            error_type=NetworkStartError,
            action=lambda ctx: services.start_network(topology.network_path(ctx.project_root)),
        ),
        *branch.start_steps(services, topology),
        StartupStep(
            stage=Stage.START_GATEWAY,
            failure_message="Failed to start gateway",
            success_message="✅ Gateway started successfully",
            error_type=GatewayStartError,
            action=lambda ctx: services.start_gateway(topology.gateway_path(ctx.project_root)),
        ),
        StartupStep(
            stage=Stage.START_SIDECHAIN,
            failure_message="Failed to start Cosmos sidechain",
            success_message="✅ Cosmos sidechain up and running",
            error_type=SidechainStartError,
            action=lambda ctx: services.start_sidechain(topology.sidechain_path(ctx.project_root)),
        ),
        StartupStep(
            stage=Stage.START_RELAYER,
            failure_message="Failed to start relayer",
            success_message="✅ Relayer started successfully",
            error_type=RelayerStartError,
            action=lambda ctx: services.start_relayer(topology.relayer_path(ctx.project_root)),
        ),
        StartupStep(
            stage=Stage.START_APPCHAIN,
            failure_message="Failed to start Osmosis",
            success_message="✅ Osmosis appchain is up and running",
            error_type=AppchainStartError,
            action=lambda ctx: services.start_appchain(topology.appchain_path(ctx.project_root)),
        ),
        StartupStep(
            stage=Stage.CONFIGURE_RELAY_TOOLING,
            failure_message="Failed to configure Hermes",
            success_message="✅ Hermes configured successfully and channels built",
            error_type=RelayConfigError,
            action=lambda ctx: services.configure_relay_tooling(topology.appchain_path(ctx.project_root)),
        ),
        *branch.genesis_steps(services, topology),
    ]


class Orchestrator:
    """Runs the startup pipeline against a set of service launchers."""

    def __init__(
        self,
        services: BridgeServicesPort,
        topology: ServiceTopology = DEFAULT_TOPOLOGY,
        notify: Notifier = log_status,
    ) -> None:
        self.services = services
        self.topology = topology
        self.notify = notify

    def start(self, config: ProjectConfig) -> OrchestrationOutcome:
        """Run every startup step in order, stopping at the first failure.

        Never raises for a step failure; the failure is returned as
        ``FailedAt`` so the caller decides how to tear down.
        """
        branch = mithril_branch(config)
        steps = build_startup_sequence(self.services, branch, self.topology)
        context = StartupContext(project_root=config.project_root)

        logger.debug(f"Osmosis appchain directory: {self.topology.appchain_path(config.project_root)}")
        logger.info(f"Starting bridge ({len(steps)} steps, mithril enabled: {branch.enabled})")

        for step in steps:
            logger.info(f"Step {step.stage.number}: {step.stage.value}")
            try:
                step.action(context)
            except Exception as e:
                return FailedAt(
                    stage=step.stage,
                    cause=f"{step.failure_message}: {e}",
                    error=step.attribute(e),
                    completed=tuple(context.completed),
                )
            context.completed.append(step.stage)
            self.notify(step.success_message)

        return Success(completed=tuple(context.completed))
