"""Startup/shutdown orchestration of the bridge testbed."""

from caribic.orchestration.lifecycle import EXIT_FAILURE, EXIT_SUCCESS, BridgeLifecycle
from caribic.orchestration.models import (
    FailedAt,
    OrchestrationOutcome,
    RunState,
    Stage,
    StartupContext,
    Success,
    TeardownReport,
)
from caribic.orchestration.orchestrator import (
    MithrilBranch,
    MithrilDisabled,
    MithrilEnabled,
    Orchestrator,
    StartupStep,
    build_startup_sequence,
    mithril_branch,
)
from caribic.orchestration.readiness import ReadinessWaiter, count_immutable_files
from caribic.orchestration.teardown import Teardown
from caribic.orchestration.topology import DEFAULT_TOPOLOGY, TEARDOWN_ORDER, ServiceTopology

__all__ = [
    "BridgeLifecycle",
    "EXIT_SUCCESS",
    "EXIT_FAILURE",
    "Orchestrator",
    "StartupStep",
    "MithrilBranch",
    "MithrilEnabled",
    "MithrilDisabled",
    "build_startup_sequence",
    "mithril_branch",
    "ReadinessWaiter",
    "count_immutable_files",
    "Teardown",
    "ServiceTopology",
    "DEFAULT_TOPOLOGY",
    "TEARDOWN_ORDER",
    "Stage",
    "RunState",
    "StartupContext",
    "Success",
    "FailedAt",
    "OrchestrationOutcome",
    "TeardownReport",
]
