"""Run-level lifecycle: start or stop the bridge and exit accordingly.

    INIT -> STARTING -> RUNNING
    INIT -> STARTING -> FAILED -> STOPPING -> TERMINATED (exit 1)
    RUNNING | INIT -> STOPPING -> TERMINATED (exit 0)
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from caribic.config import ProjectConfig
from caribic.errors import CaribicError
from caribic.observability import log_status, tracebacks_enabled
from caribic.orchestration.models import FailedAt, RunState, Success, TeardownReport
from caribic.orchestration.orchestrator import Notifier, Orchestrator
from caribic.orchestration.teardown import Teardown
from caribic.orchestration.topology import DEFAULT_TOPOLOGY, ServiceTopology
from caribic.ports import BridgeServicesPort

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def failure_suggestions(error: BaseException | None) -> list[str]:
    """Suggestions of a stage error followed by those of its cause."""
    suggestions: list[str] = []
    while isinstance(error, CaribicError):
        for suggestion in error.suggestions:
            if suggestion not in suggestions:
                suggestions.append(suggestion)
        error = error.cause
    return suggestions


class BridgeLifecycle:
    """Drives one run of the bridge: startup, or teardown on request/failure."""

    def __init__(
        self,
        services: BridgeServicesPort,
        topology: ServiceTopology = DEFAULT_TOPOLOGY,
        notify: Notifier = log_status,
    ) -> None:
        self.orchestrator = Orchestrator(services, topology=topology, notify=notify)
        self.teardown = Teardown(services, topology=topology)
        self.notify = notify
        self.state = RunState.INIT
        self.exit_code: int | None = None
        self.teardown_passes = 0

    def start(self, config: ProjectConfig) -> Success:
        """Bring the whole bridge up.

        Returns only on success. On failure the error is logged, every
        service is stopped and the process exits with status 1.
        """
        self.state = RunState.STARTING
        outcome = self.orchestrator.start(config)

        if isinstance(outcome, FailedAt):
            self._abort(outcome, config.project_root)

        self.state = RunState.RUNNING
        self.notify("\n✅ Bridge started successfully")
        return outcome

    def stop(self, project_root: Path) -> TeardownReport:
        """Stop every service on user request."""
        report = self._teardown(project_root)
        self.exit_code = EXIT_SUCCESS
        self.state = RunState.TERMINATED
        if not report.clean:
            logger.warning(
                f"Some services could not be stopped: {', '.join(sorted(report.failures))}"
            )
        self.notify("\n❎ Bridge stopped successfully")
        return report

    def _teardown(self, project_root: Path) -> TeardownReport:
        self.state = RunState.STOPPING
        self.teardown_passes += 1
        return self.teardown.run(project_root)

    def _abort(self, failure: FailedAt, project_root: Path) -> None:
        self.state = RunState.FAILED
        message = f"❌ {failure.cause}"
        suggestions = failure_suggestions(failure.error)
        if suggestions:
            message += "\n" + "\n".join(f"   - {s}" for s in suggestions)
        logger.error(message, exc_info=failure.error if tracebacks_enabled() else None)
        self.notify("🚨 Stopping services...")
        report = self._teardown(project_root)
        if not report.clean:
            logger.warning(
                f"Teardown finished with failures: {', '.join(sorted(report.failures))}"
            )
        self.state = RunState.TERMINATED
        self.exit_code = EXIT_FAILURE
        sys.exit(EXIT_FAILURE)
