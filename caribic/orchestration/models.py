"""Value types shared by the orchestrator, the teardown and the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Union


class Stage(Enum):
    """Startup stages, in the order they run."""

    PREPARE_APPCHAIN = "prepare_appchain"
    START_NETWORK = "start_network"
    START_MITHRIL = "start_mithril"
    START_GATEWAY = "start_gateway"
    START_SIDECHAIN = "start_sidechain"
    START_RELAYER = "start_relayer"
    START_APPCHAIN = "start_appchain"
    CONFIGURE_RELAY_TOOLING = "configure_relay_tooling"
    CERTIFY_GENESIS = "certify_genesis"

    @property
    def number(self) -> int:
        """1-based position in the full startup sequence."""
        return list(Stage).index(self) + 1


class RunState(Enum):
    """States of one caribic run."""

    INIT = "init"
    STARTING = "starting"
    RUNNING = "running"
    FAILED = "failed"
    STOPPING = "stopping"
    TERMINATED = "terminated"


@dataclass
class StartupContext:
    """State threaded through the startup steps.

    ``cardano_current_epoch`` is written by the Mithril start step and read
    by the genesis step; it stays 0 when Mithril is disabled.
    """

    project_root: Path
    cardano_current_epoch: int = 0
    completed: list[Stage] = field(default_factory=list)


@dataclass(frozen=True)
class Success:
    """Every startup step succeeded."""

    completed: tuple[Stage, ...] = ()

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class FailedAt:
    """Startup stopped at ``stage``.

    Attributes:
        stage: The stage whose operation raised.
        cause: Human-readable diagnostic, prefixed with what failed.
        error: The exception that was raised.
    """

    stage: Stage
    cause: str
    error: BaseException | None = field(default=None, compare=False)
    completed: tuple[Stage, ...] = ()

    @property
    def ok(self) -> bool:
        return False


OrchestrationOutcome = Union[Success, FailedAt]


@dataclass
class TeardownReport:
    """What a teardown pass did."""

    attempted: list[str] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def clean(self) -> bool:
        return not self.failures
