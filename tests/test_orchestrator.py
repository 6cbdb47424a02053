"""Tests for the startup orchestrator."""

from __future__ import annotations

from pathlib import Path

import pytest

from caribic.config import ProjectConfig
from caribic.errors import (
    GenesisWaitError,
    NetworkStartError,
    SidechainStartError,
    StartupError,
    WaitTimeoutError,
)
from caribic.orchestration import (
    FailedAt,
    MithrilDisabled,
    MithrilEnabled,
    Orchestrator,
    Stage,
    Success,
    build_startup_sequence,
    mithril_branch,
)
from tests.fakes import (
    STARTUP_WITH_MITHRIL,
    STARTUP_WITHOUT_MITHRIL,
    RecordingServices,
)


class TestStartupSequence:
    """Tests for building the ordered step list."""

    def test_full_sequence_with_mithril(self, services: RecordingServices) -> None:
        steps = build_startup_sequence(services, MithrilEnabled())

        assert [step.stage for step in steps] == list(Stage)

    def test_sequence_without_mithril_skips_both_mithril_stages(self, services: RecordingServices) -> None:
        steps = build_startup_sequence(services, MithrilDisabled())
        stages = [step.stage for step in steps]

        assert Stage.START_MITHRIL not in stages
        assert Stage.CERTIFY_GENESIS not in stages
        assert len(stages) == 7

    def test_branch_follows_config(self, mithril_config: ProjectConfig, no_mithril_config: ProjectConfig) -> None:
        assert isinstance(mithril_branch(mithril_config), MithrilEnabled)
        assert isinstance(mithril_branch(no_mithril_config), MithrilDisabled)

    def test_stage_numbers(self) -> None:
        assert Stage.PREPARE_APPCHAIN.number == 1
        assert Stage.START_SIDECHAIN.number == 5
        assert Stage.CERTIFY_GENESIS.number == 9


class TestOrchestratorSuccess:
    """Scenarios where every step succeeds."""

    def test_all_steps_run_in_order_with_mithril(
        self, services: RecordingServices, mithril_config: ProjectConfig
    ) -> None:
        messages: list[str] = []
        outcome = Orchestrator(services, notify=messages.append).start(mithril_config)

        assert isinstance(outcome, Success)
        assert outcome.ok is True
        assert services.names == STARTUP_WITH_MITHRIL
        assert len(messages) == 9

    def test_epoch_from_mithril_start_reaches_genesis_wait(
        self, mithril_config: ProjectConfig
    ) -> None:
        services = RecordingServices(mithril_epoch=42)

        Orchestrator(services, notify=lambda _: None).start(mithril_config)

        assert services.genesis_epochs == [42]

    def test_mithril_disabled_never_calls_mithril(
        self, services: RecordingServices, no_mithril_config: ProjectConfig
    ) -> None:
        outcome = Orchestrator(services, notify=lambda _: None).start(no_mithril_config)

        assert isinstance(outcome, Success)
        assert services.names == STARTUP_WITHOUT_MITHRIL
        assert services.genesis_epochs == []
        assert Stage.START_MITHRIL not in outcome.completed

    def test_paths_are_derived_from_project_root(
        self, services: RecordingServices, no_mithril_config: ProjectConfig
    ) -> None:
        Orchestrator(services, notify=lambda _: None).start(no_mithril_config)
        root = no_mithril_config.project_root
        paths = dict(services.calls)

        assert paths["prepare"] == root / "chains/osmosis/osmosis"
        assert paths["start_network"] == root
        assert paths["start_gateway"] == root / "cardano/gateway"
        assert paths["start_sidechain"] == root / "cosmos"
        assert paths["start_relayer"] == root / "relayer"
        assert paths["start_appchain"] == root / "chains/osmosis/osmosis"
        assert paths["configure_relay_tooling"] == root / "chains/osmosis/osmosis"

    def test_progress_messages(
        self, services: RecordingServices, no_mithril_config: ProjectConfig
    ) -> None:
        messages: list[str] = []
        Orchestrator(services, notify=messages.append).start(no_mithril_config)

        assert messages[0] == "✅ Osmosis appchain prepared"
        assert "✅ Cosmos sidechain up and running" in messages
        assert messages[-1] == "✅ Hermes configured successfully and channels built"


class TestOrchestratorFailure:
    """Fail-fast behaviour."""

    @pytest.mark.parametrize("index", range(len(STARTUP_WITH_MITHRIL)))
    def test_no_step_runs_after_a_failure(self, index: int, mithril_config: ProjectConfig) -> None:
        failing = STARTUP_WITH_MITHRIL[index]
        services = RecordingServices(fail_on={failing})

        outcome = Orchestrator(services, notify=lambda _: None).start(mithril_config)

        assert isinstance(outcome, FailedAt)
        assert services.names == STARTUP_WITH_MITHRIL[: index + 1]
        assert outcome.stage.number == index + 1
        assert len(outcome.completed) == index

    def test_sidechain_failure_is_attributed(self, mithril_config: ProjectConfig) -> None:
        services = RecordingServices(fail_on={"start_sidechain"})

        outcome = Orchestrator(services, notify=lambda _: None).start(mithril_config)

        assert isinstance(outcome, FailedAt)
        assert outcome.stage is Stage.START_SIDECHAIN
        assert outcome.cause == "Failed to start Cosmos sidechain: start_sidechain exploded"
        assert isinstance(outcome.error, SidechainStartError)
        assert isinstance(outcome.error.cause, RuntimeError)
        assert "start_relayer" not in services.names

    def test_failed_step_emits_no_progress_message(self, mithril_config: ProjectConfig) -> None:
        services = RecordingServices(fail_on={"start_network"})
        messages: list[str] = []

        Orchestrator(services, notify=messages.append).start(mithril_config)

        assert messages == ["✅ Osmosis appchain prepared"]

    def test_startup_error_from_launcher_is_kept(self, mithril_config: ProjectConfig) -> None:
        class FailingNetwork(RecordingServices):
            def start_network(self, path: Path) -> None:
                raise NetworkStartError("node socket never appeared")

        outcome = Orchestrator(FailingNetwork(), notify=lambda _: None).start(mithril_config)

        assert isinstance(outcome, FailedAt)
        assert isinstance(outcome.error, NetworkStartError)
        assert outcome.cause == "Failed to start local Cardano network: node socket never appeared"

    def test_genesis_timeout_is_a_genesis_failure(self, mithril_config: ProjectConfig) -> None:
        class SlowGenesis(RecordingServices):
            def wait_and_certify_genesis(self, path: Path, epoch: int) -> None:
                raise WaitTimeoutError(condition_description="epoch 42", elapsed_seconds=3.0)

        outcome = Orchestrator(SlowGenesis(), notify=lambda _: None).start(mithril_config)

        assert isinstance(outcome, FailedAt)
        assert outcome.stage is Stage.CERTIFY_GENESIS
        assert isinstance(outcome.error, GenesisWaitError)
        assert isinstance(outcome.error, StartupError)
