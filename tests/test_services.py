"""Tests for the service launchers."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import httpx
import pytest

from caribic.config import CosmosConfig, HermesConfig, OsmosisConfig, ProjectConfig
from caribic.errors import CaribicError, RelayConfigError, ServiceUnreachableError
from caribic.services import Hermes, LocalBridgeServices, Osmosis, parse_tip_epoch
from caribic.services.rpc import latest_block_height, rpc_status, wait_for_rpc


class TestParseTipEpoch:
    """Tests for parse_tip_epoch."""

    def test_parses_epoch(self) -> None:
        output = json.dumps({"block": 1200, "epoch": 3, "era": "Conway", "slot": 6000})

        assert parse_tip_epoch(output) == 3

    @pytest.mark.parametrize("output", ["", "not json", '{"slot": 1}', '{"epoch": "x"}'])
    def test_rejects_bad_output(self, output: str) -> None:
        with pytest.raises(CaribicError):
            parse_tip_epoch(output)

    def test_rejects_negative_epoch(self) -> None:
        with pytest.raises(CaribicError, match="Negative"):
            parse_tip_epoch('{"epoch": -1}')


class TestRpc:
    """Tests for the Tendermint RPC probes."""

    @patch("httpx.get")
    def test_status(self, mock_get) -> None:
        response = MagicMock()
        response.json.return_value = {"result": {"sync_info": {"latest_block_height": "7"}}}
        mock_get.return_value = response

        status = rpc_status("http://localhost:26657/")

        mock_get.assert_called_once_with("http://localhost:26657/status", timeout=5.0)
        assert latest_block_height(status) == 7

    @patch("httpx.get", side_effect=httpx.ConnectError("refused"))
    def test_status_unreachable(self, mock_get) -> None:
        assert rpc_status("http://localhost:26657") is None

    def test_block_height_missing(self) -> None:
        assert latest_block_height({}) == 0

    @patch("caribic.services.rpc.rpc_status")
    def test_wait_until_first_block(self, mock_status) -> None:
        mock_status.side_effect = [
            None,
            {"sync_info": {"latest_block_height": "0"}},
            {"sync_info": {"latest_block_height": "1"}},
        ]
        sleeps: list[float] = []

        status = wait_for_rpc("http://rpc", timeout=60, poll_interval=1, sleep=sleeps.append)

        assert latest_block_height(status) == 1
        assert sleeps == [1, 1]

    @patch("caribic.services.rpc.rpc_status", return_value=None)
    def test_wait_times_out(self, mock_status) -> None:
        with pytest.raises(ServiceUnreachableError):
            wait_for_rpc("http://rpc", timeout=0, sleep=lambda _: None)


class TestOsmosis:
    """Tests for the Osmosis launcher."""

    @patch("caribic.services.osmosis.run_command")
    def test_prepare_clones_missing_checkout(self, mock_run, tmp_path: Path) -> None:
        osmosis_dir = tmp_path / "osmosis"

        Osmosis(OsmosisConfig()).prepare(osmosis_dir)

        args = mock_run.call_args[0]
        assert args[:2] == ("git", "clone")
        assert args[-1] == str(osmosis_dir)

    @patch("caribic.services.osmosis.run_command")
    def test_prepare_reuses_checkout_and_copies_overrides(self, mock_run, tmp_path: Path) -> None:
        osmosis_dir = tmp_path / "osmosis"
        osmosis_dir.mkdir()
        (tmp_path / "configuration" / "scripts").mkdir(parents=True)
        (tmp_path / "configuration" / "scripts" / "setup.sh").write_text("#!/bin/sh\n")

        Osmosis(OsmosisConfig()).prepare(osmosis_dir)

        mock_run.assert_not_called()
        assert (osmosis_dir / "scripts" / "setup.sh").exists()

    @patch("caribic.services.osmosis.run_command")
    def test_stop_without_checkout_is_noop(self, mock_run, tmp_path: Path) -> None:
        Osmosis(OsmosisConfig()).stop(tmp_path / "osmosis")

        mock_run.assert_not_called()

    @patch("caribic.services.osmosis.run_command")
    def test_stop(self, mock_run, tmp_path: Path) -> None:
        (tmp_path / "Makefile").write_text("")

        Osmosis(OsmosisConfig()).stop(tmp_path)

        assert mock_run.call_args[0] == ("make", "localnet-stop")


class TestHermes:
    """Tests for Hermes relay configuration."""

    def test_missing_config(self, tmp_path: Path) -> None:
        hermes = Hermes(HermesConfig(), CosmosConfig(), OsmosisConfig())

        with pytest.raises(RelayConfigError):
            hermes.configure(tmp_path / "osmosis")

    @patch("caribic.services.hermes.run_command")
    def test_adds_keys_and_creates_channel(self, mock_run, tmp_path: Path) -> None:
        hermes_dir = tmp_path / "configuration" / "hermes"
        hermes_dir.mkdir(parents=True)
        (hermes_dir / "config.toml").write_text("")
        (hermes_dir / "sidechain.mnemonic").write_text("words")

        Hermes(HermesConfig(), CosmosConfig(), OsmosisConfig()).configure(tmp_path / "osmosis")

        calls = [c[0] for c in mock_run.call_args_list]
        assert len(calls) == 2
        assert calls[0][3:5] == ("keys", "add")
        assert "sidechain" in calls[0]
        assert calls[1][3:5] == ("create", "channel")
        assert calls[1][calls[1].index("--a-chain") + 1] == "sidechain"
        assert calls[1][calls[1].index("--b-chain") + 1] == "localosmosis"


class TestLocalBridgeServices:
    """Tests for the default launcher wiring."""

    def test_start_mithril_returns_tip_epoch(self, tmp_path: Path) -> None:
        services = LocalBridgeServices(ProjectConfig(project_root=tmp_path))

        with patch.object(services.mithril, "start") as mock_start, patch(
            "caribic.services.local.CardanoNetwork.query_tip_epoch", return_value=12
        ):
            assert services.start_mithril(tmp_path) == 12

        mock_start.assert_called_once_with(tmp_path / "chains/mithrils")

    def test_genesis_waits_then_certifies(self, tmp_path: Path) -> None:
        services = LocalBridgeServices(ProjectConfig(project_root=tmp_path))

        with patch("caribic.services.local.ReadinessWaiter") as mock_waiter, patch.object(
            services.mithril, "certify_genesis"
        ) as mock_certify:
            services.wait_and_certify_genesis(tmp_path, 5)

        mock_waiter.return_value.wait_for_epoch.assert_called_once_with(5)
        assert mock_waiter.call_args[1]["immutable_dir"] == tmp_path / "chains/cardano/devnet/db/immutable"
        mock_certify.assert_called_once_with(tmp_path / "chains/mithrils")

    def test_stops_are_noops_on_empty_project(self, tmp_path: Path) -> None:
        services = LocalBridgeServices(ProjectConfig(project_root=tmp_path))

        with patch("subprocess.run") as mock_run:
            services.stop_network(tmp_path)
            services.stop_sidechain(tmp_path / "cosmos")
            services.stop_relayer(tmp_path / "relayer")
            services.stop_appchain(tmp_path / "chains/osmosis/osmosis")
            services.stop_mithril(tmp_path / "chains/mithrils")

        mock_run.assert_not_called()
