"""Service launchers for the bridge testbed."""

from caribic.services.base import ComposeService
from caribic.services.cardano import CardanoNetwork, parse_tip_epoch
from caribic.services.cosmos import CosmosSidechain
from caribic.services.hermes import Hermes
from caribic.services.local import LocalBridgeServices
from caribic.services.mithril import Mithril
from caribic.services.osmosis import Osmosis
from caribic.services.rpc import rpc_status, wait_for_rpc

__all__ = [
    "LocalBridgeServices",
    "ComposeService",
    "CardanoNetwork",
    "CosmosSidechain",
    "Hermes",
    "Mithril",
    "Osmosis",
    "parse_tip_epoch",
    "rpc_status",
    "wait_for_rpc",
]
