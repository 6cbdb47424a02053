"""caribic - local Cardano <-> Cosmos IBC bridge testbed.

caribic starts and stops every component of the bridge development
environment in dependency order:

    1. prepare the Osmosis appchain checkout
    2. local Cardano network
    3. Mithril (optional)
    4. gateway
    5. Cosmos sidechain
    6. relayer
    7. Osmosis appchain
    8. Hermes keys and IBC channels
    9. Mithril genesis certification (optional)

Any failure stops everything already running and exits with status 1.

Example:
    >>> from caribic.config import load_config
    >>> from caribic.orchestration import BridgeLifecycle
    >>> from caribic.services import LocalBridgeServices
    >>>
    >>> config = load_config("config.json")
    >>> BridgeLifecycle(LocalBridgeServices(config)).start(config)
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
