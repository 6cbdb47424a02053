from caribic.ports.services import BridgeServicesPort

__all__ = [
    "BridgeServicesPort",
]
