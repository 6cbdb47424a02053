"""Tendermint RPC reachability probes."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import httpx

from caribic.errors import ServiceUnreachableError

logger = logging.getLogger(__name__)


def rpc_status(rpc_url: str, timeout: float = 5.0) -> dict | None:
    """Fetch ``/status`` from a Tendermint RPC endpoint.

    Returns:
        The ``result`` payload, or None if the endpoint does not answer.
    """
    try:
        response = httpx.get(f"{rpc_url.rstrip('/')}/status", timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.debug(f"RPC {rpc_url} not ready: {e}")
        return None
    return payload.get("result", payload)


def latest_block_height(status: dict) -> int:
    """Latest block height from an RPC status payload (0 if absent)."""
    sync_info = status.get("sync_info") or {}
    try:
        return int(sync_info.get("latest_block_height", 0))
    except (TypeError, ValueError):
        return 0


def wait_for_rpc(
    rpc_url: str,
    timeout: float = 300.0,
    poll_interval: float = 2.0,
    sleep: Callable[[float], None] = time.sleep,
) -> dict:
    """Poll an RPC endpoint until it answers and has produced a block.

    Raises:
        ServiceUnreachableError: If it does not within ``timeout`` seconds.
    """
    started = time.monotonic()
    attempts = 0

    while True:
        attempts += 1
        status = rpc_status(rpc_url)
        if status is not None and latest_block_height(status) > 0:
            return status

        if time.monotonic() - started >= timeout:
            raise ServiceUnreachableError(
                f"{rpc_url} did not become ready within {timeout:.0f}s ({attempts} attempts)"
            )
        sleep(poll_interval)
