"""Blocking readiness gate for Mithril genesis certification.

Mithril can only certify a genesis once the Cardano node has written
immutable ledger files for the epoch that was current when Mithril
started. The waiter polls two probes until both agree:

- the chain tip epoch is at or beyond the target epoch
- the immutable database directory holds at least one chunk file
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

from caribic.errors import WaitTimeoutError

logger = logging.getLogger(__name__)


def count_immutable_files(immutable_dir: Path) -> int:
    """Number of immutable chunk files written by the Cardano node."""
    if not immutable_dir.is_dir():
        return 0
    return sum(1 for _ in immutable_dir.glob("*.chunk"))


class ReadinessWaiter:
    """Polls until the Cardano ledger reaches a target epoch.

    Args:
        epoch_probe: Returns the current chain tip epoch. May raise while
            the node is still busy; that counts as "not yet".
        immutable_dir: Directory the node writes immutable chunks to.
        timeout: Seconds to wait before giving up.
        poll_interval: Seconds between polls.
        clock: Monotonic clock, replaceable in tests.
        sleep: Sleep function, replaceable in tests.
    """

    def __init__(
        self,
        epoch_probe: Callable[[], int],
        immutable_dir: Path,
        timeout: float = 1200.0,
        poll_interval: float = 10.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.epoch_probe = epoch_probe
        self.immutable_dir = immutable_dir
        self.timeout = timeout
        self.poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep

    def _observe_epoch(self) -> int | None:
        try:
            return self.epoch_probe()
        except Exception as e:
            logger.debug(f"Epoch probe failed, retrying: {e}")
            return None

    def wait_for_epoch(self, target_epoch: int) -> int:
        """Block until the target epoch is reached and immutable files exist.

        Returns:
            The epoch observed when the condition held.

        Raises:
            WaitTimeoutError: If the condition does not hold within the timeout.
        """
        started = self._clock()
        attempts = 0
        last_epoch: int | None = None

        while True:
            attempts += 1
            epoch = self._observe_epoch()
            if epoch is not None:
                last_epoch = epoch
            files = count_immutable_files(self.immutable_dir)

            if epoch is not None and epoch >= target_epoch and files > 0:
                logger.info(f"Cardano epoch {epoch} reached with {files} immutable file(s)")
                return epoch

            elapsed = self._clock() - started
            if elapsed >= self.timeout:
                raise WaitTimeoutError(
                    condition_description=(
                        f"immutable Cardano files for epoch >= {target_epoch} in {self.immutable_dir}"
                    ),
                    timeout_seconds=self.timeout,
                    elapsed_seconds=elapsed,
                    poll_attempts=attempts,
                    last_value=last_epoch,
                    expected_value=target_epoch,
                )

            logger.debug(
                f"Waiting for epoch {target_epoch} (current: {epoch}, immutable files: {files})"
            )
            self._sleep(self.poll_interval)
