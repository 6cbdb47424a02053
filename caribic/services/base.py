"""Compose-backed service launcher shared by the simple services."""

from __future__ import annotations

import logging
from pathlib import Path

from caribic.errors import CaribicError
from caribic.infra import ComposeProject

logger = logging.getLogger(__name__)


class ComposeService:
    """A service that is just a compose project: ``up`` to start, ``down`` to stop.

    Args:
        name: Display name used in logs and errors.
        profiles: Compose profiles activated on start.
    """

    def __init__(self, name: str, profiles: list[str] | None = None) -> None:
        self.name = name
        self.profiles = profiles or []

    def project(self, path: Path) -> ComposeProject:
        return ComposeProject(path, profiles=self.profiles)

    def start(self, path: Path) -> ComposeProject:
        project = self.project(path)
        if not project.exists:
            raise CaribicError(f"No compose file for {self.name} in {path}")
        logger.info(f"Starting {self.name} in {path}")
        project.up()
        return project

    def stop(self, path: Path) -> None:
        logger.info(f"Stopping {self.name} in {path}")
        self.project(path).down()
