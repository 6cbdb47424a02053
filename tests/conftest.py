"""Pytest fixtures for caribic tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from caribic.config import MithrilConfig, ProjectConfig
from caribic.observability import ROOT_LOGGER_NAME
from tests.fakes import RecordingServices


@pytest.fixture
def services() -> RecordingServices:
    return RecordingServices()


@pytest.fixture
def mithril_config(tmp_path: Path) -> ProjectConfig:
    return ProjectConfig(project_root=tmp_path, mithril=MithrilConfig(enabled=True))


@pytest.fixture
def no_mithril_config(tmp_path: Path) -> ProjectConfig:
    return ProjectConfig(project_root=tmp_path, mithril=MithrilConfig(enabled=False))


@pytest.fixture(autouse=True)
def reset_caribic_logger():
    """Undo configure_logging so caplog sees caribic records."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
