"""Logging for caribic."""

from caribic.observability.logging import (
    QUIET,
    ROOT_LOGGER_NAME,
    STATUS,
    HumanReadableFormatter,
    StructuredFormatter,
    configure_logging,
    level_for_verbosity,
    log_status,
    tracebacks_enabled,
)

__all__ = [
    "QUIET",
    "ROOT_LOGGER_NAME",
    "STATUS",
    "HumanReadableFormatter",
    "StructuredFormatter",
    "configure_logging",
    "level_for_verbosity",
    "log_status",
    "tracebacks_enabled",
]
