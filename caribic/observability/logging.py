"""Logging setup for caribic.

All caribic modules log through the standard ``logging`` module under the
``caribic`` logger hierarchy. This module installs the handler and maps the
CLI ``--verbose`` level onto logging thresholds:

    ====  ========  ==========================================
    0     quiet     nothing is printed
    1     standard  progress messages and errors
    2     warning   adds warnings
    3     error     like warning, failures include tracebacks
    4     info      adds informational messages
    5     verbose   everything, including debug output
    ====  ========  ==========================================

Progress messages use the custom ``STATUS`` level, which sits between
WARNING and ERROR so that the standard verbosity shows them without the
noise of warnings.

Example:
    >>> configure_logging(verbosity=1)
    >>> log_status("✅ Relayer started successfully")
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

ROOT_LOGGER_NAME = "caribic"

STATUS = 35
logging.addLevelName(STATUS, "STATUS")

QUIET = logging.CRITICAL + 10

VERBOSITY_LEVELS: dict[int, int] = {
    0: QUIET,
    1: STATUS,
    2: logging.WARNING,
    3: logging.WARNING,
    4: logging.INFO,
    5: logging.DEBUG,
}

_verbosity = 1


class StructuredFormatter(logging.Formatter):
    """JSON formatter, one object per line.

    Enabled with ``CARIBIC_JSON_LOGS=true`` for machine consumption.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "level_num": record.levelno,
            "message": record.getMessage(),
            "logger": record.name,
        }

        if record.exc_info and record.exc_info[0] is not None:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(log_data, default=str, ensure_ascii=False)


class HumanReadableFormatter(logging.Formatter):
    """Console formatter.

    STATUS records are printed bare, the way an operator expects progress
    lines to look. Everything else gets a timestamp, a level and the
    logger name.
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "STATUS": "",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors and self._supports_color()

    @staticmethod
    def _supports_color() -> bool:
        if os.getenv("NO_COLOR"):
            return False
        if sys.platform == "win32":
            return os.environ.get("ANSICON") is not None or "WT_SESSION" in os.environ
        return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno == STATUS:
            base = record.getMessage()
        else:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
            if self.use_colors:
                color = self.COLORS.get(record.levelname, "")
                level = f"{color}{record.levelname:8}{self.RESET}"
            else:
                level = f"{record.levelname:8}"
            base = f"{timestamp} {level} [{record.name}] {record.getMessage()}"

        if record.exc_info:
            base += f"\n{self.formatException(record.exc_info)}"

        return base


def level_for_verbosity(verbosity: int) -> int:
    """Translate a CLI verbosity (0-5) into a logging level.

    Values outside the range are clamped.
    """
    clamped = max(0, min(5, verbosity))
    return VERBOSITY_LEVELS[clamped]


def configure_logging(
    verbosity: int = 1,
    json_format: bool | None = None,
    stream: Any | None = None,
) -> None:
    """Configure the ``caribic`` logger.

    Args:
        verbosity: CLI verbosity, 0 (quiet) to 5 (verbose).
        json_format: Emit JSON lines. If None, uses CARIBIC_JSON_LOGS env var.
        stream: Output stream (defaults to sys.stdout).
    """
    global _verbosity

    if json_format is None:
        json_format = os.environ.get("CARIBIC_JSON_LOGS", "false").lower() == "true"

    _verbosity = max(0, min(5, verbosity))
    level = level_for_verbosity(verbosity)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.propagate = False

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)

    formatter: logging.Formatter
    if json_format:
        formatter = StructuredFormatter()
    else:
        formatter = HumanReadableFormatter()

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def tracebacks_enabled() -> bool:
    """Whether failures should be logged with their traceback."""
    return _verbosity >= 3


def log_status(message: str, logger_name: str = ROOT_LOGGER_NAME) -> None:
    """Emit a progress message at STATUS level."""
    logging.getLogger(logger_name).log(STATUS, message)
