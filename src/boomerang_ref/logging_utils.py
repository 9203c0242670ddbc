"""Runtime logging helpers.

The package logs through loguru but stays silent when used as a library; the
CLI opts in via `configure_logging`.
"""

from __future__ import annotations

import os
import sys

from loguru import logger

PACKAGE = "boomerang_ref"
LOG_FILTER_ENV = "BOOMERANG_LOG_FILTER"

_FORMAT = "{time:HH:mm:ss.SSS} | {level:<7} | {name}:{function}:{line} | {message}"
_CONFIGURED = False

logger.disable(PACKAGE)

def _parse_log_level() -> str:
    """Read BOOMERANG_LOG_FILTER, e.g. "debug" or "info"; defaults to warning."""
    raw = os.getenv(LOG_FILTER_ENV, "warning").strip()
    return (raw or "warning").upper()

def configure_logging() -> None:
    """Install a single stderr sink once and enable package logs."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    logger.remove()
    logger.add(
        sys.stderr,
        level=_parse_log_level(),
        format=_FORMAT,
        backtrace=False,
        diagnose=False,
    )
    logger.enable(PACKAGE)

    _CONFIGURED = True
