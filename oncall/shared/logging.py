"""
Logging setup for apps hosting callable endpoints.

The package logs through ``oncall.*`` loggers only and is silent until the
host configures logging, either with its own setup or with
``configure_logging`` below.
Never logs request bodies, ID tokens or handler results.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

PACKAGE_LOGGER = "oncall"
QUIET_LOGGERS = ("uvicorn.access", "uvicorn.error")


def _to_level(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


def configure_logging(level: str = "INFO", package_level: Optional[str] = None) -> None:
    """Send log records to stdout in the standard format.

    Args:
        level: Root log level (DEBUG, INFO, WARNING, ERROR).
        package_level: Separate level for the ``oncall`` loggers, e.g.
            "DEBUG" to trace token verification only. Follows ``level``
            when omitted.
    """
    logging.basicConfig(
        level=_to_level(level),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    logging.getLogger(PACKAGE_LOGGER).setLevel(
        _to_level(package_level) if package_level else logging.NOTSET
    )

    # Suppress per-request server noise
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
