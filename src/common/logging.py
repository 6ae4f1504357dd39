"""
Logging setup for the API process and the maintenance scripts.
Modules log through `logging.getLogger(__name__)`; this installs the root handler once.
"""

from __future__ import annotations

import logging

from src.common.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
QUIET_LOGGERS = ("urllib3", "google.auth", "gspread")

_configured = False


def configure_logging(level: str | None = None) -> None:
    """Install the root handler at `level`, or at LOG_LEVEL from the environment when omitted."""

    global _configured
    if _configured:
        return

    level_name = (level or get_settings().LOG_LEVEL).upper()
    logging.basicConfig(level=logging.getLevelName(level_name), format=LOG_FORMAT)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    _configured = True
