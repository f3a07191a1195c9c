"""Logging setup for the MK8 build optimizer entry points.

Library modules only create loggers; handlers are installed here, once,
by ``main.py``, the dashboard and the scripts.
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure root logging.

    Args:
        level: Log level name.  Defaults to ``MK8_LOG_LEVEL`` or ``INFO``.
    """
    level_name = (level or os.environ.get("MK8_LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )
    # urllib3 logs every connection at DEBUG.
    logging.getLogger("urllib3").setLevel(logging.WARNING)
