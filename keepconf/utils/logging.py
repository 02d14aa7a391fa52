"""Logging configuration for keepconf.

File logging is opt-in and controlled through environment variables:

    KEEPCONF_LOG       Enable logging to a file ("true", "1" or "yes")
    KEEPCONF_LOG_FILE  Log file location (default: ~/.keepconf.log)

Library modules log through ``logging.getLogger(__name__)``; those loggers
are children of the "keepconf" logger configured here.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_ENABLED = os.environ.get("KEEPCONF_LOG", "false").lower() in ("true", "1", "yes")
LOG_FILE = Path(os.environ.get("KEEPCONF_LOG_FILE", str(Path.home() / ".keepconf.log")))
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging() -> logging.Logger:
    """Configure and return the package logger.

    Attaches a FileHandler when KEEPCONF_LOG is enabled, otherwise a
    NullHandler so library users never see "no handler" warnings.
    """
    logger = logging.getLogger("keepconf")
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()

    if LOG_ENABLED:
        LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(LOG_FILE, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.setLevel(logging.DEBUG)
    else:
        handler = logging.NullHandler()

    logger.addHandler(handler)
    return logger
