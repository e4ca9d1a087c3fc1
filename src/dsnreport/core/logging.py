"""Package-wide logging setup.

All modules log through ``logging.getLogger(__name__)``; the handlers live on
the ``dsnreport`` root logger so embedding applications keep control of
everything else.
"""

from __future__ import annotations

import logging

ROOT_LOGGER = "dsnreport"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def configure_logging(level: str = "INFO", *, console: bool = True) -> logging.Logger:
    """Configure the ``dsnreport`` logger once. Later calls only adjust the level."""
    global _configured

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if _configured:
        return logger

    if console:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)

    _configured = True
    return logger
