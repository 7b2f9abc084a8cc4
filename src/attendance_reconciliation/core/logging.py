"""Package logging helpers.

Every module logs under the ``attendance_reconciliation`` namespace so the
host application can route engine output with a single logger config.
"""

from __future__ import annotations

import logging
import sys

_LOGGER_PREFIX = "attendance_reconciliation"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the attendance_reconciliation namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Install one stream handler on the package root logger.

    Safe to call more than once: an existing handler is reused.
    """
    root = logging.getLogger(_LOGGER_PREFIX)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
    return root
