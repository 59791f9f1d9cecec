"""
utils/logger.py
---------------
Logging setup for the fitfam modules.

Every module calls `get_logger(__name__)`; the loggers it returns live under
the ``fitfam`` namespace, which owns a single stderr handler at LOG_LEVEL.
The root logger is left alone so an embedding application keeps control of
its own output. Set LOG_LEVEL=DEBUG to see every statement sent to
PostgreSQL.
"""

import logging
import sys

from config import ENV, LOG_LEVEL

NAMESPACE = "fitfam"

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | " + ENV + " | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _configure(base: logging.Logger) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    base.addHandler(handler)
    base.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    base.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Usually ``__name__`` of the calling module, e.g.
            ``repositories.user_repo``.

    Returns:
        The ``fitfam.<name>`` logger.
    """
    base = logging.getLogger(NAMESPACE)
    if not base.handlers:
        _configure(base)
    return base.getChild(name)
