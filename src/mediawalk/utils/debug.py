"""Logging setup for mediawalk.

Modules log through ``logging.getLogger(__name__)`` and propagate to the
``mediawalk`` package logger configured here. Setting MEDIAWALK_DEBUG=1
turns on debug output without passing ``--verbose``.
"""

import logging
import os

DEBUG_ON = os.getenv("MEDIAWALK_DEBUG", "0") == "1"


def setup_logger(verbose: bool = False) -> logging.Logger:
    """Configure and return the ``mediawalk`` package logger.

    Args:
        verbose: Force DEBUG level even when MEDIAWALK_DEBUG is not set.
    """
    logger = logging.getLogger("mediawalk")
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("[%(levelname)s] %(asctime)s %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if (DEBUG_ON or verbose) else logging.INFO)
    return logger
