from __future__ import annotations

"""Central logging configuration using loguru."""

import os
import sys

from loguru import logger


def init_logging(debug: bool | None = None):
    """Configure the loguru logger.

    The level is DEBUG when ``debug`` is true or, if ``debug`` is not given,
    when the ``COMPLIANCE_DEBUG`` environment variable is ``"1"``.
    """
    if debug is None:
        debug = os.getenv("COMPLIANCE_DEBUG") == "1"
    logger.remove()
    logger.add(
        sys.stderr, level="DEBUG" if debug else "INFO", backtrace=True, diagnose=debug
    )
    return logger


__all__ = ["init_logging", "logger"]
