from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(levelname)5s %(name)s: %(message)s"


def init_logging(debug: bool = False) -> None:
    """Send ``bfrun`` log records to stderr.

    Only the package logger is configured; the root logger is left alone
    so embedding applications keep control of their own handlers.
    """
    logger = logging.getLogger("bfrun")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.propagate = False
