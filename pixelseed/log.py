"""
Logging setup for pixelseed.

Usage:
    import logging
    logger = logging.getLogger(__name__)

    logger.debug("Detailed debug info")
    logger.warning("Something unexpected")

Call setup_logging() once from the entry point. Diagnostics go to stderr so
operation output on stdout stays clean.
"""

import logging
import sys

LOGGER_NAME = "pixelseed"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(verbose=False, stream=None):
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False  # Don't pass to root logger

    # Replace rather than stack handlers when called twice (tests, demos)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger
