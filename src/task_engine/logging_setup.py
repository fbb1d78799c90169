"""Logging configuration for the command line entrypoint."""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "task_engine"


def setup_logging(level: int = logging.WARNING) -> None:
    """Route ``task_engine`` logs to stderr at ``level``.

    Only the package logger is touched; root handlers installed by the host are left alone.
    Library code never calls this.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    # Replace the handler from a previous call instead of stacking another one.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ),
    )
    logger.addHandler(handler)
