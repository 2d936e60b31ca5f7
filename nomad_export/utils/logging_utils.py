"""Logging setup for the nomad-export CLI.

Modules use the standard pattern:

    import logging
    logger = logging.getLogger(__name__)

and setup_logging() attaches a single stderr handler to the package logger,
so log lines never end up in an export written to stdout.
"""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "nomad_export"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def level_for_flags(verbose: bool, silent: bool) -> Optional[int]:
    """Map the CLI flags to a log level; None means logging is off."""
    if silent:
        return None
    return logging.DEBUG if verbose else logging.INFO


def setup_logging(level: Optional[int] = logging.INFO) -> logging.Logger:
    """Configure the package logger and return it.

    Calling it again replaces the previous handler instead of stacking another.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)

    for existing in list(logger.handlers):
        if getattr(existing, "_nomad_export", False):
            logger.removeHandler(existing)

    if level is None:
        handler: logging.Handler = logging.NullHandler()
        level = logging.CRITICAL + 1
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    handler._nomad_export = True  # type: ignore[attr-defined]
    handler.setLevel(level)

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    return logger
