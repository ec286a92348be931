"""Logging setup for the marker reader command line."""

import logging
import sys
from typing import Optional


def setup_logger(name: str = "marker_reader", level: str = "WARNING",
                 format_string: Optional[str] = None) -> logging.Logger:
    """
    Configure a logger that writes to stderr.

    stdout stays free for raster output (``-o``), so diagnostics never
    share a stream with image data.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.handlers.clear()

    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logger.setLevel(numeric_level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)

    if format_string is None:
        if level.upper() == "DEBUG":
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"
    handler.setFormatter(logging.Formatter(format_string))

    logger.addHandler(handler)
    logger.propagate = False
    return logger
