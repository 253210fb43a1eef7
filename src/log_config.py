#!/usr/bin/env python3
"""Centralized logging setup for the bitstream loader."""

import logging
import sys
from typing import Optional, TextIO


def setup_logging(
    level: int = logging.WARNING, stream: Optional[TextIO] = None
) -> None:
    """Setup console logging.

    Args:
        level: Logging level (default: WARNING, so a successful run is silent)
        stream: Output stream (default: stderr)

    Note:
        Console output uses a minimal formatter since string_utils.py handles
        timestamp/level formatting. Stdout is left alone so the program has
        no output on success.
    """
    # Clear any existing handlers to avoid conflicts
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
