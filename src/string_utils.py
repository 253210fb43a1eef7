#!/usr/bin/env python3
"""
String utilities for safe formatting and logging.

Every log line in the loader goes through these helpers so that messages
share the same short timestamp, padded level column and ``[PREFIX]`` tag.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Optional


@dataclass
class FormatConfig:
    """Runtime configuration controlling formatting behavior."""

    timestamp_format: str = "%H:%M:%S"
    log_padding_width: int = 7

    _instance: ClassVar[Optional["FormatConfig"]] = None

    @classmethod
    def get_instance(cls) -> "FormatConfig":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance


def safe_format(template: str, prefix: Optional[str] = None, **kwargs: Any) -> str:
    """
    Safely format a string template with the given keyword arguments.

    A missing key never raises; the placeholder is replaced with
    ``<MISSING:key>`` instead, so an error message can always be built.

    Args:
        template: The string template with {variable} placeholders
        prefix: Optional prefix to add to the formatted message
        **kwargs: Keyword arguments to substitute in the template

    Returns:
        The formatted string with all placeholders replaced

    Example:
        >>> safe_format("Can't write {path}", path="/tmp/load_bitstream.tcl")
        "Can't write /tmp/load_bitstream.tcl"

        >>> safe_format("Removing {bdf}", prefix="HOTRESET", bdf="0000:01:00.0")
        '[HOTRESET] Removing 0000:01:00.0'
    """
    try:
        formatted_message = template.format(**kwargs)
    except KeyError as e:
        missing_key = str(e).strip("'\"")
        logging.getLogger(__name__).warning(
            "Missing key '%s' in string template", missing_key
        )
        pattern = re.compile(rf"\{{{re.escape(missing_key)}(:[^}}]+)?\}}")
        formatted_message = pattern.sub(f"<MISSING:{missing_key}>", template)
    except (ValueError, IndexError) as e:
        logging.getLogger(__name__).error("Format error in string template: %s", e)
        formatted_message = template

    if prefix:
        return f"[{prefix}] {formatted_message}"
    return formatted_message


def get_short_timestamp() -> str:
    """
    Get a short timestamp string for logging.

    Example:
        >>> get_short_timestamp()
        '14:23:45'
    """
    fmt = FormatConfig.get_instance().timestamp_format
    return datetime.now().strftime(fmt)


def format_padded_message(message: str, log_level: str) -> str:
    """
    Format a message with padding based on log level.

    Example:
        >>> format_padded_message("Vivado finished", "INFO")
        '  14:23:45 │  INFO  │ Vivado finished'
    """
    timestamp = get_short_timestamp()
    config = FormatConfig.get_instance()

    level_defaults = {
        "INFO": " INFO  ",
        "WARNING": "WARNING",
        "DEBUG": " DEBUG ",
        "ERROR": "ERROR  ",
        "CRITICAL": "CRITCL",
    }

    level_segment = level_defaults.get(log_level, log_level)
    if len(level_segment) < config.log_padding_width:
        level_segment = level_segment.ljust(config.log_padding_width)
    else:
        level_segment = level_segment[: config.log_padding_width]

    return f"  {timestamp} │ {level_segment}│ {message}"


def safe_log_format(
    logger: logging.Logger,
    log_level: int,
    template: str,
    prefix: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """
    Safely log a formatted message with padding and short timestamps.

    Args:
        logger: The logger instance to use
        log_level: The logging level (e.g., logging.INFO, logging.ERROR)
        template: The string template with {variable} placeholders
        prefix: Optional prefix to add to the log message (e.g., "VIVADO")
        **kwargs: Keyword arguments to substitute in the template
    """
    if not logger.isEnabledFor(log_level):
        return

    formatted_message = safe_format(template, prefix=prefix, **kwargs)
    padded_message = format_padded_message(
        formatted_message, logging.getLevelName(log_level)
    )
    # Call the specific logger method so mocks like mock_logger.info are
    # invoked during tests.
    if log_level == logging.INFO:
        logger.info(padded_message)
    elif log_level == logging.WARNING:
        logger.warning(padded_message)
    elif log_level == logging.DEBUG:
        logger.debug(padded_message)
    elif log_level == logging.ERROR:
        logger.error(padded_message)
    else:
        logger.log(log_level, padded_message)


def log_info_safe(
    logger: logging.Logger,
    template: str,
    prefix: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """Convenience function for safe INFO level logging."""
    safe_log_format(logger, logging.INFO, template, prefix=prefix, **kwargs)


def log_debug_safe(
    logger: logging.Logger,
    template: str,
    prefix: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """Convenience function for safe DEBUG level logging."""
    safe_log_format(logger, logging.DEBUG, template, prefix=prefix, **kwargs)
