#!/usr/bin/env python3
"""Macro substitution for the programming script."""

import dataclasses
from typing import Iterable, Tuple

from ..cli.config import RunConfig
from ..exceptions import ConfigError
from ..log_config import get_logger
from ..string_utils import log_debug_safe

logger = get_logger(__name__)

FILE_MACRO = "%file%"


def substitute_macros(script: Iterable[str], bitstream: str) -> Tuple[str, ...]:
    """Replace the first ``%file%`` on each line with *bitstream*.

    Only the first occurrence per line is replaced; a line that names the
    macro twice keeps the second one verbatim.
    """
    return tuple(line.replace(FILE_MACRO, bitstream, 1) for line in script)


def apply_macros(config: RunConfig, bitstream: str) -> RunConfig:
    """Return a copy of *config* with the programming script substituted.

    Raises:
        ConfigError: If the resulting script is empty
    """
    script = substitute_macros(config.programming_script, bitstream)
    if not script:
        raise ConfigError("Programming script is empty")

    log_debug_safe(
        logger,
        "Substituted {macro} -> {bitstream} in {count} of {total} lines",
        prefix="MACRO",
        macro=FILE_MACRO,
        bitstream=bitstream,
        count=sum(FILE_MACRO in line for line in config.programming_script),
        total=len(script),
    )
    return dataclasses.replace(config, programming_script=script)
