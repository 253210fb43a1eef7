#!/usr/bin/env python3
"""Subprocess runner that captures output as a list of lines."""

import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .log_config import get_logger
from .string_utils import log_debug_safe, log_info_safe

logger = get_logger(__name__)

Command = Union[str, Sequence[str]]


def _describe(cmd: Command) -> str:
    return cmd if isinstance(cmd, str) else " ".join(str(c) for c in cmd)


class Shell:
    """Runs external commands and hands their output back line by line."""

    def __init__(self, prefix: str = "SHELL"):
        self.prefix = prefix

    def run_lines(
        self, cmd: Command, cwd: Optional[Union[str, Path]] = None
    ) -> List[str]:
        """Run *cmd* and return its combined stdout/stderr, one entry per line.

        A string is run through the shell; a sequence is executed directly.
        stderr is merged into stdout so lines keep the order the child
        produced them in. The call blocks until the child exits.

        If the command can't be started at all, an empty list is returned;
        callers decide what too little output means.
        """
        log_info_safe(logger, "Running: {cmd}", prefix=self.prefix, cmd=_describe(cmd))

        try:
            process = subprocess.Popen(
                cmd,
                shell=isinstance(cmd, str),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                cwd=cwd,
            )
        except OSError as e:
            log_info_safe(
                logger,
                "Could not start {cmd}: {error}",
                prefix=self.prefix,
                cmd=_describe(cmd),
                error=e,
            )
            return []

        lines: List[str] = []
        with process:
            for raw in process.stdout:
                line = raw.rstrip("\r\n")
                log_debug_safe(logger, "{line}", prefix=self.prefix, line=line)
                lines.append(line)

        log_debug_safe(
            logger,
            "{cmd} exited with {code} after {count} lines",
            prefix=self.prefix,
            cmd=_describe(cmd),
            code=process.returncode,
            count=len(lines),
        )
        return lines
