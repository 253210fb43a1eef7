#!/usr/bin/env python3
"""
VivadoRunner: programs a bitstream into the FPGA over JTAG.

The programming script is written to the temp directory, Vivado is run in
batch mode against it, and Vivado's output is scanned for an ``ERROR:``
line.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..cli.config import RunConfig
from ..exceptions import LaunchError, ToolchainError
from ..file_management.file_manager import FileManager
from ..log_config import get_logger
from ..shell import Shell
from ..string_utils import log_info_safe, safe_format

ERROR_MARKER = "ERROR:"

# Vivado always prints a banner, so anything shorter means it never started
MIN_OUTPUT_LINES = 3

BATCH_FLAGS = ("-nojournal", "-nolog", "-mode", "batch")


@dataclass
class ProgrammingOutcome:
    """Result of a programming attempt."""

    success: bool
    error_line: Optional[str] = None
    output: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.success


def first_token(line: str) -> str:
    """Return the text from column 0 up to the first whitespace character."""
    return re.match(r"\S*", line).group()


def find_error_line(lines: Iterable[str]) -> Optional[str]:
    """Return the first line whose first word is exactly ``ERROR:``."""
    for line in lines:
        if first_token(line) == ERROR_MARKER:
            return line
    return None


def analyze_output(lines: List[str]) -> ProgrammingOutcome:
    error_line = find_error_line(lines)
    if error_line is not None:
        return ProgrammingOutcome(False, error_line, lines)
    return ProgrammingOutcome(True, None, lines)


class VivadoRunner:
    """
    Runs the programming script through Vivado.

    Attributes:
        config: run configuration with the substituted programming script
        shell: subprocess runner
        files: writer for the script and result artifacts
        logger: attach a logger
    """

    def __init__(
        self,
        config: RunConfig,
        shell: Optional[Shell] = None,
        file_manager: Optional[FileManager] = None,
        logger: Optional[logging.Logger] = None,
        prefix: str = "VIVADO",
    ):
        self.logger: logging.Logger = logger or get_logger(self.__class__.__name__)
        self.config: RunConfig = config
        self.shell: Shell = shell or Shell(prefix=prefix)
        self.files: FileManager = file_manager or FileManager(config.tmp_dir)
        self.prefix: str = prefix

    def build_command(self, tcl_path: str) -> List[str]:
        return [self.config.vivado, *BATCH_FLAGS, "-source", tcl_path]

    def program(self) -> ProgrammingOutcome:
        """
        Program the bitstream.

        Raises:
            WriteError: If the Tcl script can't be written
            LaunchError: If Vivado produced too little output to have run
            ToolchainError: If Vivado reported an ``ERROR:`` line
        """
        tcl_path = self.files.write_script(self.config.programming_script)

        output = self.shell.run_lines(self.build_command(str(tcl_path)))
        if len(output) < MIN_OUTPUT_LINES:
            raise LaunchError(
                safe_format("Can't run {vivado}", vivado=self.config.vivado)
            )

        self.files.write_result(output)

        outcome = analyze_output(output)
        if not outcome:
            log_info_safe(
                self.logger,
                "Programming failed, see {path}",
                prefix=self.prefix,
                path=self.files.result_path,
            )
            raise ToolchainError(
                safe_format("Vivado reports '{line}'", line=outcome.error_line),
                line=outcome.error_line or "",
            )

        log_info_safe(
            self.logger,
            "Bitstream programmed ({count} lines of Vivado output)",
            prefix=self.prefix,
            count=len(output),
        )
        return outcome
