#!/usr/bin/env python3
"""
File Management Module

Writes the two artifacts the loader leaves in the temp directory: the
substituted Tcl script handed to Vivado, and Vivado's captured output.
"""

import logging
from pathlib import Path
from typing import Iterable, Union

from ..exceptions import WriteError
from ..string_utils import log_debug_safe, log_info_safe, safe_format

logger = logging.getLogger(__name__)

SCRIPT_FILENAME = "load_bitstream.tcl"
RESULT_FILENAME = "load_bitstream.result"


def write_lines(lines: Iterable[str], path: Union[str, Path]) -> None:
    """Write *lines* to *path*, one per line, replacing any existing file."""
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")


class FileManager:
    """Manages the artifacts written to the configured temp directory."""

    def __init__(self, tmp_dir: Union[str, Path]):
        self.tmp_dir = Path(tmp_dir)

    @property
    def script_path(self) -> Path:
        return self.tmp_dir / SCRIPT_FILENAME

    @property
    def result_path(self) -> Path:
        return self.tmp_dir / RESULT_FILENAME

    def write_script(self, lines: Iterable[str]) -> Path:
        """
        Write the programming script for Vivado.

        Returns:
            Path to the written script

        Raises:
            WriteError: If the script file can't be created
        """
        path = self.script_path
        try:
            write_lines(lines, path)
        except OSError as e:
            raise WriteError(safe_format("Can't write {path}", path=path)) from e

        log_debug_safe(logger, "Wrote script {path}", prefix="FILEMGR", path=path)
        return path

    def write_result(self, lines: Iterable[str]) -> bool:
        """
        Save Vivado's output for later inspection.

        A failure here is logged and otherwise ignored.

        Returns:
            True if the file was written
        """
        path = self.result_path
        try:
            write_lines(lines, path)
        except OSError as e:
            log_info_safe(
                logger,
                "Could not save Vivado output to {path}: {error}",
                prefix="FILEMGR",
                path=path,
                error=e,
            )
            return False

        log_debug_safe(logger, "Wrote result {path}", prefix="FILEMGR", path=path)
        return True
