#!/usr/bin/env python3
"""
File Management Package

Modules:
- config_file: Reads key/value settings and named script blocks
- file_manager: Writes the script and result artifacts in the temp directory
"""

from .config_file import ConfigFile
from .file_manager import RESULT_FILENAME, SCRIPT_FILENAME, FileManager, write_lines

__all__ = [
    "ConfigFile",
    "FileManager",
    "RESULT_FILENAME",
    "SCRIPT_FILENAME",
    "write_lines",
]
