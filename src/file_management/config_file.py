#!/usr/bin/env python3
"""
Configuration file reader.

The format is line oriented::

    # comment
    tmp_dir = /tmp
    vivado  = "/tools/Xilinx/Vivado/2023.1/bin/vivado"

    programming_script
    {
        open_hw_manager
        program_hw_devices -file %file%
    }

Plain entries are ``key = value``. A named script is the block name on its
own line followed by a brace-delimited list of lines.
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..exceptions import ConfigError
from ..string_utils import log_debug_safe, safe_format

logger = logging.getLogger(__name__)

COMMENT_MARKERS = ("#", "//")

BRACE_RE = re.compile(r"(?<!\\)[{}]")


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


class ConfigFile:
    """Key/value settings plus named multi-line scripts."""

    def __init__(self) -> None:
        self.values: Dict[str, str] = {}
        self.scripts: Dict[str, List[str]] = {}

    def read(self, filename: Union[str, Path]) -> "ConfigFile":
        """Read and parse *filename*.

        Raises:
            ConfigError: If the file cannot be opened, read or parsed
        """
        try:
            with open(filename, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(
                safe_format("Cant read file {filename}", filename=filename)
            ) from e

        self.parse(text, source=str(filename))
        log_debug_safe(
            logger,
            "Read {keys} keys and {scripts} scripts from {filename}",
            prefix="CONFIG",
            keys=len(self.values),
            scripts=len(self.scripts),
            filename=filename,
        )
        return self

    def parse(self, text: str, source: str = "<string>") -> None:
        lines = text.splitlines()
        idx = 0
        while idx < len(lines):
            line = lines[idx].strip()
            idx += 1

            if not line or line.startswith(COMMENT_MARKERS):
                continue

            if "=" in line:
                key, _, value = line.partition("=")
                self.values[key.strip()] = _strip_quotes(value.strip())
                continue

            # Anything else opens a script block: "name" then "{", or "name {"
            name = line
            if name.endswith("{"):
                name = name[:-1].strip()
            else:
                while idx < len(lines) and not lines[idx].strip():
                    idx += 1
                if idx >= len(lines) or lines[idx].strip() != "{":
                    raise ConfigError(
                        safe_format(
                            "{source}: expected '{{' after '{name}'",
                            source=source,
                            name=name,
                        )
                    )
                idx += 1

            body, idx = self._read_block(lines, idx, name, source)
            self.scripts[name] = body

    @staticmethod
    def _read_block(
        lines: List[str], idx: int, name: str, source: str
    ) -> Tuple[List[str], int]:
        body: List[str] = []
        depth = 1
        while idx < len(lines):
            line = lines[idx].strip()
            idx += 1
            if line == "}" and depth <= 1:
                return body, idx
            # Tcl bodies nest braces; only the matching "}" ends the block
            for brace in BRACE_RE.findall(line):
                depth += 1 if brace == "{" else -1
            if line:
                body.append(line)
        raise ConfigError(
            safe_format(
                "{source}: script '{name}' has no closing '}}'",
                source=source,
                name=name,
            )
        )

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.values.get(key, default)

    def get_script(self, name: str) -> Optional[List[str]]:
        script = self.scripts.get(name)
        return list(script) if script is not None else None
