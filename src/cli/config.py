#!/usr/bin/env python3
"""Run configuration for the bitstream loader."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple, Union

from ..exceptions import ConfigError
from ..file_management.config_file import ConfigFile
from ..log_config import get_logger
from ..string_utils import log_info_safe, safe_format

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = "load_bitstream.conf"

# config key -> role used in error messages
REQUIRED_KEYS = (
    ("tmp_dir", "temporary directory"),
    ("vivado", "Vivado executable"),
)
PCI_DEVICE_KEY = ("pci_device", "PCI device")
SCRIPT_KEY = ("programming_script", "programming script")


@dataclass(frozen=True)
class RunConfig:
    """Settings read once at startup and passed to every step."""

    tmp_dir: str
    vivado: str
    pci_device: str = ""
    programming_script: Tuple[str, ...] = field(default_factory=tuple)


def _missing(key: str, role: str, filename: Union[str, Path]) -> ConfigError:
    return ConfigError(
        safe_format(
            "{filename}: no {role} configured (key '{key}')",
            filename=filename,
            role=role,
            key=key,
        )
    )


def load_run_config(filename: Union[str, Path], hot_reset: bool = False) -> RunConfig:
    """Read *filename* into a :class:`RunConfig`.

    ``pci_device`` is only required when *hot_reset* is set; otherwise it is
    left empty.

    Raises:
        ConfigError: If the file can't be read or a required key is missing
    """
    cf = ConfigFile().read(filename)

    values = {}
    for key, role in REQUIRED_KEYS:
        value = cf.get(key, "")
        if not value:
            raise _missing(key, role, filename)
        values[key] = value

    pci_device = ""
    if hot_reset:
        key, role = PCI_DEVICE_KEY
        pci_device = cf.get(key, "") or ""
        if not pci_device:
            raise _missing(key, role, filename)

    key, role = SCRIPT_KEY
    script = cf.get_script(key)
    if not script:
        raise _missing(key, role, filename)

    config = RunConfig(
        tmp_dir=values["tmp_dir"],
        vivado=values["vivado"],
        pci_device=pci_device,
        programming_script=tuple(script),
    )
    log_info_safe(
        logger,
        "Loaded {filename}: vivado={vivado}, tmp_dir={tmp_dir}, {lines} script lines",
        prefix="CONFIG",
        filename=filename,
        vivado=config.vivado,
        tmp_dir=config.tmp_dir,
        lines=len(config.programming_script),
    )
    return config
