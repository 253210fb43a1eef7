#!/usr/bin/env python3
"""PCI hot reset via sysfs.

After the FPGA is reprogrammed its configuration space may look nothing like
what the kernel enumerated at boot. The device is removed from the PCI tree
and its parent bus is rescanned so the kernel discovers it again.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Union

from ..exceptions import ConfigError, DeviceNotFoundError, HotResetError
from ..log_config import get_logger
from ..string_utils import log_debug_safe, log_info_safe, safe_format

logger = get_logger(__name__)

SYSFS_PCI_ROOT = "/sys/bus/pci"

BDF_PATTERN = re.compile(r"^[0-9a-fA-F]{4}:[0-9a-fA-F]{2}:[0-9a-fA-F]{2}\.[0-7]$")
DEVICE_ID_PATTERN = re.compile(
    r"^(?:0x)?([0-9a-fA-F]{1,4}):(?:0x)?([0-9a-fA-F]{1,4})$"
)


@dataclass(frozen=True)
class PciDeviceId:
    vendor: int
    device: int

    def __str__(self) -> str:
        return f"{self.vendor:04x}:{self.device:04x}"


def parse_device_id(text: str) -> PciDeviceId:
    """Parse ``vendor:device`` hex ids, e.g. ``10ee:903f`` or ``0x10ee:0x903f``."""
    match = DEVICE_ID_PATTERN.match(text.strip())
    if not match:
        raise ConfigError(
            safe_format(
                "Invalid PCI device '{text}'. Expected vendor:device in hex.",
                text=text,
            )
        )
    return PciDeviceId(int(match.group(1), 16), int(match.group(2), 16))


def _read_hex(path: Path) -> int:
    return int(path.read_text().strip(), 16)


class PciHotReset:
    """Removes matching PCI devices and rescans their parent buses."""

    def __init__(self, sysfs_root: Union[str, Path] = SYSFS_PCI_ROOT):
        self.sysfs_root = Path(sysfs_root)
        self.devices_dir = self.sysfs_root / "devices"

    def find_devices(self, device_id: PciDeviceId) -> List[str]:
        """Return the BDFs of attached devices with the given vendor:device."""
        matches: List[str] = []
        if not self.devices_dir.is_dir():
            log_info_safe(
                logger,
                "No PCI device directory at {path}",
                prefix="HOTRESET",
                path=self.devices_dir,
            )
            return matches

        for entry in sorted(self.devices_dir.iterdir()):
            try:
                vendor = _read_hex(entry / "vendor")
                device = _read_hex(entry / "device")
            except (OSError, ValueError):
                # Device vanished mid-scan or has unreadable ids
                continue
            if (vendor, device) == (device_id.vendor, device_id.device):
                matches.append(entry.name)

        log_debug_safe(
            logger,
            "Found {count} device(s) matching {id}: {bdfs}",
            prefix="HOTRESET",
            count=len(matches),
            id=device_id,
            bdfs=", ".join(matches) or "none",
        )
        return matches

    def parent_rescan_file(self, bdf: str) -> Path:
        """Return the rescan control file for the bus *bdf* sits on.

        This must be resolved before the device is removed, since its sysfs
        node disappears with it.
        """
        parent = (self.devices_dir / bdf).resolve().parent
        if BDF_PATTERN.match(parent.name) and (parent / "rescan").exists():
            return parent / "rescan"
        return self.sysfs_root / "rescan"

    def _write_control(self, path: Path, what: str) -> None:
        try:
            path.write_text("1\n")
        except OSError as e:
            raise HotResetError(
                safe_format("Can't {what} via {path}: {error}", what=what, path=path, error=e)
            ) from e

    def hot_reset(self, device: Union[str, PciDeviceId]) -> List[str]:
        """
        Force the kernel to forget and rediscover every device matching
        *device*.

        The sequence is fire-and-forget; nothing checks that the device comes
        back.

        Returns:
            The BDFs that were reset

        Raises:
            ConfigError: If *device* isn't a vendor:device pair
            DeviceNotFoundError: If no attached device matches
            HotResetError: If a sysfs control file can't be written
        """
        device_id = device if isinstance(device, PciDeviceId) else parse_device_id(device)

        bdfs = self.find_devices(device_id)
        if not bdfs:
            raise DeviceNotFoundError(
                safe_format("No PCI device matching {id} found", id=device_id)
            )

        targets: List[Tuple[str, Path]] = [
            (bdf, self.parent_rescan_file(bdf)) for bdf in bdfs
        ]

        for bdf, _ in targets:
            log_info_safe(logger, "Removing {bdf}", prefix="HOTRESET", bdf=bdf)
            self._write_control(self.devices_dir / bdf / "remove", "remove " + bdf)

        rescanned: List[Path] = []
        for _, rescan in targets:
            if rescan in rescanned:
                continue
            log_info_safe(logger, "Rescanning via {path}", prefix="HOTRESET", path=rescan)
            self._write_control(rescan, "rescan bus")
            rescanned.append(rescan)

        return bdfs
