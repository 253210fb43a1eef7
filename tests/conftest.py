#!/usr/bin/env python3
"""Shared fixtures: a shell-script stand-in for Vivado and a fake sysfs tree."""

import os
import stat
import textwrap
from pathlib import Path

import pytest

XILINX_VENDOR = "0x10ee"
FPGA_DEVICE = "0x903f"


@pytest.fixture
def make_vivado_stub(tmp_path):
    """Return a factory that writes an executable script echoing *lines*."""

    def _make(lines, name="vivado"):
        body = "\n".join(
            "printf '%s\\n' " + "'" + line.replace("'", "'\\''") + "'"
            for line in lines
        )
        stub = tmp_path / "bin" / name
        stub.parent.mkdir(parents=True, exist_ok=True)
        stub.write_text("#!/bin/sh\n" + body + "\n")
        stub.chmod(stub.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return stub

    return _make


@pytest.fixture
def vivado_banner():
    return [
        "",
        "****** Vivado v2023.1 (64-bit)",
        "  **** SW Build 3865809 on Sun May  7 15:04:56 MDT 2023",
        "INFO: [Labtools 27-2285] Connecting to hw_server url TCP:localhost:3121",
        "INFO: [Labtools 27-3164] End of startup status: HIGH",
        "INFO: [Common 17-206] Exiting Vivado at Mon Oct 14 10:02:11 2024...",
    ]


@pytest.fixture
def write_config(tmp_path):
    """Return a factory that writes a config file and returns its path."""

    def _write(text, name="load_bitstream.conf"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(text))
        return path

    return _write


def _add_pci_function(parent: Path, bdf: str, vendor: str, device: str) -> Path:
    node = parent / bdf
    node.mkdir(parents=True)
    (node / "vendor").write_text(vendor + "\n")
    (node / "device").write_text(device + "\n")
    (node / "remove").write_text("")
    return node


@pytest.fixture
def fake_sysfs(tmp_path):
    """Build a minimal /sys layout.

    Returns the path standing in for /sys/bus/pci. The FPGA (10ee:903f) sits
    behind root port 0000:00:01.0; a second function (8086:1533) sits
    directly on the root bus.
    """
    devices_root = tmp_path / "sys" / "devices" / "pci0000:00"
    bus_pci = tmp_path / "sys" / "bus" / "pci"
    (bus_pci / "devices").mkdir(parents=True)
    (bus_pci / "rescan").write_text("")

    bridge = _add_pci_function(devices_root, "0000:00:01.0", "0x8086", "0x1901")
    (bridge / "rescan").write_text("")
    fpga = _add_pci_function(bridge, "0000:01:00.0", XILINX_VENDOR, FPGA_DEVICE)
    nic = _add_pci_function(devices_root, "0000:00:1f.6", "0x8086", "0x1533")

    for node in (bridge, fpga, nic):
        os.symlink(node, bus_pci / "devices" / node.name)

    return bus_pci
