#!/usr/bin/env python3
"""Load an FPGA bitstream with Vivado and optionally hot-reset the PCI card."""

from .__version__ import __version__

__all__ = ["__version__"]
