#!/usr/bin/env python3
"""
Load Bitstream - Unified Entry Point

Usage:
  sudo python3 load_bitstream.py design.bit
  sudo python3 load_bitstream.py design.bit -hot_reset -config /etc/load_bitstream.conf
"""

import sys

from bitstream_loader.load_bitstream_cli import main

if __name__ == "__main__":
    sys.exit(main())
