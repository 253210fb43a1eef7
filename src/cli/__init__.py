#!/usr/bin/env python3
"""Command-line support: run configuration and PCI hot reset."""
