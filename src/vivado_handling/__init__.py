#!/usr/bin/env python3
"""Vivado invocation."""

from .vivado_runner import (
    ProgrammingOutcome,
    VivadoRunner,
    analyze_output,
    find_error_line,
    first_token,
)

__all__ = [
    "ProgrammingOutcome",
    "VivadoRunner",
    "analyze_output",
    "find_error_line",
    "first_token",
]
