#!/usr/bin/env python3
"""Programming script templating."""

from .script_macros import FILE_MACRO, apply_macros, substitute_macros

__all__ = ["FILE_MACRO", "apply_macros", "substitute_macros"]
