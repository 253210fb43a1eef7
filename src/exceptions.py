#!/usr/bin/env python3
"""Exception hierarchy for the bitstream loader.

Every failure the loader reports is a :class:`LoaderError`. Each subclass
carries a ``kind`` tag naming the step that failed, so callers can branch on
the tag instead of parsing the message.
"""

from typing import Optional


class LoaderError(RuntimeError):
    """Base exception for all bitstream loader failures."""

    kind = "runtime"

    def __init__(self, message: str, kind: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def __str__(self) -> str:
        return self.message


class UsageError(LoaderError):
    """Raised for a malformed command line."""

    kind = "usage"


class PrivilegeError(LoaderError, PermissionError):
    """Raised when the loader is not running with root privileges."""

    kind = "privilege"


class ConfigError(LoaderError):
    """Raised when the configuration file is unreadable or incomplete."""

    kind = "config"


class WriteError(LoaderError):
    """Raised when a required artifact cannot be written."""

    kind = "write"


class LaunchError(LoaderError):
    """Raised when the toolchain could not be started."""

    kind = "launch"


class ToolchainError(LoaderError):
    """Raised when the toolchain ran and reported an error line."""

    kind = "toolchain"

    def __init__(self, message: str, line: str = ""):
        super().__init__(message)
        self.line = line


class DeviceNotFoundError(LoaderError):
    """Raised when no attached PCI device matches the configured id."""

    kind = "not_found"


class HotResetError(LoaderError):
    """Raised when a sysfs control file cannot be written."""

    kind = "hot_reset"


__all__ = [
    "LoaderError",
    "UsageError",
    "PrivilegeError",
    "ConfigError",
    "WriteError",
    "LaunchError",
    "ToolchainError",
    "DeviceNotFoundError",
    "HotResetError",
]
