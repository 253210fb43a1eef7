#!/usr/bin/env python3
"""
CLI entry point for the load-bitstream console script.

    load_bitstream <filename> [-hot_reset] [-config <filename>] [-verbose]

Programs a bitstream into the FPGA with Vivado and, if asked, hot-resets the
card so the host re-enumerates it.
"""

import argparse
import logging
import os
import sys
from typing import List, NoReturn, Optional

from rich.console import Console
from rich.text import Text

from .cli.config import DEFAULT_CONFIG_FILE, load_run_config
from .cli.hot_reset import PciHotReset
from .exceptions import LoaderError, PrivilegeError, UsageError
from .log_config import get_logger, setup_logging
from .string_utils import log_info_safe, safe_format
from .templating.script_macros import apply_macros
from .vivado_handling.vivado_runner import VivadoRunner

USAGE = "load_bitstream <filename> [-hot_reset] [-config <filename>]"

console = Console(stderr=True, highlight=False)


class LoaderArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def create_parser() -> argparse.ArgumentParser:
    parser = LoaderArgumentParser(
        prog="load_bitstream",
        usage=USAGE,
        description="Program an FPGA bitstream over JTAG using Vivado.",
        allow_abbrev=False,
    )
    parser.add_argument("bitstream", nargs="?", help="Bitstream file to program")
    parser.add_argument(
        "-hot_reset",
        action="store_true",
        help="Hot-reset the PCI device after programming",
    )
    parser.add_argument(
        "-config",
        default=DEFAULT_CONFIG_FILE,
        metavar="<filename>",
        help=safe_format("Configuration file (default: {name})", name=DEFAULT_CONFIG_FILE),
    )
    parser.add_argument(
        "-verbose", action="store_true", help="Log each step to stderr"
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse the command line.

    Raises:
        UsageError: On an unknown switch, a second filename, or no filename
    """
    parser = create_parser()
    args, extra = parser.parse_known_args(argv)
    if extra:
        raise UsageError(
            safe_format("invalid command-line switch: {arg}", arg=extra[0])
        )
    if not args.bitstream:
        raise UsageError("no bitstream file given")
    return args


def check_root() -> None:
    """
    Fail unless running as root.

    Raises:
        PrivilegeError: If the effective uid isn't 0
    """
    if not hasattr(os, "geteuid"):
        raise PrivilegeError("Root privileges can't be checked on this platform")
    if os.geteuid() != 0:
        raise PrivilegeError("Must be root to run.  Use sudo.")


def execute(args: argparse.Namespace) -> None:
    """Main body: load config, program the FPGA, then hot-reset if asked."""
    logger = get_logger(__name__)

    check_root()

    config = load_run_config(args.config, hot_reset=args.hot_reset)
    config = apply_macros(config, args.bitstream)

    VivadoRunner(config).program()

    if args.hot_reset:
        bdfs = PciHotReset().hot_reset(config.pci_device)
        log_info_safe(
            logger, "Hot reset issued for {bdfs}", prefix="CLI", bdfs=", ".join(bdfs)
        )


def report_error(message: str) -> None:
    console.print(Text(message, style="bold red"), soft_wrap=True)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the load-bitstream command."""
    try:
        args = parse_args(argv)
    except UsageError as e:
        report_error(str(e))
        console.print("usage:", soft_wrap=True)
        console.print(USAGE, soft_wrap=True, markup=False)
        return 1

    setup_logging(level=logging.INFO if args.verbose else logging.WARNING)

    try:
        execute(args)
    except LoaderError as e:
        report_error(str(e))
        return 1
    except KeyboardInterrupt:
        report_error("Interrupted")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
