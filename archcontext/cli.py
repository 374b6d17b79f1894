"""
Command-line entry point.

Usage:
    arch-context                      # all modules (--full)
    arch-context --basic              # hardware, os, packages
    arch-context --modules=hardware,network
    arch-context --list-modules
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .generator import UnknownModuleError, generate, resolve_modules
from .modules import ALL_MODULES, BASIC_MODULES
from .settings import Settings, SettingsError

logger = logging.getLogger(__name__)


def _module_list(value: str) -> list[str]:
    try:
        modules = resolve_modules(value.split(","))
    except UnknownModuleError as e:
        raise argparse.ArgumentTypeError(str(e)) from None
    if not modules:
        raise argparse.ArgumentTypeError("no modules given")
    return modules


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arch-context",
        description="Generate a Markdown context report describing this Arch Linux workstation.",
    )
    selection = parser.add_mutually_exclusive_group()
    selection.add_argument(
        "--basic",
        action="store_true",
        help=f"Collect only the basic modules ({','.join(BASIC_MODULES)})",
    )
    selection.add_argument(
        "--full",
        action="store_true",
        help="Collect all modules (default)",
    )
    selection.add_argument(
        "--modules",
        type=_module_list,
        metavar="A,B,C",
        help=f"Comma-separated modules to collect: {','.join(ALL_MODULES)}",
    )
    selection.add_argument(
        "--list-modules",
        action="store_true",
        help="List available modules and exit",
    )
    parser.add_argument("-o", "--output-dir", type=Path, help="Report directory (default: ARCH_CONTEXT_OUTPUT_DIR or .)")
    parser.add_argument("--keep", type=int, help="Number of reports to keep (default: 5)")
    parser.add_argument("--no-redact", action="store_true", help="Do not mask sensitive data")
    parser.add_argument("--deep-scrub", action="store_true", help="Also run scrubadub's PII detectors")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(asctime)s] %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def select_modules(args: argparse.Namespace) -> list[str]:
    if args.modules:
        return args.modules
    if args.basic:
        return list(BASIC_MODULES)
    return list(ALL_MODULES)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_modules:
        for name in ALL_MODULES:
            marker = " (basic)" if name in BASIC_MODULES else ""
            print(f"{name}{marker}")
        return 0

    try:
        settings = Settings.from_env()
    except SettingsError as e:
        parser.error(str(e))

    if args.output_dir is not None:
        settings.output_dir = args.output_dir
    if args.keep is not None:
        if args.keep < 1:
            parser.error("--keep must be at least 1")
        settings.keep = args.keep
    if args.no_redact:
        settings.redact = False
    if args.deep_scrub:
        settings.deep_scrub = True

    configure_logging(args.verbose)
    logger.info("Starting system context generation...")

    path = generate(select_modules(args), settings)

    logger.info("System context generated successfully")
    print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
