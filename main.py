#!/usr/bin/env python3
"""
Clean Recently Used

Remove entries below one or more directories from the desktop's
recently-used file list (~/.local/share/recently-used.xbel).
"""

import argparse
import logging
import sys
from typing import List, Optional

from recently_used import (
    Colors,
    InvalidArgumentError,
    RegistryError,
    purge,
    setup_logging,
)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="clean-recently-used",
        description="Remove recently used entries below the given directories.",
    )
    parser.add_argument(
        "paths",
        nargs="+",
        metavar="PATH",
        help="absolute directory whose entries should be removed",
    )
    parser.add_argument(
        "-n", "--dry-run",
        action="store_true",
        help="only report what would be removed",
    )
    parser.add_argument(
        "-b", "--backup",
        action="store_true",
        help="keep a timestamped copy of the registry before rewriting it",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="only report errors")
    return parser


def check_posix():
    """Check if running on a POSIX system, exit if not."""
    if sys.platform == "win32":
        print(f"\n{Colors.RED}Error: This tool only works on POSIX systems.{Colors.RESET}", file=sys.stderr)
        print(f"Current platform: {sys.platform}", file=sys.stderr)
        sys.exit(1)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    check_posix()
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose, silent=args.quiet)

    try:
        purge(args.paths, dry_run=args.dry_run, backup=args.backup)
    except InvalidArgumentError as e:
        parser.error(str(e))
    except RegistryError as e:
        logging.error(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
