"""Main CLI entry point for nbtcodec."""

from __future__ import annotations

import argparse
import logging
import sys
import zlib
from pathlib import Path

import structlog

from .. import __version__
from ..cli.dump import dump_file
from ..config import COMPRESSIONS
from ..exceptions import NbtError


def setup_logging(verbose: bool = False) -> None:
    """Send structlog output to stderr, filtered below WARNING unless verbose."""
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def main() -> int:
    """Main entry point for the nbtcodec CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="nbtcodec: Named Binary Tag codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  nbtcodec --dump level.dat                 Print the decoded tree
  nbtcodec --dump chunk.bin --compression zlib
  nbtcodec --version                        Show version
        """,
    )

    parser.add_argument(
        "--dump",
        metavar="FILE",
        type=str,
        help="Decode FILE and print its tag tree",
    )

    parser.add_argument(
        "--compression",
        choices=COMPRESSIONS,
        default="auto",
        help="Compression of FILE (default: auto-detect)",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log codec debug events to stderr",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"nbtcodec {__version__}",
    )

    args = parser.parse_args()
    setup_logging(args.verbose)

    # Handle --dump
    if args.dump:
        file_path = Path(args.dump)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            dump_file(file_path, args.compression)
            return 0
        except (NbtError, OSError, EOFError, zlib.error) as e:
            print(f"Error decoding file: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
