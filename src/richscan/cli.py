"""Command-line interface for richscan."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import __version__
from .constants import TABLE_HEADER
from .database import load_database
from .models import ParseResult, RichEntry
from .parser import parse_file

USAGE_BLURB = (
    "Rich header decoder. Usage:\n\n"
    "  richscan file ...\n\n"
    "Rich headers can be found in executable files, DLLs, "
    "and other binary files\ncreated by Microsoft linker."
)


def format_entry_line(entry: RichEntry) -> str:
    """Format a single Rich header entry for display."""
    return (
        f"{entry.ver_dword:08x} {entry.comp_id:4x} {entry.build_version:6d} "
        f"{entry.use_count:5d}"
        + (f" {entry.description}" if entry.description else "")
    )


def print_result(result: ParseResult) -> None:
    """Print parse result in human-readable format."""
    if not result.opened:
        print(result.error, file=sys.stderr)
        return

    print(f"Processing {result.filename}")

    if result.pe_info:
        print(f"Target machine: {result.pe_info.machine_name}")

    if not result.success:
        print(result.error, file=sys.stderr)
        return

    if result.rich_header:
        print(TABLE_HEADER)
        for entry in result.rich_header.entries:
            print(format_entry_line(entry))


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
    root = logging.getLogger("richscan")
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="richscan",
        description="Decode and print Rich headers from Windows PE executables.",
        epilog=(
            "Rich headers contain compiler version information embedded by "
            "Microsoft's linker."
        ),
    )

    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="PE executable file(s) to analyze",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON",
    )

    parser.add_argument(
        "--database", "-d",
        metavar="PATH",
        help="Path to custom comp_id.txt description file",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log header offsets and keys while scanning",
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.files:
        print(USAGE_BLURB)
        return 0

    setup_logging(args.verbose)

    # Loaded once, shared read-only by every file
    db = load_database(args.database)

    results = []
    for filename in args.files:
        result = parse_file(filename, db)
        results.append(result)
        if not args.json:
            print_result(result)

    if args.json:
        output = [r.to_dict() for r in results]
        print(json.dumps(output, indent=2))

    # Per-file failures are reported, not fatal
    return 0


if __name__ == "__main__":
    sys.exit(main())
