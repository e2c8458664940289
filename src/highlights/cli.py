#!/usr/bin/env python3
"""CLI interface for the highlight harvester."""

import argparse
import random
from pathlib import Path

from common.env import env
from common.logger import error, get_logger, progress, setup_logging, success, warning

from .display import format_quote, pick_random_quote
from .errors import LuaSyntaxError
from .main import harvest
from .models import ScanOptions
from .store import QuoteStore

logger = get_logger(__name__)


def _report_folder(folder: Path) -> None:
    progress(f"Scanning: {folder.name}")


def cmd_extract(args):
    """Scan the book directory and rewrite the quote store.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    options = ScanOptions.from_env(
        root_dir=args.book_dir,
        max_depth=args.max_depth,
        colors=frozenset(args.color) if args.color else None,
        legacy_fallback=False if args.no_legacy else None,
    )
    store_path = args.output or env.quotes_path()

    progress(f"Scanning for highlights in {options.root_dir}...")
    try:
        result = harvest(options, store_path, on_folder=_report_folder)
    except Exception as e:
        error(f"Error during extraction: {e}")
        logger.debug("Extraction failed", exc_info=True)
        return 1

    if result.found == 0:
        warning("No highlights found.")
        return 0

    if not result.saved:
        error(f"{result.found} highlights found, but saving to {result.store_path} failed.")
        return 1

    if result.found == 1:
        success("1 highlight found and saved.")
    else:
        success(f"{result.found} highlights found and saved.")
    return 0


def cmd_show(args):
    """Print a random quote from the store.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    store = QuoteStore(args.store or env.quotes_path())
    try:
        records = store.load()
    except (OSError, UnicodeDecodeError, LuaSyntaxError) as e:
        error(f"Cannot read quote store {store.file_path}: {e}")
        return 1

    rng = random.Random(args.seed)
    print(format_quote(pick_random_quote(records, rng)))
    return 0


def main():
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Harvest KOReader highlights into a random-quote store"
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser(
        "extract", help="Extract highlights from book sidecars into quotes.lua"
    )
    extract_parser.add_argument(
        "--book-dir",
        type=Path,
        default=None,
        help="Directory containing books (default: $RANDOMQUOTE_BOOK_DIR or /mnt/us/Books)",
    )
    extract_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Quote store to write (default: $RANDOMQUOTE_QUOTES_PATH or ./quotes.lua)",
    )
    extract_parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="How many directory levels to descend (default: 5)",
    )
    extract_parser.add_argument(
        "--color",
        action="append",
        default=None,
        help="Only keep highlights of this color (repeatable; default: all colors)",
    )
    extract_parser.add_argument(
        "--no-legacy",
        action="store_true",
        help="Skip sidecars that are not valid Lua instead of scanning their raw text",
    )
    extract_parser.set_defaults(func=cmd_extract)

    show_parser = subparsers.add_parser("show", help="Print a random quote from the store")
    show_parser.add_argument(
        "--store",
        type=Path,
        default=None,
        help="Quote store to read (default: $RANDOMQUOTE_QUOTES_PATH or ./quotes.lua)",
    )
    show_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    show_parser.set_defaults(func=cmd_show)

    args = parser.parse_args()
    setup_logging(level=args.log_level)
    return args.func(args)


if __name__ == "__main__":
    exit(main())
