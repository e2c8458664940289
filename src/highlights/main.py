"""
Harvest highlights from a KOReader library into a quote store.

Walks the book directory, parses every per-book sidecar it finds, keeps the
highlights that make usable quotes, and writes them to quotes.lua.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

from common.logger import get_logger

from .collector import QuoteCollector
from .models import QuoteRecord, ScanOptions
from .sidecar import parse_sidecar
from .store import write_quote_store
from .walker import walk

logger = get_logger(__name__)


@dataclass
class HarvestResult:
    """Outcome of an extract-and-save run."""

    found: int
    saved: bool
    store_path: Path


def extract_highlights(
    root_dir: str | Path,
    options: ScanOptions | Mapping | None = None,
    on_folder: Callable[[Path], None] | None = None,
) -> list[QuoteRecord]:
    """
    Collect quote records from every sidecar under root_dir.

    A missing or non-directory root is not an error; it simply yields no
    records. Nothing is written to disk.

    Args:
        root_dir: Book directory to scan
        options: ScanOptions, or a mapping with max_depth / colors / legacy_fallback
        on_folder: Progress callback, called with each ``.sdr`` folder entered

    Returns:
        Deduplicated records in discovery order
    """
    scan = ScanOptions.coerce(root_dir, options)
    root = scan.root_dir

    if not root.is_dir():
        logger.warning(f"{root} is not a directory, nothing to scan")
        return []

    logger.debug(f"Scanning {root} (max depth {scan.max_depth})")

    collector = QuoteCollector()
    files_seen = 0
    for file_path in walk(root, scan.max_depth, on_folder=on_folder):
        files_seen += 1
        records = parse_sidecar(
            file_path, colors=scan.colors, legacy_fallback=scan.legacy_fallback
        )
        collector.extend(records)

    logger.debug(f"Checked {files_seen} file(s), kept {len(collector)} highlight(s)")
    return collector.records


def harvest(
    options: ScanOptions,
    store_path: Path,
    on_folder: Callable[[Path], None] | None = None,
) -> HarvestResult:
    """
    Extract highlights and rewrite the quote store with them.

    The store is replaced on every run, even when nothing was found. A missing
    book directory leaves the existing store alone.

    Args:
        options: Scan settings
        store_path: Destination quotes.lua
        on_folder: Progress callback passed through to the walker

    Returns:
        HarvestResult; ``found`` is accurate even if saving failed
    """
    store_path = Path(store_path)
    if not options.root_dir.is_dir():
        logger.warning(f"{options.root_dir} is not a directory, keeping existing store")
        return HarvestResult(found=0, saved=False, store_path=store_path)

    records = extract_highlights(options.root_dir, options, on_folder=on_folder)

    saved = write_quote_store(records, store_path)
    return HarvestResult(found=len(records), saved=saved, store_path=store_path)
