"""
Parse KOReader sidecar files into quote records.

A sidecar lives in ``<book>.sdr/metadata.<ext>.lua`` and is a Lua table with
``annotations``, ``doc_props`` and ``stats`` entries. Very old sidecars are not
valid Lua data at all; for those the raw text is scanned for quoted strings.
"""

import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from common.constants import SIDECAR_SUFFIX
from common.logger import get_logger

from .acceptance import accept
from .errors import LuaSyntaxError
from .lua_reader import loads
from .models import AnnotationSource, QuoteRecord

logger = get_logger(__name__)

# metadata.epub.lua, metadata.pdf.lua, and the metadata.epub.lua.old backup
SIDECAR_NAME_RE = re.compile(r"^metadata\.[A-Za-z0-9]+\.lua(\.old)?$")

_DOUBLE_QUOTED_RE = re.compile(r'"([^"]+)"')
_SINGLE_QUOTED_RE = re.compile(r"'([^']+)'")


def is_sidecar_file(file_path: Path) -> bool:
    """Check whether a file follows the per-book metadata naming convention."""
    return bool(SIDECAR_NAME_RE.match(Path(file_path).name))


def title_from_folder(file_path: Path) -> str:
    """
    Derive a book title from the folder holding a sidecar.

    e.g., '/books/The_Left-Hand_of_Darkness.sdr/metadata.epub.lua'
          -> 'The Left Hand of Darkness'
    """
    name = Path(file_path).parent.name
    if name.endswith(SIDECAR_SUFFIX):
        name = name[: -len(SIDECAR_SUFFIX)]
    return name.replace("_", " ").replace("-", " ").strip()


def normalize_authors(value: Any) -> str:
    """
    Turn a metadata authors field into a single string.

    A string is kept verbatim; a list joins its non-blank entries with ", ".

    >>> normalize_authors(["Jane Doe", "", "J. Smith"])
    'Jane Doe, J. Smith'
    """
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return ", ".join(a for a in value if isinstance(a, str) and a.strip())
    return ""


def _first_present(*values: Any) -> Any:
    for value in values:
        if isinstance(value, str):
            if value.strip():
                return value
        elif value:
            return value
    return None


def resolve_book(source: AnnotationSource, file_path: Path) -> str:
    """Title from doc_props, then stats, then the sidecar folder name."""
    return _first_present(source.title, source.stats_title) or title_from_folder(file_path)


def resolve_author(source: AnnotationSource) -> str:
    """Authors from doc_props, then stats."""
    return normalize_authors(_first_present(source.authors, source.stats_authors))


def records_from_source(
    source: AnnotationSource,
    file_path: Path,
    colors: Iterable[str] | None = None,
) -> list[QuoteRecord]:
    """
    Build quote records from a validated sidecar.

    Args:
        source: Decoded sidecar contents
        file_path: Path of the sidecar (used for the folder-name title fallback)
        colors: Allowed color tags, or None to accept every color

    Returns:
        Records for every annotation that passes the filters
    """
    allowed = frozenset(colors) if colors else None
    book = resolve_book(source, file_path)
    author = resolve_author(source)

    records = []
    for annotation in source.annotations:
        text = annotation.content
        if not accept(text):
            continue
        if allowed is not None and annotation.color_tag not in allowed:
            continue
        records.append(QuoteRecord(text=text, book=book, author=author))
    return records


def records_from_raw_text(content: str) -> list[QuoteRecord]:
    """
    Harvest quoted substrings from a sidecar that is not valid Lua data.

    Double-quoted strings are collected first, then single-quoted ones. The
    legacy format carries no book, author or color information.
    """
    records = []
    for pattern in (_DOUBLE_QUOTED_RE, _SINGLE_QUOTED_RE):
        for match in pattern.finditer(content):
            snippet = match.group(1)
            if accept(snippet):
                records.append(QuoteRecord(text=snippet))
    return records


def parse_sidecar(
    file_path: Path,
    colors: Iterable[str] | None = None,
    legacy_fallback: bool = True,
) -> list[QuoteRecord]:
    """
    Extract quote records from one sidecar file.

    Files that don't follow the sidecar naming convention, can't be read, or
    have no annotations contribute nothing. A file that isn't Lua data falls
    back to the raw-text scan when ``legacy_fallback`` is set.

    Args:
        file_path: Path to a candidate file
        colors: Allowed color tags, or None to accept every color
        legacy_fallback: Scan unparseable sidecars for quoted strings

    Returns:
        List of records (possibly empty); never raises for bad input files
    """
    file_path = Path(file_path)
    if not is_sidecar_file(file_path):
        return []

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Cannot read {file_path}: {e}")
        return []

    try:
        table = loads(content)
    except LuaSyntaxError as e:
        if not legacy_fallback:
            logger.debug(f"Skipping unparseable sidecar {file_path}: {e}")
            return []
        logger.debug(f"Scanning {file_path} as raw text ({e})")
        return records_from_raw_text(content)
    except RecursionError:
        logger.debug(f"Skipping {file_path}: tables nested too deeply")
        return []

    source = AnnotationSource.from_table(table)
    if source is None:
        logger.debug(f"No annotations in {file_path}")
        return []

    records = records_from_source(source, file_path, colors)
    logger.debug(f"  {len(records)} highlight(s) in {file_path.parent.name}")
    return records
