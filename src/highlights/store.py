"""Read and write the Lua quote store consumed by the random-quote plugin."""

import os
import stat
import tempfile
from collections.abc import Iterable
from pathlib import Path

from common.constants import STORE_HEADER
from common.logger import get_logger

from .errors import LuaSyntaxError, StoreWriteError
from .lua_reader import load_file
from .models import QuoteRecord

logger = get_logger(__name__)

# Backslash must come first so later escapes aren't escaped again
_ESCAPES = (("\\", "\\\\"), ('"', '\\"'), ("\r", "\\r"), ("\n", "\\n"))

_caches: dict[Path, list[QuoteRecord]] = {}


def escape_lua_string(value: str) -> str:
    """Escape a value for a double-quoted Lua string literal."""
    for char, replacement in _ESCAPES:
        value = value.replace(char, replacement)
    return value


def render_quote_store(records: Iterable[QuoteRecord]) -> str:
    """Render records as the Lua source of a quote store."""
    lines = [STORE_HEADER, "local quotes = {"]
    for record in records:
        lines.append(
            f'    {{ text = "{escape_lua_string(record.text)}", '
            f'book = "{escape_lua_string(record.book)}", '
            f'author = "{escape_lua_string(record.author)}" }},'
        )
    lines.extend(["}", "", "return quotes", ""])
    return "\n".join(lines)


def _target_mode(file_path: Path) -> int:
    """Permissions for the new store: the old file's, or the umask default."""
    try:
        return stat.S_IMODE(os.stat(file_path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _atomic_write(file_path: Path, content: str) -> None:
    """Write content next to file_path and rename it into place.

    Raises:
        StoreWriteError: If any step fails; the old file is left untouched
    """
    tmp_name = None
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, _target_mode(file_path))
        os.replace(tmp_name, file_path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise StoreWriteError(f"Cannot write {file_path}: {e}") from e


def write_quote_store(records: Iterable[QuoteRecord], file_path: Path) -> bool:
    """
    Replace the quote store with the given records.

    The previous contents are discarded. Either the whole new store lands on
    disk or the old one stays as it was.

    Args:
        records: Records to persist, in order
        file_path: Destination quotes.lua

    Returns:
        True on success, False if the store could not be written
    """
    file_path = Path(file_path)
    records = list(records)
    try:
        _atomic_write(file_path, render_quote_store(records))
    except StoreWriteError as e:
        logger.error(f"[red]✗[/red] {e}")
        return False

    invalidate_cache(file_path)
    logger.debug(f"Wrote {len(records)} quote(s) to {file_path}")
    return True


def _record_from_entry(entry) -> QuoteRecord | None:
    if isinstance(entry, str):
        return QuoteRecord(text=entry)
    if isinstance(entry, dict):
        text = entry.get("text")
        if text is None:
            return None
        return QuoteRecord(
            text=str(text),
            book=str(entry.get("book", "")),
            author=str(entry.get("author", "")),
        )
    return None


def read_quote_store(file_path: Path) -> list[QuoteRecord]:
    """
    Load records from a quote store.

    Entries may be ``{ text = ..., book = ..., author = ... }`` tables or bare
    strings.

    Args:
        file_path: Path to quotes.lua

    Returns:
        Records in file order; empty if the store doesn't exist

    Raises:
        LuaSyntaxError: If the store is not valid Lua data
    """
    file_path = Path(file_path)
    if not file_path.exists():
        return []

    data = load_file(file_path)
    if isinstance(data, dict):
        # sparse array
        data = [data[k] for k in sorted(k for k in data if isinstance(k, int))]
    if not isinstance(data, list):
        raise LuaSyntaxError(f"{file_path} does not return a list of quotes")

    records = []
    for entry in data:
        record = _record_from_entry(entry)
        if record is not None:
            records.append(record)
    return records


def invalidate_cache(file_path: Path | None = None) -> None:
    """Forget cached store contents for one path, or for every path."""
    if file_path is None:
        _caches.clear()
    else:
        _caches.pop(Path(file_path).resolve(), None)


class QuoteStore:
    """A quote store on disk with a read cache shared per path."""

    def __init__(self, file_path: Path):
        self.file_path = Path(file_path)

    @property
    def _cache_key(self) -> Path:
        return self.file_path.resolve()

    def load(self) -> list[QuoteRecord]:
        """Return the stored records, reading the file only on a cache miss."""
        key = self._cache_key
        if key not in _caches:
            _caches[key] = read_quote_store(self.file_path)
        return list(_caches[key])

    def invalidate(self) -> None:
        invalidate_cache(self.file_path)

    def write(self, records: Iterable[QuoteRecord]) -> bool:
        """Replace the store contents; a later load() sees the new records."""
        return write_quote_store(records, self.file_path)
