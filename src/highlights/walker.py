"""Recursive, depth-bounded traversal of a book directory."""

from collections.abc import Callable, Iterator
from pathlib import Path

from common.constants import SIDECAR_SUFFIX
from common.logger import get_logger

logger = get_logger(__name__)


def walk(
    root_dir: Path,
    max_depth: int,
    on_folder: Callable[[Path], None] | None = None,
) -> Iterator[Path]:
    """
    Yield every regular file under root_dir, depth first.

    Files directly inside root_dir are at depth 0. A subdirectory is entered
    only while the current depth is below max_depth, so files at depth
    max_depth are visited and deeper ones are not. Symlink cycles are bounded
    by the depth limit alone.

    Args:
        root_dir: Directory to scan; a missing path yields nothing
        max_depth: Recursion bound
        on_folder: Called with each ``.sdr`` folder before it is scanned

    Yields:
        Paths of regular files, in sorted order within each directory
    """
    root_dir = Path(root_dir)
    if not root_dir.is_dir():
        return
    yield from _walk_dir(root_dir, 0, max_depth, on_folder)


def _walk_dir(
    directory: Path,
    depth: int,
    max_depth: int,
    on_folder: Callable[[Path], None] | None,
) -> Iterator[Path]:
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.warning(f"Cannot list {directory}, skipping: {e}")
        return

    for entry in entries:
        try:
            is_dir = entry.is_dir()
            is_file = not is_dir and entry.is_file()
        except OSError:
            continue

        if is_dir:
            if depth >= max_depth:
                continue
            if on_folder is not None and entry.name.endswith(SIDECAR_SUFFIX):
                on_folder(entry)
            yield from _walk_dir(entry, depth + 1, max_depth, on_folder)
        elif is_file:
            yield entry
