"""Data models for highlight extraction."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from common.constants import DEFAULT_MAX_DEPTH, KEY_SEPARATOR
from common.env import env


@dataclass(frozen=True)
class QuoteRecord:
    """A single harvested highlight or note."""

    text: str
    book: str = ""
    author: str = ""

    @property
    def key(self) -> str:
        """Composite key used for exact-match deduplication."""
        return KEY_SEPARATOR.join((self.text, self.book, self.author))


@dataclass
class ScanOptions:
    """Settings for one extraction run."""

    root_dir: Path
    max_depth: int = DEFAULT_MAX_DEPTH
    colors: frozenset[str] | None = None  # None accepts every color
    legacy_fallback: bool = True

    def __post_init__(self):
        self.root_dir = Path(self.root_dir)
        if self.colors is not None:
            self.colors = frozenset(self.colors) or None

    @classmethod
    def from_env(cls, **overrides: Any) -> "ScanOptions":
        """Build options from the environment, with explicit overrides taking precedence."""
        values = {
            "root_dir": env.book_dir(),
            "max_depth": env.max_depth(),
            "colors": env.highlight_colors(),
            "legacy_fallback": env.legacy_fallback(),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @classmethod
    def coerce(cls, root_dir: str | Path, options: "ScanOptions | Mapping | None") -> "ScanOptions":
        """Accept either a ScanOptions or a host-style options mapping.

        root_dir always wins over the root stored in the options. Keys that
        are missing or None in a mapping fall back to their defaults.
        """
        if isinstance(options, ScanOptions):
            return replace(options, root_dir=Path(root_dir))
        values = {k: v for k, v in (options or {}).items() if v is not None}
        return cls(
            root_dir=Path(root_dir),
            max_depth=values.get("max_depth", DEFAULT_MAX_DEPTH),
            colors=values.get("colors"),
            legacy_fallback=values.get("legacy_fallback", True),
        )


def _string_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


@dataclass
class Annotation:
    """One highlight or note inside a sidecar's annotations collection."""

    text: str | None = None
    note: str | None = None
    color: str | None = None
    drawer: str | None = None

    @property
    def content(self) -> str | None:
        """Highlighted text, falling back to the attached note."""
        return self.text if self.text is not None else self.note

    @property
    def color_tag(self) -> str:
        """Color category; older sidecars only carry the drawer style."""
        return self.color or self.drawer or ""

    @classmethod
    def from_table(cls, table: Mapping) -> "Annotation":
        return cls(
            text=_string_or_none(table.get("text")),
            note=_string_or_none(table.get("note")),
            color=_string_or_none(table.get("color")),
            drawer=_string_or_none(table.get("drawer")),
        )


@dataclass
class AnnotationSource:
    """Annotations and descriptive fields read from one sidecar.

    ``title``/``authors`` come from ``doc_props``; ``stats_title``/``stats_authors``
    from the reading statistics block, used as a fallback pair.
    """

    annotations: list[Annotation] = field(default_factory=list)
    title: str | None = None
    authors: str | list[str] | None = None
    stats_title: str | None = None
    stats_authors: str | list[str] | None = None

    @classmethod
    def from_table(cls, table: Any) -> "AnnotationSource | None":
        """Validate a decoded sidecar table.

        Returns:
            AnnotationSource, or None when the table has no annotations collection
        """
        if not isinstance(table, Mapping):
            return None

        raw_annotations = table.get("annotations")
        if isinstance(raw_annotations, Mapping):
            entries = list(raw_annotations.values())
        elif isinstance(raw_annotations, list):
            entries = raw_annotations
        else:
            return None

        doc_props = table.get("doc_props")
        doc_props = doc_props if isinstance(doc_props, Mapping) else {}
        stats = table.get("stats")
        stats = stats if isinstance(stats, Mapping) else {}

        return cls(
            annotations=[Annotation.from_table(e) for e in entries if isinstance(e, Mapping)],
            title=_string_or_none(doc_props.get("title")),
            authors=_authors_or_none(doc_props.get("authors")),
            stats_title=_string_or_none(stats.get("title")),
            stats_authors=_authors_or_none(stats.get("authors")),
        )


def _authors_or_none(value: Any) -> str | list[str] | None:
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        # Lua arrays with holes decode as dicts keyed by index
        value = [value[k] for k in sorted(k for k in value if isinstance(k, int))]
    if isinstance(value, list):
        names = [v for v in value if isinstance(v, str) and v.strip()]
        return names or None
    return None
