"""Accumulate quote records, dropping exact duplicates."""

from collections.abc import Iterable

from .models import QuoteRecord


class QuoteCollector:
    """Ordered, duplicate-free record collection for a single extraction run."""

    def __init__(self):
        self._seen: set[str] = set()
        self._records: list[QuoteRecord] = []

    def add(self, record: QuoteRecord) -> bool:
        """Add a record unless its (text, book, author) triple was already seen.

        Returns:
            True if the record was added
        """
        key = record.key
        if key in self._seen:
            return False
        self._seen.add(key)
        self._records.append(record)
        return True

    def extend(self, records: Iterable[QuoteRecord]) -> int:
        """Add several records; returns how many were new."""
        return sum(1 for record in records if self.add(record))

    @property
    def records(self) -> list[QuoteRecord]:
        """Records in discovery order."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)
