"""Frequency tables and corpus sets."""

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

from config import NGRAM_LENGTHS
from core.sanitizer import SanitizedString


MAX_COUNT = 2 ** 64 - 1


@dataclass(frozen=True)
class FrequencyEntry:
    """One '<count> <token>' line of an n-gram file."""

    count: int
    token: SanitizedString

    def __post_init__(self):
        if not 0 <= self.count <= MAX_COUNT:
            raise ValueError(f"count out of range: {self.count}")


@dataclass(frozen=True)
class FrequencyTable:
    """Entries of one n-gram length, sorted by count descending."""

    length: int
    entries: Tuple[FrequencyEntry, ...] = ()

    def __post_init__(self):
        counts = [entry.count for entry in self.entries]
        if any(a < b for a, b in zip(counts, counts[1:])):
            raise ValueError(f"{self.length}-gram entries are not sorted by count")

    @classmethod
    def from_entries(cls, length: int, entries: Iterable[FrequencyEntry]) -> "FrequencyTable":
        """Sort entries by count descending; equal counts keep input order."""
        ordered = sorted(entries, key=lambda entry: entry.count, reverse=True)
        return cls(length, tuple(ordered))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[FrequencyEntry]:
        return iter(self.entries)

    def head(self, limit: int) -> "FrequencyTable":
        """First `limit` entries as a new table."""
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        return FrequencyTable(self.length, self.entries[:limit])


@dataclass(frozen=True)
class CorpusSet:
    """Exactly one FrequencyTable per supported n-gram length."""

    name: str
    tables: Tuple[FrequencyTable, FrequencyTable, FrequencyTable]

    def __post_init__(self):
        lengths = tuple(table.length for table in self.tables)
        if lengths != NGRAM_LENGTHS:
            raise ValueError(
                f"CorpusSet needs tables for lengths {NGRAM_LENGTHS}, got {lengths}"
            )

    def table(self, length: int) -> FrequencyTable:
        """Table for n-gram length 1..3."""
        if length not in NGRAM_LENGTHS:
            raise ValueError(f"Unsupported n-gram length: {length}")
        return self.tables[length - 1]

    def __iter__(self) -> Iterator[FrequencyTable]:
        return iter(self.tables)

    def __len__(self) -> int:
        return len(self.tables)
