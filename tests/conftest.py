"""Shared fixtures for ngram-charts tests."""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.corpus import CorpusSet, FrequencyEntry, FrequencyTable
from core.sanitizer import cleaned


def table_from_counts(length, counts, prefix="t"):
    """Table with one entry per count, tokens t0, t1, ..."""
    entries = [FrequencyEntry(count, cleaned(f"{prefix}{i}")) for i, count in enumerate(counts)]
    return FrequencyTable.from_entries(length, entries)


@pytest.fixture
def make_corpus():
    """Factory: make_corpus([counts1, counts2, counts3], name="subject")."""
    def _make(counts_per_length, name="subject", prefix="t"):
        tables = tuple(
            table_from_counts(length, counts, prefix)
            for length, counts in zip((1, 2, 3), counts_per_length)
        )
        return CorpusSet(name, tables)
    return _make


@pytest.fixture
def sized_corpus(make_corpus):
    """Factory: corpus whose tables have the given sizes (counts descending)."""
    def _make(sizes, name="subject"):
        return make_corpus([list(range(size, 0, -1)) for size in sizes], name=name)
    return _make


@pytest.fixture
def write_corpus(tmp_path):
    """Factory: write {length: text} into a corpus directory and return it."""
    def _write(files, name="ngrams"):
        directory = tmp_path / name
        directory.mkdir(parents=True, exist_ok=True)
        for length, text in files.items():
            (directory / f"{length}-grams.txt").write_text(text, encoding="utf-8")
        return directory
    return _write
