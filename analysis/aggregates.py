"""Derived statistics over n-gram corpus sets.

All divisions are integer (floor) divisions. Axis ranges and the
reference scaling rely on the truncated values, so keep it that way.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from config import FILTER_LIMITS, HEADROOM_DIVISOR, NGRAM_LENGTHS
from core.corpus import CorpusSet
from core.errors import EmptyTableError


@dataclass(frozen=True)
class Aggregate:
    """Read-only snapshot of the statistics of one corpus."""

    unique_counts: Tuple[Tuple[int, int], ...]
    growth_ratios: Tuple[Tuple[int, int], ...]
    maxima: Tuple[Optional[int], ...]  # None for empty tables
    scale_divisors: Optional[Tuple[Optional[int], ...]] = None  # only with a reference


def axis_upper_bound(max_value: int, headroom_divisor: int = HEADROOM_DIVISOR) -> int:
    """Y axis upper bound with headroom above the tallest bar.

    Examples:
        axis_upper_bound(10) -> 11
        axis_upper_bound(95) -> 104
    """
    return max_value + max_value // headroom_divisor


class AggregateEngine:
    """Computes unique counts, growth ratios, maxima and scaling."""

    def unique_counts(self, corpus: CorpusSet) -> List[Tuple[int, int]]:
        """Number of entries per n-gram length: [(1, n1), (2, n2), (3, n3)]."""
        return [(table.length, len(table)) for table in corpus]

    def growth_ratios(self, corpus: CorpusSet) -> List[Tuple[int, int]]:
        """Ratio of unique counts between consecutive lengths.

        Length 1 has no predecessor and is defined as 1. An empty
        predecessor table gives a ratio of 0.
        """
        counts = self.unique_counts(corpus)
        ratios = [(NGRAM_LENGTHS[0], 1)]
        for (_, prev_count), (length, count) in zip(counts, counts[1:]):
            ratios.append((length, count // prev_count if prev_count else 0))
        return ratios

    def per_length_max(self, corpus: CorpusSet, length: int) -> int:
        """Largest count in the table of the given length.

        Raises:
            EmptyTableError: If the table has no entries
        """
        table = corpus.table(length)
        if not len(table):
            raise EmptyTableError(length, f"maximum of '{corpus.name}'")
        # Tables are sorted, but do not rely on it here
        return max(entry.count for entry in table)

    def reference_scale(self, subject_max: int, reference_max: int) -> int:
        """Divisor bringing reference counts into the subject's range.

        Examples:
            reference_scale(50, 200) -> 4
            reference_scale(30, 100) -> 3
        """
        if subject_max <= 0:
            raise ValueError(f"subject_max must be positive, got {subject_max}")
        return reference_max // subject_max

    def chart_divisor(self, subject_max: int, reference_max: int) -> int:
        """reference_scale(), but a reference smaller than the subject is left as is."""
        return self.reference_scale(subject_max, reference_max) or 1

    def truncate(
        self,
        corpus: CorpusSet,
        per_length_limits: Sequence[int] = FILTER_LIMITS,
    ) -> CorpusSet:
        """Keep the top-N entries of each table. Returns a new CorpusSet."""
        if len(per_length_limits) != len(NGRAM_LENGTHS):
            raise ValueError(
                f"Expected {len(NGRAM_LENGTHS)} limits, got {len(per_length_limits)}"
            )
        tables = tuple(
            table.head(limit) for table, limit in zip(corpus, per_length_limits)
        )
        return CorpusSet(corpus.name, tables)

    def _maxima(self, corpus: CorpusSet) -> Tuple[Optional[int], ...]:
        return tuple(
            self.per_length_max(corpus, table.length) if len(table) else None
            for table in corpus
        )

    def snapshot(self, subject: CorpusSet, reference: Optional[CorpusSet] = None) -> Aggregate:
        """Compute all aggregates of `subject` at once.

        Scale divisors are the ones the token charts divide by. They are only
        computed when a reference is given, and are None for lengths where
        either table is empty.
        """
        maxima = self._maxima(subject)

        divisors = None
        if reference is not None:
            divisors = tuple(
                self.chart_divisor(subject_max, reference_max)
                if subject_max and reference_max is not None
                else None
                for subject_max, reference_max in zip(maxima, self._maxima(reference))
            )

        return Aggregate(
            unique_counts=tuple(self.unique_counts(subject)),
            growth_ratios=tuple(self.growth_ratios(subject)),
            maxima=maxima,
            scale_divisors=divisors,
        )
