"""Shaping of aggregates into plottable chart series.

Nothing here draws or touches files: the result is a ChartData that a
renderer turns into an image.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from config import OVERLAY_ALPHA, REFERENCE_COLOR, SUBJECT_COLOR
from analysis.aggregates import AggregateEngine, axis_upper_bound
from core.corpus import CorpusSet


class SeriesMode(Enum):
    BY_LENGTH_TOTALS = "by_length_totals"
    BY_LENGTH_GROWTH_RATIO = "by_length_growth_ratio"
    BY_TOKEN_OCCURRENCE = "by_token_occurrence"


# mode -> (x description, y description)
AXIS_DESCRIPTIONS = {
    SeriesMode.BY_LENGTH_TOTALS: ("N-Gram length", "Unique N-Grams"),
    SeriesMode.BY_LENGTH_GROWTH_RATIO: ("N-Gram length", "Unique N-Gram increase"),
    SeriesMode.BY_TOKEN_OCCURRENCE: ("N-Gram", "Occurrences"),
}


@dataclass(frozen=True)
class Series:
    """Ordered (category, value) points plus drawing metadata."""

    name: str
    points: Tuple[Tuple[str, int], ...]
    x_desc: str
    y_desc: str
    color: str = SUBJECT_COLOR
    alpha: float = 1.0

    @property
    def max_value(self) -> int:
        return max((value for _, value in self.points), default=0)

    @property
    def values(self) -> List[int]:
        return [value for _, value in self.points]


@dataclass(frozen=True)
class ChartData:
    """Everything a renderer needs for one chart."""

    title: str
    mode: SeriesMode
    x_domain: Tuple[str, ...]
    y_range: Tuple[int, int]
    series: Tuple[Series, ...] = field(default_factory=tuple)

    @property
    def x_desc(self) -> str:
        return AXIS_DESCRIPTIONS[self.mode][0]

    @property
    def y_desc(self) -> str:
        return AXIS_DESCRIPTIONS[self.mode][1]


class ChartSeriesBuilder:
    """Builds subject (and optional reference) series for one chart."""

    def __init__(self, engine: Optional[AggregateEngine] = None):
        self.engine = engine or AggregateEngine()

    def _length_points(self, mode: SeriesMode, corpus: CorpusSet) -> Tuple[Tuple[str, int], ...]:
        if mode is SeriesMode.BY_LENGTH_TOTALS:
            pairs = self.engine.unique_counts(corpus)
        else:
            pairs = self.engine.growth_ratios(corpus)
        return tuple((str(length), value) for length, value in pairs)

    def _token_points(self, corpus: CorpusSet, length: int, divisor: int = 1) -> Tuple[Tuple[str, int], ...]:
        return tuple(
            (entry.token.text, entry.count // divisor)
            for entry in corpus.table(length)
            if not entry.token.is_unrepresentable
        )

    def _token_divisor(self, subject: CorpusSet, reference: CorpusSet, length: int) -> int:
        subject_max = self.engine.per_length_max(subject, length)
        reference_max = self.engine.per_length_max(reference, length)
        return self.engine.chart_divisor(subject_max, reference_max)

    def build(
        self,
        mode: SeriesMode,
        subject: CorpusSet,
        reference: Optional[CorpusSet] = None,
        length: Optional[int] = None,
        title: str = "",
    ) -> ChartData:
        """
        Build chart data for one chart.

        Args:
            mode: Which statistic to plot
            subject: Corpus being analyzed
            reference: Optional corpus drawn underneath for comparison
            length: N-gram length (required for BY_TOKEN_OCCURRENCE)
            title: Chart title

        Returns:
            ChartData with the reference series first (if any), then subject

        Raises:
            EmptyTableError: If a needed table maximum is undefined
        """
        x_desc, y_desc = AXIS_DESCRIPTIONS[mode]
        alpha = OVERLAY_ALPHA if reference is not None else 1.0

        if mode is SeriesMode.BY_TOKEN_OCCURRENCE:
            if length is None:
                raise ValueError("length is required for by_token_occurrence")
            # Also validates that the subject table is non-empty
            self.engine.per_length_max(subject, length)
            subject_points = self._token_points(subject, length)
            reference_points = None
            if reference is not None:
                divisor = self._token_divisor(subject, reference, length)
                reference_points = self._token_points(reference, length, divisor)
            x_domain = tuple(dict.fromkeys(label for label, _ in subject_points))
        else:
            subject_points = self._length_points(mode, subject)
            reference_points = (
                self._length_points(mode, reference) if reference is not None else None
            )
            x_domain = tuple(label for label, _ in subject_points)

        series = []
        if reference_points is not None:
            series.append(Series(
                name=reference.name,
                points=reference_points,
                x_desc=x_desc,
                y_desc=y_desc,
                color=REFERENCE_COLOR,
                alpha=alpha,
            ))
        series.append(Series(
            name=subject.name,
            points=subject_points,
            x_desc=x_desc,
            y_desc=y_desc,
            color=SUBJECT_COLOR,
            alpha=alpha,
        ))

        # Only points on the x domain are drawn
        domain = set(x_domain)
        top = max(
            (value for s in series for label, value in s.points if label in domain),
            default=0,
        )

        return ChartData(
            title=title,
            mode=mode,
            x_domain=x_domain,
            y_range=(0, axis_upper_bound(top)),
            series=tuple(series),
        )
