"""Analysis modules for n-gram aggregates and chart series."""

from .aggregates import Aggregate, AggregateEngine, axis_upper_bound
from .series import ChartData, ChartSeriesBuilder, Series, SeriesMode

__all__ = [
    "Aggregate",
    "AggregateEngine",
    "axis_upper_bound",
    "ChartData",
    "ChartSeriesBuilder",
    "Series",
    "SeriesMode",
]
