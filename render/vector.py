"""Bar chart rendering with matplotlib (SVG by default)."""

from pathlib import Path
from typing import Tuple, Union

import matplotlib

matplotlib.use("Agg")

import numpy as np
from matplotlib.figure import Figure

from analysis.series import ChartData, SeriesMode
from core.errors import RenderError


DPI = 100


class VectorChartRenderer:
    """Draws overlaid bar charts, one bar group per x category."""

    def __init__(
        self,
        size: Tuple[int, int] = (1920, 1080),
        font_size: int = 20,
        tick_font_size: int = 8,
    ):
        """
        Initialize renderer.

        Args:
            size: Canvas size in pixels (width, height)
            font_size: Axis description font size
            tick_font_size: Font size of token labels on the x axis
        """
        self.size = size
        self.font_size = font_size
        self.tick_font_size = tick_font_size

    def _bar_width(self, chart: ChartData) -> float:
        # Token charts have bars touching each other
        if chart.mode is SeriesMode.BY_TOKEN_OCCURRENCE:
            return 1.0
        return 0.8

    def _draw(self, chart: ChartData) -> Figure:
        fig = Figure(figsize=(self.size[0] / DPI, self.size[1] / DPI), dpi=DPI)
        fig.patch.set_facecolor("white")
        ax = fig.add_subplot(1, 1, 1)

        positions = {label: i for i, label in enumerate(chart.x_domain)}
        width = self._bar_width(chart)

        for series in chart.series:
            points = [(positions[label], value) for label, value in series.points if label in positions]
            if not points:
                continue
            xs, heights = zip(*points)
            ax.bar(
                xs,
                heights,
                width=width,
                color=series.color,
                alpha=series.alpha,
                label=series.name,
                linewidth=0,
            )

        ax.set_xlim(-0.5, max(len(chart.x_domain), 1) - 0.5)
        low, high = chart.y_range
        ax.set_ylim(low, max(high, low + 1))
        ax.set_xticks(np.arange(len(chart.x_domain)))
        rotation = 90 if chart.mode is SeriesMode.BY_TOKEN_OCCURRENCE else 0
        tick_size = self.tick_font_size if rotation else self.font_size
        # Token labels may contain '$', which must not start math text
        ax.set_xticklabels(chart.x_domain, rotation=rotation, fontsize=tick_size, parse_math=False)
        ax.set_xlabel(chart.x_desc, fontsize=self.font_size, parse_math=False)
        ax.set_ylabel(chart.y_desc, fontsize=self.font_size, parse_math=False)
        ax.grid(axis="y", alpha=0.3)
        if chart.title:
            ax.set_title(chart.title, fontsize=self.font_size, parse_math=False)
        if len(chart.series) > 1:
            legend = ax.legend()
            for text in legend.get_texts():
                text.set_parse_math(False)

        fig.tight_layout()
        return fig

    def render(self, chart: ChartData, path: Union[str, Path]) -> Path:
        """
        Render chart to a file. Format follows the file suffix.

        Returns:
            Path of the written file

        Raises:
            RenderError: If the figure cannot be drawn or written
        """
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fig = self._draw(chart)
            fig.savefig(path)
        except (OSError, ValueError, RuntimeError) as e:
            raise RenderError(path, str(e)) from e
        return path
