"""Line overview charts drawn with Pillow (PNG)."""

from pathlib import Path
from typing import List, Tuple, Union

from matplotlib import font_manager
from PIL import Image, ImageColor, ImageDraw, ImageFont

from analysis.series import ChartData
from core.errors import RenderError


def get_default_font(size: int = 20) -> ImageFont.FreeTypeFont:
    """DejaVu Sans as shipped with matplotlib, else Pillow's built-in font."""
    path = font_manager.findfont(font_manager.FontProperties(family="DejaVu Sans"))
    try:
        return ImageFont.truetype(path, size)
    except OSError:
        # Scalable built-in font (Pillow >= 10.1)
        return ImageFont.load_default(size)


class RasterChartRenderer:
    """Renders each series of a chart as a polyline over its categories."""

    def __init__(
        self,
        size: Tuple[int, int] = (1920, 1080),
        font_size: int = 20,
        background: str = "#FFFFFF",
        axis_color: str = "#000000",
        margins: Tuple[int, int, int, int] = (100, 60, 40, 80),
        max_labels: int = 40,
    ):
        """
        Initialize renderer.

        Args:
            size: Canvas size (width, height)
            font_size: Label font size
            background: Canvas color in hex
            axis_color: Axis and label color in hex
            margins: Plot margins (left, top, right, bottom)
            max_labels: Max x labels drawn; denser domains are thinned out
        """
        self.size = size
        self.font_size = font_size
        self.background = background
        self.axis_color = axis_color
        self.margins = margins
        self.max_labels = max_labels
        self.font = get_default_font(font_size)

    def _plot_box(self) -> Tuple[int, int, int, int]:
        left, top, right, bottom = self.margins
        return left, top, self.size[0] - right, self.size[1] - bottom

    def _x(self, index: int, count: int) -> float:
        x0, _, x1, _ = self._plot_box()
        if count <= 1:
            return (x0 + x1) / 2
        return x0 + (x1 - x0) * index / (count - 1)

    def _y(self, value: int, y_range: Tuple[int, int]) -> float:
        _, y0, _, y1 = self._plot_box()
        low, high = y_range
        span = max(high - low, 1)
        return y1 - (y1 - y0) * (value - low) / span

    def _draw_axes(self, draw: ImageDraw.ImageDraw, chart: ChartData):
        x0, y0, x1, y1 = self._plot_box()
        draw.line([(x0, y0), (x0, y1), (x1, y1)], fill=self.axis_color, width=2)

        # Y ticks
        low, high = chart.y_range
        steps = 5
        for i in range(steps + 1):
            value = low + (high - low) * i // steps
            y = self._y(value, chart.y_range)
            draw.line([(x0 - 6, y), (x0, y)], fill=self.axis_color, width=2)
            draw.text((x0 - 10, y), str(value), font=self.font, fill=self.axis_color, anchor="rm")

        # X labels
        count = len(chart.x_domain)
        every = max(1, -(-count // self.max_labels))
        for i, label in enumerate(chart.x_domain):
            if i % every:
                continue
            x = self._x(i, count)
            draw.line([(x, y1), (x, y1 + 6)], fill=self.axis_color, width=2)
            draw.text((x, y1 + 10), label, font=self.font, fill=self.axis_color, anchor="mt")

        draw.text(((x0 + x1) / 2, self.size[1] - 10), chart.x_desc,
                  font=self.font, fill=self.axis_color, anchor="md")
        draw.text((10, y0 - 30), chart.y_desc, font=self.font, fill=self.axis_color, anchor="lm")
        if chart.title:
            draw.text(((x0 + x1) / 2, 10), chart.title, font=self.font, fill=self.axis_color, anchor="mt")

    def _draw_series(self, img: Image.Image, chart: ChartData) -> Image.Image:
        positions = {label: i for i, label in enumerate(chart.x_domain)}
        count = len(chart.x_domain)

        for series in chart.series:
            overlay = Image.new("RGBA", img.size, (0, 0, 0, 0))
            draw = ImageDraw.Draw(overlay)
            rgba = ImageColor.getrgb(series.color)[:3] + (int(255 * series.alpha),)

            points: List[Tuple[float, float]] = [
                (self._x(positions[label], count), self._y(value, chart.y_range))
                for label, value in series.points
                if label in positions
            ]
            if len(points) > 1:
                draw.line(points, fill=rgba, width=3, joint="curve")
            for x, y in points:
                draw.ellipse([x - 4, y - 4, x + 4, y + 4], fill=rgba)

            img = Image.alpha_composite(img, overlay)

        return img

    def render(self, chart: ChartData, path: Union[str, Path]) -> Path:
        """
        Render chart as a raster image.

        Raises:
            RenderError: If the canvas cannot be created or written
        """
        path = Path(path)
        try:
            img = Image.new("RGBA", self.size, self.background)
            self._draw_axes(ImageDraw.Draw(img), chart)
            img = self._draw_series(img, chart)
            path.parent.mkdir(parents=True, exist_ok=True)
            img.convert("RGB").save(path)
        except (OSError, ValueError) as e:
            raise RenderError(path, str(e)) from e
        return path
