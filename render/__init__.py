"""Chart rendering backends."""

from pathlib import Path
from typing import Tuple, Union

from .raster import RasterChartRenderer
from .vector import VectorChartRenderer

RASTER_SUFFIXES = {".png", ".jpg", ".jpeg"}


def get_renderer(path: Union[str, Path], size: Tuple[int, int] = (1920, 1080)):
    """Pick a renderer for the output file: Pillow for raster, matplotlib otherwise."""
    if Path(path).suffix.lower() in RASTER_SUFFIXES:
        return RasterChartRenderer(size=size)
    return VectorChartRenderer(size=size)


__all__ = ["RasterChartRenderer", "VectorChartRenderer", "get_renderer"]
