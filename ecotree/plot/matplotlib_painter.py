"""
Raster painter drawing onto a matplotlib figure.

The figure is sized so that one data unit equals one output pixel at
``dpi`` and the y axis points down, matching painter coordinates.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from ecotree.config import Config
from ecotree.plot.painter import Painter

logger = logging.getLogger(__name__)

POINTS_PER_INCH = 72


class MatplotlibPainter(Painter):
    def __init__(
        self,
        font_width: Optional[int] = None,
        font_height: Optional[int] = None,
        dpi: int = 100,
    ):
        self._font_width = font_width or Config.FONT_WIDTH
        self._font_height = font_height or Config.FONT_HEIGHT
        self.dpi = dpi
        self.figure: Optional[Figure] = None
        self.axes = None

    def font_width(self) -> int:
        return self._font_width

    def font_height(self) -> int:
        return self._font_height

    def _points(self, pixels: float) -> float:
        return pixels * POINTS_PER_INCH / self.dpi

    def start(self, width: int, height: int) -> None:
        width, height = max(width, 1), max(height, 1)
        self.figure = Figure(figsize=(width / self.dpi, height / self.dpi), dpi=self.dpi)
        FigureCanvasAgg(self.figure)
        self.axes = self.figure.add_axes((0, 0, 1, 1))
        self.axes.set_xlim(0, width)
        self.axes.set_ylim(height, 0)
        self.axes.axis("off")

    def draw_string(self, text: str, x: int, y: int) -> None:
        self._require_axes().text(
            x,
            y,
            text,
            fontsize=self._points(self._font_height),
            family="monospace",
            verticalalignment="baseline",
        )

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, stroke_width: int) -> None:
        self._require_axes().plot(
            [x1, x2],
            [y1, y2],
            color="black",
            linewidth=self._points(stroke_width),
            solid_capstyle="butt",
        )

    def end(self) -> None:
        logger.debug("Finished matplotlib drawing")

    def save(self, path: Union[str, Path]) -> None:
        """Write the figure; the format follows the file suffix (png, pdf, svg)."""
        if self.figure is None:
            raise RuntimeError("MatplotlibPainter.start() has not been called.")
        self.figure.savefig(path, dpi=self.dpi)
        logger.info("Saved figure to %s", path)

    def _require_axes(self):
        if self.axes is None:
            raise RuntimeError("MatplotlibPainter.start() has not been called.")
        return self.axes
