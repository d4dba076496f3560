"""
SVG painter built on ``xml.etree.ElementTree``.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Optional

from ecotree.config import Config
from ecotree.plot.painter import Painter

logger = logging.getLogger(__name__)

STROKE_COLOR = "#000"


def get_svg_root(width: int, height: int) -> ET.Element:
    data = {
        "width": str(width),
        "height": str(height),
        "viewBox": f"0 0 {width} {height}",
        "version": "1.1",
        "xmlns": "http://www.w3.org/2000/svg",
        "xmlns:xlink": "http://www.w3.org/1999/xlink",
        "xml:space": "preserve",
    }
    return ET.Element("svg", data)


class SvgPainter(Painter):
    """Collects draw calls into an SVG document."""

    def __init__(
        self,
        font_width: Optional[int] = None,
        font_height: Optional[int] = None,
        font_family: str = Config.FONT_FAMILY,
    ):
        self._font_width = font_width or Config.FONT_WIDTH
        self._font_height = font_height or Config.FONT_HEIGHT
        self.font_family = font_family
        self.svg_root: Optional[ET.Element] = None
        self.finished = False

    def font_width(self) -> int:
        return self._font_width

    def font_height(self) -> int:
        return self._font_height

    def start(self, width: int, height: int) -> None:
        self.svg_root = get_svg_root(width, height)
        self.finished = False
        # White background so rasterised output is not transparent
        ET.SubElement(
            self.svg_root,
            "rect",
            {"width": "100%", "height": "100%", "fill": "#fff"},
        )

    def draw_string(self, text: str, x: int, y: int) -> None:
        data = {
            "x": str(x),
            "y": str(y),
            "font-size": str(self._font_height),
            "font-family": self.font_family,
            "style": "fill:#000",
        }
        label = ET.SubElement(self._require_root(), "text", data)
        label.text = text

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, stroke_width: int) -> None:
        data = {
            "x1": str(x1),
            "y1": str(y1),
            "x2": str(x2),
            "y2": str(y2),
            "stroke": STROKE_COLOR,
            "stroke-width": str(stroke_width),
            "stroke-linecap": "square",
        }
        ET.SubElement(self._require_root(), "line", data)

    def end(self) -> None:
        self.finished = True

    def to_string(self) -> str:
        return ET.tostring(self._require_root(), encoding="unicode")

    def _require_root(self) -> ET.Element:
        if self.svg_root is None:
            raise RuntimeError("SvgPainter.start() has not been called.")
        return self.svg_root
