"""
Tree layout and painting.

The matplotlib painter is not imported here so the package can be used
without matplotlib; import it from ``ecotree.plot.matplotlib_painter``.
"""

from ecotree.plot.layout import (
    PaintMethod,
    calculate_node_xy,
    number_of_descendants,
)
from ecotree.plot.painter import Painter, paint_tree, painting
from ecotree.plot.svg_painter import SvgPainter

__all__ = [
    "PaintMethod",
    "calculate_node_xy",
    "number_of_descendants",
    "Painter",
    "paint_tree",
    "painting",
    "SvgPainter",
]
