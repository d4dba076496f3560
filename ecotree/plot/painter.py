"""
Drawing surface abstraction and the driver that paints a laid-out tree.

A :class:`Painter` only knows how to draw strings and lines on an integer
pixel canvas. :func:`paint_tree` lays the tree out, sizes the canvas, and
issues the draw calls for the chosen presentation mode.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Tuple, Union

from ecotree.config import Config
from ecotree.node import Node
from ecotree.plot.layout import (
    PaintMethod,
    calculate_node_xy,
    is_atom,
    number_of_descendants,
)

logger = logging.getLogger(__name__)


class Painter(ABC):
    """Abstract drawing surface. Coordinates are integer pixels."""

    @abstractmethod
    def font_width(self) -> int:
        """Width in pixels of one character."""

    @abstractmethod
    def font_height(self) -> int:
        """Height in pixels of one line of text."""

    @abstractmethod
    def start(self, width: int, height: int) -> None:
        """Begin a drawing of the given canvas size."""

    @abstractmethod
    def draw_string(self, text: str, x: int, y: int) -> None:
        """Draw ``text`` with its baseline starting at ``(x, y)``."""

    @abstractmethod
    def draw_line(self, x1: int, y1: int, x2: int, y2: int, stroke_width: int) -> None:
        """Draw a straight line."""

    @abstractmethod
    def end(self) -> None:
        """Finish the drawing started by :meth:`start`."""


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@contextmanager
def painting(painter: Painter, width: int, height: int) -> Iterator[Painter]:
    """Start ``painter`` and make sure it is ended, even if a draw call fails."""
    painter.start(width, height)
    try:
        yield painter
    finally:
        painter.end()


@dataclass
class CanvasGeometry:
    """Pixel geometry shared by every draw call of one paint run."""

    font_width: int
    font_height: int
    method: PaintMethod
    demarcation_x: int = 0

    @property
    def x_spacer(self) -> int:
        return self.font_width // 2

    @property
    def y_spacer(self) -> int:
        return self.font_height // 2

    def node_x(self, node: Node) -> int:
        return self.font_width + round_half_up(node.x * Config.X_MODIFIER)

    def node_y(self, node: Node) -> int:
        return self.font_height + round_half_up(node.y * self.font_height)

    def label_width(self, name: str) -> int:
        return (len(name) + 1) * self.font_width


def canvas_size(
    root: Node, nodes: List[Node], geometry: CanvasGeometry
) -> Tuple[int, int]:
    """
    Return ``(width, height)`` for a laid-out tree and set the x position of
    the demarcation column on ``geometry``.
    """
    width = 0
    for node in nodes:
        if node is root:
            continue
        width = max(width, geometry.node_x(node) + geometry.label_width(node.name))
    height = geometry.font_height * (number_of_descendants(root, geometry.method) + 1)

    geometry.demarcation_x = width + Config.DEMARCATION_PADDING
    if geometry.method is PaintMethod.DEMARCATED:
        widest_label = max(
            (geometry.label_width(node.name) for node in root.get_collapsed()),
            default=0,
        )
        width += Config.DEMARCATION_WIDTH + geometry.x_spacer + widest_label
    return width, height


def paint_tree(
    root: Node,
    painter: Painter,
    method: Union[PaintMethod, str, None] = None,
) -> None:
    """
    Lay out the tree rooted at ``root`` and paint it with ``painter``.

    ``painter.end()`` is called whenever ``painter.start()`` was, including
    when a draw call raises; the exception then propagates to the caller.
    """
    method = PaintMethod.from_value(method)
    geometry = CanvasGeometry(painter.font_width(), painter.font_height(), method)
    nodes = calculate_node_xy(root, method)
    width, height = canvas_size(root, nodes, geometry)
    logger.info("Painting %d nodes on a %dx%d canvas (%s)", len(nodes), width, height, method.value)

    with painting(painter, width, height):
        _paint_nodes(painter, root, geometry)


def _paint_nodes(painter: Painter, root: Node, geometry: CanvasGeometry) -> None:
    # Stack items are ("node", node, None) or ("edge", parent, child); the
    # order matches a depth-first walk that paints each child right after
    # its connecting edge.
    stack: List[Tuple[str, Node, Node | None]] = [("node", root, None)]
    while stack:
        kind, node, child = stack.pop()
        if kind == "edge" and child is not None:
            _paint_edge(painter, node, child, geometry)
            continue

        if is_atom(node, geometry.method):
            painter.draw_string(
                node.name,
                geometry.node_x(node) + geometry.x_spacer,
                geometry.node_y(node) + geometry.y_spacer - 2,
            )
            continue

        for next_child in reversed(node.children):
            stack.append(("node", next_child, None))
            stack.append(("edge", node, next_child))


def _paint_edge(
    painter: Painter, node: Node, child: Node, geometry: CanvasGeometry
) -> None:
    method = geometry.method
    stroke = Config.STROKE
    node_x = geometry.node_x(node)
    node_y = geometry.node_y(node)
    child_x = geometry.node_x(child)
    child_y = geometry.node_y(child)

    painter.draw_line(node_x, node_y, node_x, child_y, stroke)

    if (
        child.collapsed
        and method is PaintMethod.COLLAPSED
        and number_of_descendants(child, method) > 1
    ):
        top = child_y - geometry.y_spacer + 1
        bottom = child_y + geometry.y_spacer - 1
        painter.draw_line(node_x, child_y, child_x, top, stroke)
        painter.draw_line(node_x, child_y, child_x, bottom, stroke)
        painter.draw_line(child_x, top, child_x, bottom, stroke)
    else:
        painter.draw_line(node_x, child_y, child_x, child_y, stroke)

    if child.collapsed and method is PaintMethod.DEMARCATED:
        _paint_demarcation(painter, child, geometry)


def _paint_demarcation(painter: Painter, clade: Node, geometry: CanvasGeometry) -> None:
    leaf_ys = [geometry.node_y(leaf) for leaf in clade.get_leaves()]
    min_y, max_y = min(leaf_ys), max(leaf_ys)
    column = geometry.demarcation_x
    painter.draw_line(
        column,
        min_y - geometry.y_spacer + 2,
        column,
        max_y + geometry.y_spacer - 2,
        Config.DEMARCATION_STROKE,
    )
    painter.draw_string(
        clade.name,
        column + geometry.font_width,
        round_half_up((min_y + max_y) / 2) + geometry.y_spacer - 2,
    )
