import logging
from pathlib import Path
from typing import Optional, Union

from ecotree.plot.layout import PaintMethod
from ecotree.plot.svg_painter import SvgPainter
from ecotree.tree import Tree

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
MethodLike = Union[PaintMethod, str, None]


def read_newick(path: PathLike, method: MethodLike = None) -> Tree:
    return Tree.from_file(path, method=method)


def write_newick(tree: Tree, path: PathLike) -> None:
    tree.to_newick(path)


def render_svg(tree: Tree, method: MethodLike = None) -> str:
    painter = SvgPainter()
    tree.paint_tree(painter, method=method)
    return painter.to_string()


def write_svg(tree: Tree, path: PathLike, method: MethodLike = None) -> None:
    svg = render_svg(tree, method=method)
    with open(path, mode="w", encoding="utf-8") as f:
        f.write(svg)
    logger.info("Wrote SVG to %s", path)


def write_png(
    tree: Tree, path: PathLike, method: MethodLike = None, scale: float = 1.0
) -> None:
    """Render the tree as SVG and rasterise it with CairoSVG."""
    import cairosvg

    svg = render_svg(tree, method=method)
    cairosvg.svg2png(bytestring=svg.encode("utf-8"), write_to=str(path), scale=scale)
    logger.info("Wrote PNG to %s", path)


def write_figure(
    tree: Tree, path: PathLike, method: MethodLike = None, dpi: Optional[int] = None
) -> None:
    """Paint the tree with matplotlib; the format follows the suffix of ``path``."""
    from ecotree.plot.matplotlib_painter import MatplotlibPainter

    painter = MatplotlibPainter(dpi=dpi or 100)
    tree.paint_tree(painter, method=method)
    painter.save(path)
