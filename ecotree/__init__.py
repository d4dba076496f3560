"""Phylogenetic tree reading, editing and cladogram drawing."""

from ecotree.exceptions import EcotreeError, InvalidTreeError, InvalidTreeKind
from ecotree.node import Node
from ecotree.parser import NewickReader, NewickWriter, parse_newick
from ecotree.plot import Painter, PaintMethod, SvgPainter
from ecotree.tree import Tree

__all__ = [
    "EcotreeError",
    "InvalidTreeError",
    "InvalidTreeKind",
    "Node",
    "NewickReader",
    "NewickWriter",
    "parse_newick",
    "Painter",
    "PaintMethod",
    "SvgPainter",
    "Tree",
]
