from __future__ import annotations

import io
import logging
import os
from typing import IO, List, Optional, Union

from ecotree.exceptions import InvalidTreeError, InvalidTreeKind
from ecotree.node import Node
from ecotree.parser.newick_parser import NewickReader, parse_newick
from ecotree.parser.newick_writer import NewickWriter, write_tree
from ecotree.plot.layout import PaintMethod, number_of_descendants
from ecotree.plot.painter import Painter, paint_tree

logger = logging.getLogger(__name__)

NodeRef = Union[str, Node]
PathLike = Union[str, "os.PathLike[str]"]

__all__ = ["Tree", "PaintMethod"]


class Tree:
    """
    A rooted phylogenetic tree read from Newick text.

    The tree owns its node graph through ``root``; every structural change
    (rerooting, leaf removal) goes through this class. ``method`` is the
    default presentation mode for :meth:`size` and :meth:`paint_tree`; both
    accept a per-call override.
    """

    def __init__(
        self,
        source: Union[str, Tree, Node, None] = None,
        method: Union[PaintMethod, str, None] = None,
    ):
        """
        Args:
            source: Newick text, another Tree to copy, an existing root Node,
                or None for an empty tree.
            method: Default presentation mode.

        Raises:
            InvalidTreeError: If ``source`` is text that is not a valid tree.
        """
        self.method = PaintMethod.from_value(method)
        if source is None:
            self.root = Node()
        elif isinstance(source, Tree):
            self.root = parse_newick(source.to_string())
        elif isinstance(source, Node):
            self.root = source
        else:
            self.root = parse_newick(source)

    @classmethod
    def from_newick(
        cls,
        source: Union[str, "os.PathLike[str]", IO[str]],
        method: Union[PaintMethod, str, None] = None,
    ) -> Tree:
        """
        Read a tree from Newick text, a file path or an open character stream.

        A plain ``str`` is treated as Newick text; use :meth:`from_file` or a
        ``pathlib.Path`` to read a file. A stream is closed after reading.
        """
        if isinstance(source, os.PathLike):
            return cls.from_file(source, method=method)
        if isinstance(source, str):
            reader: IO[str] = io.StringIO(source)
        else:
            reader = source
        return cls(NewickReader(reader).read_tree(), method=method)

    @classmethod
    def from_file(
        cls, path: PathLike, method: Union[PaintMethod, str, None] = None
    ) -> Tree:
        try:
            reader = open(path, encoding="utf-8")
        except FileNotFoundError:
            raise InvalidTreeError(InvalidTreeKind.FILE_NOT_FOUND, detail=str(path))
        tree = cls(NewickReader(reader).read_tree(), method=method)
        logger.info("Read tree with %d leaves from %s", len(tree.root.get_leaves()), path)
        return tree

    # ------------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------------
    def get_root(self) -> Node:
        return self.root

    def get_descendant(self, name: str) -> Node:
        """
        Return the first descendant (pre-order) named ``name``.

        If there is none, a new empty Node that is not part of the tree is
        returned instead.
        """
        for descendant in self.root.get_descendants():
            if descendant.name == name:
                return descendant
        return Node()

    def get_descendants(self) -> List[Node]:
        return self.root.get_descendants()

    def get_collapsed(self) -> List[Node]:
        return self.root.get_collapsed()

    def number_of_descendants(
        self, node: Node, method: Union[PaintMethod, str, None] = None
    ) -> int:
        """Return the number of living descendants of ``node``."""
        return number_of_descendants(node, self._method(method))

    def size(self, method: Union[PaintMethod, str, None] = None) -> int:
        """
        Return the number of living descendants of the root: its leaves, with
        each collapsed clade counted once in collapsed mode.
        """
        return number_of_descendants(self.root, self._method(method))

    def maximum_width(self) -> float:
        """Distance from the root to the most divergent leaf."""
        return self.root.maximum_distance_from_leaf()

    def maximum_x(self) -> float:
        return self.root.maximum_distance_from_leaf()

    def maximum_y(self, method: Union[PaintMethod, str, None] = None) -> float:
        return float(self.size(method))

    def is_valid(self) -> bool:
        return len(self.root.children) > 0

    def compare_to(self, other: Tree) -> int:
        return self.root.compare_to(other.get_root())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tree):
            return NotImplemented
        return self.compare_to(other) == 0

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> Tree:
        return Tree(self, method=self.method)

    # ------------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------------
    def remove_descendant(self, descendant: NodeRef) -> None:
        """
        Remove a leaf from the tree.

        The leaf is detached from its parent. If the parent is left with a
        single child, the parent is removed as well: the surviving child
        takes its place (and its branch length is extended by the parent's).
        When that parent was the root, the surviving child becomes the root.
        Internal nodes and nodes outside the tree are ignored.
        """
        if isinstance(descendant, str):
            descendant = self.get_descendant(descendant)
        parent = descendant.parent
        if (
            not descendant.is_leaf()
            or parent is None
            or descendant.get_root() is not self.root
        ):
            logger.debug("Ignoring removal of %r: not a leaf of this tree", descendant)
            return

        parent.remove_child(descendant)
        logger.debug("Removed leaf %r", descendant)
        if len(parent.children) != 1:
            return

        other_child = parent.children[0]
        other_child.distance += parent.distance
        grandparent = parent.parent
        if grandparent is None:
            parent.remove_child(other_child)
            self.root = other_child
        else:
            grandparent.replace_child(parent, other_child)

    def reroot(self, outgroup: NodeRef) -> None:
        """
        Reroot the tree so that ``outgroup`` is next to the root.

        A new root is inserted on the outgroup's branch, splitting it in
        half. Every node on the path from the outgroup's old parent up to the
        old root is turned around: it becomes a child of the node that used
        to be its child, taking over that node's branch length. The old root
        is dissolved when a single child remains, which is attached to the
        last node on the path with the carried branch length added to its own.
        An old root left with several children becomes an internal node below
        the last node on the path, taking the carried branch length.
        """
        if isinstance(outgroup, str):
            outgroup = self.get_descendant(outgroup)
        old_parent = outgroup.parent
        if old_parent is None:
            logger.debug("Ignoring reroot at %r: node is a root", outgroup)
            return
        if outgroup.get_root() is not self.root:
            raise ValueError(f"{outgroup!r} is not part of this tree.")

        new_root = Node()
        old_parent.remove_child(outgroup)
        new_root.add_child(outgroup)
        distance = outgroup.distance * 0.5
        old_distance = old_parent.distance
        outgroup.distance = distance
        outgroup.outgroup = True
        old_parent.distance = distance

        new_parent = new_root
        while old_parent is not self.root:
            node = old_parent
            old_parent = node.parent
            if old_parent is None:
                raise ValueError(f"{node!r} is detached from the root.")
            old_parent.remove_child(node)
            new_parent.add_child(node)
            new_parent = node
            node.distance = distance
            distance = old_distance
            old_distance = old_parent.distance

        if len(old_parent.children) == 1:
            child = old_parent.children[0]
            old_parent.remove_child(child)
            new_parent.add_child(child)
            child.distance += distance
        elif old_parent.children:
            # A multifurcating old root stays on as an internal node
            new_parent.add_child(old_parent)
            old_parent.distance = distance

        self.root = new_root
        logger.info("Rerooted tree at outgroup %r", outgroup)

    # ------------------------------------------------------------------------
    # Serialization & painting
    # ------------------------------------------------------------------------
    def to_string(self) -> str:
        return write_tree(self.root)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Tree({self.to_string()!r})"

    def to_newick(self, path: Optional[PathLike] = None) -> str:
        """
        Return the tree as Newick text, also writing it to ``path`` if given.

        Raises:
            OSError: If the file cannot be written.
        """
        if path is not None:
            with NewickWriter(open(path, "w", encoding="utf-8")) as writer:
                writer.write(self)
            logger.info("Wrote tree to %s", path)
        return self.to_string()

    def paint_tree(
        self, painter: Painter, method: Union[PaintMethod, str, None] = None
    ) -> None:
        """Lay out the tree and draw it with ``painter``."""
        paint_tree(self.root, painter, self._method(method))

    def _method(self, method: Union[PaintMethod, str, None]) -> PaintMethod:
        return self.method if method is None else PaintMethod.from_value(method)
