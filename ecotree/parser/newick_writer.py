"""
Newick serialization.

Symmetric to :mod:`ecotree.parser.newick_parser`: labels that contain a
delimiter or whitespace are single-quoted (embedded quotes doubled) and
branch lengths are written with the shortest representation that reads back
to the same float.
"""

from __future__ import annotations

import logging
from typing import IO, TYPE_CHECKING, List, Union

if TYPE_CHECKING:
    from ecotree.node import Node
    from ecotree.tree import Tree

logger = logging.getLogger(__name__)

# Characters that force a label to be quoted
NEWICK_DELIMITERS = frozenset("()[],:;'")


def format_label(name: str) -> str:
    if not name:
        return ""
    if any(char in NEWICK_DELIMITERS or char.isspace() for char in name):
        return "'" + name.replace("'", "''") + "'"
    return name


def format_distance(distance: float) -> str:
    # repr() of a float is the shortest string that round-trips exactly
    return repr(float(distance))


def write_subtree(node: Node) -> str:
    """
    Return the Newick text of the subtree rooted at ``node`` without the
    terminating semicolon. Every node that has a parent carries ``:distance``.
    """
    out: List[str] = []
    stack: List[Union[str, Node]] = [node]

    while stack:
        item = stack.pop()
        if isinstance(item, str):
            out.append(item)
            continue

        tail = format_label(item.name)
        if item.parent is not None:
            tail += ":" + format_distance(item.distance)

        if not item.children:
            out.append(tail)
            continue

        out.append("(")
        stack.append(tail)
        stack.append(")")
        for index, child in enumerate(reversed(item.children)):
            if index:
                stack.append(",")
            stack.append(child)

    return "".join(out)


def write_tree(root: Node) -> str:
    return write_subtree(root) + ";"


class NewickWriter:
    """Writes trees in Newick format to a character sink, one tree per line."""

    def __init__(self, sink: IO[str]):
        self.sink = sink

    def write(self, tree: Union[Tree, Node]) -> None:
        root = tree.get_root()
        text = write_tree(root)
        self.sink.write(text + "\n")
        logger.debug("Wrote Newick tree with %d characters", len(text))

    def close(self) -> None:
        self.sink.close()

    def __enter__(self) -> NewickWriter:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
