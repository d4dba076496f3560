"""
Cladogram layout.

Assigns ``x`` and ``y`` to every visible node of a tree:

* ``x`` is the cumulative branch length along the parent chain. In collapsed
  mode a collapsed clade is pushed further right by its own depth so the
  triangle that replaces it has a width.
* ``y`` counts leaf slots. Leaves (and collapsed clades in collapsed mode)
  each take the next integer slot; an internal node sits halfway between its
  first and last child.
"""

import logging
from enum import Enum
from typing import List

from ecotree.config import Config
from ecotree.node import Node

logger = logging.getLogger(__name__)


class PaintMethod(Enum):
    NORMAL = "normal"
    COLLAPSED = "collapsed"
    DEMARCATED = "demarcated"

    @classmethod
    def from_value(cls, value: "PaintMethod | str | None") -> "PaintMethod":
        """Resolve a method given by value, falling back to the configured default."""
        if value is None:
            value = Config.PAINT_METHOD
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(
                f"Unknown paint method '{value}', expected one of: {choices}"
            )


def is_atom(node: Node, method: PaintMethod) -> bool:
    """True if ``node`` is drawn as a single row: a leaf or a collapsed clade."""
    return not node.children or (node.collapsed and method is PaintMethod.COLLAPSED)


def number_of_descendants(node: Node, method: PaintMethod) -> int:
    """
    Return the number of living descendants of ``node``: its leaves, with a
    collapsed clade counted once in collapsed mode. A leaf has none.
    """
    count = 0
    stack: List[Node] = list(node.children)
    while stack:
        current = stack.pop()
        if is_atom(current, method):
            count += 1
        else:
            stack.extend(current.children)
    return count


def visible_nodes(root: Node, method: PaintMethod) -> List[Node]:
    """Pre-order list of nodes that are drawn; collapsed clades hide their contents."""
    nodes: List[Node] = []
    stack: List[Node] = [root]
    while stack:
        current = stack.pop()
        nodes.append(current)
        if not is_atom(current, method):
            stack.extend(reversed(current.children))
    return nodes


def calculate_node_xy(
    root: Node, method: PaintMethod, height: float = 0.0
) -> List[Node]:
    """
    Lay out the tree rooted at ``root``.

    Args:
        root: Root of the (sub)tree to lay out.
        method: Presentation mode.
        height: Y slot given to the first leaf.

    Returns:
        The visible nodes in pre-order, with ``x`` and ``y`` assigned.
    """
    nodes = visible_nodes(root, method)
    slot = height

    # Pre-order: parents before children for x, leaves left to right for y
    for node in nodes:
        x = node.distance
        if node.parent is not None:
            x += node.parent.x
        if (
            node.collapsed
            and method is PaintMethod.COLLAPSED
            and number_of_descendants(node, method) > 1
        ):
            x += max(node.maximum_distance_from_leaf(), Config.MIN_COLLAPSED_WIDTH)
        node.x = x

        if is_atom(node, method):
            node.y = slot
            slot += 1

    # Reverse pre-order: every child is placed before its parent
    for node in reversed(nodes):
        if not is_atom(node, method):
            child_ys = [child.y for child in node.children]
            node.y = (min(child_ys) + max(child_ys)) / 2

    logger.debug(
        "Laid out %d visible nodes in %s mode (%d rows)",
        len(nodes),
        method.value,
        int(slot - height),
    )
    return nodes
